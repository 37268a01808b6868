from django.conf import settings
from rest_framework.exceptions import AuthenticationFailed
from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import AccessToken

from ..models import AdminAccount
from ..sessions import get_session_service


class CookieOrHeaderTokenMixin:
    """Reads the raw token from the access cookie, then the Bearer header."""

    def get_raw_request_token(self, request):
        cookie_name = getattr(settings, "JWT_ACCESS_COOKIE_NAME", "vod_access")
        raw_token = request.COOKIES.get(cookie_name)
        if raw_token:
            return raw_token

        header = self.get_header(request)
        if header is None:
            return None
        return self.get_raw_token(header)


class SessionJWTAuthentication(CookieOrHeaderTokenMixin, JWTAuthentication):
    """
    Viewer authentication.

    Authentication flow:
    1) Reads the token from the HttpOnly cookie (default: "vod_access") or
       the "Authorization: Bearer <token>" header.
    2) Validates signature and expiry, then checks that the session registry
       still holds this exact token for the user (single active session).
    """

    def authenticate(self, request):
        raw_token = self.get_raw_request_token(request)
        if raw_token is None:
            return None

        claims = get_session_service().validate(raw_token)
        return (self.get_user(claims.token), claims.token)


class AdminJWTAuthentication(CookieOrHeaderTokenMixin, JWTAuthentication):
    """
    Admin authentication.

    Only claims tokens carrying an `admin_id`; anything else is left to the
    next authentication class so viewer tokens keep working.
    """

    def authenticate(self, request):
        raw_token = self.get_raw_request_token(request)
        if raw_token is None:
            return None

        try:
            token = AccessToken(raw_token)
        except TokenError:
            return None

        admin_id = token.get("admin_id")
        if admin_id is None:
            return None

        try:
            admin = AdminAccount.objects.get(pk=admin_id)
        except AdminAccount.DoesNotExist:
            raise AuthenticationFailed("Admin not found.", code="admin_not_found")
        return (admin, token)
