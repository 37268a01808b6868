from django.conf import settings
from rest_framework_simplejwt.tokens import AccessToken


def issue_admin_token(admin) -> str:
    """
    Mint an access token for an AdminAccount.

    Admin tokens carry an `admin_id` claim instead of `user_id`, so they are
    never accepted as viewer sessions and are not tracked by the registry.
    """
    token = AccessToken()
    token.set_exp(lifetime=settings.ADMIN_TOKEN_LIFETIME)
    token["admin_id"] = admin.pk
    token["email"] = admin.email
    return str(token)


def set_auth_cookie(response, token: str):
    """
    Sets the session token as an HttpOnly cookie on the HTTP response.

    The cookie lives as long as the token itself; the registry still decides
    whether the token is accepted.
    """
    response.set_cookie(
        key=getattr(settings, "JWT_ACCESS_COOKIE_NAME", "vod_access"),
        value=token,
        max_age=int(settings.SESSION_TOKEN_LIFETIME.total_seconds()),
        httponly=True,
        secure=getattr(settings, "JWT_COOKIE_SECURE", True),
        samesite=getattr(settings, "JWT_COOKIE_SAMESITE", "Lax"),
        path="/",
    )
    return response


def clear_auth_cookie(response):
    """Removes the session cookie from the HTTP response (logout)."""
    response.delete_cookie(
        getattr(settings, "JWT_ACCESS_COOKIE_NAME", "vod_access"), path="/"
    )
    return response
