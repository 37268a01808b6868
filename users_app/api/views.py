"""
User management endpoints for the VOD backend.

Endpoints:
-----------
GET    /users/email-exists/     → Check whether an email is registered
POST   /users/register/         → Store a pending registration + email a code
POST   /users/verify-email/     → Verify the code and create the account
POST   /users/login/            → Login; issues the single session token
POST   /users/logout/           → Revoke the session token
GET    /users/profile/          → Current user's public profile
POST   /users/admin/login/      → Admin login; issues an admin token
GET    /users/admin/profile/    → Current admin's account data
"""

import logging

from django.conf import settings
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.throttling import AnonRateThrottle
from rest_framework.views import APIView

from ..models import UserProfile
from ..registration import complete_registration, start_registration
from ..sessions import get_session_service
from .auth import clear_auth_cookie, issue_admin_token, set_auth_cookie
from .authentication import SessionJWTAuthentication
from .permissions import IsAdminAccount, IsSessionUser
from .serializers import (
    AdminLoginSerializer,
    EmailQuerySerializer,
    LoginSerializer,
    RegisterSerializer,
    UserPublicSerializer,
    VerifyEmailSerializer,
)

logger = logging.getLogger(__name__)


class EmailExistsView(APIView):
    """
    GET /users/email-exists/?email=<addr>
    Returns: { "exists": true|false }

    Notes:
    - Public endpoint; validates email format.
    - Case-insensitive lookup.
    - Throttled to reduce enumeration risk.
    """
    permission_classes = [AllowAny]
    authentication_classes = []
    throttle_classes = [AnonRateThrottle]

    def get(self, request):
        ser = EmailQuerySerializer(data=request.query_params)
        ser.is_valid(raise_exception=True)
        email = ser.validated_data["email"].strip().lower()
        exists = UserProfile.objects.filter(email__iexact=email).exists()
        return Response({"exists": exists}, status=200)


class RegisterView(APIView):
    """
    POST /users/register/
    Stores the sign-up data as a pending registration and emails a
    six-digit verification code. In DEBUG the code is echoed back.
    """
    permission_classes = [AllowAny]
    authentication_classes = []

    def post(self, request):
        ser = RegisterSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        pending = start_registration(**ser.validated_data)

        payload = {"message": "Verification code sent to email"}
        if settings.DEBUG:
            payload["debug"] = {"code": pending["code"]}
        return Response(payload, status=status.HTTP_202_ACCEPTED)


class VerifyEmailView(APIView):
    """
    POST /users/verify-email/
    Creates the account if the code matches the pending registration.
    """
    permission_classes = [AllowAny]
    authentication_classes = []

    def post(self, request):
        ser = VerifyEmailSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        user = complete_registration(**ser.validated_data)
        return Response(
            {
                "message": "Account created successfully",
                "user": UserPublicSerializer(user).data,
            },
            status=status.HTTP_201_CREATED,
        )


class LoginView(APIView):
    """
    POST /users/login/
    Authenticates the user and issues the session token (body + HttpOnly cookie).

    Flow:
    - Validate input with LoginSerializer (email, password).
    - 409 if the user already holds a live session.
    """
    permission_classes = [AllowAny]
    authentication_classes = []

    def post(self, request):
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        user = serializer.validated_data["user"]
        token = get_session_service().issue_session(user)

        response = Response(
            {
                "message": "Login successful",
                "token": token,
                "user": UserPublicSerializer(user).data,
            },
            status=200,
        )
        set_auth_cookie(response, token)
        return response


class LogoutView(APIView):
    """
    POST /users/logout/
    Revokes whatever token the request carries and always clears the cookie,
    so a client holding a stale cookie can still reset its state.
    """
    permission_classes = [AllowAny]
    authentication_classes = []

    def post(self, request):
        raw_token = SessionJWTAuthentication().get_raw_request_token(request)
        if raw_token is not None:
            get_session_service().revoke(raw_token)

        resp = Response({"message": "Logout successful"}, status=200)
        clear_auth_cookie(resp)
        return resp


class ProfileView(APIView):
    """GET /users/profile/: the authenticated user's public data."""
    permission_classes = [IsSessionUser]

    def get(self, request):
        return Response(UserPublicSerializer(request.user).data)


class AdminLoginView(APIView):
    """
    POST /users/admin/login/
    Returns a short-lived admin token. Admin sessions are not tracked.
    """
    permission_classes = [AllowAny]
    authentication_classes = []

    def post(self, request):
        ser = AdminLoginSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        admin = ser.validated_data["admin"]
        logger.info("Admin %s logged in", admin.pk)
        return Response(
            {"token": issue_admin_token(admin), "admin": {"id": admin.pk, "email": admin.email}},
            status=200,
        )


class AdminProfileView(APIView):
    """GET /users/admin/profile/: the authenticated admin's account data."""
    permission_classes = [IsAdminAccount]

    def get(self, request):
        admin = request.user
        return Response(
            {"id": admin.pk, "email": admin.email, "created_at": admin.created_at}
        )
