"""
users_app.exceptions — typed failures for registration and sessions.

All errors are DRF exceptions, so views can let them propagate and the
default exception handler renders `{"detail": ...}` with the right status.
"""

from rest_framework import status
from rest_framework.exceptions import APIException, AuthenticationFailed


class AlreadyLoggedIn(APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "User is already logged in."
    default_code = "already_logged_in"


class TokenNotActive(AuthenticationFailed):
    default_detail = "Token is not active."
    default_code = "token_not_active"


class DuplicateEmail(APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Email already exists."
    default_code = "duplicate_email"


class DuplicatePhone(APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Phone number already exists."
    default_code = "duplicate_phone"


class NoPendingRegistration(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "No verification request found for this email."
    default_code = "no_pending_registration"


class InvalidVerificationCode(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid verification code."
    default_code = "invalid_verification_code"


class NotificationFailed(APIException):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_detail = "Verification code could not be sent. Please retry."
    default_code = "notification_failed"
