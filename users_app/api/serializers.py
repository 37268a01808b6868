"""
Serializers for VOD users and admins.

- RegisterSerializer: validates the first registration step (code request).
- VerifyEmailSerializer: validates the email + code pair.
- LoginSerializer: validates viewer credentials; the session token is issued in the view.
- AdminLoginSerializer: validates admin credentials.
- UserPublicSerializer: exposes safe, public user data.
"""

from django.contrib.auth import authenticate, password_validation
from rest_framework import serializers

from ..models import AdminAccount, UserProfile


class EmailQuerySerializer(serializers.Serializer):
    email = serializers.EmailField()


class RegisterSerializer(serializers.Serializer):
    """
    Input for POST /users/register/.
    Nothing is written to the user table until the code is verified.
    """
    name = serializers.CharField(max_length=150)
    email = serializers.EmailField()
    password = serializers.CharField(
        write_only=True, style={"input_type": "password"})
    phone_number = serializers.CharField(max_length=20)
    push_token = serializers.CharField(
        max_length=255, required=False, allow_blank=True, allow_null=True)

    def validate(self, data):
        """
        - Normalize email.
        - Run Django's password validators.
        """
        data["email"] = data["email"].strip().lower()
        password_validation.validate_password(data["password"])
        return data


class VerifyEmailSerializer(serializers.Serializer):
    email = serializers.EmailField()
    code = serializers.CharField(max_length=6)


class LoginSerializer(serializers.Serializer):
    """
    Validates login credentials (input-only).
    The session token is created in the view.
    """
    email = serializers.EmailField()
    password = serializers.CharField(
        write_only=True, style={"input_type": "password"})

    def validate(self, attrs):
        """
        Normalize email and authenticate using Django's auth system.
        """
        email = (attrs.get("email") or "").strip().lower()
        password = attrs.get("password")

        user = authenticate(username=email, password=password)
        if not user or not user.is_active:
            raise serializers.ValidationError("Invalid email or password.")

        attrs["user"] = user
        return attrs


class AdminLoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(
        write_only=True, style={"input_type": "password"})

    def validate(self, attrs):
        email = (attrs.get("email") or "").strip().lower()
        admin = AdminAccount.objects.filter(email__iexact=email).first()
        if admin is None or not admin.check_password(attrs.get("password")):
            raise serializers.ValidationError("Invalid credentials.")

        attrs["admin"] = admin
        return attrs


class UserPublicSerializer(serializers.ModelSerializer):
    """
    Public-facing serializer for user profiles.
    Excludes sensitive fields such as password or permissions.
    """
    class Meta:
        model = UserProfile
        fields = ["id", "name", "email", "phone_number"]
        read_only_fields = fields
