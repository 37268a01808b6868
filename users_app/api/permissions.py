from rest_framework.permissions import SAFE_METHODS, BasePermission

from ..models import AdminAccount, UserProfile


class IsSessionUser(BasePermission):
    """Request carries a live viewer session."""

    message = "Not authorized."

    def has_permission(self, request, view):
        user = request.user
        return isinstance(user, UserProfile) and user.is_authenticated


class IsAdminAccount(BasePermission):
    """Request carries a valid admin token."""

    message = "Admin access required."

    def has_permission(self, request, view):
        return isinstance(request.user, AdminAccount)


class IsAdminOrReadOnly(IsAdminAccount):
    def has_permission(self, request, view):
        if request.method in SAFE_METHODS:
            return True
        return super().has_permission(request, view)
