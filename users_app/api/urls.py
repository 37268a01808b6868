from django.urls import path
from .views import (
    EmailExistsView,
    RegisterView,
    VerifyEmailView,

    LoginView,
    LogoutView,
    ProfileView,
    AdminLoginView,
    AdminProfileView,
)
urlpatterns = [
    path("email-exists/", EmailExistsView.as_view(), name="user-email-exists"),
    path("register/", RegisterView.as_view(), name="user-register"),
    path("verify-email/", VerifyEmailView.as_view(), name="user-verify-email"),

    path("login/", LoginView.as_view(), name="user-login"),
    path("logout/", LogoutView.as_view(), name="user-logout"),
    path("profile/", ProfileView.as_view(), name="user-profile"),

    path("admin/login/", AdminLoginView.as_view(), name="admin-login"),
    path("admin/profile/", AdminProfileView.as_view(), name="admin-profile"),
]
