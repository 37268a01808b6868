from django import forms
from django.contrib.auth.forms import UserCreationForm

from users_app.models import AdminAccount, UserProfile


class UserProfileCreationForm(UserCreationForm):
    class Meta(UserCreationForm.Meta):
        model = UserProfile
        fields = ("username", "email", "name", "phone_number")


class AdminAccountForm(forms.ModelForm):
    """Admin-site form that hashes the entered password."""

    raw_password = forms.CharField(
        label="Password",
        widget=forms.PasswordInput,
        required=False,
        help_text="Leave empty to keep the current password.",
    )

    class Meta:
        model = AdminAccount
        fields = ("email",)

    def clean(self):
        cleaned = super().clean()
        if not self.instance.pk and not cleaned.get("raw_password"):
            raise forms.ValidationError("A password is required for new admins.")
        return cleaned

    def save(self, commit=True):
        admin = super().save(commit=False)
        if self.cleaned_data.get("raw_password"):
            admin.set_password(self.cleaned_data["raw_password"])
        if commit:
            admin.save()
        return admin
