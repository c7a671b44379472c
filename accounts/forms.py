# accounts/forms.py
from django import forms
from django.contrib.auth.forms import UserCreationForm
from .models import User


class UserSignupForm(UserCreationForm):
    # Admin accounts are created through the Django admin, never by self-signup.
    ROLE_CHOICES = (
        (User.ROLE_USER, 'Applicant'),
        (User.ROLE_HR, 'HR'),
    )
    role = forms.ChoiceField(choices=ROLE_CHOICES, widget=forms.RadioSelect, initial=User.ROLE_USER)

    class Meta:
        model = User
        fields = ('username', 'email', 'full_name', 'phone', 'role', 'password1', 'password2')
