# accounts/models.py
from django.contrib.auth.models import AbstractUser
from django.db import models


class User(AbstractUser):
    ROLE_USER = 'user'
    ROLE_HR = 'hr'
    ROLE_ADMIN = 'admin'
    ROLE_CHOICES = [
        (ROLE_USER, 'Applicant'),
        (ROLE_HR, 'HR'),
        (ROLE_ADMIN, 'Admin'),
    ]
    PRIVILEGED_ROLES = (ROLE_HR, ROLE_ADMIN)

    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default=ROLE_USER)
    full_name = models.CharField(max_length=255, blank=True)
    phone = models.CharField(max_length=32, blank=True)

    def is_privileged(self):
        """Admin and HR staff may see inactive postings and manage them."""
        return self.role in self.PRIVILEGED_ROLES or self.is_superuser

    def display_name(self):
        return self.full_name or self.get_full_name() or self.username
