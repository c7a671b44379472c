# accounts/urls.py
from django.urls import path
from . import views

urlpatterns = [
    path('signup/', views.signup, name='signup'),
    path('dashboard-redirect/', views.dashboard_redirect, name='dashboard-redirect'),
    path('dashboard/user/', views.user_dashboard, name='user_dashboard'),
    path('dashboard/hr/', views.hr_dashboard, name='hr_dashboard'),
]
