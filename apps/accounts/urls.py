"""
Accounts App URLs - Authentication and employee management
"""
from django.contrib.auth import views as auth_views
from django.urls import path

from . import views

app_name = 'accounts'

urlpatterns = [
    path('login/', views.ERPLoginView.as_view(), name='login'),
    path('logout/', auth_views.LogoutView.as_view(), name='logout'),
    path('no-profile/', views.no_profile, name='no_profile'),

    path('employees/', views.employee_list, name='employee_list'),
    path('employees/new/', views.employee_create, name='employee_create'),
    path('employees/<int:pk>/toggle/', views.employee_toggle, name='employee_toggle'),
]
