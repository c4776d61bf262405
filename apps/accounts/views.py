"""
Accounts App Views - Login, profile checks and employee management
"""
import logging

from django.contrib import messages
from django.contrib.auth import login
from django.contrib.auth.decorators import login_required
from django.contrib.auth.models import User
from django.contrib.auth.views import LoginView
from django.db import transaction
from django.shortcuts import get_object_or_404, redirect, render
from django.views.decorators.http import require_POST

from .forms import EmployeeForm, ERPAuthenticationForm
from .models import UserProfile
from .permissions import Capability, capability_required, get_profile

logger = logging.getLogger(__name__)


class ERPLoginView(LoginView):
    """
    Login view that:
    1. Authenticates user (username or email)
    2. Sends users without an active profile to the no-profile page
    """
    template_name = 'registration/login.html'
    authentication_form = ERPAuthenticationForm

    def form_valid(self, form):
        user = form.get_user()
        login(self.request, user, backend='apps.accounts.backends.EmailBackend')
        logger.info(f"Sesión iniciada: {user.username}")

        if not user.is_superuser and get_profile(user) is None:
            return redirect('accounts:no_profile')

        return redirect(self.get_success_url())

    def get_success_url(self):
        return self.get_redirect_url() or '/app/'


@login_required
def no_profile(request):
    """Shown when the user has no active profile (role/branch)"""
    return render(request, 'accounts/no_profile.html')


@login_required
@capability_required(Capability.MANAGE_USERS)
def employee_list(request):
    profiles = UserProfile.objects.select_related('user', 'branch').order_by('user__username')
    return render(request, 'accounts/employee_list.html', {'profiles': profiles})


@login_required
@capability_required(Capability.MANAGE_USERS)
def employee_create(request):
    form = EmployeeForm(request.POST or None)

    if request.method == 'POST' and form.is_valid():
        data = form.cleaned_data
        with transaction.atomic():
            user = User.objects.create_user(
                username=data['username'],
                email=data['email'],
                password=data['password'],
                first_name=data['first_name'],
                last_name=data['last_name'],
            )
            UserProfile.objects.create(user=user, role=data['role'], branch=data['branch'])

        logger.info(f"Empleado {user.username} creado por {request.user.username} con rol {data['role']}")
        messages.success(request, f"Empleado '{user.username}' creado.")
        return redirect('accounts:employee_list')

    return render(request, 'accounts/employee_form.html', {'form': form})


@login_required
@require_POST
@capability_required(Capability.MANAGE_USERS)
def employee_toggle(request, pk):
    """Activate/deactivate a profile (users are never deleted)"""
    profile = get_object_or_404(UserProfile, pk=pk)

    if profile.user_id == request.user.id:
        messages.error(request, "No puedes desactivar tu propio usuario.")
        return redirect('accounts:employee_list')

    profile.is_active = not profile.is_active
    profile.save(update_fields=['is_active'])

    state = "activado" if profile.is_active else "desactivado"
    messages.success(request, f"Empleado '{profile.user.username}' {state}.")
    return redirect('accounts:employee_list')
