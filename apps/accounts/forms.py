from django import forms
from django.contrib.auth.forms import AuthenticationForm
from django.contrib.auth.models import User

from apps.branches.models import Branch

from .models import Role

INPUT_CLASS = 'w-full px-4 py-3 bg-slate-50 border border-slate-200 rounded-xl text-slate-900 focus:ring-4 focus:ring-indigo-500/10 focus:border-indigo-500 transition-all'


class EmployeeForm(forms.Form):
    """Alta de empleado: usuario + perfil con rol y sucursal"""
    username = forms.CharField(max_length=150, label="Usuario", widget=forms.TextInput(attrs={'class': INPUT_CLASS}))
    email = forms.EmailField(required=False, label="Correo", widget=forms.EmailInput(attrs={'class': INPUT_CLASS}))
    first_name = forms.CharField(max_length=150, required=False, label="Nombres", widget=forms.TextInput(attrs={'class': INPUT_CLASS}))
    last_name = forms.CharField(max_length=150, required=False, label="Apellidos", widget=forms.TextInput(attrs={'class': INPUT_CLASS}))
    password = forms.CharField(min_length=6, label="Contraseña", widget=forms.PasswordInput(attrs={'class': INPUT_CLASS}))
    role = forms.ChoiceField(choices=Role.choices, label="Rol", widget=forms.Select(attrs={'class': INPUT_CLASS}))
    branch = forms.ModelChoiceField(
        queryset=Branch.objects.none(),
        required=False,
        label="Sucursal",
        widget=forms.Select(attrs={'class': INPUT_CLASS})
    )

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields['branch'].queryset = Branch.objects.active()

    def clean_username(self):
        username = self.cleaned_data['username'].strip()
        if User.objects.filter(username__iexact=username).exists():
            raise forms.ValidationError("Ya existe un usuario con ese nombre.")
        return username

    def clean(self):
        cleaned_data = super().clean()
        role = cleaned_data.get('role')
        if role in [Role.BRANCH_ADMIN, Role.WAREHOUSE] and not cleaned_data.get('branch'):
            raise forms.ValidationError("Los roles de sucursal requieren una sucursal asignada.")
        return cleaned_data


class ERPAuthenticationForm(AuthenticationForm):
    """Rejects users whose profile was deactivated, whatever backend matched"""

    def confirm_login_allowed(self, user):
        super().confirm_login_allowed(user)
        profile = getattr(user, 'profile', None)
        if not user.is_superuser and profile is not None and not profile.is_active:
            raise forms.ValidationError("Tu usuario está desactivado.", code='inactive')
