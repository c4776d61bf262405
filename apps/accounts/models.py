"""
Accounts App - User profile with role and assigned branch

A user acts with exactly one role. Branch-bound roles (ADMIN_SUC, ALMACEN)
operate only on the branch of their profile; privileged roles pick a branch
per operation.
"""
from django.conf import settings
from django.db import models

from apps.branches.models import Branch


class Role(models.TextChoices):
    CEO = 'CEO', 'Gerente General'
    GENERAL_ADMIN = 'ADMINISTRADOR GENERAL', 'Administrador General'
    LOGISTICS = 'LOGISTICA', 'Logística'
    ACCOUNTANT = 'CONTADOR', 'Contador'
    BRANCH_ADMIN = 'ADMIN_SUC', 'Administrador de Sucursal'
    WAREHOUSE = 'ALMACEN', 'Almacén'
    REQUESTER = 'SOLICITANTE', 'Solicitante'


class UserProfile(models.Model):
    """
    Links a User to its role and branch.
    """
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='profile'
    )
    role = models.CharField(
        max_length=30,
        choices=Role.choices,
        default=Role.REQUESTER,
        verbose_name="Rol"
    )
    branch = models.ForeignKey(
        Branch,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='profiles',
        verbose_name="Sucursal"
    )
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = "Perfil de Usuario"
        verbose_name_plural = "Perfiles de Usuario"

    def __str__(self):
        return f"{self.user.username} ({self.get_role_display()})"

    @property
    def display_name(self):
        return self.user.get_full_name() or self.user.email or self.user.username

    @property
    def is_branch_bound(self):
        return self.role in [Role.BRANCH_ADMIN, Role.WAREHOUSE]
