"""
Role capability table.

Each business action names the capability it needs; the table below is the
single place that decides which roles hold it. Superusers hold every capability.
"""
from enum import Enum
from functools import wraps

from django.contrib import messages
from django.http import JsonResponse
from django.shortcuts import redirect
from rest_framework.permissions import BasePermission

from apps.core.exceptions import PermissionDeniedError

from .models import Role


class Capability(Enum):
    CREATE_REQUEST = 'CREATE_REQUEST'
    EDIT_REQUEST = 'EDIT_REQUEST'
    APPROVE_REQUEST = 'APPROVE_REQUEST'
    REJECT_REQUEST = 'REJECT_REQUEST'
    REGISTER_EXECUTION = 'REGISTER_EXECUTION'
    VALIDATE_DOCUMENT = 'VALIDATE_DOCUMENT'
    DELETE_DOCUMENT = 'DELETE_DOCUMENT'
    COMPLETE_PURCHASE = 'COMPLETE_PURCHASE'
    CLOSE_PURCHASE = 'CLOSE_PURCHASE'
    REGISTER_RECEPTION = 'REGISTER_RECEPTION'
    VIEW_ALL_REQUESTS = 'VIEW_ALL_REQUESTS'
    ADJUST_STOCK = 'ADJUST_STOCK'
    ADJUST_ANY_BRANCH = 'ADJUST_ANY_BRANCH'
    MANAGE_STOCK_LEVELS = 'MANAGE_STOCK_LEVELS'
    CREATE_PRODUCT = 'CREATE_PRODUCT'
    MANAGE_CLIENTS = 'MANAGE_CLIENTS'
    MANAGE_PROVIDERS = 'MANAGE_PROVIDERS'
    MANAGE_USERS = 'MANAGE_USERS'


ALL_ROLES = frozenset(Role.values)
DIRECTORS = frozenset({Role.CEO, Role.GENERAL_ADMIN})
PRIVILEGED = DIRECTORS | {Role.LOGISTICS}
STORE_ROLES = frozenset({Role.BRANCH_ADMIN, Role.WAREHOUSE})
BACK_OFFICE = PRIVILEGED | {Role.ACCOUNTANT}
APPROVERS = frozenset({Role.CEO, Role.LOGISTICS, Role.BRANCH_ADMIN})

CAPABILITIES = {
    Capability.CREATE_REQUEST: ALL_ROLES,
    Capability.EDIT_REQUEST: ALL_ROLES,
    Capability.APPROVE_REQUEST: APPROVERS,
    Capability.REJECT_REQUEST: APPROVERS,
    Capability.REGISTER_EXECUTION: ALL_ROLES,
    Capability.VALIDATE_DOCUMENT: DIRECTORS | {Role.ACCOUNTANT},
    Capability.DELETE_DOCUMENT: BACK_OFFICE,
    Capability.COMPLETE_PURCHASE: BACK_OFFICE,
    Capability.CLOSE_PURCHASE: BACK_OFFICE,
    Capability.REGISTER_RECEPTION: PRIVILEGED | STORE_ROLES,
    Capability.VIEW_ALL_REQUESTS: BACK_OFFICE,
    Capability.ADJUST_STOCK: PRIVILEGED | STORE_ROLES,
    Capability.ADJUST_ANY_BRANCH: PRIVILEGED,
    Capability.MANAGE_STOCK_LEVELS: PRIVILEGED | {Role.BRANCH_ADMIN},
    Capability.CREATE_PRODUCT: PRIVILEGED,
    Capability.MANAGE_CLIENTS: ALL_ROLES,
    Capability.MANAGE_PROVIDERS: BACK_OFFICE,
    Capability.MANAGE_USERS: DIRECTORS,
}

DENIED_MESSAGES = {
    Capability.APPROVE_REQUEST: "No tienes permiso para aprobar solicitudes.",
    Capability.REJECT_REQUEST: "No tienes permiso para rechazar solicitudes.",
    Capability.CLOSE_PURCHASE: "No tienes permiso para Validar la compra.",
    Capability.REGISTER_RECEPTION: "Sin permisos de Almacén.",
    Capability.ADJUST_STOCK: "⛔ Sin permisos para realizar ajustes.",
    Capability.CREATE_PRODUCT: "⛔ No tienes permisos para crear productos.",
}


def get_profile(user):
    """Active profile of an authenticated user, or None"""
    if user is None or not getattr(user, 'is_authenticated', False):
        return None
    profile = getattr(user, 'profile', None)
    if profile is None or not profile.is_active:
        return None
    return profile


def role_of(user):
    profile = get_profile(user)
    return profile.role if profile else None


def has_capability(user, capability: Capability) -> bool:
    if user is None or not getattr(user, 'is_authenticated', False):
        return False
    if user.is_superuser:
        return True
    role = role_of(user)
    return role is not None and role in CAPABILITIES[capability]


def capabilities_for(user) -> set[str]:
    """Names of every capability held by the user (for templates)"""
    return {cap.value for cap in Capability if has_capability(user, cap)}


def require_authenticated(user):
    if user is None or not getattr(user, 'is_authenticated', False):
        raise PermissionDeniedError('NOT_AUTHENTICATED')


def require_capability(user, capability: Capability):
    require_authenticated(user)
    if not has_capability(user, capability):
        raise PermissionDeniedError(
            'PERMISSION_DENIED',
            DENIED_MESSAGES.get(capability),
            capability=capability.value,
        )


def capability_required(capability: Capability, redirect_to='reports:dashboard'):
    """View decorator that requires a role capability (use after @login_required)"""
    def decorator(view_func):
        @wraps(view_func)
        def wrapper(request, *args, **kwargs):
            if not has_capability(request.user, capability):
                message = DENIED_MESSAGES.get(capability, "Acceso restringido para tu rol.")
                if request.headers.get('X-Requested-With') == 'XMLHttpRequest':
                    return JsonResponse({'success': False, 'message': message}, status=403)
                messages.error(request, message)
                return redirect(redirect_to)
            return view_func(request, *args, **kwargs)
        return wrapper
    return decorator


class HasCapability(BasePermission):
    """
    DRF permission reading `required_capabilities` from the view:
        required_capabilities = {'approve': Capability.APPROVE_REQUEST}
    keyed by viewset action; actions not listed only need authentication.
    """

    def has_permission(self, request, view):
        if not request.user or not request.user.is_authenticated:
            return False
        required = getattr(view, 'required_capabilities', {}).get(getattr(view, 'action', None))
        return required is None or has_capability(request.user, required)
