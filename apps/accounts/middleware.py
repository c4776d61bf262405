"""
Profile Middleware - attaches the acting profile to every request

Responsibilities:
1. Attach request.profile, request.role and request.branch
2. Block authenticated users without an active profile
"""
from django.contrib import messages
from django.shortcuts import redirect


class ProfileMiddleware:
    """
    Injects the user's profile context:
    - request.profile: active UserProfile or None
    - request.role: role code or None
    - request.branch: assigned Branch (None for users without one)
    """

    # Paths that don't require a profile
    EXEMPT_PATHS = [
        '/accounts/',
        '/admin/',
        '/static/',
        '/uploads/',
        '/api/',
        '/favicon.ico',
    ]

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        request.profile = None
        request.role = None
        request.branch = None

        if not request.user.is_authenticated:
            return self.get_response(request)

        profile = getattr(request.user, 'profile', None)
        if profile is not None and profile.is_active:
            request.profile = profile
            request.role = profile.role
            request.branch = profile.branch

        if self._is_exempt_path(request.path) or request.user.is_superuser:
            return self.get_response(request)

        if request.profile is None:
            messages.warning(request, "Tu usuario no tiene un perfil activo asignado.")
            return redirect('accounts:no_profile')

        return self.get_response(request)

    def _is_exempt_path(self, path):
        return any(path.startswith(exempt) for exempt in self.EXEMPT_PATHS)
