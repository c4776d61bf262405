from apps.accounts.permissions import capabilities_for


def global_settings(request):
    profile = getattr(request, 'profile', None)
    return {
        'profile': profile,
        'current_branch': getattr(request, 'branch', None),
        'capabilities': capabilities_for(getattr(request, 'user', None)),
    }
