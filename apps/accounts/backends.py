"""
Authentication backend - login with username or email
"""
from django.contrib.auth import get_user_model
from django.contrib.auth.backends import ModelBackend
from django.db.models import Q


class EmailBackend(ModelBackend):
    """
    Authenticates against settings.AUTH_USER_MODEL.
    Allows login using either username or email; users whose profile was
    deactivated cannot log in (superusers excepted).
    """
    def authenticate(self, request, username=None, password=None, **kwargs):
        UserModel = get_user_model()
        if username is None:
            username = kwargs.get(UserModel.USERNAME_FIELD)
        if not username or not password:
            return None

        user = (
            UserModel.objects
            .filter(Q(username__iexact=username) | Q(email__iexact=username))
            .order_by('id')
            .first()
        )
        if user is None:
            # Run the hasher anyway to keep timing similar
            UserModel().set_password(password)
            return None

        if user.check_password(password) and self.user_can_authenticate(user):
            return user
        return None

    def user_can_authenticate(self, user):
        if not super().user_can_authenticate(user):
            return False
        if user.is_superuser:
            return True
        profile = getattr(user, 'profile', None)
        return profile is None or profile.is_active


def user_authentication_rule(user):
    """SimpleJWT rule: active user whose profile is active (superusers excepted)"""
    return user is not None and EmailBackend().user_can_authenticate(user)
