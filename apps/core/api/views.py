from rest_framework import viewsets
from rest_framework.permissions import IsAuthenticated

from apps.accounts.permissions import Capability, HasCapability, get_profile, has_capability


class BaseBranchViewSet(viewsets.ReadOnlyModelViewSet):
    """
    Base ViewSet that restricts querysets to the user's branch.

    Users without VIEW_ALL_REQUESTS/ADJUST_ANY_BRANCH (branch-bound roles and
    requesters) only see rows of their own branch. Set `branch_field` to the
    lookup path of the branch FK ('branch', 'request__branch', ...); None
    disables the filter.
    """
    permission_classes = [IsAuthenticated, HasCapability]
    branch_field = 'branch'
    required_capabilities = {}

    def get_branch(self):
        """Branch the user is bound to, resolved from its profile (JWT-safe)"""
        profile = get_profile(self.request.user)
        return profile.branch if profile else None

    def sees_all_branches(self):
        user = self.request.user
        return (
            has_capability(user, Capability.VIEW_ALL_REQUESTS)
            or has_capability(user, Capability.ADJUST_ANY_BRANCH)
        )

    def get_queryset(self):
        queryset = super().get_queryset()
        if self.branch_field is None or self.sees_all_branches():
            return queryset
        branch = self.get_branch()
        if branch is None:
            return queryset.none()
        return queryset.filter(**{self.branch_field: branch})
