from rest_framework.permissions import BasePermission


class IsAdminRole(BasePermission):
    """Allow users with the admin role (or superusers)"""
    message = 'Only administrators can perform this action.'

    def has_permission(self, request, view):
        user = request.user
        return bool(user and user.is_authenticated and user.is_admin_role)
