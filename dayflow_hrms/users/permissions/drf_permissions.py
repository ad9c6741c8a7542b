from rest_framework.permissions import BasePermission
from rolepermissions.checkers import has_permission


class CanManageEmployees(BasePermission):
    message = "Only admin or HR can manage the employee directory."

    def has_permission(self, request, view):
        return request.user.is_authenticated and has_permission(request.user, 'manage_employees')


class CanAssignRoles(BasePermission):
    message = "Only admin can assign roles."

    def has_permission(self, request, view):
        return request.user.is_authenticated and has_permission(request.user, 'assign_roles')
