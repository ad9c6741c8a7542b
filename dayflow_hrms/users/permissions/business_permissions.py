from rest_framework.permissions import BasePermission

from dayflow_hrms.payroll import policies


class CanViewAllPayroll(BasePermission):
    message = "Only admin or HR can list payroll records."

    def has_permission(self, request, view):
        return policies.can_view_all_payroll(request.user)


class CanCreatePayroll(BasePermission):
    message = "Only admin or HR can create payroll records."

    def has_permission(self, request, view):
        return policies.can_create_payroll(request.user)


class CanEditPayroll(BasePermission):
    message = "Only admin or HR can modify payroll records."

    def has_permission(self, request, view):
        return policies.can_edit_payroll(request.user)


class CanDeletePayroll(BasePermission):
    message = "Only admin can delete payroll records."

    def has_permission(self, request, view):
        return policies.can_delete_payroll(request.user)

