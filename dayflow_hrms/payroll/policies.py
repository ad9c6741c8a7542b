"""Who may do what with payroll records.

One function per operation, each a capability check against the closed
role set in ``users.roles.base_roles``. Views, serializers and services all
ask these functions instead of comparing role strings.
"""
from rolepermissions.checkers import has_permission


def _allowed(user, permission_name: str) -> bool:
    if user is None or not user.is_authenticated:
        return False
    return has_permission(user, permission_name)


def can_create_payroll(user) -> bool:
    return _allowed(user, "create_payroll")


def can_edit_payroll(user) -> bool:
    return _allowed(user, "edit_payroll")


def can_submit_payroll(user) -> bool:
    return _allowed(user, "submit_payroll")


def can_approve_payroll(user) -> bool:
    """Approving and rejecting share this capability."""
    return _allowed(user, "approve_payroll")


def can_pay_payroll(user) -> bool:
    return _allowed(user, "pay_payroll")


def can_delete_payroll(user) -> bool:
    return _allowed(user, "delete_payroll")


def can_view_all_payroll(user) -> bool:
    return _allowed(user, "view_all_payroll")


def can_view_payroll(user, record) -> bool:
    if can_view_all_payroll(user):
        return True
    return _allowed(user, "view_own_payroll") and record.employee_id == user.pk
