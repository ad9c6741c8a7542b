from rolepermissions.roles import AbstractUserRole


class Admin(AbstractUserRole):
    available_permissions = {
        'manage_employees': True,
        'assign_roles': True,
        'create_payroll': True,
        'edit_payroll': True,
        'submit_payroll': True,
        'approve_payroll': True,
        'pay_payroll': True,
        'delete_payroll': True,
        'view_all_payroll': True,
        'view_own_payroll': True,
    }


class HR(AbstractUserRole):
    available_permissions = {
        'manage_employees': True,
        'create_payroll': True,
        'edit_payroll': True,
        'submit_payroll': True,
        'pay_payroll': True,
        'view_all_payroll': True,
        'view_own_payroll': True,
    }


class Employee(AbstractUserRole):
    available_permissions = {
        'view_own_payroll': True,
    }
