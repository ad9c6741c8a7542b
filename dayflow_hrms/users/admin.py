from django.contrib import admin
from rolepermissions.admin import RolePermissionsUserAdmin
from rolepermissions.checkers import has_permission
from rolepermissions.roles import get_user_roles

from dayflow_hrms.users.models import LoginIdSequence, Role, User
from dayflow_hrms.users.services.user_service import UserService


@admin.register(User)
class CustomUserAdmin(RolePermissionsUserAdmin):
    ordering = ("first_name", "last_name", "email")
    list_display = ("email", "login_id", "get_full_name", "role", "department", "status", "is_active", "get_roles")
    search_fields = ("email", "login_id", "first_name", "last_name")
    list_filter = ("role", "status", "department", "is_active", "is_staff")
    readonly_fields = ("login_id", "date_joined", "last_login")
    actions = ['assign_admin_role', 'assign_hr_role', 'assign_employee_role']

    fieldsets = (
        (None, {'fields': ('email', 'password', 'login_id')}),
        ('Directory', {'fields': ('first_name', 'last_name', 'department', 'position', 'avatar', 'phone',
                                  'join_date', 'status')}),
        ('Permissions', {'fields': ('role', 'must_change_password', 'is_active', 'is_staff', 'is_superuser')}),
        ('Dates', {'fields': ('last_login', 'date_joined')}),
    )
    add_fieldsets = (
        (None, {
            'classes': ('wide',),
            'fields': ('email', 'password1', 'password2', 'first_name', 'last_name', 'role', 'is_active'),
        }),
    )

    def get_full_name(self, obj):
        return obj.get_full_name()

    get_full_name.short_description = "Name"

    def get_roles(self, obj):
        return ", ".join([role.get_name() for role in get_user_roles(obj)])

    get_roles.short_description = "Roles"

    def _assign_role(self, request, queryset, role_name):
        if not has_permission(request.user, 'assign_roles'):
            self.message_user(request, "Only admins can assign roles.", level='error')
            return
        for user in queryset:
            UserService.assign_role_to_user(user, role_name)
            self.message_user(request, f"Assigned {role_name} role to {user.email}")

    def assign_admin_role(self, request, queryset):
        self._assign_role(request, queryset, Role.ADMIN)

    assign_admin_role.short_description = "Assign Admin role"

    def assign_hr_role(self, request, queryset):
        self._assign_role(request, queryset, Role.HR)

    assign_hr_role.short_description = "Assign HR role"

    def assign_employee_role(self, request, queryset):
        self._assign_role(request, queryset, Role.EMPLOYEE)

    assign_employee_role.short_description = "Assign Employee role"


@admin.register(LoginIdSequence)
class LoginIdSequenceAdmin(admin.ModelAdmin):
    list_display = ("company_code", "year", "last_serial", "updated_at")
    list_filter = ("company_code", "year")
