from django.contrib import admin

from dayflow_hrms.payroll.models import PayrollRecord, SalaryComponent


class SalaryComponentInline(admin.TabularInline):
    model = SalaryComponent
    extra = 0
    fields = ("position", "name", "kind", "amount", "is_percentage")

    def has_add_permission(self, request, obj=None):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(PayrollRecord)
class PayrollRecordAdmin(admin.ModelAdmin):
    """Read-only view; records change only through the API so totals stay consistent."""
    list_display = (
        "employee",
        "month",
        "year",
        "basic_salary",
        "gross_salary",
        "total_deductions",
        "net_salary",
        "status",
        "payment_method",
        "created_at",
    )
    list_filter = ("status", "year", "month", "payment_method")
    search_fields = ("employee__email", "employee__first_name", "employee__last_name", "employee__login_id")
    inlines = [SalaryComponentInline]

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False
