from django.apps import AppConfig


class PayrollConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "dayflow_hrms.payroll"
    label = "payroll"
    verbose_name = "Payroll"
