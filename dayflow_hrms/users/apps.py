from django.apps import AppConfig


class UsersConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "dayflow_hrms.users"
    label = "users"
    verbose_name = "Users & Employee Directory"

    def ready(self):
        from dayflow_hrms.users import signals  # noqa: F401
