from django.contrib.auth import get_user_model
from django.db.models import Q

User = get_user_model()


def lookup_employee(employee_id):
    """Return the directory entry for ``employee_id`` or ``None``."""
    return User.objects.filter(pk=employee_id).first()


def list_employees(department=None, status=None, role=None, search=None):
    qs = User.objects.all()
    if department:
        qs = qs.filter(department__iexact=department)
    if status:
        qs = qs.filter(status=status)
    if role:
        qs = qs.filter(role=role)
    if search:
        qs = qs.filter(
            Q(first_name__icontains=search)
            | Q(last_name__icontains=search)
            | Q(email__icontains=search)
            | Q(login_id__icontains=search)
        )
    return qs.order_by("first_name", "last_name", "email")
