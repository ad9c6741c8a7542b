from decimal import Decimal

from django.db.models import Count, Sum

from dayflow_hrms.payroll.models import PayrollRecord

RECORD_ORDERING = ("-year", "-month", "-created_at", "-id")


def filter_payrolls(month=None, year=None, status=None, employee=None):
    qs = PayrollRecord.objects.select_related("employee", "approved_by", "created_by").prefetch_related("components")

    if month is not None:
        qs = qs.filter(month=month)
    if year is not None:
        qs = qs.filter(year=year)
    if status:
        qs = qs.filter(status=status)
    if employee is not None:
        qs = qs.filter(employee=employee)

    return qs.order_by(*RECORD_ORDERING)


def summarize_payrolls(qs):
    """Totals over exactly the records in ``qs``."""
    totals = qs.order_by().aggregate(
        total_net_pay=Sum("net_salary", default=Decimal("0")),
        total_gross=Sum("gross_salary", default=Decimal("0")),
        total_deductions=Sum("total_deductions", default=Decimal("0")),
        employee_count=Count("employee", distinct=True),
        record_count=Count("id"),
    )
    status_counts = {
        row["status"]: row["count"]
        for row in qs.order_by().values("status").annotate(count=Count("id"))
    }
    totals["status_counts"] = status_counts
    # flat counters the dashboard cards read
    for status in (PayrollRecord.Status.PENDING, PayrollRecord.Status.APPROVED, PayrollRecord.Status.PAID):
        totals[f"{status.value}_count"] = status_counts.get(status.value, 0)
    return totals


def list_payrolls(month=None, year=None, status=None, employee=None):
    """Return ``(records, summary)`` for the conjunction of the given filters.

    Callers are expected to have checked that the actor may see every
    employee's payroll.
    """
    records = filter_payrolls(month=month, year=year, status=status, employee=employee)
    return records, summarize_payrolls(records)


def list_own_payrolls(user, year=None):
    return filter_payrolls(year=year, employee=user)
