"""Payroll record operations.

Each operation checks the actor's capability, loads the record, validates
the change and computes totals in memory, and only then writes. A create
or update either lands completely or not at all.
"""
import logging
from decimal import Decimal, InvalidOperation

from django.db import IntegrityError, transaction

from dayflow_hrms.payroll import policies
from dayflow_hrms.payroll.exceptions import (
    PayrollConflict,
    PayrollFinalized,
    PayrollNotFound,
    PayrollPermissionDenied,
    PayrollValidationError,
)
from dayflow_hrms.payroll.models import PayrollRecord, SalaryComponent
from dayflow_hrms.payroll.services.payroll_lifecycle import apply_transition, resolve_transition
from dayflow_hrms.payroll.services.payslip_builder import apply_totals, build_totals
from dayflow_hrms.users.selectors.employee_directory import lookup_employee

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = {"basic_salary", "components", "payment_method", "status", "remarks", "payment_date"}
SIMPLE_FIELDS = ("payment_method", "remarks", "payment_date")


def _decimal(value, label):
    try:
        result = Decimal(str(value))
    except (InvalidOperation, TypeError, ValueError):
        raise PayrollValidationError(f"{label} must be a number.")
    if not result.is_finite():
        raise PayrollValidationError(f"{label} must be a number.")
    return result


def _clean_basic_salary(value):
    if value is None:
        raise PayrollValidationError("Basic salary is required.")
    basic = _decimal(value, "Basic salary")
    if basic < 0:
        raise PayrollValidationError("Basic salary cannot be negative.")
    return basic


def _clean_components(components):
    cleaned = []
    for index, component in enumerate(components or []):
        name = (component.get("name") or "").strip()
        kind = component.get("kind")
        if not name:
            raise PayrollValidationError(f"Component {index + 1} needs a name.")
        if kind not in (SalaryComponent.EARNING, SalaryComponent.DEDUCTION):
            raise PayrollValidationError(f"Component '{name}' must be an earning or a deduction.")
        amount = _decimal(component.get("amount"), f"Component '{name}' amount")
        if amount < 0:
            raise PayrollValidationError(f"Component '{name}' amount cannot be negative.")
        cleaned.append({
            "name": name,
            "kind": kind,
            "amount": amount,
            "is_percentage": bool(component.get("is_percentage", False)),
        })
    return cleaned


def _replace_components(record, components):
    record.components.all().delete()
    SalaryComponent.objects.bulk_create([
        SalaryComponent(payroll=record, position=position, **component)
        for position, component in enumerate(components)
    ])


def _period_taken(employee, month, year):
    return PayrollRecord.objects.filter(employee=employee, month=month, year=year).exists()


def _period_conflict(employee, month, year):
    return PayrollConflict(
        f"Payroll record already exists for {employee.get_full_name()} for {month:02d}/{year}."
    )


def create_payroll(actor, data):
    """Create a draft record for ``data['employee']`` and return it.

    ``status`` in ``data`` is ignored; every record starts as ``draft``.
    """
    if not policies.can_create_payroll(actor):
        logger.warning(f"{getattr(actor, 'email', None)} tried to create a payroll record")
        raise PayrollPermissionDenied("Only admin or HR can create payroll records.")

    employee_ref = data.get("employee")
    if employee_ref is None:
        raise PayrollValidationError("Employee is required.")
    month, year = data.get("month"), data.get("year")
    if month is None or year is None:
        raise PayrollValidationError("Month and year are required.")
    month, year = int(month), int(year)
    if not 1 <= month <= 12:
        raise PayrollValidationError("Month must be between 1 and 12.")
    if year < 1:
        raise PayrollValidationError("Year must be a positive number.")
    basic = _clean_basic_salary(data.get("basic_salary"))
    components = _clean_components(data.get("components"))

    employee = lookup_employee(getattr(employee_ref, "pk", employee_ref))
    if employee is None:
        raise PayrollNotFound("Employee not found.")

    if _period_taken(employee, month, year):
        raise _period_conflict(employee, month, year)

    record = PayrollRecord(
        employee=employee,
        month=month,
        year=year,
        basic_salary=basic,
        payment_method=data.get("payment_method") or PayrollRecord.PaymentMethod.BANK_TRANSFER,
        remarks=data.get("remarks") or "",
        status=PayrollRecord.Status.DRAFT,
        created_by=actor,
    )
    apply_totals(record, build_totals(basic, components))

    try:
        with transaction.atomic():
            record.save()
            _replace_components(record, components)
    except IntegrityError:
        # lost a race with another create for the same period
        raise _period_conflict(employee, month, year)

    logger.info(
        f"Payroll {record.pk} created for {employee.email} {month:02d}/{year} "
        f"by {actor.email}: net {record.net_salary}"
    )
    return record


def get_payroll(actor, record_id):
    record = (
        PayrollRecord.objects.select_related("employee", "approved_by", "created_by")
        .prefetch_related("components")
        .filter(pk=record_id)
        .first()
    )
    if record is None:
        raise PayrollNotFound()
    if not policies.can_view_payroll(actor, record):
        logger.warning(f"{getattr(actor, 'email', None)} denied access to payroll {record_id}")
        raise PayrollPermissionDenied("You can only view your own payroll records.")
    return record


@transaction.atomic
def update_payroll(actor, record_id, changes):
    """Apply ``changes`` to a non-paid record.

    Totals are rebuilt only when ``basic_salary`` or ``components`` is
    part of the update.
    """
    if not policies.can_edit_payroll(actor):
        logger.warning(f"{getattr(actor, 'email', None)} tried to update payroll {record_id}")
        raise PayrollPermissionDenied("Only admin or HR can modify payroll records.")

    record = PayrollRecord.objects.select_for_update().filter(pk=record_id).first()
    if record is None:
        raise PayrollNotFound()
    if record.is_finalized:
        logger.warning(f"{actor.email} tried to modify paid payroll {record.pk}")
        raise PayrollFinalized()

    unknown = set(changes) - EDITABLE_FIELDS
    if unknown:
        raise PayrollValidationError(f"Fields cannot be changed: {', '.join(sorted(unknown))}.")

    basic = _clean_basic_salary(changes["basic_salary"]) if "basic_salary" in changes else None
    components = _clean_components(changes["components"]) if "components" in changes else None

    pending_transition = None
    if changes.get("status") is not None:
        pending_transition = resolve_transition(record, changes["status"], actor)

    for field in SIMPLE_FIELDS:
        if field in changes:
            value = changes[field]
            if field == "remarks" and value is None:
                value = ""
            setattr(record, field, value)

    if pending_transition is not None:
        apply_transition(record, pending_transition, actor)

    if basic is not None or components is not None:
        if basic is not None:
            record.basic_salary = basic
        if components is not None:
            totals = build_totals(record.basic_salary, components)
            _replace_components(record, components)
        else:
            totals = build_totals(record.basic_salary, record.components.all())
        apply_totals(record, totals)

    record.save()
    logger.info(f"Payroll {record.pk} updated by {actor.email}: {', '.join(sorted(changes)) or 'no changes'}")
    return record


@transaction.atomic
def delete_payroll(actor, record_id):
    if not policies.can_delete_payroll(actor):
        logger.warning(f"{getattr(actor, 'email', None)} tried to delete payroll {record_id}")
        raise PayrollPermissionDenied("Only admin can delete payroll records.")

    record = PayrollRecord.objects.select_for_update().filter(pk=record_id).first()
    if record is None:
        raise PayrollNotFound()
    if record.is_finalized:
        logger.warning(f"{actor.email} tried to delete paid payroll {record.pk}")
        raise PayrollFinalized("Cannot delete paid payroll record.")

    record.delete()
    logger.info(f"Payroll {record_id} deleted by {actor.email}")


def preview_totals(actor, basic_salary, components):
    """Totals for unsaved input, for the editing form."""
    if not (policies.can_create_payroll(actor) or policies.can_edit_payroll(actor)):
        raise PayrollPermissionDenied("Only admin or HR can preview payroll totals.")
    return build_totals(_clean_basic_salary(basic_salary), _clean_components(components))
