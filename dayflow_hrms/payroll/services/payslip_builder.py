from decimal import ROUND_HALF_UP, Decimal

from django.conf import settings

from dayflow_hrms.payroll.exceptions import PayrollValidationError
from dayflow_hrms.payroll.services.salary_evaluator import EARNING, component_value, evaluate

CENTS = Decimal("0.01")
# Totals at or above this no longer fit DecimalField(max_digits=12, decimal_places=2).
TOTAL_LIMIT = Decimal("9999999999.995")


def build_totals(basic_salary, components):
    totals = evaluate(basic_salary, components)
    for field, value in totals._asdict().items():
        if abs(value) >= TOTAL_LIMIT:
            raise PayrollValidationError(
                f"Computed {field.replace('_', ' ')} is too large to store."
            )
    return totals


def _to_cents(value):
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)


def apply_totals(record, totals):
    """Copy builder output onto ``record``; the only writer of the totals fields.

    Net is derived from the rounded gross and deductions so the stored
    record always satisfies ``net = gross - deductions``.
    """
    record.gross_salary = _to_cents(totals.gross_salary)
    record.total_deductions = _to_cents(totals.deductions)
    record.net_salary = record.gross_salary - record.total_deductions
    return record


def build_payslip_json(record):
    """Payslip view of a record with each component resolved to its money value."""
    earnings = []
    deductions = []
    basic = record.basic_salary
    gross = record.gross_salary

    for component in record.components.all():
        base = basic if component.kind == EARNING else gross
        item = {
            "name": component.name,
            "amount": str(_to_cents(component_value(component, base))),
        }
        if component.is_percentage:
            item["rate"] = str(component.amount)

        if component.kind == EARNING:
            earnings.append(item)
        else:
            deductions.append(item)

    return {
        "employee": record.employee_id,
        "period": f"{record.year}-{record.month:02d}",
        "currency": settings.HRMS_DEFAULT_CURRENCY,
        "basic_salary": str(record.basic_salary),
        "gross_salary": str(record.gross_salary),
        "total_deductions": str(record.total_deductions),
        "net_salary": str(record.net_salary),
        "earnings": earnings,
        "deductions": deductions,
    }
