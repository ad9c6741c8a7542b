"""Salary component evaluation.

Percentage earnings are a share of the basic salary. Percentage deductions
are a share of the gross salary, which already includes every earning, so
earnings are always summed first. Nothing is rounded here and net salary
is not clamped at zero.
"""
from collections import namedtuple
from decimal import Decimal

EARNING = "earning"
DEDUCTION = "deduction"

HUNDRED = Decimal("100")

SalaryTotals = namedtuple("SalaryTotals", ["earnings", "gross_salary", "deductions", "net_salary"])


def _to_decimal(value):
    if isinstance(value, Decimal):
        return value
    # str() keeps floats like 0.1 from dragging in binary noise
    return Decimal(str(value))


def _read(component, field, default=None):
    if isinstance(component, dict):
        return component.get(field, default)
    return getattr(component, field, default)


def component_value(component, base):
    amount = _to_decimal(_read(component, "amount", 0))
    if _read(component, "is_percentage", False):
        return base * amount / HUNDRED
    return amount


def evaluate(basic_salary, components=()):
    """Return ``SalaryTotals`` for a basic salary and its components.

    ``components`` may be model instances or mappings with ``kind``,
    ``amount`` and ``is_percentage``; the order does not matter.
    """
    basic = _to_decimal(basic_salary)
    components = list(components)

    earnings = sum(
        (component_value(c, basic) for c in components if _read(c, "kind") == EARNING),
        Decimal("0"),
    )
    gross = basic + earnings

    deductions = sum(
        (component_value(c, gross) for c in components if _read(c, "kind") == DEDUCTION),
        Decimal("0"),
    )

    return SalaryTotals(
        earnings=earnings,
        gross_salary=gross,
        deductions=deductions,
        net_salary=gross - deductions,
    )
