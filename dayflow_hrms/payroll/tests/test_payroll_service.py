from decimal import Decimal

import pytest

from dayflow_hrms.payroll.exceptions import (
    PayrollConflict,
    PayrollFinalized,
    PayrollNotFound,
    PayrollPermissionDenied,
    PayrollValidationError,
)
from dayflow_hrms.payroll.models import PayrollRecord, SalaryComponent
from dayflow_hrms.payroll.services import payroll_service
from dayflow_hrms.payroll.services.payroll_service import (
    create_payroll,
    delete_payroll,
    get_payroll,
    preview_totals,
    update_payroll,
)
from dayflow_hrms.payroll.tests.samples import EXAMPLE_COMPONENTS, TEN_FLAT_TAXES

Status = PayrollRecord.Status


def payload(owner, **overrides):
    data = {
        "employee": owner.pk,
        "month": 3,
        "year": 2024,
        "basic_salary": Decimal("50000"),
        "components": EXAMPLE_COMPONENTS,
    }
    data.update(overrides)
    return data


def pay(record, admin):
    for status in (Status.PENDING, Status.APPROVED, Status.PAID):
        record = update_payroll(admin, record.pk, {"status": status})
    return record


@pytest.mark.django_db
def test_create_stores_totals_as_draft(hr_actor, employee_actor):
    record = create_payroll(hr_actor, payload(employee_actor, status=Status.PAID))

    record.refresh_from_db()
    assert record.status == Status.DRAFT
    assert record.created_by == hr_actor
    assert record.gross_salary == Decimal("71600.00")
    assert record.total_deductions == Decimal("8792.00")
    assert record.net_salary == Decimal("62808.00")
    assert record.payment_method == PayrollRecord.PaymentMethod.BANK_TRANSFER
    assert [c.name for c in record.components.all()] == ["HRA", "Transport", "PF", "ProfTax"]


@pytest.mark.django_db
def test_create_accepts_negative_net(hr_actor, employee_actor):
    record = create_payroll(hr_actor, payload(employee_actor, basic_salary=Decimal("1000"), components=TEN_FLAT_TAXES))

    record.refresh_from_db()
    assert record.net_salary == Decimal("-500.00")
    assert record.components.count() == 10


@pytest.mark.django_db
def test_create_duplicate_period_conflicts(hr_actor, admin_actor, employee_actor):
    create_payroll(hr_actor, payload(employee_actor))

    with pytest.raises(PayrollConflict):
        create_payroll(admin_actor, payload(employee_actor, basic_salary=Decimal("1")))

    assert PayrollRecord.objects.filter(employee=employee_actor).count() == 1
    assert PayrollRecord.objects.get(employee=employee_actor).basic_salary == Decimal("50000.00")


@pytest.mark.django_db
def test_create_race_on_unique_constraint_conflicts(hr_actor, employee_actor, monkeypatch):
    create_payroll(hr_actor, payload(employee_actor))
    # skip the pre-check so the insert hits the database constraint
    monkeypatch.setattr(payroll_service, "_period_taken", lambda *args: False)

    with pytest.raises(PayrollConflict):
        create_payroll(hr_actor, payload(employee_actor))

    assert PayrollRecord.objects.filter(employee=employee_actor).count() == 1


@pytest.mark.django_db
def test_same_employee_different_period_is_allowed(hr_actor, employee_actor):
    create_payroll(hr_actor, payload(employee_actor, month=3))
    create_payroll(hr_actor, payload(employee_actor, month=4))

    assert PayrollRecord.objects.filter(employee=employee_actor).count() == 2


@pytest.mark.django_db
def test_create_validation(hr_actor, employee_actor):
    with pytest.raises(PayrollValidationError):
        create_payroll(hr_actor, payload(employee_actor, basic_salary=None))
    with pytest.raises(PayrollValidationError):
        create_payroll(hr_actor, payload(employee_actor, employee=None))
    with pytest.raises(PayrollValidationError):
        create_payroll(hr_actor, payload(employee_actor, month=13))
    with pytest.raises(PayrollValidationError):
        create_payroll(hr_actor, payload(employee_actor, components=[{"name": "X", "kind": "bonus", "amount": 1}]))

    assert not PayrollRecord.objects.exists()


@pytest.mark.django_db
def test_create_for_unknown_employee(hr_actor):
    with pytest.raises(PayrollNotFound):
        create_payroll(hr_actor, {"employee": 987654, "month": 1, "year": 2024, "basic_salary": Decimal("10")})


@pytest.mark.django_db
def test_employee_cannot_create(employee_actor):
    with pytest.raises(PayrollPermissionDenied):
        create_payroll(employee_actor, payload(employee_actor))


@pytest.mark.django_db
def test_update_basic_salary_rebuilds_totals(make_payroll, employee_actor, hr_actor):
    record = make_payroll(employee_actor)

    record = update_payroll(hr_actor, record.pk, {"basic_salary": Decimal("60000")})

    record.refresh_from_db()
    # 60000 + 24000 + 1600 = 85600 gross; 10272 + 200 deductions
    assert record.gross_salary == Decimal("85600.00")
    assert record.total_deductions == Decimal("10472.00")
    assert record.net_salary == Decimal("75128.00")


@pytest.mark.django_db
def test_update_components_replaces_them(make_payroll, employee_actor, hr_actor):
    record = make_payroll(employee_actor)

    update_payroll(hr_actor, record.pk, {"components": [
        {"name": "Bonus", "kind": "earning", "amount": Decimal("5000")},
    ]})

    record.refresh_from_db()
    assert list(record.components.values_list("name", "position")) == [("Bonus", 0)]
    assert SalaryComponent.objects.filter(payroll=record).count() == 1
    assert record.net_salary == Decimal("55000.00")


@pytest.mark.django_db
def test_update_remarks_keeps_totals(make_payroll, employee_actor, hr_actor):
    record = make_payroll(employee_actor)

    update_payroll(hr_actor, record.pk, {"remarks": "March run", "payment_method": PayrollRecord.PaymentMethod.CASH})

    record.refresh_from_db()
    assert record.remarks == "March run"
    assert record.payment_method == PayrollRecord.PaymentMethod.CASH
    assert record.net_salary == Decimal("62808.00")


@pytest.mark.django_db
def test_update_rejects_locked_fields(make_payroll, employee_actor, hr_actor, other_employee):
    record = make_payroll(employee_actor)

    with pytest.raises(PayrollValidationError):
        update_payroll(hr_actor, record.pk, {"net_salary": Decimal("1")})
    with pytest.raises(PayrollValidationError):
        update_payroll(hr_actor, record.pk, {"employee": other_employee.pk})
    with pytest.raises(PayrollValidationError):
        update_payroll(hr_actor, record.pk, {"basic_salary": None})


@pytest.mark.django_db
def test_update_permissions_and_missing_record(make_payroll, employee_actor, hr_actor):
    record = make_payroll(employee_actor)

    with pytest.raises(PayrollPermissionDenied):
        update_payroll(employee_actor, record.pk, {"remarks": "mine now"})
    with pytest.raises(PayrollNotFound):
        update_payroll(hr_actor, record.pk + 1000, {"remarks": "?"})


@pytest.mark.django_db
@pytest.mark.parametrize("changes", [
    {},
    {"basic_salary": Decimal("1")},
    {"components": []},
    {"status": Status.PENDING},
    {"status": Status.DRAFT},
    {"remarks": "late edit"},
    {"payment_method": PayrollRecord.PaymentMethod.CHECK},
    {"payment_date": None},
])
def test_paid_record_is_finalized(make_payroll, employee_actor, admin_actor, changes):
    record = pay(make_payroll(employee_actor), admin_actor)

    with pytest.raises(PayrollFinalized):
        update_payroll(admin_actor, record.pk, changes)

    record.refresh_from_db()
    assert record.status == Status.PAID
    assert record.basic_salary == Decimal("50000.00")
    assert record.remarks == ""
    assert record.components.count() == 4


@pytest.mark.django_db
def test_paid_record_cannot_be_deleted(make_payroll, employee_actor, admin_actor):
    record = pay(make_payroll(employee_actor), admin_actor)

    with pytest.raises(PayrollFinalized):
        delete_payroll(admin_actor, record.pk)

    assert PayrollRecord.objects.filter(pk=record.pk).exists()


@pytest.mark.django_db
@pytest.mark.parametrize("path", [[], [Status.PENDING], [Status.PENDING, Status.REJECTED]])
def test_admin_deletes_unpaid_record(make_payroll, employee_actor, admin_actor, path):
    record = make_payroll(employee_actor)
    for status in path:
        update_payroll(admin_actor, record.pk, {"status": status})

    delete_payroll(admin_actor, record.pk)

    assert not PayrollRecord.objects.filter(pk=record.pk).exists()
    assert not SalaryComponent.objects.exists()


@pytest.mark.django_db
def test_only_admin_deletes(make_payroll, employee_actor, hr_actor):
    record = make_payroll(employee_actor)

    with pytest.raises(PayrollPermissionDenied):
        delete_payroll(hr_actor, record.pk)
    with pytest.raises(PayrollPermissionDenied):
        delete_payroll(employee_actor, record.pk)


@pytest.mark.django_db
def test_get_payroll_access(make_payroll, employee_actor, other_employee, hr_actor):
    record = make_payroll(employee_actor)

    assert get_payroll(hr_actor, record.pk) == record
    assert get_payroll(employee_actor, record.pk) == record
    with pytest.raises(PayrollPermissionDenied):
        get_payroll(other_employee, record.pk)
    with pytest.raises(PayrollNotFound):
        get_payroll(hr_actor, record.pk + 1000)


@pytest.mark.django_db
def test_preview_totals(hr_actor, employee_actor):
    totals = preview_totals(hr_actor, Decimal("50000"), EXAMPLE_COMPONENTS)

    assert totals.net_salary == Decimal("62808")
    assert not PayrollRecord.objects.exists()
    with pytest.raises(PayrollPermissionDenied):
        preview_totals(employee_actor, Decimal("50000"), EXAMPLE_COMPONENTS)


@pytest.mark.django_db
def test_stored_net_is_rounded_gross_minus_rounded_deductions(hr_actor, employee_actor):
    # 1.005 gross rounds up, 0.00402 deductions round down
    record = create_payroll(hr_actor, payload(employee_actor, basic_salary=Decimal("1.00"), components=[
        {"name": "Meal", "kind": "earning", "amount": Decimal("0.5"), "is_percentage": True},
        {"name": "Cess", "kind": "deduction", "amount": Decimal("0.4"), "is_percentage": True},
    ]))

    record.refresh_from_db()
    assert record.gross_salary == Decimal("1.01")
    assert record.total_deductions == Decimal("0.00")
    assert record.net_salary == record.gross_salary - record.total_deductions


@pytest.mark.django_db
def test_totals_too_large_to_store_are_rejected(make_payroll, hr_actor, employee_actor, other_employee):
    huge = {"basic_salary": Decimal("9999999999.99"), "components": [
        {"name": "HRA", "kind": "earning", "amount": Decimal("100"), "is_percentage": True},
    ]}

    with pytest.raises(PayrollValidationError):
        create_payroll(hr_actor, payload(employee_actor, **huge))
    assert not PayrollRecord.objects.exists()

    record = make_payroll(other_employee)
    with pytest.raises(PayrollValidationError):
        update_payroll(hr_actor, record.pk, huge)
    record.refresh_from_db()
    assert record.basic_salary == Decimal("50000.00")
    assert record.components.count() == 4

    with pytest.raises(PayrollValidationError):
        preview_totals(hr_actor, huge["basic_salary"], huge["components"])
