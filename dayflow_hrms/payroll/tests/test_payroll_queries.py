from decimal import Decimal

import pytest

from dayflow_hrms.payroll.models import PayrollRecord
from dayflow_hrms.payroll.selectors.payroll_queries import list_own_payrolls, list_payrolls
from dayflow_hrms.payroll.services.payroll_service import update_payroll
from dayflow_hrms.payroll.tests.samples import TEN_FLAT_TAXES

Status = PayrollRecord.Status


@pytest.fixture
def records(make_payroll, employee_actor, other_employee, admin_actor):
    jan = make_payroll(employee_actor, month=1, year=2024)
    feb = make_payroll(employee_actor, month=2, year=2024)
    other_jan = make_payroll(other_employee, month=1, year=2024, basic_salary=Decimal("1000"), components=TEN_FLAT_TAXES)
    old = make_payroll(other_employee, month=12, year=2023, basic_salary=Decimal("20000"), components=[])
    update_payroll(admin_actor, feb.pk, {"status": Status.PENDING})
    return {"jan": jan, "feb": feb, "other_jan": other_jan, "old": old}


@pytest.mark.django_db
def test_summary_covers_filtered_set(records):
    rows, summary = list_payrolls(year=2024)

    assert {r.pk for r in rows} == {records["jan"].pk, records["feb"].pk, records["other_jan"].pk}
    assert summary["record_count"] == 3
    assert summary["total_net_pay"] == Decimal("62808") * 2 + Decimal("-500")
    assert summary["total_gross"] == Decimal("71600") * 2 + Decimal("1000")
    assert summary["total_deductions"] == Decimal("8792") * 2 + Decimal("1500")
    assert summary["employee_count"] == 2
    assert summary["status_counts"] == {"draft": 2, "pending": 1}
    assert summary["pending_count"] == 1
    assert summary["paid_count"] == 0


@pytest.mark.django_db
def test_employee_count_is_distinct(records, employee_actor):
    rows, summary = list_payrolls(employee=employee_actor)

    assert summary["record_count"] == 2
    assert summary["employee_count"] == 1
    assert summary["total_net_pay"] == Decimal("125616")


@pytest.mark.django_db
def test_filters_are_combined(records, other_employee):
    rows, summary = list_payrolls(month=1, year=2024, employee=other_employee)
    assert [r.pk for r in rows] == [records["other_jan"].pk]

    rows, summary = list_payrolls(month=1, status=Status.PENDING)
    assert list(rows) == []
    assert summary["record_count"] == 0
    assert summary["total_net_pay"] == 0
    assert summary["employee_count"] == 0
    assert summary["status_counts"] == {}


@pytest.mark.django_db
def test_newest_period_first(records):
    rows, _ = list_payrolls()

    assert [r.pk for r in rows] == [
        records["feb"].pk,
        records["other_jan"].pk,
        records["jan"].pk,
        records["old"].pk,
    ]


@pytest.mark.django_db
def test_own_payrolls_only(records, employee_actor):
    assert {r.pk for r in list_own_payrolls(employee_actor)} == {records["jan"].pk, records["feb"].pk}
