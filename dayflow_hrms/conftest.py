import pytest
from decimal import Decimal
from rest_framework.test import APIClient

from dayflow_hrms.payroll.services.payroll_service import create_payroll
from dayflow_hrms.payroll.tests.samples import EXAMPLE_COMPONENTS
from dayflow_hrms.users.models import Role, User


@pytest.fixture
def admin_actor(db):
    return User.objects.create_user(
        email="admin@dayflow.test", password="pass", first_name="Asha", last_name="Rao", role=Role.ADMIN
    )


@pytest.fixture
def hr_actor(db):
    return User.objects.create_user(
        email="hr@dayflow.test", password="pass", first_name="Harish", last_name="Menon", role=Role.HR
    )


@pytest.fixture
def employee_actor(db):
    return User.objects.create_user(
        email="john.doe@dayflow.test", password="pass", first_name="John", last_name="Doe",
        role=Role.EMPLOYEE, department="Engineering", position="Developer"
    )


@pytest.fixture
def other_employee(db):
    return User.objects.create_user(
        email="priya.shah@dayflow.test", password="pass", first_name="Priya", last_name="Shah",
        role=Role.EMPLOYEE, department="Finance", position="Accountant"
    )


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def client_for(api_client):
    def _client_for(user):
        api_client.force_authenticate(user=user)
        return api_client
    return _client_for


@pytest.fixture
def make_payroll(hr_actor):
    """Create a draft record through the service, defaulting to the 50000 example."""
    def _make_payroll(employee, month=1, year=2024, basic_salary=Decimal("50000"), components=None, actor=None):
        return create_payroll(actor or hr_actor, {
            "employee": employee.pk,
            "month": month,
            "year": year,
            "basic_salary": basic_salary,
            "components": EXAMPLE_COMPONENTS if components is None else components,
        })
    return _make_payroll
