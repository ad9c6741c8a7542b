import pytest
from rolepermissions.checkers import has_permission, has_role

from dayflow_hrms.users.models import Role, User
from dayflow_hrms.users.services.user_service import UserService


@pytest.mark.django_db
def test_role_is_synced_on_save(employee_actor):
    assert has_role(employee_actor, "employee")
    assert not has_permission(employee_actor, "create_payroll")

    UserService.assign_role_to_user(employee_actor, Role.HR)

    assert has_role(employee_actor, "hr")
    assert not has_role(employee_actor, "employee")
    assert has_permission(employee_actor, "create_payroll")
    assert not has_permission(employee_actor, "approve_payroll")


@pytest.mark.django_db
def test_superuser_defaults_to_admin():
    user = User.objects.create_superuser(email="Root@Dayflow.test", password="pass")

    assert user.email == "root@dayflow.test"
    assert user.role == Role.ADMIN
    assert has_role(user, "admin")


@pytest.mark.django_db
def test_me(client_for, employee_actor):
    resp = client_for(employee_actor).get("/api/users/me/")

    assert resp.status_code == 200
    assert resp.json()["email"] == employee_actor.email
    assert resp.json()["role"] == "employee"
    assert resp.json()["full_name"] == "John Doe"


@pytest.mark.django_db
def test_hr_creates_employee_with_login_id(client_for, hr_actor):
    payload = {
        "email": "New.Hire@Dayflow.test",
        "first_name": "Neha",
        "last_name": "Kapoor",
        "department": "Sales",
        "join_date": "2023-04-01",
    }

    resp = client_for(hr_actor).post("/api/users/employees/", payload, format="json")

    assert resp.status_code == 201, resp.content
    body = resp.json()
    assert body["login_id"] == "OINEKA20230001"
    assert len(body["temporary_password"]) == 12
    user = User.objects.get(email="new.hire@dayflow.test")
    assert user.must_change_password
    assert user.check_password(body["temporary_password"])
    assert has_role(user, "employee")


@pytest.mark.django_db
def test_hr_cannot_create_admin(client_for, hr_actor):
    payload = {"email": "boss@dayflow.test", "first_name": "Big", "last_name": "Boss", "role": "admin"}

    resp = client_for(hr_actor).post("/api/users/employees/", payload, format="json")

    assert resp.status_code == 400
    assert not User.objects.filter(email="boss@dayflow.test").exists()


@pytest.mark.django_db
def test_employee_directory_is_admin_hr_only(client_for, employee_actor, hr_actor, other_employee):
    assert client_for(employee_actor).get("/api/users/employees/").status_code == 403

    resp = client_for(hr_actor).get("/api/users/employees/", {"department": "finance"})
    assert resp.status_code == 200
    assert [u["email"] for u in resp.json()] == [other_employee.email]


@pytest.mark.django_db
def test_admin_assigns_role(client_for, admin_actor, hr_actor, employee_actor):
    url = f"/api/users/{employee_actor.pk}/role/"

    assert client_for(hr_actor).post(url, {"role": "hr"}, format="json").status_code == 403

    resp = client_for(admin_actor).post(url, {"role": "hr"}, format="json")
    assert resp.status_code == 200
    employee_actor.refresh_from_db()
    assert employee_actor.role == Role.HR
    assert has_role(employee_actor, "hr")


@pytest.mark.django_db
def test_admin_cannot_demote_self(client_for, admin_actor):
    resp = client_for(admin_actor).post(f"/api/users/{admin_actor.pk}/role/", {"role": "employee"}, format="json")
    assert resp.status_code == 400
