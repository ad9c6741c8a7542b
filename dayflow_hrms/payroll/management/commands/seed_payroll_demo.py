from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone

from dayflow_hrms.payroll.models import PayrollRecord
from dayflow_hrms.payroll.services.payroll_service import create_payroll
from dayflow_hrms.users.models import Role, User
from dayflow_hrms.users.services.login_id_service import generate_login_id

DEMO_PASSWORD = "Dayflow@123"

DEMO_USERS = [
    {"email": "admin@dayflow.local", "first_name": "Asha", "last_name": "Rao", "role": Role.ADMIN,
     "department": "Management", "position": "Director"},
    {"email": "hr@dayflow.local", "first_name": "Harish", "last_name": "Menon", "role": Role.HR,
     "department": "People", "position": "HR Manager"},
    {"email": "john.doe@dayflow.local", "first_name": "John", "last_name": "Doe", "role": Role.EMPLOYEE,
     "department": "Engineering", "position": "Developer"},
    {"email": "priya.shah@dayflow.local", "first_name": "Priya", "last_name": "Shah", "role": Role.EMPLOYEE,
     "department": "Finance", "position": "Accountant"},
]

STANDARD_COMPONENTS = [
    {"name": "HRA", "kind": "earning", "amount": Decimal("40"), "is_percentage": True},
    {"name": "Transport", "kind": "earning", "amount": Decimal("1600"), "is_percentage": False},
    {"name": "PF", "kind": "deduction", "amount": Decimal("12"), "is_percentage": True},
    {"name": "Professional Tax", "kind": "deduction", "amount": Decimal("200"), "is_percentage": False},
]


class Command(BaseCommand):
    help = "Seed demo users for each role and draft payroll records for the current month"

    def add_arguments(self, parser):
        parser.add_argument("--basic-salary", type=Decimal, default=Decimal("50000"))

    @transaction.atomic
    def handle(self, *args, **options):
        users = {}
        for data in DEMO_USERS:
            user = User.objects.filter(email=data["email"]).first()
            if user:
                self.stdout.write(f"{user.email} already exists")
            else:
                user = User(**data, must_change_password=True)
                user.login_id = generate_login_id(user.first_name, user.last_name, user.join_date.year)
                user.set_password(DEMO_PASSWORD)
                user.save()
                self.stdout.write(self.style.SUCCESS(f"Created {user.email} ({user.login_id})"))
            users[data["role"]] = users.get(data["role"], []) + [user]

        today = timezone.localdate()
        hr = users[Role.HR][0]
        for employee in users[Role.EMPLOYEE]:
            if PayrollRecord.objects.filter(employee=employee, month=today.month, year=today.year).exists():
                self.stdout.write(f"Payroll for {employee.email} {today.month:02d}/{today.year} already exists")
                continue
            record = create_payroll(hr, {
                "employee": employee.pk,
                "month": today.month,
                "year": today.year,
                "basic_salary": options["basic_salary"],
                "components": STANDARD_COMPONENTS,
            })
            self.stdout.write(self.style.SUCCESS(f"Created payroll {record.pk} for {employee.email}: net {record.net_salary}"))
