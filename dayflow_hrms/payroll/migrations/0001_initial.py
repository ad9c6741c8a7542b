from decimal import Decimal

import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="PayrollRecord",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "month",
                    models.PositiveSmallIntegerField(
                        validators=[
                            django.core.validators.MinValueValidator(1),
                            django.core.validators.MaxValueValidator(12),
                        ]
                    ),
                ),
                ("year", models.PositiveIntegerField(validators=[django.core.validators.MinValueValidator(1)])),
                (
                    "basic_salary",
                    models.DecimalField(
                        decimal_places=2,
                        max_digits=12,
                        validators=[django.core.validators.MinValueValidator(Decimal("0"))],
                    ),
                ),
                ("gross_salary", models.DecimalField(decimal_places=2, default=Decimal("0.00"), editable=False, max_digits=12)),
                ("total_deductions", models.DecimalField(decimal_places=2, default=Decimal("0.00"), editable=False, max_digits=12)),
                ("net_salary", models.DecimalField(decimal_places=2, default=Decimal("0.00"), editable=False, max_digits=12)),
                (
                    "payment_method",
                    models.CharField(
                        choices=[("bank_transfer", "Bank transfer"), ("check", "Check"), ("cash", "Cash")],
                        default="bank_transfer",
                        max_length=20,
                    ),
                ),
                ("payment_date", models.DateTimeField(blank=True, null=True)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("draft", "Draft"),
                            ("pending", "Pending"),
                            ("approved", "Approved"),
                            ("paid", "Paid"),
                            ("rejected", "Rejected"),
                        ],
                        default="draft",
                        max_length=10,
                    ),
                ),
                ("remarks", models.TextField(blank=True, default="")),
                ("approved_at", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "approved_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="approved_payroll_records",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "created_by",
                    models.ForeignKey(
                        editable=False,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="created_payroll_records",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "employee",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="payroll_records",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["-year", "-month", "-created_at", "-id"],
            },
        ),
        migrations.CreateModel(
            name="SalaryComponent",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=100)),
                ("kind", models.CharField(choices=[("earning", "Earning"), ("deduction", "Deduction")], max_length=10)),
                (
                    "amount",
                    models.DecimalField(
                        decimal_places=2,
                        max_digits=12,
                        validators=[django.core.validators.MinValueValidator(Decimal("0"))],
                    ),
                ),
                ("is_percentage", models.BooleanField(default=False)),
                ("position", models.PositiveIntegerField(default=0)),
                (
                    "payroll",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="components",
                        to="payroll.payrollrecord",
                    ),
                ),
            ],
            options={
                "ordering": ["position", "id"],
            },
        ),
        migrations.AddConstraint(
            model_name="payrollrecord",
            constraint=models.UniqueConstraint(
                fields=("employee", "month", "year"), name="unique_payroll_per_employee_period"
            ),
        ),
        migrations.AddIndex(
            model_name="payrollrecord",
            index=models.Index(fields=["year", "month"], name="payroll_period_idx"),
        ),
        migrations.AddIndex(
            model_name="payrollrecord",
            index=models.Index(fields=["status"], name="payroll_status_idx"),
        ),
    ]
