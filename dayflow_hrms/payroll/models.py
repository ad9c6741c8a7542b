from decimal import Decimal

from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models


class PayrollRecord(models.Model):
    """One employee's pay for one month.

    ``gross_salary``, ``total_deductions`` and ``net_salary`` are outputs of
    ``services.payslip_builder`` and are never taken from request data.
    ``net_salary`` may be negative when deductions exceed gross pay.
    """

    class Status(models.TextChoices):
        DRAFT = "draft", "Draft"
        PENDING = "pending", "Pending"
        APPROVED = "approved", "Approved"
        PAID = "paid", "Paid"
        REJECTED = "rejected", "Rejected"

    class PaymentMethod(models.TextChoices):
        BANK_TRANSFER = "bank_transfer", "Bank transfer"
        CHECK = "check", "Check"
        CASH = "cash", "Cash"

    employee = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="payroll_records"
    )
    month = models.PositiveSmallIntegerField(validators=[MinValueValidator(1), MaxValueValidator(12)])
    year = models.PositiveIntegerField(validators=[MinValueValidator(1)])

    basic_salary = models.DecimalField(max_digits=12, decimal_places=2, validators=[MinValueValidator(Decimal("0"))])
    gross_salary = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"), editable=False)
    total_deductions = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"), editable=False)
    net_salary = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"), editable=False)

    payment_method = models.CharField(
        max_length=20,
        choices=PaymentMethod.choices,
        default=PaymentMethod.BANK_TRANSFER
    )
    payment_date = models.DateTimeField(null=True, blank=True)
    status = models.CharField(max_length=10, choices=Status.choices, default=Status.DRAFT)
    remarks = models.TextField(blank=True, default="")

    approved_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="approved_payroll_records"
    )
    approved_at = models.DateTimeField(null=True, blank=True)
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="created_payroll_records",
        editable=False
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-year", "-month", "-created_at", "-id"]
        constraints = [
            models.UniqueConstraint(
                fields=["employee", "month", "year"],
                name="unique_payroll_per_employee_period"
            )
        ]
        indexes = [
            models.Index(fields=["year", "month"], name="payroll_period_idx"),
            models.Index(fields=["status"], name="payroll_status_idx"),
        ]

    def __str__(self):
        return f"{self.employee} {self.year}-{self.month:02d} ({self.status})"

    @property
    def is_finalized(self):
        return self.status == self.Status.PAID


class SalaryComponent(models.Model):
    """A line item of a payroll record.

    Percentage earnings are taken on basic salary, percentage deductions on
    gross salary. Names are not unique within a record.
    """
    EARNING = "earning"
    DEDUCTION = "deduction"

    KIND_CHOICES = [
        (EARNING, "Earning"),
        (DEDUCTION, "Deduction"),
    ]

    payroll = models.ForeignKey(PayrollRecord, on_delete=models.CASCADE, related_name="components")
    name = models.CharField(max_length=100)
    kind = models.CharField(max_length=10, choices=KIND_CHOICES)
    amount = models.DecimalField(max_digits=12, decimal_places=2, validators=[MinValueValidator(Decimal("0"))])
    is_percentage = models.BooleanField(default=False)
    position = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ["position", "id"]

    def __str__(self):
        suffix = "%" if self.is_percentage else ""
        return f"{self.name} ({self.kind}) {self.amount}{suffix}"
