from decimal import Decimal

from rest_framework import serializers

from dayflow_hrms.payroll.models import PayrollRecord, SalaryComponent
from dayflow_hrms.users.api.serializers import EmployeeMiniSerializer

MONEY = {"max_digits": 12, "decimal_places": 2}


class SalaryComponentSerializer(serializers.ModelSerializer):
    amount = serializers.DecimalField(min_value=Decimal("0"), **MONEY)

    class Meta:
        model = SalaryComponent
        fields = ["name", "kind", "amount", "is_percentage"]


class PayrollRecordSerializer(serializers.ModelSerializer):
    employee = EmployeeMiniSerializer(read_only=True)
    components = SalaryComponentSerializer(many=True, read_only=True)
    approved_by_name = serializers.SerializerMethodField()
    created_by_name = serializers.SerializerMethodField()

    class Meta:
        model = PayrollRecord
        fields = [
            "id", "employee", "month", "year", "basic_salary", "components",
            "gross_salary", "total_deductions", "net_salary",
            "payment_method", "payment_date", "status", "remarks",
            "approved_by", "approved_by_name", "approved_at",
            "created_by", "created_by_name", "created_at", "updated_at",
        ]
        read_only_fields = fields

    def get_approved_by_name(self, obj):
        return obj.approved_by.get_full_name() if obj.approved_by else None

    def get_created_by_name(self, obj):
        return obj.created_by.get_full_name() if obj.created_by_id else None


class PayrollCreateSerializer(serializers.Serializer):
    employee = serializers.IntegerField()
    month = serializers.IntegerField(min_value=1, max_value=12)
    year = serializers.IntegerField(min_value=1)
    basic_salary = serializers.DecimalField(min_value=Decimal("0"), **MONEY)
    components = SalaryComponentSerializer(many=True, required=False)
    payment_method = serializers.ChoiceField(choices=PayrollRecord.PaymentMethod.choices, required=False)
    remarks = serializers.CharField(required=False, allow_blank=True)


class PayrollUpdateSerializer(serializers.Serializer):
    basic_salary = serializers.DecimalField(min_value=Decimal("0"), required=False, **MONEY)
    components = SalaryComponentSerializer(many=True, required=False)
    payment_method = serializers.ChoiceField(choices=PayrollRecord.PaymentMethod.choices, required=False)
    status = serializers.ChoiceField(choices=PayrollRecord.Status.choices, required=False)
    remarks = serializers.CharField(required=False, allow_blank=True)
    payment_date = serializers.DateTimeField(required=False, allow_null=True)


class PayrollPreviewSerializer(serializers.Serializer):
    basic_salary = serializers.DecimalField(min_value=Decimal("0"), **MONEY)
    components = SalaryComponentSerializer(many=True, required=False)


class SalaryTotalsSerializer(serializers.Serializer):
    earnings = serializers.DecimalField(max_digits=14, decimal_places=2)
    gross_salary = serializers.DecimalField(max_digits=14, decimal_places=2)
    deductions = serializers.DecimalField(max_digits=14, decimal_places=2)
    net_salary = serializers.DecimalField(max_digits=14, decimal_places=2)


class PayrollSummarySerializer(serializers.Serializer):
    total_net_pay = serializers.DecimalField(max_digits=16, decimal_places=2)
    total_gross = serializers.DecimalField(max_digits=16, decimal_places=2)
    total_deductions = serializers.DecimalField(max_digits=16, decimal_places=2)
    employee_count = serializers.IntegerField()
    record_count = serializers.IntegerField()
    status_counts = serializers.DictField(child=serializers.IntegerField())
    pending_count = serializers.IntegerField()
    approved_count = serializers.IntegerField()
    paid_count = serializers.IntegerField()


class PayrollListResponseSerializer(serializers.Serializer):
    results = PayrollRecordSerializer(many=True)
    summary = PayrollSummarySerializer()
    employees = EmployeeMiniSerializer(many=True)
