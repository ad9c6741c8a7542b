import django_filters
from django import forms

from dayflow_hrms.payroll.models import PayrollRecord


class IntegerFilter(django_filters.NumberFilter):
    field_class = forms.IntegerField


class PayrollRecordFilter(django_filters.FilterSet):
    month = IntegerFilter(min_value=1, max_value=12)
    year = IntegerFilter(min_value=1)
    status = django_filters.ChoiceFilter(choices=PayrollRecord.Status.choices)
    employee = IntegerFilter(field_name="employee")

    class Meta:
        model = PayrollRecord
        fields = ["month", "year", "status", "employee"]
