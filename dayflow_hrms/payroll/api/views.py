import logging

from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.utils import OpenApiResponse, extend_schema, extend_schema_view
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import ValidationError
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from dayflow_hrms.payroll.api.filters import PayrollRecordFilter
from dayflow_hrms.payroll.api.serializers import (
    PayrollCreateSerializer,
    PayrollListResponseSerializer,
    PayrollPreviewSerializer,
    PayrollRecordSerializer,
    PayrollSummarySerializer,
    PayrollUpdateSerializer,
    SalaryTotalsSerializer,
)
from dayflow_hrms.payroll.models import PayrollRecord
from dayflow_hrms.payroll.selectors.payroll_queries import list_own_payrolls, list_payrolls
from dayflow_hrms.payroll.services import payroll_service
from dayflow_hrms.payroll.services.payslip_builder import build_payslip_json
from dayflow_hrms.users.api.serializers import EmployeeMiniSerializer
from dayflow_hrms.users.permissions.business_permissions import (
    CanCreatePayroll,
    CanDeletePayroll,
    CanEditPayroll,
    CanViewAllPayroll,
)
from dayflow_hrms.users.selectors.employee_directory import list_employees

logger = logging.getLogger(__name__)

ERRORS = {
    400: OpenApiResponse(description="Invalid data or status transition"),
    403: OpenApiResponse(description="Role not allowed"),
    404: OpenApiResponse(description="Record or employee not found"),
    409: OpenApiResponse(description="Duplicate period or paid record"),
}


@extend_schema_view(
    list=extend_schema(
        tags=["Payroll - Records"],
        summary="List payroll records with summary",
        description=(
            "Admin/HR only. Filters are combined; the summary covers exactly the "
            "filtered records. Newest period first."
        ),
        responses={200: PayrollListResponseSerializer},
    ),
    create=extend_schema(
        tags=["Payroll - Records"],
        summary="Create a payroll record",
        description="Admin/HR only. Totals are computed from the basic salary and components; status starts as draft.",
        request=PayrollCreateSerializer,
        responses={201: PayrollRecordSerializer, **ERRORS},
    ),
    retrieve=extend_schema(
        tags=["Payroll - Records"],
        summary="Retrieve a payroll record",
        description="Admin/HR see any record; employees only their own.",
        responses={200: PayrollRecordSerializer, 403: ERRORS[403], 404: ERRORS[404]},
    ),
    update=extend_schema(
        tags=["Payroll - Records"],
        summary="Update a payroll record",
        description="Admin/HR only; approving or rejecting is admin only. Paid records cannot change.",
        request=PayrollUpdateSerializer,
        responses={200: PayrollRecordSerializer, **ERRORS},
    ),
    partial_update=extend_schema(
        tags=["Payroll - Records"],
        summary="Partially update a payroll record",
        request=PayrollUpdateSerializer,
        responses={200: PayrollRecordSerializer, **ERRORS},
    ),
    destroy=extend_schema(
        tags=["Payroll - Records"],
        summary="Delete a payroll record",
        description="Admin only. Paid records cannot be deleted.",
        responses={204: None, 403: ERRORS[403], 404: ERRORS[404], 409: ERRORS[409]},
    ),
    mine=extend_schema(
        tags=["Payroll - Records"],
        summary="My payroll records",
        responses={200: PayrollRecordSerializer(many=True)},
    ),
    payslip=extend_schema(
        tags=["Payroll - Records"],
        summary="Payslip for a payroll record",
        description="Component amounts resolved to money values. Same access rules as retrieve.",
        responses={200: dict, 403: ERRORS[403], 404: ERRORS[404]},
    ),
)
class PayrollRecordViewSet(viewsets.GenericViewSet):
    queryset = PayrollRecord.objects.all()
    serializer_class = PayrollRecordSerializer
    filter_backends = [DjangoFilterBackend]
    filterset_class = PayrollRecordFilter

    def get_permissions(self):
        role_permissions = {
            "list": [CanViewAllPayroll],
            "create": [CanCreatePayroll],
            "update": [CanEditPayroll],
            "partial_update": [CanEditPayroll],
            "destroy": [CanDeletePayroll],
        }
        return [IsAuthenticated()] + [p() for p in role_permissions.get(self.action, [])]

    def _query_params(self, request):
        filterset = PayrollRecordFilter(request.query_params, queryset=PayrollRecord.objects.none())
        if not filterset.is_valid():
            raise ValidationError(filterset.errors)
        return filterset.form.cleaned_data

    def list(self, request):
        params = self._query_params(request)

        records, summary = list_payrolls(
            month=params.get("month"),
            year=params.get("year"),
            status=params.get("status") or None,
            employee=params.get("employee"),
        )
        logger.info(f"{request.user.email} listed {summary['record_count']} payroll records")
        return Response({
            "results": PayrollRecordSerializer(records, many=True).data,
            "summary": PayrollSummarySerializer(summary).data,
            "employees": EmployeeMiniSerializer(list_employees(), many=True).data,
        })

    def create(self, request):
        serializer = PayrollCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        record = payroll_service.create_payroll(request.user, serializer.validated_data)
        record = payroll_service.get_payroll(request.user, record.pk)
        return Response(PayrollRecordSerializer(record).data, status=status.HTTP_201_CREATED)

    def retrieve(self, request, pk=None):
        record = payroll_service.get_payroll(request.user, pk)
        return Response(PayrollRecordSerializer(record).data)

    def update(self, request, pk=None, partial=False):
        serializer = PayrollUpdateSerializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        record = payroll_service.update_payroll(request.user, pk, serializer.validated_data)
        record = payroll_service.get_payroll(request.user, record.pk)
        return Response(PayrollRecordSerializer(record).data)

    def partial_update(self, request, pk=None):
        return self.update(request, pk=pk, partial=True)

    def destroy(self, request, pk=None):
        payroll_service.delete_payroll(request.user, pk)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=False, methods=["get"], url_path="mine")
    def mine(self, request):
        params = self._query_params(request)
        records = list_own_payrolls(request.user, year=params.get("year"))
        return Response(PayrollRecordSerializer(records, many=True).data)

    @action(detail=True, methods=["get"], url_path="payslip")
    def payslip(self, request, pk=None):
        record = payroll_service.get_payroll(request.user, pk)
        return Response(build_payslip_json(record))


@extend_schema(
    tags=["Payroll - Preview"],
    summary="Preview salary totals",
    description=(
        "Evaluate earnings, gross, deductions and net for unsaved input. "
        "Percentage earnings use the basic salary, percentage deductions the gross salary."
    ),
    request=PayrollPreviewSerializer,
    responses={200: SalaryTotalsSerializer, 403: ERRORS[403]},
)
class PayrollPreviewAPIView(APIView):
    permission_classes = [IsAuthenticated, CanCreatePayroll]

    def post(self, request):
        serializer = PayrollPreviewSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        totals = payroll_service.preview_totals(
            request.user,
            serializer.validated_data["basic_salary"],
            serializer.validated_data.get("components", []),
        )
        return Response(SalaryTotalsSerializer(totals._asdict()).data)
