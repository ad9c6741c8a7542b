import logging

from django.contrib.auth import get_user_model
from django.shortcuts import get_object_or_404
from drf_spectacular.utils import OpenApiParameter, extend_schema, extend_schema_view
from rest_framework import mixins
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from dayflow_hrms.users.permissions.drf_permissions import CanAssignRoles, CanManageEmployees
from dayflow_hrms.users.selectors.employee_directory import list_employees
from .serializers import EmployeeCreateSerializer, UserRoleSerializer, UserSerializer

User = get_user_model()
logger = logging.getLogger(__name__)


@extend_schema_view(
    me=extend_schema(
        tags=["Authentication & Users"],
        summary="Current user with role and directory fields",
        responses=UserSerializer,
    ),
    role=extend_schema(
        tags=["Authentication & Users"],
        summary="Assign a role to a user",
        request=UserRoleSerializer,
        responses={200: UserSerializer},
    ),
)
class UserViewSet(GenericViewSet):
    queryset = User.objects.all()
    serializer_class = UserSerializer

    def get_permissions(self):
        if self.action == "role":
            return [IsAuthenticated(), CanAssignRoles()]
        return [IsAuthenticated()]

    @action(detail=False, methods=["get"], url_path="me")
    def me(self, request):
        return Response(UserSerializer(request.user).data)

    @action(detail=True, methods=["post"], url_path="role")
    def role(self, request, pk=None):
        target_user = get_object_or_404(User, pk=pk)
        serializer = UserRoleSerializer(
            data=request.data, context={"request": request, "target_user": target_user}
        )
        serializer.is_valid(raise_exception=True)
        user = serializer.save()
        logger.info(f"{request.user.email} assigned role {user.role} to {user.email}")
        return Response(UserSerializer(user).data)


@extend_schema_view(
    list=extend_schema(
        tags=["Authentication & Users"],
        summary="Employee directory",
        parameters=[
            OpenApiParameter("department", str),
            OpenApiParameter("status", str),
            OpenApiParameter("role", str),
            OpenApiParameter("search", str, description="Name, email or login ID"),
        ],
        responses={200: UserSerializer(many=True)},
    ),
    create=extend_schema(
        tags=["Authentication & Users"],
        summary="Create an employee with a generated login ID and temporary password",
        request=EmployeeCreateSerializer,
        responses={201: EmployeeCreateSerializer},
    ),
)
class EmployeeViewSet(mixins.ListModelMixin, mixins.CreateModelMixin, GenericViewSet):
    permission_classes = [IsAuthenticated, CanManageEmployees]

    def get_queryset(self):
        params = self.request.query_params
        return list_employees(
            department=params.get("department"),
            status=params.get("status"),
            role=params.get("role"),
            search=params.get("search"),
        )

    def get_serializer_class(self):
        if self.action == "create":
            return EmployeeCreateSerializer
        return UserSerializer

    def perform_create(self, serializer):
        user = serializer.save()
        logger.info(f"{self.request.user.email} created employee {user.email}")
