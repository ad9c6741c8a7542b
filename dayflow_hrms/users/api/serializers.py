import logging

from django.contrib.auth import get_user_model
from rest_framework import serializers

from dayflow_hrms.users.models import Role
from dayflow_hrms.users.services.user_service import UserService

logger = logging.getLogger(__name__)
User = get_user_model()


class UserSerializer(serializers.ModelSerializer):
    full_name = serializers.CharField(source='get_full_name', read_only=True)

    class Meta:
        model = User
        fields = [
            'id', 'email', 'login_id', 'first_name', 'last_name', 'full_name', 'role',
            'department', 'position', 'avatar', 'phone', 'join_date', 'status',
            'must_change_password',
        ]
        read_only_fields = fields


class EmployeeMiniSerializer(serializers.ModelSerializer):
    """Employee identity as shown next to payroll records."""
    name = serializers.CharField(source='get_full_name', read_only=True)

    class Meta:
        model = User
        fields = ['id', 'name', 'email', 'department', 'position', 'avatar']
        read_only_fields = fields


class EmployeeCreateSerializer(serializers.ModelSerializer):
    role = serializers.ChoiceField(choices=Role.choices, default=Role.EMPLOYEE)
    temporary_password = serializers.CharField(read_only=True)

    class Meta:
        model = User
        fields = [
            'id', 'email', 'login_id', 'first_name', 'last_name', 'role', 'department',
            'position', 'avatar', 'phone', 'join_date', 'status', 'temporary_password',
        ]
        read_only_fields = ['id', 'login_id', 'temporary_password']
        extra_kwargs = {
            'first_name': {'required': True, 'allow_blank': False},
            'last_name': {'required': True, 'allow_blank': False},
        }

    def validate_email(self, value):
        cleaned = value.strip().lower()
        if User.objects.filter(email=cleaned).exists():
            raise serializers.ValidationError("This email is already in use.")
        return cleaned

    def create(self, validated_data):
        request = self.context.get('request')
        actor = request.user if request else None
        user, temporary_password = UserService.create_employee(validated_data, actor=actor)
        user.temporary_password = temporary_password
        return user


class UserRoleSerializer(serializers.Serializer):
    role = serializers.ChoiceField(choices=Role.choices)

    def validate(self, data):
        user = self.context['request'].user
        target_user = self.context['target_user']

        if target_user == user and data['role'] != Role.ADMIN:
            raise serializers.ValidationError("You cannot change your own role unless assigning Admin.")
        if not target_user.is_active:
            raise serializers.ValidationError("Cannot assign role to inactive user.")
        return data

    def save(self):
        return UserService.assign_role_to_user(self.context['target_user'], self.validated_data['role'])
