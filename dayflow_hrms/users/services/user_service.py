import logging

from django.contrib.auth import get_user_model
from django.db import transaction
from rest_framework import serializers

from dayflow_hrms.users.models import Role
from dayflow_hrms.users.services.login_id_service import (
    generate_login_id,
    generate_temporary_password,
)

User = get_user_model()
logger = logging.getLogger(__name__)


class UserService:

    @staticmethod
    @transaction.atomic
    def create_employee(validated_data, actor=None):
        """Create a directory entry with a generated login ID.

        Returns ``(user, temporary_password)``. The password is only ever
        handed back here; it is stored hashed.
        """
        role = validated_data.pop("role", Role.EMPLOYEE)
        if role == Role.ADMIN and actor is not None and actor.role != Role.ADMIN and not actor.is_superuser:
            raise serializers.ValidationError({"role": "Only admin can create admin accounts."})

        temporary_password = generate_temporary_password()
        user = User(role=role, must_change_password=True, **validated_data)
        user.email = User.objects.normalize_email(user.email).lower()
        user.login_id = generate_login_id(user.first_name, user.last_name, user.join_date.year)
        user.set_password(temporary_password)
        user.save()

        logger.info(f"Employee {user.email} ({user.login_id}) created as {role}")
        return user, temporary_password

    @staticmethod
    @transaction.atomic
    def assign_role_to_user(user, role):
        if role not in Role.values:
            raise serializers.ValidationError({"role": f"Role {role} does not exist."})

        previous = user.role
        user.role = role
        # post_save re-syncs the django-role-permissions role.
        user.save(update_fields=["role"])
        logger.info(f"Role for {user.email} changed from {previous} to {role}")
        return user
