import logging

from django.db.models.signals import post_save
from django.dispatch import receiver
from rolepermissions.roles import assign_role, get_user_roles, remove_role

from dayflow_hrms.users.models import User

logger = logging.getLogger(__name__)


@receiver(post_save, sender=User)
def sync_user_role(sender, instance, created, **kwargs):
    """Keep the django-role-permissions role in step with ``User.role``."""
    current_roles = [role.get_name() for role in get_user_roles(instance)]
    if current_roles == [instance.role]:
        return

    for current_role in current_roles:
        remove_role(instance, current_role)
    assign_role(instance, instance.role)
    logger.debug(f"Role for {instance.email} synced to {instance.role}")
