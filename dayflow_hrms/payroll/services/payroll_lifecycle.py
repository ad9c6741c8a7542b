"""Payroll status transitions.

Every allowed move is a row in ``TRANSITIONS``; anything not listed is
rejected. ``paid`` has no outgoing rows and is also guarded against field
edits and deletion by ``payroll_service``.
"""
import logging
from collections import namedtuple

from django.utils import timezone

from dayflow_hrms.payroll import policies
from dayflow_hrms.payroll.exceptions import (
    PayrollFinalized,
    PayrollPermissionDenied,
    PayrollValidationError,
)
from dayflow_hrms.payroll.models import PayrollRecord

logger = logging.getLogger(__name__)

Status = PayrollRecord.Status

Transition = namedtuple("Transition", ["source", "target", "policy", "side_effect"])


def _mark_approved(record, actor):
    record.approved_by = actor
    record.approved_at = timezone.now()


def _mark_paid(record, actor):
    if record.payment_date is None:
        record.payment_date = timezone.now()


TRANSITIONS = {
    (Status.DRAFT, Status.PENDING): Transition(
        Status.DRAFT, Status.PENDING, policies.can_submit_payroll, None
    ),
    (Status.PENDING, Status.APPROVED): Transition(
        Status.PENDING, Status.APPROVED, policies.can_approve_payroll, _mark_approved
    ),
    (Status.PENDING, Status.REJECTED): Transition(
        Status.PENDING, Status.REJECTED, policies.can_approve_payroll, None
    ),
    (Status.APPROVED, Status.PAID): Transition(
        Status.APPROVED, Status.PAID, policies.can_pay_payroll, _mark_paid
    ),
}

# Capability needed to move into a status, checked before the pair itself.
TARGET_POLICIES = {transition.target: transition.policy for transition in TRANSITIONS.values()}


def allowed_targets(status):
    return [target for (source, target) in TRANSITIONS if source == status]


def resolve_transition(record, target, actor):
    """Return the ``Transition`` for moving ``record`` to ``target``.

    Returns ``None`` when ``target`` is the current status. Raises
    ``PayrollFinalized`` for paid records, ``PayrollPermissionDenied`` when
    the actor may not move records into ``target``, and
    ``PayrollValidationError`` for a pair not in the table.
    """
    if record.status == Status.PAID:
        raise PayrollFinalized()

    if target == record.status:
        return None

    if target not in Status.values:
        raise PayrollValidationError(f"Unknown payroll status '{target}'.")

    policy = TARGET_POLICIES.get(target)
    if policy is not None and not policy(actor):
        logger.warning(
            f"{getattr(actor, 'email', actor)} denied moving payroll {record.pk} "
            f"from {record.status} to {target}"
        )
        if target in (Status.APPROVED, Status.REJECTED):
            raise PayrollPermissionDenied("Only admin can approve or reject payroll.")
        raise PayrollPermissionDenied(f"You cannot move payroll records to '{target}'.")

    transition = TRANSITIONS.get((record.status, target))
    if transition is None:
        allowed = ", ".join(allowed_targets(record.status)) or "none"
        raise PayrollValidationError(
            f"Cannot move payroll from '{record.status}' to '{target}'. Allowed: {allowed}."
        )
    return transition


def apply_transition(record, transition, actor):
    """Write the new status and run the side effect, in memory only."""
    previous = record.status
    record.status = transition.target
    if transition.side_effect is not None:
        transition.side_effect(record, actor)
    logger.info(f"Payroll {record.pk} moved from {previous} to {transition.target} by {actor.email}")
    return record
