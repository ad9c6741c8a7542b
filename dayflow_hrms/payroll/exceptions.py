from rest_framework import status
from rest_framework.exceptions import APIException


class PayrollError(APIException):
    """Base class for payroll errors; DRF renders them as ``{"detail": ...}``."""


class PayrollValidationError(PayrollError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid payroll data."
    default_code = "invalid"


class PayrollConflict(PayrollError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Payroll record already exists for this period."
    default_code = "conflict"


class PayrollPermissionDenied(PayrollError):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "You do not have permission to perform this action."
    default_code = "permission_denied"


class PayrollFinalized(PayrollError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Cannot modify paid payroll record."
    default_code = "finalized"


class PayrollNotFound(PayrollError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Payroll record not found."
    default_code = "not_found"
