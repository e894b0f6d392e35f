import logging

from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

logger = logging.getLogger(__name__)


class NotFound(APIException):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = 'Record not found'
    default_code = 'not_found'


class DepartmentNotFound(NotFound):
    default_detail = 'Department not found'
    default_code = 'department_not_found'


class DoctorNotFound(NotFound):
    default_detail = 'Doctor not found'
    default_code = 'doctor_not_found'


class TokenNotFound(NotFound):
    default_detail = 'Token not found'
    default_code = 'token_not_found'


class MedicineNotFound(NotFound):
    default_detail = 'Medicine not found'
    default_code = 'medicine_not_found'


class AlertNotFound(NotFound):
    default_detail = 'Alert not found'
    default_code = 'alert_not_found'


class ValidationFailed(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Invalid input'
    default_code = 'validation_failed'


class MissingDepartment(ValidationFailed):
    default_detail = 'Department ID is required'
    default_code = 'missing_department'


class InvalidAlert(ValidationFailed):
    default_detail = 'Invalid alert data'
    default_code = 'invalid_alert'


class NoWaitingTokens(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'No waiting tokens'
    default_code = 'no_waiting_tokens'


def _error_code(exc) -> str:
    if isinstance(exc, APIException):
        codes = exc.get_codes()
        return codes if isinstance(codes, str) else exc.default_code
    return 'api_error'


def api_exception_handler(exc, context):
    resp = drf_exception_handler(exc, context)
    if resp is None:
        request = context.get('request')
        logger.error('unhandled error on %s', getattr(request, 'path', '?'), exc_info=exc)
        return Response(
            {'ok': False, 'error': {'code': 'server_error', 'message': 'Internal server error'}},
            status=500,
        )
    # normalize response
    detail = None
    if isinstance(resp.data, dict):
        detail = resp.data.get('detail') or resp.data
    else:
        detail = resp.data
    return Response({'ok': False, 'error': {'code': _error_code(exc), 'message': detail}}, status=resp.status_code)
