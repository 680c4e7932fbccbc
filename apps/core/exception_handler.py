from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from .exceptions import (
    ServiceError,
    NotFoundError,
    ForbiddenError,
    ConflictError,
    BadRequestError,
)


STATUS_BY_KIND = {
    NotFoundError.kind: status.HTTP_404_NOT_FOUND,
    ForbiddenError.kind: status.HTTP_403_FORBIDDEN,
    ConflictError.kind: status.HTTP_409_CONFLICT,
    BadRequestError.kind: status.HTTP_400_BAD_REQUEST,
}


def service_exception_handler(exc, context):
    """
    Convert service errors into HTTP responses.

    Registered as REST_FRAMEWORK['EXCEPTION_HANDLER']; anything that is not a
    ServiceError falls through to DRF's default handling.
    """
    if isinstance(exc, ServiceError):
        response_status = STATUS_BY_KIND.get(exc.kind, status.HTTP_400_BAD_REQUEST)
        return Response({'error': str(exc)}, status=response_status)

    return drf_exception_handler(exc, context)
