"""
Error taxonomy shared by every services layer.

Each app defines its own exception hierarchy (see ``apps/<app>/services/exceptions.py``)
and every concrete error also inherits from exactly one of the kinds below.
The kind decides how the error is reported to the caller:

    ServiceError
    ├── NotFoundError    - referenced entity does not exist (or is not yours)
    ├── ForbiddenError   - role or relationship guard not satisfied
    ├── ConflictError    - an equivalent relation already exists
    └── BadRequestError  - malformed input or self-targeting action

Usage:
    class CannotRemoveOwnerError(GroupsServiceError, ForbiddenError):
        pass
"""


class ServiceError(Exception):
    """Base exception for all business rule violations."""

    kind = 'error'


class NotFoundError(ServiceError):
    """Referenced entity does not exist."""

    kind = 'not_found'


class ForbiddenError(ServiceError):
    """Caller's role or relationship does not allow the action."""

    kind = 'forbidden'


class ConflictError(ServiceError):
    """An equivalent relation already exists."""

    kind = 'conflict'


class BadRequestError(ServiceError):
    """Input is malformed or targets the caller in a disallowed way."""

    kind = 'bad_request'
