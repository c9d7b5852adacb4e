"""Error types raised by the services and turned into ``{"error": ...}`` responses."""


class ApiError(Exception):
    status_code = 500
    default_message = 'Unexpected error'

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(ApiError):
    status_code = 400
    default_message = 'Invalid input'


class Unauthorized(ApiError):
    status_code = 401
    default_message = 'Authentication required'


class InvalidCredentials(Unauthorized):
    default_message = 'Invalid credentials'


class InvalidRefreshToken(Unauthorized):
    default_message = 'Invalid refresh token'


class Forbidden(ApiError):
    status_code = 403
    default_message = 'Insufficient permissions for this operation'


class PendingValidation(Forbidden):
    default_message = ('Your account is pending validation by an administrator. '
                       'Please wait for approval before logging in.')


class NotFound(ApiError):
    status_code = 404
    default_message = 'Resource not found'


class Conflict(ApiError):
    status_code = 409
    default_message = 'Conflict with the current state of the resource'


class DependencyBlocked(Conflict):
    default_message = 'Resource has dependent records and cannot be deleted'
