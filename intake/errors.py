"""Error types raised by the services and rendered as JSON by the app."""


class IntakeError(Exception):
    """Base error with an HTTP status and a client-facing message."""
    status_code = 500
    default_message = 'internal server error'

    def __init__(self, message=None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message

    def to_dict(self):
        return {'error': self.message}


class ValidationError(IntakeError):
    """Malformed or missing required input."""
    status_code = 400
    default_message = 'invalid request'


class PolicyViolation(ValidationError):
    """Input is well-formed but breaks a policy, e.g. password length."""
    default_message = 'policy violation'


class Unauthorized(IntakeError):
    status_code = 401
    default_message = 'unauthorized'


class InvalidCredential(Unauthorized):
    """A presented password did not match the current admin password."""
    default_message = 'invalid credentials'


class NotFound(IntakeError):
    status_code = 404
    default_message = 'not found'


class Unavailable(IntakeError):
    """The datastore could not be reached."""
    status_code = 503
    default_message = 'database not connected'


class InternalError(IntakeError):
    pass
