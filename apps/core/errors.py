"""
Error taxonomy shared by actions, views and the JSON API

Actions never raise for expected failures (bad input, duplicates, missing
records). They return an ActionResult instead, which views turn into an inline
form error or a JSON body. Authorization is the exception: require_user() and
require_admin() raise, and the calling view maps the error to a redirect or a
401/403 response.
"""
import enum
from dataclasses import dataclass, field
from typing import Any, Optional


class ErrorKind(str, enum.Enum):
    UNAUTHORIZED = 'unauthorized'   # no identity
    FORBIDDEN = 'forbidden'         # identity present, role too low
    VALIDATION = 'validation'       # missing/malformed field, out of range value
    CONFLICT = 'conflict'           # uniqueness violation
    NOT_FOUND = 'not_found'         # referenced record missing
    UPSTREAM = 'upstream'           # store or email provider failure


HTTP_STATUS = {
    ErrorKind.UNAUTHORIZED: 401,
    ErrorKind.FORBIDDEN: 403,
    ErrorKind.VALIDATION: 400,
    ErrorKind.CONFLICT: 409,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.UPSTREAM: 502,
}


def http_status_for(kind):
    """HTTP status code for an ErrorKind (500 for anything unknown)."""
    return HTTP_STATUS.get(kind, 500)


class AuthorizationError(Exception):
    """Base class for identity/role failures"""

    kind = ErrorKind.UNAUTHORIZED
    default_message = 'Unauthorized'

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)

    @property
    def status_code(self):
        return http_status_for(self.kind)


class Unauthorized(AuthorizationError):
    """No authenticated identity on the request"""


class Forbidden(AuthorizationError):
    """Authenticated, but the role is not allowed to do this"""

    kind = ErrorKind.FORBIDDEN
    default_message = 'Forbidden'


@dataclass
class ActionResult:
    """
    Outcome of a mutation

    Fields:
        success: whether the mutation went through
        error: user facing message when it did not
        kind: ErrorKind of the failure
        record: the created/updated model instance
        data: extra payload (e.g. batch outcome)
    """
    success: bool
    error: Optional[str] = None
    kind: Optional[ErrorKind] = None
    record: Any = None
    data: dict = field(default_factory=dict)

    @classmethod
    def ok(cls, record=None, **data):
        return cls(success=True, record=record, data=data)

    @classmethod
    def fail(cls, kind, error, **data):
        return cls(success=False, error=error, kind=kind, data=data)

    @property
    def status_code(self):
        if self.success:
            return 200
        return http_status_for(self.kind)

    def as_dict(self):
        payload = {'success': self.success}
        if self.error:
            payload['error'] = self.error
        payload.update(self.data)
        return payload


def first_form_error(form):
    """Flatten a bound form's errors into one readable message."""
    for field_name, errors in form.errors.items():
        if not errors:
            continue
        if field_name == '__all__':
            return errors[0]
        label = form.fields[field_name].label if field_name in form.fields else field_name
        return f"{label or field_name}: {errors[0]}"
    return 'Invalid input'


def validation_failure(form):
    """ActionResult for a form that did not validate."""
    return ActionResult.fail(
        ErrorKind.VALIDATION,
        first_form_error(form),
        field_errors={name: list(errors) for name, errors in form.errors.items()},
    )


def attach_error(form, result):
    """
    Put a failed ActionResult's message on a bound form for re-rendering

    Validation failures already show as field errors; anything else
    (conflict, not found, upstream) becomes a non-field error.
    """
    form.is_valid()
    if result.kind != ErrorKind.VALIDATION or not form.errors:
        form.add_error(None, result.error)
    return form
