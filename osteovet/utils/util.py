# osteovet/utils/util.py
from datetime import datetime, timezone
from functools import wraps

from dateutil.parser import isoparse
from flask import request
from flask_jwt_extended import jwt_required, current_user

from osteovet.errors import Forbidden, ValidationError


def role_required(*roles):
    def wrapper(fn):
        @wraps(fn)
        @jwt_required()
        def decorator(*args, **kwargs):
            if current_user.role not in roles:
                raise Forbidden('Access denied for role ' + current_user.role.value)
            return fn(*args, **kwargs)
        return decorator
    return wrapper


def get_payload():
    """Request JSON body as a dict, empty when missing or not an object."""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def utcnow():
    return datetime.now(timezone.utc).replace(tzinfo=None)


def parse_datetime(value, field):
    """Parse an ISO-8601 string into a naive UTC datetime."""
    if not value or not isinstance(value, str):
        raise ValidationError(f'{field} is required')
    try:
        parsed = isoparse(value)
    except (ValueError, TypeError):
        raise ValidationError(f'Invalid {field}. Use ISO format (YYYY-MM-DDTHH:MM:SS)')
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def isoformat(value):
    return value.isoformat() if value is not None else None


def parse_enum(enum_cls, value, field):
    if isinstance(value, enum_cls):
        return value
    if not isinstance(value, str):
        raise ValidationError(f'{field} is required')
    for member in enum_cls:
        if value.upper() in (member.name, str(member.value).upper()):
            return member
    allowed = ', '.join(str(m.value) for m in enum_cls)
    raise ValidationError(f'Invalid {field}. Allowed: {allowed}')


def parse_bool(value, field):
    if not isinstance(value, bool):
        raise ValidationError(f'{field} must be true or false')
    return value
