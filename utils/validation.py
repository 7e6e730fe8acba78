"""
Request body helpers shared by the resource routes
"""
from datetime import datetime, timezone


class ValidationError(ValueError):
    """Bad or missing input; reported as a 400"""


def get_json_body(request):
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        raise ValidationError('Request body must be a JSON object')
    return body


def require_fields(body, *names):
    missing = [name for name in names if body.get(name) in (None, '')]
    if missing:
        raise ValidationError('Missing required fields: ' + ', '.join(missing))


def parse_datetime(value, field):
    """Parse an ISO 8601 timestamp; a trailing Z is read as UTC"""
    if value is None or value == '':
        return None
    if not isinstance(value, str):
        raise ValidationError(f'{field} must be an ISO 8601 string')
    text = value.strip()
    if text.endswith('Z'):
        text = text[:-1] + '+00:00'
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        raise ValidationError(f'{field} must be an ISO 8601 string')
    # Stored naive in UTC
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def parse_str(value, field):
    """Stripped text, or None for null/blank"""
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(f'{field} must be a string')
    return value.strip() or None


def parse_bool(value, field):
    if isinstance(value, bool):
        return value
    raise ValidationError(f'{field} must be true or false')


def parse_int(value, field):
    if isinstance(value, bool):
        raise ValidationError(f'{field} must be an integer')
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f'{field} must be an integer')
