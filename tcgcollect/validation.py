"""
Input parsing guards - every failure is a ValidationError
"""
from datetime import date
from decimal import Decimal, InvalidOperation

from flask import request

from tcgcollect.errors import ValidationError

# Largest value an INTEGER column holds on every supported store
MAX_INT = 2 ** 31 - 1

# Numeric(10, 2) holds 8 integer digits
MAX_AMOUNT = Decimal('99999999.99')


def json_body():
    """The request's JSON object, or a ValidationError"""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError('Request body must be a JSON object')
    return data


def parse_int(value, name, default=None, minimum=None, maximum=None, maximum_message=None):
    """Integer from a query string or JSON value, with optional bounds"""
    if value is None or value == '':
        if default is None:
            raise ValidationError(f'{name} is required')
        return default
    if isinstance(value, bool):
        raise ValidationError(f'{name} must be an integer')
    try:
        number = int(value)
    except (TypeError, ValueError, OverflowError):
        raise ValidationError(f'{name} must be an integer') from None
    if isinstance(value, float) and value != number:
        raise ValidationError(f'{name} must be an integer')
    if minimum is not None and number < minimum:
        raise ValidationError(f'{name} must be at least {minimum}')
    if maximum is not None and number > maximum:
        raise ValidationError(maximum_message or f'{name} cannot exceed {maximum}')
    return number


def parse_id(value, name):
    """Row id; anything outside the INTEGER range is rejected before reaching the store"""
    return parse_int(value, name, minimum=1, maximum=MAX_INT, maximum_message=f'{name} is out of range')


def parse_quantity(value):
    if value is None:
        raise ValidationError('Quantity is required')
    quantity = parse_int(value, 'Quantity')
    if quantity <= 0:
        raise ValidationError('Quantity must be greater than 0')
    if quantity > MAX_INT:
        raise ValidationError('Quantity is too large')
    return quantity


def parse_amount(value, name):
    """Decimal amount with two places"""
    if isinstance(value, bool) or value is None:
        raise ValidationError(f'{name} must be a number')
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise ValidationError(f'{name} must be a number') from None
    if not amount.is_finite():
        raise ValidationError(f'{name} must be a number')
    if abs(amount) > MAX_AMOUNT:
        raise ValidationError(f'{name} cannot exceed {MAX_AMOUNT}')
    return amount.quantize(Decimal('0.01'))


def parse_price(value):
    price = parse_amount(value, 'Price')
    if price <= 0:
        raise ValidationError('Price must be greater than 0')
    return price


def parse_purchase_price(value):
    if value is None:
        return None
    price = parse_amount(value, 'Purchase price')
    if price < 0:
        raise ValidationError('Purchase price cannot be negative')
    return price


def parse_date(value, name):
    """ISO date (YYYY-MM-DD) or None"""
    if value is None or value == '':
        return None
    try:
        return date.fromisoformat(str(value))
    except ValueError:
        raise ValidationError(f'{name} must be an ISO date (YYYY-MM-DD)') from None


def parse_bool(value):
    return str(value).lower() in ('1', 'true', 'yes')


def clean_text(value, name, required=False, max_length=None):
    """Stripped string; blank counts as missing"""
    if value is None:
        if required:
            raise ValidationError(f'{name} is required')
        return None
    if not isinstance(value, str):
        raise ValidationError(f'{name} must be a string')
    text = value.strip()
    if not text:
        if required:
            raise ValidationError(f'{name} is required')
        return None
    if max_length and len(text) > max_length:
        raise ValidationError(f'{name} cannot be longer than {max_length} characters')
    return text


# Server-assigned fields clients echo back; ignored on update
SERVER_FIELDS = ('id', 'user_id', 'created_at', 'updated_at', 'recorded_at', 'cards')


def pick_fields(data, allowed):
    """Editable fields of an update body; anything else but echoed server fields is rejected"""
    unknown = sorted(set(data) - set(allowed) - set(SERVER_FIELDS))
    if unknown:
        raise ValidationError(f'Unknown fields: {", ".join(unknown)}')
    return {key: value for key, value in data.items() if key in allowed}
