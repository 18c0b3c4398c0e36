"""
Product Payload Service

Coercion and validation of admin API bodies into Product column values.
Bodies use the camelCase keys of ``Product.to_dict()``.
"""

import math
import re

from mrtech.errors import ValidationError
from mrtech.models.product import CATEGORIES, CONDITIONS, STORAGE_TYPES, STATUSES


class _Missing:
    """Marker for a key that was absent or could not be coerced."""

    def __bool__(self):
        return False

    def __repr__(self):
        return 'MISSING'


MISSING = _Missing()

# body key -> column name for free-text fields
TEXT_FIELDS = {
    'brand': 'brand',
    'model': 'model',
    'cpu': 'cpu',
    'os': 'os',
    'accessoryType': 'accessory_type',
    'compatibility': 'compatibility',
    'notes': 'notes',
    'imageUrl': 'image_url',
}

# body key -> (column name, error message) for non-negative numbers
NON_NEGATIVE_INTS = {
    'warrantyDays': ('warranty_days', 'Invalid warrantyDays'),
    'quantity': ('quantity', 'Invalid quantity'),
    'ramGb': ('ram_gb', 'Invalid ramGb'),
    'storageGb': ('storage_gb', 'Invalid storageGb'),
}


def _is_number(value):
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _round_half_up(n):
    if not math.isfinite(n):
        return 0
    return int(math.floor(n + 0.5))


def parse_price_to_cents(value):
    """Turn a price like ``"R 1 299.50"`` or ``1299.5`` into cents.

    Anything unreadable is priced at 0.
    """
    if _is_number(value):
        try:
            return _round_half_up(float(value) * 100)
        except OverflowError:
            return 0
    s = str(value if value is not None else '').strip()
    if not s:
        return 0
    cleaned = re.sub(r'[^0-9.]', '', s)
    if not cleaned:
        return 0
    try:
        n = float(cleaned)
    except ValueError:
        return 0
    return _round_half_up(n * 100)


def _parse_number(value):
    if value is MISSING:
        return MISSING
    if value is None:
        return None
    if _is_number(value):
        try:
            n = float(value)
        except OverflowError:
            return MISSING
    elif isinstance(value, str):
        s = value.strip()
        if not s:
            return None
        try:
            n = float(s)
        except ValueError:
            return MISSING
    else:
        return MISSING
    if not math.isfinite(n):
        return MISSING
    return n


def parse_optional_int(value):
    n = _parse_number(value)
    if n is MISSING or n is None:
        return n
    return math.trunc(n)


def parse_optional_float(value):
    return _parse_number(value)


def parse_optional_bool(value):
    if value is MISSING:
        return MISSING
    if value is None:
        return None
    if isinstance(value, bool):
        return value
    s = str(value).strip().lower()
    if s == 'true':
        return True
    if s == 'false':
        return False
    return MISSING


def _check_choice(body, key, choices, message):
    value = body.get(key)
    if value and value not in choices:
        raise ValidationError(message)


def _validate_choices(body):
    _check_choice(body, 'category', CATEGORIES, 'Invalid category')
    _check_choice(body, 'status', STATUSES, 'Invalid status')
    _check_choice(body, 'condition', CONDITIONS, 'Invalid condition')
    _check_choice(body, 'storageType', STORAGE_TYPES, 'Invalid storage type')


def _parse_numbers(body):
    """Parse and range-check the numeric fields. Returns column -> value."""
    numbers = {}
    for key, (column, message) in NON_NEGATIVE_INTS.items():
        n = parse_optional_int(body.get(key, MISSING))
        if n is not MISSING and n is not None and n < 0:
            raise ValidationError(message)
        numbers[column] = n

    screen = parse_optional_float(body.get('screenInches', MISSING))
    if screen is not MISSING and screen is not None and screen < 0:
        raise ValidationError('Invalid screenInches')
    numbers['screen_inches'] = screen
    return numbers


def _or_none(value):
    return value if value is not MISSING else None


def build_create_fields(body):
    """Validate a create body and return keyword arguments for ``Product``."""
    if not isinstance(body, dict) or not body.get('name') or not body.get('category'):
        raise ValidationError('Missing fields')
    if body['category'] not in CATEGORIES:
        raise ValidationError('Invalid category')
    _validate_choices(body)
    numbers = _parse_numbers(body)
    featured = parse_optional_bool(body.get('featured', MISSING))
    quantity = numbers['quantity']
    if quantity is MISSING or quantity is None:
        quantity = 1

    fields = {
        'category': body['category'],
        'name': str(body['name']),
        'condition': body.get('condition') or None,
        'storage_type': body.get('storageType') or None,
        'status': body.get('status') or 'IN_STOCK',
        'featured': bool(featured) if featured is not MISSING else False,
        'warranty_days': _or_none(numbers['warranty_days']),
        'ram_gb': _or_none(numbers['ram_gb']),
        'storage_gb': _or_none(numbers['storage_gb']),
        'screen_inches': _or_none(numbers['screen_inches']),
        'quantity': quantity,
        'price_cents': parse_price_to_cents(body.get('price')),
    }
    for key, column in TEXT_FIELDS.items():
        value = body.get(key)
        fields[column] = str(value) if value else None
    return fields


def build_update_fields(body):
    """Validate an update body and return only the columns to change."""
    if not isinstance(body, dict):
        raise ValidationError('Invalid body')
    _validate_choices(body)
    numbers = _parse_numbers(body)

    changes = {}
    if body.get('category'):
        changes['category'] = body['category']
    if body.get('status'):
        changes['status'] = body['status']
    if 'condition' in body:
        changes['condition'] = body['condition'] or None
    if 'storageType' in body:
        changes['storage_type'] = body['storageType'] or None
    if body.get('name') is not None:
        changes['name'] = str(body['name'])

    for key, column in TEXT_FIELDS.items():
        if key not in body:
            continue
        value = body[key]
        text = '' if value is None else str(value)
        changes[column] = text or None

    for column, value in numbers.items():
        if value is MISSING:
            continue
        # quantity is required on the row, so null means "leave as is"
        if column == 'quantity' and value is None:
            continue
        changes[column] = value

    featured = parse_optional_bool(body.get('featured', MISSING))
    if featured is not MISSING and featured is not None:
        changes['featured'] = featured

    if 'price' in body:
        changes['price_cents'] = parse_price_to_cents(body['price'])

    return changes


def apply_changes(product, changes):
    for column, value in changes.items():
        setattr(product, column, value)
    return product
