"""Validation utilities."""

import re

SWIFT_KEYWORDS = frozenset({
    'associatedtype', 'class', 'deinit', 'enum', 'extension', 'func', 'import',
    'init', 'inout', 'let', 'operator', 'protocol', 'struct', 'subscript',
    'typealias', 'var', 'case', 'default', 'switch', 'return', 'self', 'Self',
})


def is_valid_language_code(code: str) -> bool:
    """
    Validate language code as POEditor accepts it.

    Examples: en, tr, es, pt-br, zh-Hans, en-US
    """
    if not code or not isinstance(code, str):
        return False

    pattern = r'^[A-Za-z]{2,3}(-[A-Za-z]{2,4})?$'
    return bool(re.match(pattern, code))


def is_valid_swift_identifier(name: str) -> bool:
    """Check that ``name`` can be used as a Swift type name."""
    if not name or not isinstance(name, str):
        return False

    if name in SWIFT_KEYWORDS:
        return False

    return bool(re.match(r'^[A-Za-z_][A-Za-z0-9_]*$', name))


def mask_secret(value: str, visible: int = 3) -> str:
    """
    Hide all but the last ``visible`` characters of a token or project id.

    Examples:
        mask_secret('abcdef123') -> '******123'
        mask_secret('12') -> '12'
    """
    if not value:
        return ''

    value = str(value)
    if len(value) <= visible:
        return value

    return '*' * (len(value) - visible) + value[-visible:]
