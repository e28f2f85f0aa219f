"""
Location: python/payto_sdk/validators.py

Summary:
    Format rules for the strictly validated payto fields. Holds the
    regular expressions, the email check and the exceptions raised when a
    setter refuses a value.

Usage:
    Used by rails.py and payto.py before any value is written to the
    underlying URI, so a rejected write never leaves partial state.

Example:
    from payto_sdk.validators import validate_bic

    validate_bic("DEUTDEFF")   # passes
    validate_bic("invalid")    # raises InvalidFieldError
"""

import re
from typing import Optional

from pydantic import EmailStr, TypeAdapter, ValidationError


BIC_REGEX = re.compile(r"^[A-Z]{6}[A-Z0-9]{2}([A-Z0-9]{3})?$", re.IGNORECASE)
IBAN_REGEX = re.compile(r"^[A-Z]{2}[0-9]{2}[A-Z0-9]{12,30}$", re.IGNORECASE)
ROUTING_NUMBER_REGEX = re.compile(r"^\d{9}$")
ACCOUNT_NUMBER_REGEX = re.compile(r"^\d{7,14}$")
UNIX_TIMESTAMP_REGEX = re.compile(r"^\d+$")
HEX_COLOR_REGEX = re.compile(r"^[0-9a-fA-F]{6}$")
LANG_REGEX = re.compile(r"^[a-z]{2}(-[A-Za-z]{2})?$")
PLUS_CODE_REGEX = re.compile(
    r"^[23456789CFGHJMPQRVWX]{2,8}\+[23456789CFGHJMPQRVWX]{2,7}$"
)
GEO_LOCATION_REGEX = re.compile(
    r"^[+-]?(?:90(?:\.0{1,9})?|(?:[0-9]|[1-8][0-9])(?:\.[0-9]{1,9})?),"
    r"[+-]?(?:180(?:\.0{1,9})?|(?:[0-9]|[1-9][0-9]|1[0-7][0-9])(?:\.[0-9]{1,9})?)$"
)
# Leading numeric prefix, the same rule browsers use for parseFloat
FLOAT_PREFIX_REGEX = re.compile(r"^\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")

_email_adapter = TypeAdapter(EmailStr)


def parse_float(text: Optional[str]) -> Optional[float]:
    """
    Parse the leading number of a string.

    Trailing garbage is ignored ("10abc" -> 10.0); a string without a
    numeric prefix yields None.

    Args:
        text: Raw text, typically one side of an amount parameter

    Returns:
        The parsed float, or None if there is no numeric prefix
    """
    if not text:
        return None
    match = FLOAT_PREFIX_REGEX.match(text)
    if match is None:
        return None
    return float(match.group(0))


def is_email(value: str) -> bool:
    """Check an address with pydantic's EmailStr rules (no DNS lookups)."""
    try:
        _email_adapter.validate_python(value)
    except ValidationError:
        return False
    return True


def validate_bic(value: str) -> str:
    """Return the BIC uppercased, or raise InvalidFieldError."""
    if not BIC_REGEX.match(value):
        raise InvalidFieldError("Invalid BIC format")
    return value.upper()


def validate_iban(value: str) -> str:
    """Return the IBAN uppercased, or raise InvalidFieldError."""
    if not IBAN_REGEX.match(value):
        raise InvalidFieldError("Invalid IBAN format")
    return value.upper()


def validate_routing_number(value: "int | str") -> str:
    text = _integer_text(value)
    if text is None or not ROUTING_NUMBER_REGEX.match(text):
        raise InvalidFieldError(
            "Invalid routing number format. Must be exactly 9 digits."
        )
    return text


def validate_ach_account_number(value: "int | str") -> str:
    text = _integer_text(value)
    if text is None or not ACCOUNT_NUMBER_REGEX.match(text):
        raise InvalidFieldError(
            "Invalid account number format. Must be 7-14 digits."
        )
    return text


def validate_intra_account_number(value: str) -> str:
    """Intra-bank account numbers are free-form but must fit in one path segment."""
    text = str(value)
    if not text or "/" in text or any(ch.isspace() for ch in text):
        raise InvalidFieldError(
            "Invalid account number format. Must be a single path segment."
        )
    return text


def validate_account_alias(value: str) -> str:
    if not isinstance(value, str) or not is_email(value):
        raise InvalidFieldError("Invalid email address format")
    return value


def validate_deadline(value: "int | str") -> str:
    text = _integer_text(value)
    if text is None or not UNIX_TIMESTAMP_REGEX.match(text):
        raise InvalidFieldError(
            "Invalid deadline format. Must be a positive integer (Unix timestamp)."
        )
    return text


def validate_lang(value: str) -> str:
    if not isinstance(value, str) or not LANG_REGEX.match(value):
        raise InvalidFieldError(
            "Invalid language format. Must be a two-letter language code, "
            "optionally followed by a region (e.g. en or en-US)."
        )
    return value.lower()


def validate_location(void_type: Optional[str], value: str) -> str:
    """
    Check a location against the current void sub-type.

    Args:
        void_type: The void sub-type ("geo", "plus" or free-form)
        value: The location to store

    Returns:
        The location unchanged

    Raises:
        InvalidFieldError: If no void sub-type is set, or the value does
            not match the sub-type's format
    """
    if not void_type:
        raise InvalidFieldError("Void type must be set before setting location")

    if void_type == "geo" and not GEO_LOCATION_REGEX.match(value):
        raise InvalidFieldError(
            'Invalid geo location format. Must be "latitude,longitude" '
            "with valid coordinates."
        )
    if void_type == "plus" and not PLUS_CODE_REGEX.match(value):
        raise InvalidFieldError("Invalid plus code format.")
    return value


def _integer_text(value: "int | str") -> Optional[str]:
    """Render an int (or a string holding one) as text; bools and floats are refused."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return str(value)
    if isinstance(value, str):
        return value
    return None


class PaytoError(ValueError):
    """Base exception for all payto parsing and field errors."""
    pass


class InvalidFieldError(PaytoError):
    """Exception raised when a setter refuses a value that breaks its format."""
    pass


class InvalidHostnameError(InvalidFieldError):
    """Exception raised when a field is written on a network that does not carry it."""
    pass
