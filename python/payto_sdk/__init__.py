"""
Location: python/payto_sdk/__init__.py

Summary:
    Main package initialization for payto-sdk. Exports all public classes
    and functions for convenient importing.

Usage:
    from payto_sdk import PaymentURI, InvalidFieldError

    # Or import specific modules
    from payto_sdk.rails import get_rail, RAILS
    from payto_sdk.types import Amount

Version: 0.1.0
"""

from .payto import PaymentURI, InvalidProtocolError
from .types import Amount, PaymentURISnapshot
from .rails import (
    Rail,
    LayoutRail,
    AchRail,
    IbanRail,
    BicRail,
    AliasRail,
    IntraRail,
    VoidRail,
    GenericRail,
    RAILS,
    get_rail,
)
from .url import QUERY_KEYS, InvalidURIError
from .validators import PaytoError, InvalidFieldError, InvalidHostnameError

__version__ = "0.1.0"

__all__ = [
    # Main class
    "PaymentURI",
    # Types
    "Amount",
    "PaymentURISnapshot",
    # Rails
    "Rail",
    "LayoutRail",
    "AchRail",
    "IbanRail",
    "BicRail",
    "AliasRail",
    "IntraRail",
    "VoidRail",
    "GenericRail",
    "RAILS",
    "get_rail",
    # Query parameter names
    "QUERY_KEYS",
    # Exceptions
    "PaytoError",
    "InvalidProtocolError",
    "InvalidURIError",
    "InvalidFieldError",
    "InvalidHostnameError",
]
