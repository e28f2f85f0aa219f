"""
Location: python/payto_sdk/types.py

Summary:
    Pydantic models for payto-sdk. Amount is the single parsed form of the
    composite "amount" query parameter that asset, value and currency are
    all views of; PaymentURISnapshot is the plain record produced by
    PaymentURI.to_json_object().

Usage:
    Used by payto.py. The numeric part of an amount is kept as the text it
    was written with so that rewriting only the token never reformats the
    number.

Example:
    from payto_sdk.types import Amount

    amount = Amount.parse("ctn:10.01")
    amount.asset                                    # "ctn"
    amount.value                                    # 10.01
    amount.model_copy(update={"token": "xxx"}).serialize()   # "xxx:10.01"
"""

import math
from typing import Optional, Union

from pydantic import BaseModel, Field

from .validators import InvalidFieldError, parse_float


class Amount(BaseModel):
    """
    Composite amount value, serialized as "token:number" or "number".

    Attributes:
        token: Asset token (e.g. "ctn", "usd"), None if absent
        number: Numeric part as text, None if absent
    """
    token: Optional[str] = None
    number: Optional[str] = None

    @classmethod
    def parse(cls, text: Optional[str]) -> "Amount":
        """
        Decompose an amount parameter.

        "ctn:10.01" -> token "ctn", number "10.01"
        "10.01"     -> number only
        "ctn"       -> token only (bare text without a numeric prefix)

        Args:
            text: Raw amount parameter value, or None

        Returns:
            The parsed Amount (empty if text is empty)
        """
        if not text:
            return cls()
        if ":" in text:
            token, number = text.split(":", 1)
            return cls(token=token or None, number=number or None)
        if parse_float(text) is None:
            return cls(token=text)
        return cls(number=text)

    def serialize(self) -> Optional[str]:
        """
        Render the amount parameter.

        Returns:
            "token:number", "number", "token:" or None when both parts are empty
        """
        if self.token:
            return f"{self.token}:{self.number or ''}"
        return self.number or None

    @property
    def asset(self) -> Optional[str]:
        """The token, unless it is itself numeric."""
        if self.token and parse_float(self.token) is None:
            return self.token
        return None

    @property
    def value(self) -> Optional[float]:
        """The numeric part, or None if it does not parse."""
        return parse_float(self.number)


def format_number(value: Union[int, float]) -> str:
    """
    Render a number for the amount parameter.

    Integral floats drop their ".0" so 50.0 is written as "50".

    Raises:
        InvalidFieldError: If value is not a finite int or float (bools are refused)
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidFieldError(
            f"Invalid value format. Must be a number, got {type(value).__name__}"
        )
    if not math.isfinite(value):
        raise InvalidFieldError("Invalid value format. Must be a finite number")
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class PaymentURISnapshot(BaseModel):
    """
    Plain record of every field a payto URI defines.

    Keys are dumped with their camelCase aliases; absent fields are None
    and dropped by exclude_none.
    """
    account_alias: Optional[str] = Field(None, alias="accountAlias")
    account_number: Optional[Union[int, str]] = Field(None, alias="accountNumber")
    address: Optional[str] = None
    amount: Optional[str] = None
    asset: Optional[str] = None
    barcode: Optional[str] = None
    bic: Optional[str] = None
    color_background: Optional[str] = Field(None, alias="colorBackground")
    color_foreground: Optional[str] = Field(None, alias="colorForeground")
    currency: Optional[tuple[Optional[str], Optional[str]]] = None
    deadline: Optional[int] = None
    donate: Optional[bool] = None
    fiat: Optional[str] = None
    hash: Optional[str] = None
    host: Optional[str] = None
    hostname: Optional[str] = None
    href: Optional[str] = None
    iban: Optional[str] = None
    item: Optional[str] = None
    lang: Optional[str] = None
    location: Optional[str] = None
    message: Optional[str] = None
    mode: Optional[str] = None
    network: Optional[str] = None
    organization: Optional[str] = None
    origin: Optional[str] = None
    password: Optional[str] = None
    pathname: Optional[str] = None
    port: Optional[str] = None
    protocol: Optional[str] = None
    receiver_name: Optional[str] = Field(None, alias="receiverName")
    recurring: Optional[str] = None
    route: Optional[str] = None
    routing_number: Optional[int] = Field(None, alias="routingNumber")
    rtl: Optional[bool] = None
    search: Optional[str] = None
    split: Optional[tuple[str, str, bool]] = None
    swap: Optional[str] = None
    username: Optional[str] = None
    value: Optional[float] = None
    void: Optional[str] = None

    model_config = {"populate_by_name": True}
