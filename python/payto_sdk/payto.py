"""
Location: python/payto_sdk/payto.py

Summary:
    PaymentURI, a mutable typed view over a payto: URI. The URI is parsed
    once; every payment field (address, amount, currency, BIC, IBAN,
    routing number, location, ...) is then a property that reads from and
    writes back to the underlying URI text.

Usage:
    The primary entry point of the SDK. Strict fields raise
    InvalidFieldError on a bad write and leave the URI untouched; cosmetic
    fields (colors, organization, item) drop invalid input silently.

Example:
    from payto_sdk import PaymentURI

    payto = PaymentURI("payto://xcb/cb7147...?amount=ctn:10.01&fiat=eur")
    payto.currency          # ("ctn", "eur")
    payto.asset = "xxx"
    payto.amount            # "xxx:10.01"
    payto.to_json_object()  # {"address": "cb7147...", "amount": ...}
"""

import logging
from typing import Any, Callable, Optional, Sequence, Union

import httpx

from .rails import get_rail, hostname_error
from .types import Amount, PaymentURISnapshot, format_number
from .url import (
    PAYTO_SCHEME,
    QUERY_KEYS,
    copy_url,
    encode_query,
    parse_url,
    replace_param,
    with_param,
)
from .validators import (
    HEX_COLOR_REGEX,
    UNIX_TIMESTAMP_REGEX,
    InvalidFieldError,
    PaytoError,
    validate_deadline,
    validate_lang,
    validate_location,
)

logger = logging.getLogger(__name__)

ORGANIZATION_MAX_LENGTH = 25
ITEM_MAX_LENGTH = 40


class PaymentURI:
    """
    Typed accessor layer over a payto: URI.

    The only state is the parsed httpx.URL; every property is derived from
    it on read and written straight back to it. The hostname selects the
    payment rail (ach, iban, bic, upi, pix, intra, void or generic) that
    decides how the path segments are interpreted.

    Attributes:
        protocol: Always "payto:"
        hostname: Lowercased network/rail name
        pathname: Path carrying the account fields
    """

    def __init__(self, payto_string: str):
        """
        Parse a payto URI.

        Args:
            payto_string: URI string starting with "payto://"

        Raises:
            InvalidURIError: If the string cannot be parsed as a URI
            InvalidProtocolError: If the scheme is not payto
        """
        url = parse_url(payto_string)
        _check_protocol(url.scheme)
        self._url = url

    def __str__(self) -> str:
        return str(self._url)

    def __repr__(self) -> str:
        return f"PaymentURI({str(self._url)!r})"

    # URI components

    @property
    def protocol(self) -> str:
        return f"{self._url.scheme}:"

    @protocol.setter
    def protocol(self, value: str) -> None:
        # The scheme is fixed, so a valid write never changes the URI
        _check_protocol((value or "").rstrip(":").lower())

    @property
    def username(self) -> str:
        return self._url.username

    @username.setter
    def username(self, value: str) -> None:
        self._url = copy_url(self._url, username=value or "", password=self._url.password)

    @property
    def password(self) -> str:
        return self._url.password

    @password.setter
    def password(self, value: str) -> None:
        self._url = copy_url(self._url, username=self._url.username, password=value or "")

    @property
    def host(self) -> str:
        """Hostname with the port appended when one is set."""
        if self.port:
            return f"{self.hostname}:{self.port}"
        return self.hostname

    @host.setter
    def host(self, value: str) -> None:
        hostname, sep, port = value.rpartition(":")
        if sep and port.isdigit():
            self._url = copy_url(self._url, host=hostname.lower(), port=int(port))
        else:
            self.hostname = value

    @property
    def hostname(self) -> str:
        return self._url.host.lower()

    @hostname.setter
    def hostname(self, value: str) -> None:
        self._url = copy_url(self._url, host=value.lower())

    @property
    def network(self) -> str:
        """Alias of hostname: the payment network or rail."""
        return self.hostname

    @network.setter
    def network(self, value: str) -> None:
        self.hostname = value

    @property
    def port(self) -> str:
        port = self._url.port
        return "" if port is None else str(port)

    @port.setter
    def port(self, value: Union[str, int, None]) -> None:
        if value is None or value == "":
            self._url = copy_url(self._url, port=None)
            return
        text = str(value)
        if not text.isdigit():
            raise InvalidFieldError(f"Invalid port: {value!r}")
        self._url = copy_url(self._url, port=int(text))

    @property
    def pathname(self) -> str:
        return self._url.path

    @pathname.setter
    def pathname(self, value: str) -> None:
        self._url = copy_url(self._url, path=value)

    @property
    def search(self) -> str:
        query = self._url.query.decode("ascii")
        return f"?{query}" if query else ""

    @search.setter
    def search(self, value: str) -> None:
        query = encode_query((value or "").lstrip("?"))
        self._url = copy_url(self._url, query=query.encode("ascii") if query else None)

    @property
    def hash(self) -> str:
        fragment = self._url.fragment
        return f"#{fragment}" if fragment else ""

    @hash.setter
    def hash(self, value: str) -> None:
        fragment = (value or "").lstrip("#")
        self._url = copy_url(self._url, fragment=fragment or None)

    @property
    def href(self) -> str:
        return str(self._url)

    @href.setter
    def href(self, value: str) -> None:
        url = parse_url(value)
        _check_protocol(url.scheme)
        self._url = url

    @property
    def origin(self) -> Optional[str]:
        """Origin as "payto://host[:port]", or None when there is no host."""
        if not self.hostname:
            return None
        return f"{PAYTO_SCHEME}://{self.host}"

    # Raw query parameters

    @property
    def search_params(self) -> httpx.QueryParams:
        """Read-only view of the query parameters; use set_param/delete_param to change them."""
        return self._url.params

    def get_param(self, key: str) -> Optional[str]:
        return self._url.params.get(key)

    def has_param(self, key: str) -> bool:
        return key in self._url.params

    def set_param(self, key: str, value: str) -> None:
        """Set a parameter, leaving every other parameter's encoding as it was."""
        self._url = replace_param(self._url, key, value)

    def delete_param(self, key: str) -> None:
        self._url = replace_param(self._url, key, None)

    # Path-backed account fields

    @property
    def address(self) -> Optional[str]:
        return self._get_account_field("address")

    @address.setter
    def address(self, value: Optional[str]) -> None:
        self._set_account_field("address", value)

    @property
    def route(self) -> Optional[str]:
        return self._get_account_field("route")

    @route.setter
    def route(self, value: Optional[str]) -> None:
        self._set_account_field("route", value)

    @property
    def account_alias(self) -> Optional[str]:
        """Email-style alias on upi/pix URIs."""
        return self._get_account_field("account_alias")

    @account_alias.setter
    def account_alias(self, value: Optional[str]) -> None:
        self._set_account_field("account_alias", value)

    @property
    def account_number(self) -> Union[int, str, None]:
        """int on ach URIs, free-form str on intra URIs."""
        return self._get_account_field("account_number")

    @account_number.setter
    def account_number(self, value: Union[int, str, None]) -> None:
        self._set_account_field("account_number", value)

    @property
    def routing_number(self) -> Optional[int]:
        return self._get_account_field("routing_number")

    @routing_number.setter
    def routing_number(self, value: Union[int, str, None]) -> None:
        self._set_account_field("routing_number", value)

    @property
    def bic(self) -> Optional[str]:
        return self._get_account_field("bic")

    @bic.setter
    def bic(self, value: Optional[str]) -> None:
        self._set_account_field("bic", value)

    @property
    def iban(self) -> Optional[str]:
        return self._get_account_field("iban")

    @iban.setter
    def iban(self, value: Optional[str]) -> None:
        self._set_account_field("iban", value)

    @property
    def void(self) -> Optional[str]:
        """Sub-type of a void URI (geo, plus, ...), None on any other rail."""
        return self._get_account_field("void")

    @void.setter
    def void(self, value: Optional[str]) -> None:
        if value:
            url = copy_url(self._url, host="void")
            rail = get_rail("void")
            self._url = copy_url(url, path=rail.set("void", "/", value))
        elif self.hostname == "void":
            self.pathname = "/"

    # Composite amount

    @property
    def amount(self) -> Optional[str]:
        """Raw amount parameter, "token:number" or "number"."""
        return self.get_param(QUERY_KEYS["AMOUNT"])

    @amount.setter
    def amount(self, value: Optional[str]) -> None:
        self._set_query(QUERY_KEYS["AMOUNT"], str(value) if value else None)

    @property
    def asset(self) -> Optional[str]:
        return self._amount().asset

    @asset.setter
    def asset(self, value: Optional[str]) -> None:
        self._write_amount(self._amount().model_copy(update={"token": value or None}))

    @property
    def value(self) -> Optional[float]:
        return self._amount().value

    @value.setter
    def value(self, value: Union[int, float, None]) -> None:
        number = None if value is None else format_number(value)
        self._write_amount(self._amount().model_copy(update={"number": number}))

    @property
    def fiat(self) -> Optional[str]:
        fiat = self.get_param(QUERY_KEYS["FIAT"])
        return fiat.lower() if fiat else None

    @fiat.setter
    def fiat(self, value: Optional[str]) -> None:
        self._set_query(QUERY_KEYS["FIAT"], value.lower() if value else None)

    @property
    def currency(self) -> tuple[Optional[str], Optional[str]]:
        """(asset, fiat)."""
        return self.asset, self.fiat

    @currency.setter
    def currency(self, value: Sequence[Any]) -> None:
        """
        Set asset and fiat, and optionally the numeric value.

        Accepts (token,), (token, fiat) or (token, fiat, number). Any part
        that is missing or None keeps its current value; use asset = None or
        fiat = None to clear a component.
        """
        token, fiat, number = (tuple(value) + (None, None, None))[:3]
        update = {}
        if token:
            update["token"] = token
        if number is not None:
            update["number"] = format_number(number)
        if update:
            self._write_amount(self._amount().model_copy(update=update))
        if fiat:
            self.fiat = fiat

    # Strict query fields

    @property
    def deadline(self) -> Optional[int]:
        """Unix timestamp from the dl parameter."""
        deadline = self.get_param(QUERY_KEYS["DEADLINE"])
        if deadline is not None and UNIX_TIMESTAMP_REGEX.match(deadline):
            return int(deadline)
        return None

    @deadline.setter
    def deadline(self, value: Union[int, str, None]) -> None:
        if value is None:
            self.delete_param(QUERY_KEYS["DEADLINE"])
            return
        text = self._validate("deadline", validate_deadline, value)
        self._set_query(QUERY_KEYS["DEADLINE"], text)

    @property
    def location(self) -> Optional[str]:
        return self.get_param(QUERY_KEYS["LOCATION"])

    @location.setter
    def location(self, value: Optional[str]) -> None:
        if value is None:
            self.delete_param(QUERY_KEYS["LOCATION"])
            return
        text = self._validate("location", validate_location, self.void, str(value))
        self._set_query(QUERY_KEYS["LOCATION"], text)

    @property
    def lang(self) -> Optional[str]:
        lang = self.get_param(QUERY_KEYS["LANG"])
        return lang.lower() if lang else None

    @lang.setter
    def lang(self, value: Optional[str]) -> None:
        if not value:
            self.delete_param(QUERY_KEYS["LANG"])
            return
        self._set_query(QUERY_KEYS["LANG"], self._validate("lang", validate_lang, value))

    @property
    def split(self) -> Optional[tuple[str, str, bool]]:
        """(receiver, amount, is_percentage) from "[p:]amount@receiver"."""
        split = self.get_param(QUERY_KEYS["SPLIT"])
        if not split or "@" not in split:
            return None
        amount, receiver = split.split("@", 1)
        if not amount or not receiver:
            return None
        is_percentage = amount.startswith("p:")
        if is_percentage:
            amount = amount[2:]
        return receiver, amount, is_percentage

    @split.setter
    def split(self, value: Optional[Sequence[Any]]) -> None:
        if value is None:
            self.delete_param(QUERY_KEYS["SPLIT"])
            return
        receiver, amount, is_percentage = (tuple(value) + (None, None, False))[:3]
        if not receiver or amount is None or amount == "":
            logger.debug("Rejected split write: %r", value)
            raise InvalidFieldError("Split requires both receiver and amount")
        prefix = "p:" if is_percentage else ""
        self._set_query(QUERY_KEYS["SPLIT"], f"{prefix}{amount}@{receiver}")

    # Flags

    @property
    def donate(self) -> Optional[bool]:
        return self._get_flag(QUERY_KEYS["DONATE"])

    @donate.setter
    def donate(self, value: Optional[bool]) -> None:
        self._set_flag(QUERY_KEYS["DONATE"], value)

    @property
    def rtl(self) -> Optional[bool]:
        """Right-to-left rendering hint."""
        return self._get_flag(QUERY_KEYS["RTL"])

    @rtl.setter
    def rtl(self, value: Optional[bool]) -> None:
        self._set_flag(QUERY_KEYS["RTL"], value)

    # Silently normalized fields

    @property
    def color_background(self) -> Optional[str]:
        return self._get_lower(QUERY_KEYS["COLOR_BACKGROUND"])

    @color_background.setter
    def color_background(self, value: Optional[str]) -> None:
        self._set_color(QUERY_KEYS["COLOR_BACKGROUND"], value)

    @property
    def color_foreground(self) -> Optional[str]:
        return self._get_lower(QUERY_KEYS["COLOR_FOREGROUND"])

    @color_foreground.setter
    def color_foreground(self, value: Optional[str]) -> None:
        self._set_color(QUERY_KEYS["COLOR_FOREGROUND"], value)

    @property
    def organization(self) -> Optional[str]:
        return self.get_param(QUERY_KEYS["ORGANIZATION"])

    @organization.setter
    def organization(self, value: Optional[str]) -> None:
        self._set_bounded(QUERY_KEYS["ORGANIZATION"], value, ORGANIZATION_MAX_LENGTH)

    @property
    def item(self) -> Optional[str]:
        return self.get_param(QUERY_KEYS["ITEM"])

    @item.setter
    def item(self, value: Optional[str]) -> None:
        self._set_bounded(QUERY_KEYS["ITEM"], value, ITEM_MAX_LENGTH)

    # Free-text fields

    @property
    def message(self) -> Optional[str]:
        return self.get_param(QUERY_KEYS["MESSAGE"]) or None

    @message.setter
    def message(self, value: Optional[str]) -> None:
        self._set_query(QUERY_KEYS["MESSAGE"], value)

    @property
    def receiver_name(self) -> Optional[str]:
        return self.get_param(QUERY_KEYS["RECEIVER_NAME"]) or None

    @receiver_name.setter
    def receiver_name(self, value: Optional[str]) -> None:
        self._set_query(QUERY_KEYS["RECEIVER_NAME"], value)

    @property
    def recurring(self) -> Optional[str]:
        return self._get_lower(QUERY_KEYS["RECURRING"])

    @recurring.setter
    def recurring(self, value: Optional[str]) -> None:
        self._set_query(QUERY_KEYS["RECURRING"], value)

    @property
    def barcode(self) -> Optional[str]:
        return self._get_lower(QUERY_KEYS["BARCODE"])

    @barcode.setter
    def barcode(self, value: Optional[str]) -> None:
        self._set_query(QUERY_KEYS["BARCODE"], value)

    @property
    def swap(self) -> Optional[str]:
        return self._get_lower(QUERY_KEYS["SWAP"])

    @swap.setter
    def swap(self, value: Optional[str]) -> None:
        self._set_query(QUERY_KEYS["SWAP"], value.lower() if value else None)

    @property
    def mode(self) -> Optional[str]:
        """Transport hint such as "qr" or "nfc"."""
        return self._get_lower(QUERY_KEYS["MODE"])

    @mode.setter
    def mode(self, value: Optional[str]) -> None:
        self._set_query(QUERY_KEYS["MODE"], value.lower() if value else None)

    # Serialization

    def to_json(self) -> str:
        """The URI string, as used when embedding the object in JSON."""
        return str(self._url)

    def to_json_object(self) -> dict:
        """
        Snapshot every defined field into a plain dict.

        Keys are the camelCase field names. A field is left out only when it
        is None or an empty string, so donate=False, rtl=False and value=0
        are kept. currency is left out when both its components are None.

        Returns:
            Dict suitable for json.dumps()
        """
        asset, fiat = self.currency
        fields = {
            "account_alias": self.account_alias,
            "account_number": self.account_number,
            "address": self.address,
            "amount": self.amount,
            "asset": asset,
            "barcode": self.barcode,
            "bic": self.bic,
            "color_background": self.color_background,
            "color_foreground": self.color_foreground,
            "currency": (asset, fiat) if asset or fiat else None,
            "deadline": self.deadline,
            "donate": self.donate,
            "fiat": fiat,
            "hash": self.hash,
            "host": self.host,
            "hostname": self.hostname,
            "href": self.href,
            "iban": self.iban,
            "item": self.item,
            "lang": self.lang,
            "location": self.location,
            "message": self.message,
            "mode": self.mode,
            "network": self.network,
            "organization": self.organization,
            "origin": self.origin,
            "password": self.password,
            "pathname": self.pathname,
            "port": self.port,
            "protocol": self.protocol,
            "receiver_name": self.receiver_name,
            "recurring": self.recurring,
            "route": self.route,
            "routing_number": self.routing_number,
            "rtl": self.rtl,
            "search": self.search,
            "split": self.split,
            "swap": self.swap,
            "username": self.username,
            "value": self.value,
            "void": self.void,
        }
        snapshot = PaymentURISnapshot(
            **{name: value for name, value in fields.items() if value is not None and value != ""}
        )
        return snapshot.model_dump(by_alias=True, exclude_none=True)

    # Internal helpers

    def _get_account_field(self, field: str) -> Any:
        hostname = self.hostname
        rail = get_rail(hostname)
        if not rail.supports(field):
            return None
        return rail.get(field, hostname, self.pathname)

    def _set_account_field(self, field: str, value: Any) -> None:
        rail = get_rail(self.hostname)
        if not rail.supports(field):
            error = hostname_error(field)
            logger.debug("Rejected %s write on %s: %s", field, self.hostname, error)
            raise error
        self.pathname = self._validate(field, rail.set, field, self.pathname, value)

    def _amount(self) -> Amount:
        return Amount.parse(self.get_param(QUERY_KEYS["AMOUNT"]))

    def _write_amount(self, amount: Amount) -> None:
        self._set_query(QUERY_KEYS["AMOUNT"], amount.serialize())

    def _set_query(self, key: str, value: Optional[str]) -> None:
        self._url = with_param(self._url, key, value)

    def _get_lower(self, key: str) -> Optional[str]:
        value = self.get_param(key)
        return value.lower() if value else None

    def _get_flag(self, key: str) -> Optional[bool]:
        flag = self.get_param(key)
        if flag == "1":
            return True
        if flag == "0":
            return False
        return None

    def _set_flag(self, key: str, value: Optional[bool]) -> None:
        self._set_query(key, "1" if value is True else None)

    def _set_color(self, key: str, value: Optional[str]) -> None:
        if value and HEX_COLOR_REGEX.match(value):
            self._set_query(key, value.lower())
            return
        if value:
            logger.debug("Dropped %s: %r is not a 6-digit hex color", key, value)
        self.delete_param(key)

    def _set_bounded(self, key: str, value: Optional[str], limit: int) -> None:
        if value is not None and len(value) <= limit:
            self._set_query(key, value)
            return
        if value is not None:
            logger.debug("Dropped %s: longer than %d characters", key, limit)
        self.delete_param(key)

    def _validate(self, field: str, validate: Callable[..., Any], *args: Any) -> Any:
        try:
            return validate(*args)
        except InvalidFieldError as exc:
            logger.debug("Rejected %s write: %s", field, exc)
            raise


def _check_protocol(scheme: str) -> None:
    if scheme != PAYTO_SCHEME:
        raise InvalidProtocolError("Invalid protocol, must be payto:")


class InvalidProtocolError(PaytoError):
    """Exception raised when a URI does not use the payto: scheme."""
    pass
