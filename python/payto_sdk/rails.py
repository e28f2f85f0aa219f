"""
Location: python/payto_sdk/rails.py

Summary:
    Payment rails selected by the payto hostname. Each rail knows which
    account fields its path carries, where they sit, and how they are
    parsed and validated. Hostnames without a dedicated rail fall back to
    the generic address/route layout.

Usage:
    Used by payto.py for every path-backed field (address, route, bic,
    iban, account_number, routing_number, account_alias, void). Implement
    a Rail subclass and add it to RAILS to support another network.

Example:
    from payto_sdk.rails import get_rail

    rail = get_rail("ach")
    rail.get("routing_number", "ach", "/123456789/1234567")   # 123456789
    rail.set("account_number", "/123456789/1234567", 7654321)
    # "/123456789/7654321"
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

from .url import filled_segments, hostpath_segment, join_path_segments, set_path_segment
from .validators import (
    BIC_REGEX,
    IBAN_REGEX,
    InvalidFieldError,
    InvalidHostnameError,
    validate_account_alias,
    validate_ach_account_number,
    validate_bic,
    validate_iban,
    validate_intra_account_number,
    validate_routing_number,
)


class Rail(ABC):
    """
    Abstract base class for a payment rail.

    A rail maps the path segments of a payto URI to named account fields.
    get() returns the parsed field, set() validates a value and returns
    the rewritten pathname; neither touches the URI itself.

    Attributes:
        name: Rail identifier used in messages
        hostnames: Hostnames that select this rail
        fields: Field names the rail carries
    """

    name: str = ""
    hostnames: tuple[str, ...] = ()
    fields: tuple[str, ...] = ()

    def supports(self, field: str) -> bool:
        """Check whether the rail's path carries a field."""
        return field in self.fields

    def get(self, field: str, hostname: str, pathname: str) -> Any:
        """
        Read and parse a field.

        Args:
            field: Field name, e.g. "bic"
            hostname: Current URI hostname
            pathname: Current URI pathname

        Returns:
            The parsed value, or None if absent
        """
        text = self.read(field, hostname, pathname)
        if text is None:
            return None
        return self.load(field, text)

    def set(self, field: str, pathname: str, value: Any) -> str:
        """
        Validate a value and place it in the path.

        Args:
            field: Field name
            pathname: Current URI pathname
            value: New value; None or "" removes the field

        Returns:
            The rewritten pathname

        Raises:
            InvalidFieldError: If the value or the resulting layout is invalid
        """
        text = None
        if value is not None and value != "":
            text = self.dump(field, value)
        return self.write(field, pathname, text)

    def load(self, field: str, text: str) -> Any:
        """Convert raw segment text to the field's Python value."""
        return text

    def dump(self, field: str, value: Any) -> str:
        """Validate a value and render it as segment text."""
        return str(value)

    @abstractmethod
    def read(self, field: str, hostname: str, pathname: str) -> Optional[str]:
        """Return the raw segment text for a field."""
        raise NotImplementedError

    @abstractmethod
    def write(self, field: str, pathname: str, text: Optional[str]) -> str:
        """Return the pathname with the field's segment replaced or removed."""
        raise NotImplementedError


class LayoutRail(Rail):
    """
    Rail whose fields occupy fixed path positions.

    layout[0] is the first path segment, layout[1] the second, and so on.
    Writes that would leave a hole before a later segment are refused, as
    removing a segment would otherwise shift the next one into its place.
    """

    layout: tuple[str, ...] = ()

    @property
    def fields(self) -> tuple[str, ...]:  # type: ignore[override]
        return self.layout

    def read(self, field: str, hostname: str, pathname: str) -> Optional[str]:
        position = self.layout.index(field) + 1
        normalized = join_path_segments(filled_segments(pathname))
        return hostpath_segment(hostname, normalized, None, position)

    def write(self, field: str, pathname: str, text: Optional[str]) -> str:
        position = self.layout.index(field) + 1
        segments = filled_segments(pathname)

        if text:
            if len(segments) < position - 1:
                missing = self.layout[len(segments)]
                raise InvalidFieldError(
                    f"{_label(missing).capitalize()} must be set before {_label(field)}"
                )
        elif len(segments) > position:
            following = (
                self.layout[position] if position < len(self.layout) else "path segment"
            )
            raise InvalidFieldError(
                f"{_label(field).capitalize()} cannot be cleared while "
                f"{_label(following)} is set"
            )

        return set_path_segment(join_path_segments(segments), text, position)


class AchRail(LayoutRail):
    """US ACH transfers: /routing_number/account_number, both numeric."""

    name = "ach"
    hostnames = ("ach",)
    layout = ("routing_number", "account_number")

    def load(self, field: str, text: str) -> Optional[int]:
        return int(text) if text.isascii() and text.isdigit() else None

    def dump(self, field: str, value: Any) -> str:
        if field == "routing_number":
            return validate_routing_number(value)
        return validate_ach_account_number(value)


class BicRail(LayoutRail):
    """Bank identifier only: /bic."""

    name = "bic"
    hostnames = ("bic",)
    layout = ("bic",)

    def load(self, field: str, text: str) -> str:
        return text.upper()

    def dump(self, field: str, value: Any) -> str:
        return validate_bic(str(value))


class AliasRail(LayoutRail):
    """Instant payment aliases (UPI, PIX): /alias, where the alias is an email address."""

    name = "alias"
    hostnames = ("upi", "pix")
    layout = ("account_alias",)

    def dump(self, field: str, value: Any) -> str:
        return validate_account_alias(value)


class IntraRail(LayoutRail):
    """Transfers inside one institution: /bic/account_number, account is free-form."""

    name = "intra"
    hostnames = ("intra",)
    layout = ("bic", "account_number")

    def load(self, field: str, text: str) -> str:
        return text.upper() if field == "bic" else text

    def dump(self, field: str, value: Any) -> str:
        if field == "bic":
            return validate_bic(str(value))
        return validate_intra_account_number(value)


class VoidRail(LayoutRail):
    """Cash and off-network payments: /subtype (geo, plus or free-form)."""

    name = "void"
    hostnames = ("void",)
    layout = ("void",)

    def load(self, field: str, text: str) -> str:
        return text.lower()

    def dump(self, field: str, value: Any) -> str:
        return str(value).lower()


class GenericRail(LayoutRail):
    """Any other network (crypto tickers and the like): /address/route."""

    name = "generic"
    hostnames: tuple[str, ...] = ()
    layout = ("address", "route")


class IbanRail(Rail):
    """
    SEPA/IBAN transfers with an optional BIC in front: /iban or /bic/iban.

    A lone segment is the BIC when it looks like one and not like an IBAN;
    otherwise it is the IBAN. Writing a BIC in front of a lone IBAN shifts
    the IBAN to the second position, clearing it shifts the IBAN back.
    """

    name = "iban"
    hostnames = ("iban",)
    fields = ("bic", "iban")

    def decode(self, pathname: str) -> tuple[Optional[str], Optional[str], list[str]]:
        """
        Split the path into BIC, IBAN and any further segments.

        Args:
            pathname: Current URI pathname

        Returns:
            Tuple of (bic, iban, extra segments)
        """
        segments = filled_segments(pathname)
        if not segments:
            return None, None, []
        if len(segments) == 1:
            segment = segments[0]
            if BIC_REGEX.match(segment) and not IBAN_REGEX.match(segment):
                return segment, None, []
            return None, segment, []
        return segments[0], segments[1], segments[2:]

    def read(self, field: str, hostname: str, pathname: str) -> Optional[str]:
        bic, iban, _ = self.decode(pathname)
        return bic if field == "bic" else iban

    def write(self, field: str, pathname: str, text: Optional[str]) -> str:
        bic, iban, extra = self.decode(pathname)
        if field == "bic":
            bic = text
        else:
            iban = text
        if extra and not (bic and iban):
            raise InvalidFieldError(
                f"{_label(field).upper()} cannot be cleared while further path segments are set"
            )
        return join_path_segments([bic or "", iban or ""] + extra)

    def load(self, field: str, text: str) -> str:
        return text.upper()

    def dump(self, field: str, value: Any) -> str:
        if field == "bic":
            return validate_bic(str(value))
        return validate_iban(str(value))


RAILS: list[Rail] = [
    AchRail(),
    IbanRail(),
    BicRail(),
    AliasRail(),
    IntraRail(),
    VoidRail(),
]

GENERIC_RAIL = GenericRail()

# Mapping from hostname to its rail; unknown hostnames use GENERIC_RAIL
RAIL_BY_HOSTNAME = {
    hostname: rail for rail in RAILS for hostname in rail.hostnames
}


def get_rail(hostname: Optional[str]) -> Rail:
    """
    Select the rail for a hostname.

    Args:
        hostname: URI hostname (case-insensitive)

    Returns:
        The dedicated rail, or GENERIC_RAIL
    """
    return RAIL_BY_HOSTNAME.get((hostname or "").lower(), GENERIC_RAIL)


def hostname_error(field: str) -> InvalidHostnameError:
    """
    Build the error for writing a field on a rail that lacks it.

    The message lists every hostname whose rail carries the field, e.g.
    "Invalid hostname, must be ach or intra".
    """
    hostnames = [
        hostname
        for rail in RAILS
        if rail.supports(field)
        for hostname in rail.hostnames
    ]
    if not hostnames:
        return InvalidHostnameError(
            f"Invalid hostname, {_label(field)} is only used by generic networks"
        )
    if len(hostnames) == 1:
        listed = hostnames[0]
    else:
        listed = ", ".join(hostnames[:-1]) + " or " + hostnames[-1]
    return InvalidHostnameError(f"Invalid hostname, must be {listed}")


def _label(field: str) -> str:
    return field.replace("_", " ")
