"""
Tests for payto_sdk.validators module.

Tests the format rules applied before strict fields are written.
"""

import pytest

from payto_sdk.validators import (
    InvalidFieldError,
    InvalidHostnameError,
    PaytoError,
    is_email,
    parse_float,
    validate_account_alias,
    validate_ach_account_number,
    validate_bic,
    validate_deadline,
    validate_iban,
    validate_intra_account_number,
    validate_lang,
    validate_location,
    validate_routing_number,
)


class TestParseFloat:
    """Tests for parse_float."""

    def test_plain_numbers(self):
        """Test integers and decimals."""
        assert parse_float("10") == 10.0
        assert parse_float("10.01") == 10.01
        assert parse_float("-3.5") == -3.5

    def test_numeric_prefix(self):
        """Test that only the leading number is read."""
        assert parse_float("10abc") == 10.0
        assert parse_float("1e3x") == 1000.0

    def test_no_number(self):
        """Test text without a numeric prefix."""
        assert parse_float("abc") is None
        assert parse_float("") is None
        assert parse_float(None) is None


class TestBankIdentifiers:
    """Tests for BIC and IBAN validation."""

    def test_bic_eight_and_eleven(self):
        """Test both BIC lengths, uppercased on return."""
        assert validate_bic("DEUTDEFF") == "DEUTDEFF"
        assert validate_bic("deutdeff500") == "DEUTDEFF500"

    def test_bic_invalid(self):
        """Test malformed BICs."""
        for value in ("invalid", "DEUT", "DEUTDEFF5"):
            with pytest.raises(InvalidFieldError, match="Invalid BIC format"):
                validate_bic(value)

    def test_iban_valid(self):
        """Test an IBAN, uppercased on return."""
        assert validate_iban("de89370400440532013000") == "DE89370400440532013000"

    def test_iban_invalid(self):
        """Test malformed IBANs."""
        with pytest.raises(InvalidFieldError, match="Invalid IBAN format"):
            validate_iban("invalid-iban")


class TestAchNumbers:
    """Tests for routing and ACH account numbers."""

    def test_routing_number(self):
        """Test that exactly nine digits pass as int or str."""
        assert validate_routing_number(123456789) == "123456789"
        assert validate_routing_number("987654321") == "987654321"

    def test_routing_number_invalid(self):
        """Test wrong lengths and non-integers."""
        for value in (12345, "1234567890", 123456789.0, True):
            with pytest.raises(InvalidFieldError, match="Must be exactly 9 digits"):
                validate_routing_number(value)

    def test_account_number_range(self):
        """Test the 7 to 14 digit range."""
        assert validate_ach_account_number(1234567) == "1234567"
        assert validate_ach_account_number("12345678901234") == "12345678901234"
        with pytest.raises(InvalidFieldError, match="Invalid account number format"):
            validate_ach_account_number(123456)
        with pytest.raises(InvalidFieldError, match="Invalid account number format"):
            validate_ach_account_number("123456789012345")


class TestIntraAccountNumber:
    """Tests for validate_intra_account_number."""

    def test_free_form(self):
        """Test that letters and digits pass."""
        assert validate_intra_account_number("cb1958b39698") == "cb1958b39698"
        assert validate_intra_account_number(42) == "42"

    def test_must_be_one_segment(self):
        """Test that slashes and whitespace are refused."""
        for value in ("a/b", "a b", ""):
            with pytest.raises(InvalidFieldError):
                validate_intra_account_number(value)


class TestAccountAlias:
    """Tests for email aliases."""

    def test_is_email(self):
        """Test the email check."""
        assert is_email("user@example.com")
        assert not is_email("not-an-email")

    def test_validate_alias(self):
        """Test that a valid alias is returned unchanged."""
        assert validate_account_alias("user@example.com") == "user@example.com"

    def test_validate_alias_invalid(self):
        """Test that non-emails are refused."""
        with pytest.raises(InvalidFieldError, match="Invalid email address format"):
            validate_account_alias("invalid-email")


class TestDeadlineAndLang:
    """Tests for deadline and language codes."""

    def test_deadline(self):
        """Test Unix timestamps as int or str."""
        assert validate_deadline(1706745600) == "1706745600"
        assert validate_deadline("1706745600") == "1706745600"

    def test_deadline_invalid(self):
        """Test negative, fractional and non-numeric deadlines."""
        for value in (-1, "12.5", "tomorrow", 1.5):
            with pytest.raises(InvalidFieldError, match="Invalid deadline format"):
                validate_deadline(value)

    def test_lang(self):
        """Test language codes with and without a region."""
        assert validate_lang("en") == "en"
        assert validate_lang("en-US") == "en-us"
        assert validate_lang("de-ch") == "de-ch"

    def test_lang_invalid(self):
        """Test malformed language codes."""
        for value in ("english", "EN", "e", "en_US", "en-USA"):
            with pytest.raises(InvalidFieldError, match="Invalid language format"):
                validate_lang(value)


class TestLocation:
    """Tests for validate_location."""

    def test_requires_void_type(self):
        """Test that a location needs a void sub-type."""
        with pytest.raises(InvalidFieldError, match="Void type must be set"):
            validate_location(None, "51.5074,0.1278")

    def test_geo(self):
        """Test coordinates within range and up to nine decimals."""
        assert validate_location("geo", "51.5074,0.1278") == "51.5074,0.1278"
        assert validate_location("geo", "-90,180") == "-90,180"
        assert validate_location("geo", "45.123456789,-10.987654321")

    def test_geo_invalid(self):
        """Test out-of-range and malformed coordinates."""
        for value in ("91,0", "0,181", "invalid", "1.1234567891,0", "51.5074"):
            with pytest.raises(InvalidFieldError, match="Invalid geo location format"):
                validate_location("geo", value)

    def test_plus(self):
        """Test plus codes."""
        assert validate_location("plus", "8FVC9G8F+6X") == "8FVC9G8F+6X"
        with pytest.raises(InvalidFieldError, match="Invalid plus code format"):
            validate_location("plus", "invalid")

    def test_other_void_types_accept_anything(self):
        """Test that free-form sub-types do not check the format."""
        assert validate_location("cash", "Counter 3") == "Counter 3"


class TestExceptionHierarchy:
    """Tests for the exception classes."""

    def test_hierarchy(self):
        """Test that every error is a PaytoError and a ValueError."""
        assert issubclass(InvalidHostnameError, InvalidFieldError)
        assert issubclass(InvalidFieldError, PaytoError)
        assert issubclass(PaytoError, ValueError)
