"""
Tests for PaymentURI serialization.

Tests to_json() and the camelCase snapshot returned by to_json_object().
"""

import json

from payto_sdk import PaymentURI


XCB_ADDRESS = "cb7147879011ea207df5b35a24ca6f0859dcfb145999"


class TestToJsonObject:
    """Tests for PaymentURI.to_json_object."""

    def test_generic_network(self):
        """Test the snapshot of a crypto URI with amount, fiat and color."""
        payto = PaymentURI(
            f"payto://xcb/{XCB_ADDRESS}?amount=ctn:10.01&fiat=eur&color-f=001BEE"
        )
        snapshot = payto.to_json_object()

        assert snapshot.pop("href") == payto.href
        assert snapshot.pop("search") == payto.search
        assert snapshot == {
            "address": XCB_ADDRESS,
            "amount": "ctn:10.01",
            "asset": "ctn",
            "colorForeground": "001bee",
            "currency": ("ctn", "eur"),
            "fiat": "eur",
            "host": "xcb",
            "hostname": "xcb",
            "network": "xcb",
            "origin": "payto://xcb",
            "pathname": f"/{XCB_ADDRESS}",
            "protocol": "payto:",
            "value": 10.01,
        }

    def test_ach(self):
        """Test that ach numbers are dumped as ints under camelCase keys."""
        snapshot = PaymentURI("payto://ach/123456789/1234567").to_json_object()
        assert snapshot["routingNumber"] == 123456789
        assert snapshot["accountNumber"] == 1234567
        assert "address" not in snapshot
        assert "bic" not in snapshot

    def test_intra_account_number_is_text(self):
        """Test that intra account numbers stay strings."""
        snapshot = PaymentURI("payto://intra/pingchb2/abc123").to_json_object()
        assert snapshot["bic"] == "PINGCHB2"
        assert snapshot["accountNumber"] == "abc123"

    def test_iban(self):
        """Test bic and iban keys."""
        snapshot = PaymentURI(
            "payto://iban/DEUTDEFF/DE89370400440532013000"
        ).to_json_object()
        assert snapshot["bic"] == "DEUTDEFF"
        assert snapshot["iban"] == "DE89370400440532013000"

    def test_alias(self):
        """Test the accountAlias key."""
        snapshot = PaymentURI("payto://upi/user@example.com").to_json_object()
        assert snapshot["accountAlias"] == "user@example.com"

    def test_void(self):
        """Test void and location keys."""
        payto = PaymentURI("payto://void/geo")
        payto.location = "51.5074,0.1278"
        snapshot = payto.to_json_object()
        assert snapshot["void"] == "geo"
        assert snapshot["location"] == "51.5074,0.1278"

    def test_false_and_zero_are_kept(self):
        """Test that only None and empty strings are left out."""
        payto = PaymentURI("payto://xcb/addr?donate=0&rtl=0&amount=0")
        snapshot = payto.to_json_object()
        assert snapshot["donate"] is False
        assert snapshot["rtl"] is False
        assert snapshot["value"] == 0

    def test_empty_fields_are_left_out(self):
        """Test that empty port, hash and search are omitted."""
        snapshot = PaymentURI("payto://xcb/addr").to_json_object()
        for key in ("port", "hash", "search", "username", "password", "currency", "amount"):
            assert key not in snapshot

    def test_currency_with_fiat_only(self):
        """Test that currency is kept when only the fiat is set."""
        snapshot = PaymentURI("payto://xcb/addr?fiat=eur").to_json_object()
        assert snapshot["currency"] == (None, "eur")

    def test_split(self):
        """Test that split is dumped as a tuple."""
        payto = PaymentURI("payto://xcb/addr")
        payto.split = ("receiver", "10", True)
        assert payto.to_json_object()["split"] == ("receiver", "10", True)

    def test_json_serializable(self):
        """Test that the snapshot can be passed to json.dumps."""
        payto = PaymentURI("payto://xcb/addr?amount=ctn:5&fiat=eur&dl=1706745600")
        data = json.loads(json.dumps(payto.to_json_object()))
        assert data["currency"] == ["ctn", "eur"]
        assert data["deadline"] == 1706745600


class TestToJson:
    """Tests for PaymentURI.to_json."""

    def test_returns_href(self, xcb_payto):
        """Test that the JSON form is the URI string."""
        assert xcb_payto.to_json() == xcb_payto.href
        assert json.dumps({"uri": xcb_payto.to_json()}).startswith('{"uri": "payto://xcb/')
