"""
Shared pytest fixtures for payto-sdk tests.

This module provides the sample payto URIs used across the test files,
one per payment rail.
"""

import pytest

from payto_sdk import PaymentURI


XCB_ADDRESS = "cb7147879011ea207df5b35a24ca6f0859dcfb145999"


@pytest.fixture
def xcb_uri():
    """Generic crypto URI with a composite amount and a fiat currency."""
    return f"payto://xcb/{XCB_ADDRESS}?amount=ctn:10.01&fiat=eur"


@pytest.fixture
def xcb_payto(xcb_uri):
    """Parsed generic crypto URI."""
    return PaymentURI(xcb_uri)


@pytest.fixture
def ach_payto():
    """ACH transfer with routing and account number."""
    return PaymentURI("payto://ach/123456789/1234567")


@pytest.fixture
def iban_payto():
    """IBAN transfer with a BIC in front."""
    return PaymentURI("payto://iban/DEUTDEFF/DE89370400440532013000")


@pytest.fixture
def intra_payto():
    """Intra-institution transfer with a free-form account number."""
    return PaymentURI(
        "payto://intra/pingchb2/cb1958b39698a44bdae37f881e68dce073823a48a631?amount=usd:20"
    )


@pytest.fixture
def geo_payto():
    """Void URI carrying geographic coordinates."""
    return PaymentURI("payto://void/geo")


@pytest.fixture(
    params=[
        f"payto://xcb/{XCB_ADDRESS}?amount=ctn:10.01&fiat=eur",
        "payto://ach/123456789/1234567",
        "payto://iban/DEUTDEFF/DE89370400440532013000",
        "payto://intra/pingchb2/cb1958b39698a44bdae37f881e68dce073823a48a631?amount=usd:20",
        "payto://upi/user@example.com?receiver-name=John%20Doe",
        "payto://void/geo?loc=51.5074,0.1278&lang=en-US",
        "payto://xcb/addr?receiver-name=John%20Doe&message=Hi+there#note",
        "payto://xcb:8080/addr?split=p:10@cb00receiver&dl=1706745600",
    ]
)
def sample_uri(request):
    """Payto URIs in their canonical form, across every rail."""
    return request.param
