"""
Shared pytest fixtures for EdgeAuth tests.
"""

import hashlib
import hmac

import pytest

from edgeauth import Signer

FIXED_NOW = 1_700_000_000


def _reference_hmac(key_hex: str, data, digestmod=hashlib.sha256) -> str:
    if isinstance(data, str):
        data = data.encode("utf-8")
    return hmac.new(bytes.fromhex(key_hex), data, digestmod).hexdigest()


@pytest.fixture
def reference_hmac():
    """Independent HMAC computation used to cross-check token digests."""
    return _reference_hmac


@pytest.fixture
def key_hex() -> str:
    """Shared secret used throughout the tests."""
    return "deadbeef"


@pytest.fixture
def key_bytes(key_hex: str) -> bytes:
    """Decoded shared secret."""
    return bytes.fromhex(key_hex)


@pytest.fixture
def now() -> int:
    """Frozen wall-clock time (unix seconds)."""
    return FIXED_NOW


@pytest.fixture
def clock(now: int):
    """A clock frozen at `now`, with a fractional part to check truncation."""
    return lambda: now + 0.75


@pytest.fixture
def signer(key_hex: str, clock) -> Signer:
    """Create a Signer with default policy and a frozen clock."""
    return Signer(key=key_hex, clock=clock)
