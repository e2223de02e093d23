"""
Shared fixtures for adversarial tests.

Provides common test infrastructure for race condition and token attacks.
"""

import pytest

from src.domain.auth import SessionTokenCodec
from tests.conftest import JWT_SECRET

# Module-level marker for all adversarial tests
pytestmark = pytest.mark.adversarial


@pytest.fixture
def codec() -> SessionTokenCodec:
    """Codec signing with the same secret as the test application."""
    return SessionTokenCodec(secret=JWT_SECRET)
