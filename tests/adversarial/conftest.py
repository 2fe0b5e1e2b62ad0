"""
Shared fixtures for adversarial tests.

Provides seeded random operation streams for invariant stress tests.
"""

import random

import pytest

# Module-level marker for all adversarial tests
pytestmark = pytest.mark.adversarial


@pytest.fixture(params=[7, 42, 1337, 2024])
def rng(request: pytest.FixtureRequest) -> random.Random:
    """Seeded random source, one run per seed."""
    return random.Random(request.param)
