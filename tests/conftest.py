"""
Shared test fixtures and configuration.

This module provides pytest fixtures for:
- Registry instances with a mocked notification sink
- Caller contexts for the usual test identities
"""

from unittest.mock import Mock

import pytest

from src.domain.records import CallerContext
from src.domain.registry import Registry

ADMIN = "registry-admin"
ALICE = "alice"
BOB = "bob"
CAROL = "carol"


@pytest.fixture
def sink() -> Mock:
    """Mock notification sink recording emitted events."""
    return Mock()


@pytest.fixture
def registry(sink: Mock) -> Registry:
    """Fresh, empty registry."""
    return Registry(ADMIN, sink)


@pytest.fixture
def alice() -> CallerContext:
    return CallerContext(identity=ALICE)


@pytest.fixture
def bob() -> CallerContext:
    return CallerContext(identity=BOB)


@pytest.fixture
def carol() -> CallerContext:
    return CallerContext(identity=CAROL)
