# tests/conftest.py
"""Shared test fixtures and helpers.

Record fixtures (entity classes live in tests/fixtures/entities.py):
- user / account: populated User and Account entities
- user_mapper: FieldMapper with the canonical {"id": ("userId", copy, copy)} table

Hypothesis Configuration:
- "ci" profile: Fast tests for CI (100 examples) - default
- "nightly" profile: Thorough tests (1000 examples)
- "debug" profile: Minimal tests with verbose output (10 examples)

Set profile via environment variable:
    HYPOTHESIS_PROFILE=nightly pytest tests/property/
"""

import os
from collections.abc import Iterator
from typing import Any

import pytest
from hypothesis import Phase, Verbosity, settings
from structlog.testing import capture_logs

from basalmodel import BuiltinTransform, FieldMapper
from tests.fixtures.entities import Account, User

COPY = BuiltinTransform.COPY


@pytest.fixture
def user() -> User:
    return User(id=1, first_name="Ada", last_name="Lovelace")


@pytest.fixture
def account() -> Account:
    return Account(owner="grace hopper", balance=100)


@pytest.fixture
def user_mapper() -> FieldMapper:
    """Mapper from the canonical id <-> userId example."""
    return FieldMapper({"id": ("userId", COPY, COPY)})


@pytest.fixture
def captured_logs() -> Iterator[list[dict[str, Any]]]:
    """Capture structlog events emitted during the test."""
    with capture_logs() as logs:
        yield logs


# =============================================================================
# Hypothesis Configuration
# =============================================================================

# CI profile: Fast tests for continuous integration
settings.register_profile(
    "ci",
    max_examples=100,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,  # Disable deadline for CI (timing varies)
)

# Nightly profile: Thorough testing for scheduled runs
settings.register_profile(
    "nightly",
    max_examples=1000,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

# Debug profile: Minimal examples with verbose output for debugging
settings.register_profile(
    "debug",
    max_examples=10,
    verbosity=Verbosity.verbose,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

# Load profile from environment, default to "ci"
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "ci"))
