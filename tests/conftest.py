"""Shared fixtures for sanitizr tests."""

import pytest

from sanitizr.patterns import DEFAULT_CACHE_SIZE, set_cache_size
from sanitizr.rules import RuleSet


@pytest.fixture(autouse=True)
def reset_pattern_cache():
    """Give every test a fresh pattern cache of the default size."""
    set_cache_size(DEFAULT_CACHE_SIZE)
    yield
    set_cache_size(DEFAULT_CACHE_SIZE)


@pytest.fixture
def no_rules():
    return RuleSet.new()


@pytest.fixture
def username_rules():
    """Length 5 to 10, as used for user names."""
    return RuleSet.new().with_length(5, 10)


@pytest.fixture
def percent_rules():
    return RuleSet.new().with_numeric_range(0.0, 100.0)
