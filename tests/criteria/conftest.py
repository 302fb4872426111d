"""Shared fixtures for criteria model tests."""

from __future__ import annotations

import pytest

from criteria_kit.operators import FilterOperator


@pytest.fixture
def status_active():
    """Descriptor for ``status = active``."""
    return {"field": "status", "operator": FilterOperator.EQUAL, "value": "active"}


@pytest.fixture
def age_over_18():
    """Descriptor for ``age > 18`` (string value, as sent by query strings)."""
    return {"field": "age", "operator": FilterOperator.GT, "value": "18"}
