"""Shared fixtures."""

from __future__ import annotations

import pytest

from tests.helpers import GRADIENT_PAYLOADS, FakeGenerator


@pytest.fixture
def fake_generator() -> FakeGenerator:
    """Generator scripted with two chunk results that share an "Intro" section."""
    return FakeGenerator(payloads=GRADIENT_PAYLOADS)
