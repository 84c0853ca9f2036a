"""Tests for utility functions."""

import logging

import numpy as np
import pytest

from abs_lookup.utils import (
    BOLTZMANN_CONSTANT,
    LOSCHMIDT_CONSTANT,
    STANDARD_PRESSURE,
    STANDARD_TEMPERATURE,
    number_density,
    setup_logging,
)


class TestNumberDensity:
    """Tests for the ideal gas number density."""

    def test_loschmidt(self):
        """Test number density at 0 degC and 1 atm equals Loschmidt's constant."""
        n = number_density(STANDARD_PRESSURE, STANDARD_TEMPERATURE)
        assert np.isclose(n, LOSCHMIDT_CONSTANT, rtol=1e-6)

    def test_proportional_to_p_over_t(self):
        assert number_density(2e4, 200.0) == pytest.approx(
            2 * number_density(1e4, 200.0)
        )
        assert number_density(1e4, 200.0) == pytest.approx(1e4 / (BOLTZMANN_CONSTANT * 200.0))


class TestSetupLogging:
    """Tests for logging configuration."""

    def test_level_name(self, monkeypatch):
        calls = {}
        monkeypatch.setattr(logging, "basicConfig", lambda **kw: calls.update(kw))
        setup_logging("warning")
        assert calls["level"] == logging.WARNING

    def test_verbose(self, monkeypatch):
        calls = {}
        monkeypatch.setattr(logging, "basicConfig", lambda **kw: calls.update(kw))
        setup_logging(verbose=True)
        assert calls["level"] == logging.DEBUG
