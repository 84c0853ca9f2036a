"""Tests for the lookup table error hierarchy."""

import inspect

import pytest

from abs_lookup import errors
from abs_lookup.errors import (
    LookupRangeError,
    LookupRequestError,
    LookupTableError,
    PressureOutOfRange,
    TableStructureError,
)

ERROR_CLASSES = [
    cls for _, cls in inspect.getmembers(errors, inspect.isclass)
    if issubclass(cls, LookupTableError)
]


class TestHierarchy:
    """Tests for the structure of the error classes."""

    @pytest.mark.parametrize("cls", ERROR_CLASSES, ids=lambda cls: cls.__name__)
    def test_documented(self, cls):
        assert cls.__doc__ and cls.__doc__.strip()

    @pytest.mark.parametrize("cls", ERROR_CLASSES, ids=lambda cls: cls.__name__)
    def test_category(self, cls):
        if cls is not LookupTableError:
            assert issubclass(cls, ValueError)
            assert issubclass(cls, (TableStructureError, LookupRequestError, LookupRangeError))


class TestRangeError:
    """Tests for the range error attributes and message."""

    def test_attributes_in_message(self):
        error = PressureOutOfRange(5.0, 10.0, 1250.0, "Extra detail.")
        assert error.value == 5.0
        assert error.allowed_min == 10.0
        assert error.allowed_max == 1250.0
        message = str(error)
        assert message.startswith("Pressure 5 is outside")
        assert "10 to 1250" in message
        assert message.endswith("Extra detail.")
