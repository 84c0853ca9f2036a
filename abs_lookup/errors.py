"""
Exceptions raised by the absorption lookup table.

Failures fall into three categories:

TableStructureError
    The table itself is malformed (grid ordering, array shapes, nonlinear
    species indices). Unrecoverable for that table.
LookupRequestError
    The caller asked for something the table cannot provide (unknown
    species or frequency, wrong VMR length, interpolation order too high).
LookupRangeError
    The atmospheric state lies outside the range covered by the table plus
    its half-bin extrapolation allowance. Expected at the edges of an
    atmosphere; the caller decides whether to clip, extend, or abort.
"""

from typing import Optional


class LookupTableError(Exception):
    """Base class for all lookup table errors."""
    pass


# =============================================================================
# Structural errors
# =============================================================================

class TableStructureError(LookupTableError, ValueError):
    """The lookup table is internally inconsistent."""
    pass


class EmptyTableError(TableStructureError):
    """The lookup table contains no species."""
    pass


class NonlinearSpeciesError(TableStructureError):
    """Nonlinear species indices are duplicated, out of range or unsorted."""
    pass


class GridOrderError(TableStructureError):
    """A grid that must be strictly monotonic is not."""
    pass


class ReferenceProfileError(TableStructureError):
    """Reference profiles or perturbation grids do not match the table."""
    pass


class ShapeMismatch(TableStructureError):
    """The coefficient array does not have the shape implied by the grids."""
    pass


# =============================================================================
# Request errors
# =============================================================================

class LookupRequestError(LookupTableError, ValueError):
    """The caller requested something the table cannot provide."""
    pass


class EmptyRequestError(LookupRequestError):
    """The requested species list is empty."""
    pass


class SpeciesNotFound(LookupRequestError):
    """A requested species is not in the table."""

    def __init__(self, species: str, available):
        self.species = species
        self.available = tuple(available)
        super().__init__(
            f"Species {species!r} not found in lookup table. "
            f"Available species: {', '.join(self.available)}"
        )


class AmbiguousSpecies(LookupRequestError):
    """A requested species occurs more than once in the table."""

    def __init__(self, species: str, count: int):
        self.species = species
        self.count = count
        super().__init__(
            f"Species {species!r} occurs {count} times in the lookup table, "
            f"it must occur exactly once."
        )


class GridPointNotFound(LookupRequestError):
    """A point of the new grid has no match in the old grid."""

    def __init__(self, index: int, value: float, tolerance: float):
        self.index = index
        self.value = value
        self.tolerance = tolerance
        super().__init__(
            f"Cannot find new grid point {index} ({value}) in the lookup "
            f"table grid (tolerance {tolerance})."
        )


class DimensionMismatch(LookupRequestError):
    """The VMR vector does not have one entry per table species."""
    pass


class InsufficientGridForOrder(LookupRequestError):
    """Too few grid points for the requested interpolation order."""

    def __init__(self, axis: str, n_points: int, order: int):
        self.axis = axis
        self.n_points = n_points
        self.order = order
        super().__init__(
            f"The number of {axis} grid points in the table ({n_points}) is "
            f"not enough for the desired order of interpolation ({order})."
        )


class IndexOutOfRange(LookupRequestError):
    """A frequency index lies beyond the frequency grid."""
    pass


class TableNotAdapted(LookupRequestError):
    """The cached log-pressure grid is missing or stale."""
    pass


class NoHumidityReferenceSpecies(LookupRequestError):
    """Nonlinear species are present but no humidity reference species."""
    pass


# =============================================================================
# Range errors
# =============================================================================

class LookupRangeError(LookupTableError, ValueError):
    """A state variable lies outside the range covered by the table.

    Attributes:
        value: The offending value
        allowed_min: Lower bound including the extrapolation allowance
        allowed_max: Upper bound including the extrapolation allowance
    """

    quantity = "Value"

    def __init__(
        self,
        value: float,
        allowed_min: float,
        allowed_max: float,
        detail: Optional[str] = None,
    ):
        self.value = value
        self.allowed_min = allowed_min
        self.allowed_max = allowed_max
        message = (
            f"{self.quantity} {value:g} is outside the range covered by the "
            f"lookup table. The allowed range is {allowed_min:g} to "
            f"{allowed_max:g}."
        )
        if detail:
            message = f"{message} {detail}"
        super().__init__(message)


class PressureOutOfRange(LookupRangeError):
    """Pressure outside the table pressure grid."""

    quantity = "Pressure"


class TemperatureOutOfRange(LookupRangeError):
    """Temperature offset outside the temperature perturbation grid."""

    quantity = "Temperature offset"


class HumidityOutOfRange(LookupRangeError):
    """Humidity fraction outside the humidity perturbation grid."""

    quantity = "Fractional humidity"
