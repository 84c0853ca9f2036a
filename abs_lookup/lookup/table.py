"""
In-memory gas absorption lookup table.

The table stores absorption cross sections per species, frequency and
pressure level, optionally perturbed in temperature and, for nonlinear
species, in humidity. Coefficients live in one 4D array

    coefficients[perturbation, expanded_species, frequency, pressure]

whose first axis has ``max(n_tpert, 1)`` entries. Along the second axis an
ordinary species occupies one slice and a nonlinear species ``n_hpert``
consecutive slices, one per humidity perturbation, so that

    n_expanded = n_species + n_nonlinear * (n_hpert - 1)

Absent optional axes simply collapse to size 1.
"""

import logging
from dataclasses import dataclass, field
from typing import List, NamedTuple, Optional, Sequence, Tuple

import numpy as np

from abs_lookup.errors import (
    EmptyTableError,
    GridOrderError,
    NonlinearSpeciesError,
    ReferenceProfileError,
    ShapeMismatch,
)
from abs_lookup.grids.polynomial import is_strictly_decreasing, is_strictly_increasing
from abs_lookup.utils.constants import HUMIDITY_REFERENCE_MOLECULE

logger = logging.getLogger(__name__)

_FLOAT_FIELDS = (
    "frequency_grid",
    "pressure_grid",
    "reference_vmr",
    "reference_temperature",
    "temperature_perturbations",
    "humidity_perturbations",
    "coefficients",
)


class SpeciesSlice(NamedTuple):
    """Block of the expanded species axis belonging to one species."""

    offset: int
    length: int

    @property
    def stop(self) -> int:
        return self.offset + self.length


def species_molecule(tag: str) -> str:
    """
    Molecule name of a species tag.

    Tags look like ``"H2O"``, ``"H2O-PWR98"`` or ``"H2O,H2O-SelfContCKD"``;
    the molecule is the text before the first ``-`` of the first tag.
    """
    first = str(tag).split(",")[0]
    return first.split("-")[0].strip()


@dataclass(eq=False)
class GasAbsLookup:
    """
    Gas absorption lookup table.

    Attributes
    ----------
    species : tuple of str
        Species tags, length n_species
    nonlinear_species : ndarray of int
        Strictly ascending indices into ``species`` of the species whose
        absorption depends on humidity
    frequency_grid : ndarray
        Strictly increasing frequencies in Hz, shape (n_freq,)
    pressure_grid : ndarray
        Strictly decreasing pressures in Pa, shape (n_press,)
    reference_vmr : ndarray
        Reference VMR profiles, shape (n_species, n_press)
    reference_temperature : ndarray
        Reference temperature profile in K, shape (n_press,)
    temperature_perturbations : ndarray
        Temperature offsets in K, shape (n_tpert,); empty if the table has
        no temperature axis
    humidity_perturbations : ndarray
        Fractional humidity perturbations, shape (n_hpert,); empty if and
        only if there are no nonlinear species
    coefficients : ndarray
        Absorption cross sections in m^2, shape
        (max(n_tpert, 1), n_expanded, n_freq, n_press)
    log_pressure_grid : ndarray or None
        Cached ``log(pressure_grid)``. Reset whenever ``pressure_grid`` is
        assigned; rebuilt by :meth:`initialize_log_pressure_grid`.
    """

    species: Sequence[str]
    nonlinear_species: Sequence[int]
    frequency_grid: np.ndarray
    pressure_grid: np.ndarray
    reference_vmr: np.ndarray
    reference_temperature: np.ndarray
    temperature_perturbations: np.ndarray
    humidity_perturbations: np.ndarray
    coefficients: np.ndarray
    log_pressure_grid: Optional[np.ndarray] = field(default=None, repr=False)

    def __setattr__(self, name, value):
        if name == "species":
            value = tuple(str(s) for s in value)
        elif name == "nonlinear_species":
            value = np.asarray(value, dtype=np.int64).reshape(-1)
        elif name in _FLOAT_FIELDS:
            value = np.asarray(value, dtype=float)
        elif name == "log_pressure_grid" and value is not None:
            value = np.asarray(value, dtype=float)

        object.__setattr__(self, name, value)

        # Any new pressure grid makes the log cache stale
        if name == "pressure_grid":
            object.__setattr__(self, "log_pressure_grid", None)

    def __repr__(self) -> str:
        return (
            f"GasAbsLookup({self.n_species} species, "
            f"{len(self.nonlinear_species)} nonlinear, "
            f"{self.n_frequencies} frequencies, {self.n_pressures} pressures, "
            f"{self.n_temperature_perturbations} T perturbations, "
            f"{self.n_humidity_perturbations} H2O perturbations)"
        )

    # -------------------------------------------------------------------------
    # Sizes
    # -------------------------------------------------------------------------

    @property
    def n_species(self) -> int:
        return len(self.species)

    @property
    def n_frequencies(self) -> int:
        return len(self.frequency_grid)

    @property
    def n_pressures(self) -> int:
        return len(self.pressure_grid)

    @property
    def n_temperature_perturbations(self) -> int:
        return len(self.temperature_perturbations)

    @property
    def n_humidity_perturbations(self) -> int:
        return len(self.humidity_perturbations)

    @property
    def has_temperature_axis(self) -> bool:
        return self.n_temperature_perturbations > 0

    @property
    def has_nonlinear_species(self) -> bool:
        return len(self.nonlinear_species) > 0

    def expected_coefficient_shape(self) -> Tuple[int, int, int, int]:
        """Shape the coefficient array must have for the current grids."""
        n_nls = len(self.nonlinear_species)
        n_expanded = self.n_species + n_nls * (self.n_humidity_perturbations - 1)
        return (
            max(self.n_temperature_perturbations, 1),
            n_expanded,
            self.n_frequencies,
            self.n_pressures,
        )

    # -------------------------------------------------------------------------
    # Species layout
    # -------------------------------------------------------------------------

    def nonlinear_mask(self) -> np.ndarray:
        """Boolean flag per species, True for nonlinear species."""
        mask = np.zeros(self.n_species, dtype=bool)
        mask[self.nonlinear_species] = True
        return mask

    def species_offsets(self) -> List[SpeciesSlice]:
        """
        Position of every species on the expanded species axis.

        Ordinary species take one slice, nonlinear species take one slice
        per humidity perturbation, in species order.
        """
        n_hpert = self.n_humidity_perturbations
        offsets = []
        position = 0
        for is_nonlinear in self.nonlinear_mask():
            length = n_hpert if is_nonlinear else 1
            offsets.append(SpeciesSlice(position, length))
            position += length
        return offsets

    def humidity_species_index(
        self, molecule: str = HUMIDITY_REFERENCE_MOLECULE
    ) -> Optional[int]:
        """Index of the first species of ``molecule``, or None."""
        for i, tag in enumerate(self.species):
            if species_molecule(tag) == molecule:
                return i
        return None

    # -------------------------------------------------------------------------
    # Grids
    # -------------------------------------------------------------------------

    @property
    def has_log_pressure_grid(self) -> bool:
        """True if the log-pressure cache matches the pressure grid.

        The cache is compared value by value, so in-place edits of
        ``pressure_grid`` also invalidate it.
        """
        return (
            self.log_pressure_grid is not None
            and len(self.log_pressure_grid) == self.n_pressures
            and np.array_equal(self.log_pressure_grid, np.log(self.pressure_grid))
        )

    def initialize_log_pressure_grid(self) -> None:
        """Recompute the cached log-pressure grid."""
        self.log_pressure_grid = np.log(self.pressure_grid)
        logger.debug(f"Initialized log-pressure grid with {self.n_pressures} levels")

    def get_frequency_grid(self) -> np.ndarray:
        """Read-only view of the frequency grid."""
        view = self.frequency_grid.view()
        view.flags.writeable = False
        return view

    def get_pressure_grid(self) -> np.ndarray:
        """Read-only view of the pressure grid."""
        view = self.pressure_grid.view()
        view.flags.writeable = False
        return view

    # -------------------------------------------------------------------------
    # Consistency
    # -------------------------------------------------------------------------

    def validate(self) -> None:
        """
        Check the structural consistency of the table.

        Raises
        ------
        EmptyTableError
            If the table has no species
        NonlinearSpeciesError
            If nonlinear species indices are duplicated, out of range or
            not in ascending order
        GridOrderError
            If a grid is not strictly monotonic in its required direction
        ReferenceProfileError
            If reference profiles or humidity perturbations do not match
        ShapeMismatch
            If the coefficient array has the wrong shape
        """
        n_species = self.n_species
        n_press = self.n_pressures
        nls = self.nonlinear_species

        if n_species == 0:
            raise EmptyTableError("The lookup table should have at least one species.")

        # Nonlinear species: unique, pointing at valid species, ascending
        if len(np.unique(nls)) != len(nls):
            raise NonlinearSpeciesError(
                f"The table must not have duplicate nonlinear species. "
                f"Value of nonlinear_species: {nls.tolist()}"
            )
        for i, index in enumerate(nls):
            if not 0 <= index < n_species:
                raise NonlinearSpeciesError(
                    f"nonlinear_species[{i}] = {index} is out of range "
                    f"[0, {n_species - 1}]."
                )
        if not is_strictly_increasing(nls):
            raise NonlinearSpeciesError(
                f"nonlinear_species must be in ascending species order. "
                f"Value of nonlinear_species: {nls.tolist()}"
            )

        # Grids
        if not is_strictly_increasing(self.frequency_grid):
            raise GridOrderError("frequency_grid must be strictly increasing.")
        if not is_strictly_decreasing(self.pressure_grid):
            raise GridOrderError("pressure_grid must be strictly decreasing.")
        if not is_strictly_increasing(self.temperature_perturbations):
            raise GridOrderError("temperature_perturbations must be strictly increasing.")
        if not is_strictly_increasing(self.humidity_perturbations):
            raise GridOrderError("humidity_perturbations must be strictly increasing.")

        # Reference profiles
        if self.reference_vmr.shape != (n_species, n_press):
            raise ReferenceProfileError(
                f"reference_vmr has shape {self.reference_vmr.shape}, "
                f"expected ({n_species}, {n_press})."
            )
        if self.reference_temperature.shape != (n_press,):
            raise ReferenceProfileError(
                f"reference_temperature has shape {self.reference_temperature.shape}, "
                f"expected ({n_press},)."
            )

        # humidity_perturbations is empty if and only if there are no nonlinear species
        if len(nls) == 0 and self.n_humidity_perturbations != 0:
            raise ReferenceProfileError(
                "humidity_perturbations must be empty if the table has no "
                "nonlinear species."
            )
        if len(nls) > 0 and self.n_humidity_perturbations == 0:
            raise ReferenceProfileError(
                "humidity_perturbations should contain the perturbations for "
                "the nonlinear species, but it is empty."
            )

        self.check_coefficient_shape()

    def check_coefficient_shape(self) -> None:
        """Raise ShapeMismatch unless coefficients match the grids."""
        expected = self.expected_coefficient_shape()
        if self.coefficients.shape != expected:
            if not self.has_nonlinear_species:
                case = (
                    "temperature perturbations, no nonlinear species"
                    if self.has_temperature_axis
                    else "no temperature perturbations, no nonlinear species"
                )
            else:
                case = "nonlinear species with humidity perturbations"
            raise ShapeMismatch(
                f"coefficients has shape {self.coefficients.shape}, expected "
                f"{expected} for a table with {case}."
            )

    # -------------------------------------------------------------------------
    # Copies and comparison
    # -------------------------------------------------------------------------

    def copy(self) -> "GasAbsLookup":
        """Deep copy of the table, including the log-pressure cache."""
        return GasAbsLookup(
            species=self.species,
            nonlinear_species=self.nonlinear_species.copy(),
            frequency_grid=self.frequency_grid.copy(),
            pressure_grid=self.pressure_grid.copy(),
            reference_vmr=self.reference_vmr.copy(),
            reference_temperature=self.reference_temperature.copy(),
            temperature_perturbations=self.temperature_perturbations.copy(),
            humidity_perturbations=self.humidity_perturbations.copy(),
            coefficients=self.coefficients.copy(),
            log_pressure_grid=(
                None if self.log_pressure_grid is None
                else self.log_pressure_grid.copy()
            ),
        )

    def equals(self, other: "GasAbsLookup") -> bool:
        """True if both tables hold identical species, grids and data."""
        if self.species != other.species:
            return False
        return all(
            np.array_equal(getattr(self, name), getattr(other, name))
            for name in ("nonlinear_species",) + _FLOAT_FIELDS
        )

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    def adapt(self, species, frequencies, **kwargs) -> "GasAbsLookup":
        """Adapted copy of this table. See :func:`abs_lookup.lookup.adapt.adapt`."""
        from abs_lookup.lookup.adapt import adapt

        return adapt(self, species, frequencies, **kwargs)

    def extract(
        self,
        p_order: int,
        t_order: int,
        h_order: int,
        f_index: int,
        pressure: float,
        temperature: float,
        vmrs,
        **kwargs,
    ) -> np.ndarray:
        """Interpolated absorption. See :func:`abs_lookup.lookup.extract.extract`."""
        from abs_lookup.lookup.extract import extract

        return extract(
            self, p_order, t_order, h_order, f_index,
            pressure, temperature, vmrs, **kwargs
        )
