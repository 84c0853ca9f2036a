"""
Adapt a lookup table to the species and frequencies of a calculation.

A generic table usually holds many more species and frequencies than a
single calculation needs. Adapting it:

1. finds every requested species in the table, verifying that it occurs
   exactly once;
2. finds every requested frequency in the table frequency grid;
3. builds a new table holding just those species and frequencies;
4. initializes the log-pressure grid of the new table.

The input table is never modified. Adapting is meant to run once per
calculation, before any extraction.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Sequence, Tuple

import numpy as np

from abs_lookup.errors import (
    AmbiguousSpecies,
    EmptyRequestError,
    GridOrderError,
    SpeciesNotFound,
)
from abs_lookup.grids.locator import find_new_grid_in_old_grid
from abs_lookup.grids.polynomial import is_strictly_increasing
from abs_lookup.lookup.table import GasAbsLookup
from abs_lookup.utils.constants import FREQUENCY_TOLERANCE

logger = logging.getLogger(__name__)

Diagnostics = Optional[Callable[[str], None]]


@dataclass
class AdaptReport:
    """Summary of an adapt operation.

    Attributes:
        species_indices: Index in the original table of every new species
        frequency_indices: Index in the original frequency grid of every
            new frequency
        nonlinear: Flag per new species, True if it is nonlinear
        original_species: Number of species in the original table
        original_frequencies: Number of frequencies in the original table
    """
    species_indices: np.ndarray
    frequency_indices: np.ndarray
    nonlinear: np.ndarray
    original_species: int
    original_frequencies: int

    @property
    def n_nonlinear(self) -> int:
        return int(np.count_nonzero(self.nonlinear))


def _report(diagnostics: Diagnostics, message: str, level: int = logging.DEBUG) -> None:
    logger.log(level, message)
    if diagnostics is not None:
        diagnostics(message)


def find_species(table: GasAbsLookup, tag: str) -> int:
    """
    Index of a species in the table.

    Raises
    ------
    SpeciesNotFound
        If the species is not in the table
    AmbiguousSpecies
        If the species occurs more than once
    """
    matches = [i for i, s in enumerate(table.species) if s == tag]
    if not matches:
        raise SpeciesNotFound(tag, table.species)
    if len(matches) > 1:
        raise AmbiguousSpecies(tag, len(matches))
    return matches[0]


def adapt_with_report(
    table: GasAbsLookup,
    species: Sequence[str],
    frequencies,
    tolerance: float = FREQUENCY_TOLERANCE,
    diagnostics: Diagnostics = None,
) -> Tuple[GasAbsLookup, AdaptReport]:
    """
    Adapt a lookup table and report what was selected.

    Parameters
    ----------
    table : GasAbsLookup
        Full lookup table; left unchanged
    species : sequence of str
        Species tags of the current calculation
    frequencies : array_like
        Strictly increasing frequency grid of the current calculation in Hz
    tolerance : float
        Frequency matching tolerance in Hz
    diagnostics : callable, optional
        Receives a message for every step, in addition to the logger

    Returns
    -------
    new_table : GasAbsLookup
        Table holding exactly the requested species and frequencies, with
        an initialized log-pressure grid
    report : AdaptReport
    """
    species = [str(s) for s in species]
    frequencies = np.asarray(frequencies, dtype=float)

    _report(
        diagnostics,
        f"Original table: {table.n_species} species, {table.n_frequencies} frequencies. "
        f"Adapt to: {len(species)} species, {len(frequencies)} frequencies.",
        logging.INFO,
    )

    # Checks on the table itself
    table.validate()

    if not table.has_nonlinear_species:
        _report(diagnostics, "Table contains no nonlinear species.")
    if not table.has_temperature_axis:
        _report(diagnostics, "Table contains no temperature perturbations.")

    # Checks on the request
    if len(species) == 0:
        raise EmptyRequestError("The list of current species should not be empty.")
    if not is_strictly_increasing(frequencies):
        raise GridOrderError("The requested frequency grid must be strictly increasing.")

    # 1. Species positions in the table
    _report(diagnostics, "Looking for species in lookup table:")
    species_indices = np.empty(len(species), dtype=np.int64)
    for i, tag in enumerate(species):
        species_indices[i] = find_species(table, tag)
        _report(diagnostics, f"  {tag}: found, index = {species_indices[i]}.")

    nonlinear = table.nonlinear_mask()[species_indices]
    for tag in np.asarray(species)[nonlinear]:
        _report(diagnostics, f"  {tag} is nonlinear.")

    # 2. Frequency positions in the table
    _report(diagnostics, "Looking for frequencies in lookup table:")
    frequency_indices = find_new_grid_in_old_grid(
        table.frequency_grid, frequencies, tolerance
    )

    # 3. Build the new table. Nonlinear species occupy n_hpert slices each,
    # so the expanded species axis is gathered through the offset table.
    offsets = table.species_offsets()
    expanded = np.concatenate(
        [np.arange(offsets[i].offset, offsets[i].stop) for i in species_indices]
    )
    coefficients = np.take(table.coefficients, expanded, axis=1)
    coefficients = np.take(coefficients, frequency_indices, axis=2)

    if nonlinear.any():
        humidity_perturbations = table.humidity_perturbations.copy()
    else:
        humidity_perturbations = np.empty(0)

    new_table = GasAbsLookup(
        species=[table.species[i] for i in species_indices],
        nonlinear_species=np.flatnonzero(nonlinear),
        frequency_grid=table.frequency_grid[frequency_indices],
        pressure_grid=table.pressure_grid.copy(),
        reference_vmr=table.reference_vmr[species_indices, :],
        reference_temperature=table.reference_temperature.copy(),
        temperature_perturbations=table.temperature_perturbations.copy(),
        humidity_perturbations=humidity_perturbations,
        coefficients=coefficients,
    )

    # 4. Initialize log_p_grid
    new_table.initialize_log_pressure_grid()

    report = AdaptReport(
        species_indices=species_indices,
        frequency_indices=frequency_indices,
        nonlinear=nonlinear,
        original_species=table.n_species,
        original_frequencies=table.n_frequencies,
    )
    _report(diagnostics, f"Adapted table: {new_table!r}", logging.INFO)
    return new_table, report


def adapt(
    table: GasAbsLookup,
    species: Sequence[str],
    frequencies,
    tolerance: float = FREQUENCY_TOLERANCE,
    diagnostics: Diagnostics = None,
) -> GasAbsLookup:
    """
    Adapt a lookup table to the current calculation.

    Returns a new table; rebind the caller's reference to it, e.g.
    ``table = adapt(table, species, f_grid)``. See :func:`adapt_with_report`.
    """
    new_table, _ = adapt_with_report(
        table, species, frequencies, tolerance=tolerance, diagnostics=diagnostics
    )
    return new_table
