"""
Extract absorption coefficients from an adapted lookup table.

Interpolation is done in log(p), which gives slightly lower interpolation
errors than interpolating in p directly. For each pressure level of the
pressure stencil the table is first interpolated in temperature and, for
nonlinear species, in humidity; the per-level results are then combined
with the pressure weights and scaled by the number density of each species.

Temperature offsets and humidity fractions are taken relative to the exact
reference values at each stencil level. Interpolating the reference
profiles to the target pressure instead can produce negative effective
references with higher order pressure interpolation, because reference
profiles are often irregular (the H2O profile frequently jumps near the
surface).

All input values must lie within the range covered by the table plus half
a grid bin at each end. The extractor never modifies the table and keeps
no state between calls, so it can be called from many threads at once.
"""

import logging
import math
from typing import Callable, List, Optional

import numpy as np

from abs_lookup.config.settings import InterpolationConfig
from abs_lookup.errors import (
    DimensionMismatch,
    HumidityOutOfRange,
    IndexOutOfRange,
    InsufficientGridForOrder,
    LookupRequestError,
    NoHumidityReferenceSpecies,
    PressureOutOfRange,
    TableNotAdapted,
    TemperatureOutOfRange,
)
from abs_lookup.grids.polynomial import (
    extended_range,
    gridpos_poly,
    interpolation_weights_2d,
)
from abs_lookup.lookup.kernels import weighted_sum_1d, weighted_sum_2d
from abs_lookup.lookup.table import GasAbsLookup, SpeciesSlice
from abs_lookup.utils.constants import HUMIDITY_REFERENCE_MOLECULE, number_density

logger = logging.getLogger(__name__)


def _check_orders(table: GasAbsLookup, p_order: int, t_order: int, h_order: int) -> None:
    if min(p_order, t_order, h_order) < 0:
        raise LookupRequestError(
            f"Interpolation orders must be non-negative, got pressure={p_order}, "
            f"temperature={t_order}, humidity={h_order}."
        )

    if table.n_pressures < p_order + 1:
        raise InsufficientGridForOrder("pressure", table.n_pressures, p_order)

    n_hpert = table.n_humidity_perturbations
    if n_hpert != 0 and n_hpert < h_order + 1:
        raise InsufficientGridForOrder("humidity perturbation", n_hpert, h_order)

    n_tpert = table.n_temperature_perturbations
    if n_tpert != 0 and n_tpert < t_order + 1:
        raise InsufficientGridForOrder("temperature perturbation", n_tpert, t_order)




def _humidity_reference_index(table: GasAbsLookup, humidity_species: str) -> int:
    """Index of the humidity reference species, -1 without nonlinear species."""
    if not table.has_nonlinear_species:
        return -1
    found = table.humidity_species_index(humidity_species)
    if found is None:
        raise NoHumidityReferenceSpecies(
            f"With nonlinear species, at least one species must be a "
            f"{humidity_species} species."
        )
    return found


def _check_log_pressure_grid(table: GasAbsLookup) -> None:
    if not table.has_log_pressure_grid:
        raise TableNotAdapted(
            "The lookup table internal log-pressure grid is not initialized. "
            "Adapt the table before extracting."
        )


def extract(
    table: GasAbsLookup,
    p_order: int,
    t_order: int,
    h_order: int,
    f_index: int,
    pressure: float,
    temperature: float,
    vmrs,
    humidity_species: str = HUMIDITY_REFERENCE_MOLECULE,
    diagnostics: Optional[Callable[[str], None]] = None,
) -> np.ndarray:
    """
    Extract absorption coefficients for one atmospheric state.

    Parameters
    ----------
    table : GasAbsLookup
        Adapted lookup table; not modified
    p_order, t_order, h_order : int
        Interpolation orders for pressure, temperature and humidity
    f_index : int
        Frequency index to extract. Negative means all frequencies.
    pressure : float
        Pressure in Pa
    temperature : float
        Temperature in K
    vmrs : array_like
        Volume mixing ratio of every table species, shape (n_species,)
    humidity_species : str
        Molecule used as humidity reference for nonlinear species
    diagnostics : callable, optional
        Receives a short description of the interpolation stencils

    Returns
    -------
    ndarray
        Absorption coefficients in 1/m, shape (n_freq, n_species) if
        ``f_index < 0``, else (1, n_species)
    """
    # Checks on the table
    humidity_index = _humidity_reference_index(table, humidity_species)
    table.check_coefficient_shape()
    _check_log_pressure_grid(table)
    _check_orders(table, p_order, t_order, h_order)

    return _interpolate(
        table, p_order, t_order, h_order, f_index,
        pressure, temperature, vmrs,
        humidity_index, table.nonlinear_mask(), table.species_offsets(),
        diagnostics,
    )


def _interpolate(
    table: GasAbsLookup,
    p_order: int,
    t_order: int,
    h_order: int,
    f_index: int,
    pressure: float,
    temperature: float,
    vmrs,
    humidity_index: int,
    nonlinear: np.ndarray,
    offsets: List[SpeciesSlice],
    diagnostics: Optional[Callable[[str], None]] = None,
) -> np.ndarray:
    """Input checks and interpolation for a table that passed the table checks."""
    n_species = table.n_species
    n_freq = table.n_frequencies
    n_nls = len(table.nonlinear_species)

    # Checks on the input
    vmrs = np.asarray(vmrs, dtype=float).reshape(-1)
    if len(vmrs) != n_species:
        raise DimensionMismatch(
            f"Number of species in lookup table ({n_species}) does not match "
            f"the number of VMRs ({len(vmrs)}). Has the table been adapted?"
        )

    if f_index < 0:
        f_range = slice(0, n_freq)
        f_extent = n_freq
    else:
        if f_index >= n_freq:
            raise IndexOutOfRange(
                f"Frequency index {f_index} is too high, the largest allowed "
                f"value is {n_freq - 1}."
            )
        f_range = slice(f_index, f_index + 1)
        f_extent = 1

    # Pressure position. The range check is done on the linear grid, and
    # written so that NaN fails it.
    p_grid = table.pressure_grid
    p_min, p_max = extended_range(p_grid)
    if not p_min <= pressure <= p_max:
        raise PressureOutOfRange(
            pressure, max(p_min, 0.0), p_max,
            f"The pressure grid range in the table is {p_grid[-1]:g} to {p_grid[0]:g}.",
        )
    if pressure <= 0:
        raise PressureOutOfRange(
            pressure, max(p_min, 0.0), p_max, "Pressure must be positive."
        )

    pgp = gridpos_poly(table.log_pressure_grid, math.log(pressure), p_order, "pressure")

    do_t = table.has_temperature_axis
    if do_t:
        t_pert = table.temperature_perturbations
        t_min, t_max = extended_range(t_pert)
    if n_nls > 0:
        h_pert = table.humidity_perturbations
        h_min, h_max = extended_range(h_pert)

    coefficients = table.coefficients

    # Result for each level of the pressure stencil
    pre_interpolated = np.zeros((p_order + 1, f_extent, n_species))

    for pi, level in enumerate(pgp.indices):
        if do_t:
            t_offset = temperature - table.reference_temperature[level]
            if not t_min <= t_offset <= t_max:
                raise TemperatureOutOfRange(
                    t_offset, t_min, t_max,
                    f"Your temperature was {temperature:g} K at a pressure of "
                    f"{pressure:g} Pa.",
                )
            tgp = gridpos_poly(t_pert, t_offset, t_order, "temperature perturbation")

        if n_nls > 0:
            vmr_ref = table.reference_vmr[humidity_index, level]
            if vmr_ref > 0:
                vmr_frac = vmrs[humidity_index] / vmr_ref
            else:
                vmr_frac = math.inf
            if not h_min <= vmr_frac <= h_max:
                raise HumidityOutOfRange(
                    vmr_frac, h_min, h_max,
                    f"VMR of species {humidity_index} was {vmrs[humidity_index]:g} "
                    f"at a pressure of {pressure:g} Pa, reference VMR {vmr_ref:g}.",
                )
            vgp = gridpos_poly(h_pert, vmr_frac, h_order, "humidity perturbation")
            if do_t:
                tv_weights = interpolation_weights_2d(tgp, vgp)

        level_coefficients = coefficients[:, :, f_range, level]

        for si, block in enumerate(offsets):
            if do_t and nonlinear[si]:
                res = weighted_sum_2d(
                    tv_weights, tgp.indices, vgp.indices,
                    level_coefficients[:, block.offset:block.stop, :],
                )
            elif do_t:
                res = weighted_sum_1d(
                    tgp.weights, tgp.indices, level_coefficients[:, block.offset, :]
                )
            elif nonlinear[si]:
                res = weighted_sum_1d(
                    vgp.weights, vgp.indices,
                    level_coefficients[0, block.offset:block.stop, :],
                )
            else:
                res = level_coefficients[0, block.offset, :]

            pre_interpolated[pi, :, si] = res

    if diagnostics is not None:
        diagnostics(
            f"p={pressure:g} Pa, T={temperature:g} K: pressure levels "
            f"{pgp.indices.tolist()}, weights {pgp.weights.tolist()}"
        )

    # Combine the pressure levels
    result = np.tensordot(pgp.weights, pre_interpolated, axes=1)

    # Scale with the number density of every species
    result *= number_density(pressure, temperature) * vmrs[np.newaxis, :]
    return result


class LookupExtractor:
    """Extractor bound to one adapted table and fixed interpolation orders.

    The table checks and the species layout are computed once, when the
    extractor is created. Each call only checks its inputs and that the
    log-pressure grid still matches the pressure grid.

    Example:
        >>> table = adapt(full_table, ["H2O", "O2"], f_grid)
        >>> extractor = LookupExtractor(table, InterpolationConfig(5, 7, 5))
        >>> abs_coef = extractor(pressure=5e4, temperature=250.0, vmrs=[1e-3, 0.21])
    """

    def __init__(
        self,
        table: GasAbsLookup,
        interpolation: Optional[InterpolationConfig] = None,
        humidity_species: str = HUMIDITY_REFERENCE_MOLECULE,
    ):
        """Bind the extractor to a table.

        Args:
            table: Adapted lookup table
            interpolation: Interpolation orders, defaults to InterpolationConfig()
            humidity_species: Humidity reference molecule

        Raises:
            TableNotAdapted: If the table has no initialized log-pressure grid
            NoHumidityReferenceSpecies: If nonlinear species lack a reference
            ShapeMismatch: If the coefficients do not match the grids
            InsufficientGridForOrder: If the table is too small for the orders
        """
        _check_log_pressure_grid(table)
        self.table = table
        self.interpolation = interpolation or InterpolationConfig()
        self.humidity_species = humidity_species

        self._humidity_index = _humidity_reference_index(table, humidity_species)
        table.check_coefficient_shape()
        _check_orders(
            table,
            self.interpolation.pressure_order,
            self.interpolation.temperature_order,
            self.interpolation.humidity_order,
        )
        self._nonlinear = table.nonlinear_mask()
        self._offsets = table.species_offsets()
        logger.info(f"Extractor ready for {table!r} with orders {self.interpolation}")

    def __call__(self, pressure: float, temperature: float, vmrs, f_index: int = -1) -> np.ndarray:
        _check_log_pressure_grid(self.table)
        return _interpolate(
            self.table,
            self.interpolation.pressure_order,
            self.interpolation.temperature_order,
            self.interpolation.humidity_order,
            f_index,
            pressure,
            temperature,
            vmrs,
            self._humidity_index,
            self._nonlinear,
            self._offsets,
        )
