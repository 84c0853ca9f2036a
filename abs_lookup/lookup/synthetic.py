"""
Synthetic lookup tables.

Builds small, fully consistent tables from an analytic cross section model.
This is primarily for testing and examples; real tables come from
line-by-line calculations.
"""

from typing import Optional, Sequence

import numpy as np

from abs_lookup.lookup.table import GasAbsLookup, species_molecule

DEFAULT_PRESSURES = np.array([1e5, 5e4, 2e4, 1e4, 5e3, 2e3, 1e3, 500, 200, 100])
DEFAULT_TEMPERATURE_PERTURBATIONS = np.arange(-100.0, 101.0, 20.0)
DEFAULT_HUMIDITY_PERTURBATIONS = np.array([0.0, 0.5, 1.0, 1.5, 2.0, 5.0, 10.0])

# Reference VMRs of well mixed gases
_CONSTANT_VMR = {
    "N2": 0.7808,
    "O2": 0.2095,
    "CO2": 420e-6,
    "CH4": 1.9e-6,
    "N2O": 335e-9,
}


def reference_temperature_profile(pressures: np.ndarray) -> np.ndarray:
    """Simple reference temperature profile in K."""
    pressures = np.asarray(pressures, dtype=float)
    return np.maximum(288.15 * (pressures / 1e5) ** 0.19, 210.0)


def reference_vmr_profile(tag: str, pressures: np.ndarray) -> np.ndarray:
    """Simple reference VMR profile for a species tag."""
    pressures = np.asarray(pressures, dtype=float)
    molecule = species_molecule(tag)
    if molecule == "H2O":
        return np.maximum(1e-2 * (pressures / 1e5) ** 3, 3e-6)
    return np.full(pressures.shape, _CONSTANT_VMR.get(molecule, 1e-6))


def simple_cross_section(
    species_index: int,
    frequency,
    pressure,
    temperature,
    humidity_fraction=None,
    reference_k: float = 1e-24,
):
    """
    Analytic absorption cross section used to fill synthetic tables.

    Linear in frequency and in the humidity fraction, so linear
    interpolation along those axes reproduces it exactly.

    Parameters
    ----------
    species_index : int
        Position of the species in the table
    frequency : float or ndarray
        Frequency in Hz
    pressure : float or ndarray
        Pressure in Pa
    temperature : float or ndarray
        Temperature in K
    humidity_fraction : float or ndarray, optional
        Fractional humidity for nonlinear species; None for linear species
    reference_k : float
        Cross section scale in m^2

    Returns
    -------
    float or ndarray
        Cross section in m^2
    """
    k = (
        reference_k
        * (1 + 0.1 * species_index)
        * (np.asarray(frequency) / 1e11)
        * (np.asarray(pressure) / 1e5) ** 0.5
        * (300.0 / np.asarray(temperature)) ** 1.5
    )
    if humidity_fraction is not None:
        k = k * (1 + 0.5 * np.asarray(humidity_fraction))
    return k


def create_simple_lookup_table(
    species: Sequence[str] = ("H2O", "O2", "N2"),
    nonlinear_species: Sequence[int] = (0,),
    frequencies: Optional[Sequence[float]] = None,
    pressures: Optional[Sequence[float]] = None,
    temperature_perturbations: Optional[Sequence[float]] = None,
    humidity_perturbations: Optional[Sequence[float]] = None,
    reference_k: float = 1e-24,
    initialize: bool = False,
) -> GasAbsLookup:
    """
    Create a consistent lookup table from the analytic cross section model.

    Parameters
    ----------
    species : sequence of str
        Species tags
    nonlinear_species : sequence of int
        Ascending indices of nonlinear species
    frequencies : array_like, optional
        Frequency grid in Hz (default: 11 points from 100 to 200 GHz)
    pressures : array_like, optional
        Decreasing pressure grid in Pa (default: 1000 hPa to 1 hPa)
    temperature_perturbations : array_like, optional
        Temperature offsets in K; pass an empty sequence for no temperature
        axis (default: -100 K to +100 K in 20 K steps)
    humidity_perturbations : array_like, optional
        Fractional humidity perturbations; ignored without nonlinear species
    reference_k : float
        Cross section scale in m^2
    initialize : bool
        If True, initialize the log-pressure grid

    Returns
    -------
    GasAbsLookup
    """
    if frequencies is None:
        frequencies = np.linspace(1e11, 2e11, 11)
    if pressures is None:
        pressures = DEFAULT_PRESSURES
    if temperature_perturbations is None:
        temperature_perturbations = DEFAULT_TEMPERATURE_PERTURBATIONS
    if len(nonlinear_species) == 0:
        humidity_perturbations = []
    elif humidity_perturbations is None:
        humidity_perturbations = DEFAULT_HUMIDITY_PERTURBATIONS

    frequencies = np.asarray(frequencies, dtype=float)
    pressures = np.asarray(pressures, dtype=float)
    t_pert = np.asarray(temperature_perturbations, dtype=float)
    h_pert = np.asarray(humidity_perturbations, dtype=float)
    nonlinear = set(int(i) for i in nonlinear_species)

    t_ref = reference_temperature_profile(pressures)
    vmr_ref = np.array([reference_vmr_profile(tag, pressures) for tag in species])

    # Temperatures on the (perturbation, pressure) grid
    offsets = t_pert if len(t_pert) else np.zeros(1)
    temperatures = t_ref[np.newaxis, :] + offsets[:, np.newaxis]

    f = frequencies[np.newaxis, :, np.newaxis]
    p = pressures[np.newaxis, np.newaxis, :]
    t = temperatures[:, np.newaxis, :]

    slices = []
    for si in range(len(species)):
        if si in nonlinear:
            for h in h_pert:
                slices.append(simple_cross_section(si, f, p, t, h, reference_k))
        else:
            slices.append(simple_cross_section(si, f, p, t, None, reference_k))

    coefficients = np.stack(slices, axis=1)

    table = GasAbsLookup(
        species=species,
        nonlinear_species=sorted(nonlinear),
        frequency_grid=frequencies,
        pressure_grid=pressures,
        reference_vmr=vmr_ref,
        reference_temperature=t_ref,
        temperature_perturbations=t_pert,
        humidity_perturbations=h_pert,
        coefficients=coefficients,
    )
    if initialize:
        table.initialize_log_pressure_grid()
    return table
