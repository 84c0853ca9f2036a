"""
Utility functions and physical constants.

Constants
---------
BOLTZMANN_CONSTANT : float
    Boltzmann constant (J/K)
FREQUENCY_TOLERANCE : float
    Tolerance used to match frequency grids (Hz)
HUMIDITY_REFERENCE_MOLECULE : str
    Molecule used as humidity reference for nonlinear species

Functions
---------
number_density
    Ideal gas number density
setup_logging
    Configure logging for scripts
"""

from abs_lookup.utils.constants import (
    BOLTZMANN_CONSTANT,
    AVOGADRO_NUMBER,
    STANDARD_PRESSURE,
    STANDARD_TEMPERATURE,
    LOSCHMIDT_CONSTANT,
    FREQUENCY_TOLERANCE,
    HUMIDITY_REFERENCE_MOLECULE,
    number_density,
)
from abs_lookup.utils.log import setup_logging

__all__ = [
    "BOLTZMANN_CONSTANT",
    "AVOGADRO_NUMBER",
    "STANDARD_PRESSURE",
    "STANDARD_TEMPERATURE",
    "LOSCHMIDT_CONSTANT",
    "FREQUENCY_TOLERANCE",
    "HUMIDITY_REFERENCE_MOLECULE",
    "number_density",
    "setup_logging",
]
