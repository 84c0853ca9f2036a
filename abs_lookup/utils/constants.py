"""
Physical constants used by the lookup table.

All constants are in SI units unless otherwise specified.
"""

# Fundamental constants
BOLTZMANN_CONSTANT = 1.380649e-23  # J/K
AVOGADRO_NUMBER = 6.02214076e23  # mol^-1

# Reference conditions
STANDARD_PRESSURE = 101325.0  # Pa
STANDARD_TEMPERATURE = 273.15  # K
LOSCHMIDT_CONSTANT = 2.6867811e25  # molecules/m^3 at 273.15 K, 1 atm

# Frequency matching tolerance used when adapting a table (Hz)
FREQUENCY_TOLERANCE = 1.0

# Molecule conventionally used as the humidity reference for nonlinear species
HUMIDITY_REFERENCE_MOLECULE = "H2O"


def number_density(pressure: float, temperature: float) -> float:
    """
    Total number density of an ideal gas.

    n = p / (k_B T)

    Parameters
    ----------
    pressure : float
        Pressure in Pa
    temperature : float
        Temperature in K

    Returns
    -------
    float
        Number density in molecules/m^3
    """
    return pressure / (BOLTZMANN_CONSTANT * temperature)
