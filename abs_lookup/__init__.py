"""
abs_lookup: Gas absorption lookup tables for radiative transfer.

A lookup table tabulates absorption cross sections per species as a
function of frequency, pressure, temperature offset and, for nonlinear
species, humidity. Tables are adapted once to the species and frequencies
of a calculation and then interpolated at many atmospheric states, which is
much cheaper than a line-by-line calculation at every point of a path.

Modules
-------
lookup
    The lookup table, adapt and extract operations
grids
    Grid matching and polynomial interpolation weights
config
    Interpolation orders and adapt settings (YAML/JSON)
errors
    Structural, request and range errors
utils
    Physical constants and logging setup
"""

__version__ = "0.1.0"
__author__ = "abs_lookup Contributors"

from abs_lookup.lookup import (
    AdaptReport,
    GasAbsLookup,
    LookupExtractor,
    adapt,
    adapt_with_report,
    create_simple_lookup_table,
    extract,
)
from abs_lookup.config import InterpolationConfig, LookupConfig

__all__ = [
    "__version__",
    "AdaptReport",
    "GasAbsLookup",
    "LookupExtractor",
    "adapt",
    "adapt_with_report",
    "create_simple_lookup_table",
    "extract",
    "InterpolationConfig",
    "LookupConfig",
]
