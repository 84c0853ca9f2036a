"""
Gas absorption lookup table.

Classes
-------
GasAbsLookup
    Lookup table of absorption cross sections
AdaptReport
    Summary of an adapt operation
LookupExtractor
    Extractor bound to an adapted table and interpolation orders

Functions
---------
adapt
    Reduce a table to the species and frequencies of a calculation
extract
    Interpolate absorption coefficients for one atmospheric state
create_simple_lookup_table
    Synthetic table for tests and examples
"""

from abs_lookup.lookup.table import GasAbsLookup, SpeciesSlice, species_molecule
from abs_lookup.lookup.adapt import AdaptReport, adapt, adapt_with_report, find_species
from abs_lookup.lookup.extract import LookupExtractor, extract
from abs_lookup.lookup.synthetic import create_simple_lookup_table, simple_cross_section

__all__ = [
    "GasAbsLookup",
    "SpeciesSlice",
    "species_molecule",
    "AdaptReport",
    "adapt",
    "adapt_with_report",
    "find_species",
    "LookupExtractor",
    "extract",
    "create_simple_lookup_table",
    "simple_cross_section",
]
