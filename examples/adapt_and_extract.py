#!/usr/bin/env python3
"""
Adapt and Extract: Absorption Along an Atmospheric Profile
==========================================================

This example builds a synthetic generic lookup table, adapts it to the
species and frequencies of a calculation, and extracts absorption
coefficients along a simple atmospheric profile.

Steps demonstrated:
1. Creating a generic lookup table
2. Adapting it to a species list and frequency grid
3. Extracting absorption coefficients level by level
4. Loading interpolation orders from a YAML configuration

Usage:
    python examples/adapt_and_extract.py [--config lookup.yaml] [--verbose]
"""

import argparse
import sys

import numpy as np

from abs_lookup import LookupConfig, LookupExtractor, adapt_with_report, create_simple_lookup_table
from abs_lookup.config import InterpolationConfig
from abs_lookup.lookup.synthetic import reference_temperature_profile, reference_vmr_profile
from abs_lookup.utils import setup_logging


def main(args):
    print("=" * 70)
    print("Gas Absorption Lookup Table: Adapt and Extract")
    print("=" * 70)
    print()

    if args.config:
        config = LookupConfig.from_yaml(args.config)
        problems = config.validate()
        if problems:
            for problem in problems:
                print(f"   Config error: {problem}")
            return 1
    else:
        config = LookupConfig(interpolation=InterpolationConfig(3, 3, 1))

    setup_logging(config.log_level, verbose=args.verbose)

    # ---------------------------------------------------------------------
    # 1. Generic table
    # ---------------------------------------------------------------------
    print("1. Generic Lookup Table")
    print("-" * 40)

    generic = create_simple_lookup_table(
        species=("H2O", "O2", "N2", "O3", "CO2"),
        nonlinear_species=(0,),
        frequencies=np.linspace(1e11, 3e11, 41),
        pressures=np.geomspace(1.1e5, 10.0, 30),
    )
    print(f"   {generic!r}")
    print()

    # ---------------------------------------------------------------------
    # 2. Adapt to the calculation
    # ---------------------------------------------------------------------
    print("2. Adapting to Species and Frequencies")
    print("-" * 40)

    f_grid = generic.frequency_grid[::4]
    table, report = adapt_with_report(
        generic,
        ["O2", "H2O", "CO2"],
        f_grid,
        tolerance=config.adapt.frequency_tolerance,
    )
    print(f"   Species indices in generic table: {list(report.species_indices)}")
    print(f"   Nonlinear species kept: {report.n_nonlinear}")
    print(f"   Adapted: {table!r}")
    print()

    # ---------------------------------------------------------------------
    # 3. Extract along a profile
    # ---------------------------------------------------------------------
    print("3. Extraction Along a Profile")
    print("-" * 40)

    extractor = LookupExtractor(table, config.interpolation, config.humidity_species)

    pressures = np.geomspace(9e4, 100.0, 12)
    temperatures = reference_temperature_profile(pressures) + 3.0
    h2o = reference_vmr_profile("H2O", pressures)

    print(f"   {'p [Pa]':>10} {'T [K]':>8} {'O2 [1/m]':>12} {'H2O [1/m]':>12} {'CO2 [1/m]':>12}")
    for p, t, w in zip(pressures, temperatures, h2o):
        abs_coef = extractor(p, t, [0.2095, w, 420e-6], f_index=-1)
        mean_coef = abs_coef.mean(axis=0)
        print(f"   {p:10.1f} {t:8.2f} {mean_coef[0]:12.4e} {mean_coef[1]:12.4e} {mean_coef[2]:12.4e}")

    print()
    print("Done.")
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description='Adapt and extract a gas absorption lookup table')
    parser.add_argument('--config', default=None, help='YAML configuration file')
    parser.add_argument('--verbose', action='store_true', help='Enable debug logging')
    args = parser.parse_args()

    sys.exit(main(args))
