"""
Configuration for lookup table adaptation and extraction.
"""

from abs_lookup.config.settings import AdaptConfig, InterpolationConfig, LookupConfig

__all__ = [
    "AdaptConfig",
    "InterpolationConfig",
    "LookupConfig",
]
