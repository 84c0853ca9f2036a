"""
Lookup table configuration data structures.

Interpolation orders, the frequency matching tolerance and the humidity
reference species can be set from a dictionary, a JSON file or a YAML file.

Example YAML input:
    interpolation:
      pressure_order: 5
      temperature_order: 7
      humidity_order: 5
    adapt:
      frequency_tolerance: 1.0
    humidity_species: H2O
    log_level: INFO
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List

import yaml

from abs_lookup.utils.constants import FREQUENCY_TOLERANCE, HUMIDITY_REFERENCE_MOLECULE


@dataclass
class InterpolationConfig:
    """Interpolation orders used by the extractor.

    Attributes:
        pressure_order: Polynomial order in log-pressure
        temperature_order: Polynomial order in temperature offset
        humidity_order: Polynomial order in fractional humidity
    """
    pressure_order: int = 5
    temperature_order: int = 7
    humidity_order: int = 5


@dataclass
class AdaptConfig:
    """Settings for adapting a table.

    Attributes:
        frequency_tolerance: Frequency matching tolerance in Hz
    """
    frequency_tolerance: float = FREQUENCY_TOLERANCE


@dataclass
class LookupConfig:
    """Complete lookup table configuration."""
    interpolation: InterpolationConfig = field(default_factory=InterpolationConfig)
    adapt: AdaptConfig = field(default_factory=AdaptConfig)
    humidity_species: str = HUMIDITY_REFERENCE_MOLECULE
    log_level: str = "INFO"

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> "LookupConfig":
        """Create LookupConfig from a dictionary.

        Args:
            config_dict: Configuration dictionary; missing keys take defaults

        Returns:
            LookupConfig instance
        """
        interp_dict = config_dict.get("interpolation", {})
        interpolation = InterpolationConfig(
            pressure_order=interp_dict.get("pressure_order", 5),
            temperature_order=interp_dict.get("temperature_order", 7),
            humidity_order=interp_dict.get("humidity_order", 5),
        )

        adapt_dict = config_dict.get("adapt", {})
        adapt = AdaptConfig(
            frequency_tolerance=adapt_dict.get("frequency_tolerance", FREQUENCY_TOLERANCE),
        )

        return cls(
            interpolation=interpolation,
            adapt=adapt,
            humidity_species=config_dict.get("humidity_species", HUMIDITY_REFERENCE_MOLECULE),
            log_level=config_dict.get("log_level", "INFO"),
        )

    @classmethod
    def from_json(cls, json_path: str) -> "LookupConfig":
        """Load configuration from a JSON file."""
        with open(json_path, 'r') as f:
            config_dict = json.load(f)
        return cls.from_dict(config_dict)

    @classmethod
    def from_yaml(cls, yaml_path: str) -> "LookupConfig":
        """Load configuration from a YAML file."""
        with open(yaml_path, 'r') as f:
            config_dict = yaml.safe_load(f) or {}
        return cls.from_dict(config_dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            "interpolation": {
                "pressure_order": self.interpolation.pressure_order,
                "temperature_order": self.interpolation.temperature_order,
                "humidity_order": self.interpolation.humidity_order,
            },
            "adapt": {
                "frequency_tolerance": self.adapt.frequency_tolerance,
            },
            "humidity_species": self.humidity_species,
            "log_level": self.log_level,
        }

    def to_json(self, json_path: str, indent: int = 2) -> None:
        """Save configuration to JSON file."""
        with open(json_path, 'w') as f:
            json.dump(self.to_dict(), f, indent=indent)

    def to_yaml(self, yaml_path: str) -> None:
        """Save configuration to YAML file."""
        with open(yaml_path, 'w') as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)

    def validate(self) -> List[str]:
        """Validate configuration parameters.

        Returns:
            List of validation error messages (empty if valid)
        """
        errors = []

        for name in ("pressure_order", "temperature_order", "humidity_order"):
            value = getattr(self.interpolation, name)
            if not isinstance(value, int) or value < 0:
                errors.append(f"{name} must be a non-negative integer")

        if self.adapt.frequency_tolerance <= 0:
            errors.append("frequency_tolerance must be positive")

        if not self.humidity_species:
            errors.append("humidity_species must not be empty")

        if not isinstance(logging.getLevelName(str(self.log_level).upper()), int):
            errors.append(f"Invalid log level: {self.log_level}")

        return errors
