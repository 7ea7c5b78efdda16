"""
Statutory Parameter Loader.

Loads yearly-adjusted statutory amounts (CSSA combined income cap,
maintenance income cap) from YAML files, enabling:
- Annual updates without code changes
- Environment-specific overrides
- Year-over-year comparison when a cap is adjusted
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from rules.exceptions import NotFoundError

logger = logging.getLogger(__name__)

# Default parameter directory
PARAMETERS_DIR = Path(__file__).parent / "legal_parameters"

REQUIRED_PARAMETERS = (
    'cssa_income_cap',
    'maintenance_income_cap',
)


@dataclass
class ParameterMetadata:
    """Metadata about a parameter file."""
    version: str
    parameter_year: int
    effective_date: str
    source: str
    statutory_references: List[str] = field(default_factory=list)
    notes: str = ""


class LegalParameterLoader:
    """
    Loads and caches statutory parameters from YAML files.

    Features:
    - File discovery by year (parameters_<year>.yaml)
    - Environment variable overrides (LEGAL_<year>_<PARAM>)
    - Required-parameter check
    """

    def __init__(self, config_dir: Optional[Path] = None):
        """
        Initialize the loader.

        Args:
            config_dir: Directory containing YAML parameter files.
                       Defaults to src/config/legal_parameters/
        """
        self.config_dir = Path(config_dir) if config_dir else PARAMETERS_DIR
        self._configs: Dict[int, Dict[str, Any]] = {}
        self._metadata: Dict[int, ParameterMetadata] = {}

    def load_config(self, year: int) -> Dict[str, Any]:
        """
        Load parameters for a specific year.

        Args:
            year: The parameter year to load (e.g., 2024)

        Returns:
            Dictionary of parameters
        """
        if year in self._configs:
            return self._configs[year]

        config = self._load_from_file(year)
        config = self._apply_env_overrides(config, year)
        self._validate_config(config, year)

        self._configs[year] = config
        return config

    def _load_from_file(self, year: int) -> Dict[str, Any]:
        config: Dict[str, Any] = {}

        year_file = self.config_dir / f"parameters_{year}.yaml"
        if year_file.exists():
            logger.info(f"Loading statutory parameters from {year_file}")
            with open(year_file, 'r', encoding='utf-8') as f:
                year_config = yaml.safe_load(f)
            if year_config:
                if '_metadata' in year_config:
                    self._metadata[year] = ParameterMetadata(**year_config.pop('_metadata'))
                config.update(year_config)
        else:
            logger.warning(f"No parameter file found for {year} in {self.config_dir}")

        return config

    def _apply_env_overrides(self, config: Dict[str, Any], year: int) -> Dict[str, Any]:
        """Apply environment variable overrides to the parameters."""
        # e.g. LEGAL_2024_CSSA_INCOME_CAP=183000
        prefix = f"LEGAL_{year}_"

        for key, value in os.environ.items():
            if key.startswith(prefix):
                param_name = key[len(prefix):].lower()
                try:
                    if '.' in value:
                        config[param_name] = float(value)
                    elif value.isdigit():
                        config[param_name] = int(value)
                    else:
                        config[param_name] = value
                    logger.info(f"Applied env override: {param_name}={value}")
                except ValueError:
                    logger.warning(f"Could not parse env override: {key}={value}")

        return config

    def _validate_config(self, config: Dict[str, Any], year: int) -> None:
        missing = [p for p in REQUIRED_PARAMETERS if p not in config]
        if missing:
            logger.warning(f"Missing required parameters for {year}: {missing}")

    def get_parameter(self, param_name: str, year: int, default: Any = None) -> Any:
        """Get a parameter value, or default when absent."""
        return self.load_config(year).get(param_name, default)

    def require_parameter(self, param_name: str, year: int) -> Any:
        """
        Get a parameter value that a calculation cannot do without.

        Raises:
            NotFoundError: If the parameter is absent for that year
        """
        config = self.load_config(year)
        if param_name not in config:
            raise NotFoundError("parameter", f"{param_name} ({year})")
        return config[param_name]

    def get_metadata(self, year: int) -> Optional[ParameterMetadata]:
        self.load_config(year)  # Ensure loaded
        return self._metadata.get(year)

    def compare_years(self, year1: int, year2: int) -> Dict[str, Dict[str, Any]]:
        """
        Compare parameters between two years.

        Returns:
            Dictionary with 'added', 'removed', 'changed' keys
        """
        config1 = self.load_config(year1)
        config2 = self.load_config(year2)

        keys1 = set(config1.keys())
        keys2 = set(config2.keys())

        return {
            'added': {k: config2[k] for k in keys2 - keys1},
            'removed': {k: config1[k] for k in keys1 - keys2},
            'changed': {
                k: {'old': config1[k], 'new': config2[k]}
                for k in keys1 & keys2
                if config1[k] != config2[k]
            }
        }


# Global singleton
_parameter_loader: Optional[LegalParameterLoader] = None


def get_parameter_loader() -> LegalParameterLoader:
    """Get the global loader, honouring settings.parameters_dir."""
    global _parameter_loader
    if _parameter_loader is None:
        from .settings import get_settings

        _parameter_loader = LegalParameterLoader(get_settings().parameters_dir)
    return _parameter_loader


@lru_cache(maxsize=32)
def get_legal_parameter(param_name: str, year: int) -> Any:
    """
    Convenience accessor for a required statutory parameter.

    Example:
        >>> get_legal_parameter('cssa_income_cap', 2024)
        183000
    """
    return get_parameter_loader().require_parameter(param_name, year)


def clear_parameter_cache() -> None:
    """Clear the parameter cache (useful for testing)."""
    get_legal_parameter.cache_clear()
    global _parameter_loader
    _parameter_loader = None
