"""Configuration module for the legal rules engine."""

from .legal_parameters_loader import (
    LegalParameterLoader,
    clear_parameter_cache,
    get_legal_parameter,
    get_parameter_loader,
)
from .settings import EngineSettings, configure_logging, get_settings

__all__ = [
    "LegalParameterLoader",
    "clear_parameter_cache",
    "get_legal_parameter",
    "get_parameter_loader",
    "EngineSettings",
    "configure_logging",
    "get_settings",
]
