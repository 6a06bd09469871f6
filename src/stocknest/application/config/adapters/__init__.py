"""Adapter modules for converting job configuration to domain objects.

Example:
    >>> from stocknest.application.config.adapters import config_to_parts
    >>> # Or equivalently:
    >>> from stocknest.application.config import config_to_parts
"""

from stocknest.application.config.adapters.job_adapter import (
    config_to_candidates,
    config_to_estimate_config,
    config_to_linear_config,
    config_to_packing_config,
    config_to_parts,
    config_to_stock,
)

__all__ = [
    "config_to_candidates",
    "config_to_estimate_config",
    "config_to_linear_config",
    "config_to_packing_config",
    "config_to_parts",
    "config_to_stock",
]
