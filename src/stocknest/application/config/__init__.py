"""Job configuration schema and loading for stocknest.

This package provides JSON-based job loading and validation: Pydantic
models for schema validation, a loader with comprehensive error handling,
adapters to engine types, and pre-nesting checks.

Public API:
    - NestingJobConfiguration: Root configuration model
    - PartConfig, SheetStockConfig, BarStockConfig: Section models
    - PackingConfigSchema, LinearPackingConfigSchema, EstimateConfigSchema:
      Engine settings sections
    - load_config: Load a job from a JSON file
    - load_config_from_dict: Load a job from a dictionary
    - ConfigError: Exception for job file errors
    - ValidationResult, ValidationError, ValidationWarning: Check results
    - validate_config: Perform pre-nesting validation
    - config_to_*: Convert job sections to engine objects

Example:
    >>> from pathlib import Path
    >>> from stocknest.application.config import load_config, ConfigError
    >>>
    >>> try:
    ...     job = load_config(Path("doors.json"))
    ...     print(f"{len(job.parts)} part lines")
    ... except ConfigError as e:
    ...     print(f"Error: {e}")
"""

from stocknest.application.config.adapters import (
    config_to_candidates,
    config_to_estimate_config,
    config_to_linear_config,
    config_to_packing_config,
    config_to_parts,
    config_to_stock,
)
from stocknest.application.config.loader import (
    ConfigError,
    load_config,
    load_config_from_dict,
)
from stocknest.application.config.schemas import (
    SUPPORTED_VERSIONS,
    BarStockConfig,
    EstimateConfigSchema,
    LinearPackingConfigSchema,
    NestingJobConfiguration,
    PackingConfigSchema,
    PartConfig,
    SheetStockConfig,
)
from stocknest.application.config.validator import (
    ValidationError,
    ValidationResult,
    ValidationWarning,
    validate_config,
)

__all__ = [
    "BarStockConfig",
    "ConfigError",
    "EstimateConfigSchema",
    "LinearPackingConfigSchema",
    "NestingJobConfiguration",
    "PackingConfigSchema",
    "PartConfig",
    "SUPPORTED_VERSIONS",
    "SheetStockConfig",
    "ValidationError",
    "ValidationResult",
    "ValidationWarning",
    "config_to_candidates",
    "config_to_estimate_config",
    "config_to_linear_config",
    "config_to_packing_config",
    "config_to_parts",
    "config_to_stock",
    "load_config",
    "load_config_from_dict",
    "validate_config",
]
