"""Configuration schema models for nesting jobs.

The schemas are organized into the following modules:
- base.py: Version constants and shared enums
- job_schema.py: Parts, stock and engine settings sections
- root.py: Root configuration model
"""

from stocknest.application.config.schemas.base import (
    SUPPORTED_VERSIONS as SUPPORTED_VERSIONS,
    MaterialCategoryConfig as MaterialCategoryConfig,
)
from stocknest.application.config.schemas.job_schema import (
    BarStockConfig as BarStockConfig,
    EstimateConfigSchema as EstimateConfigSchema,
    LinearPackingConfigSchema as LinearPackingConfigSchema,
    PackingConfigSchema as PackingConfigSchema,
    PartConfig as PartConfig,
    SheetStockConfig as SheetStockConfig,
)
from stocknest.application.config.schemas.root import (
    NestingJobConfiguration as NestingJobConfiguration,
)
