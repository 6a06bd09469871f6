"""Job adapter functions.

This module converts the Pydantic sections of a NestingJobConfiguration
into the part requests, stock and frozen engine configs the nesting
service works with.
"""

from stocknest.application.config.schemas import (
    BarStockConfig,
    EstimateConfigSchema,
    LinearPackingConfigSchema,
    NestingJobConfiguration,
    PackingConfigSchema,
    SheetStockConfig,
)
from stocknest.domain.services import EstimateConfig
from stocknest.domain.value_objects import (
    STANDARD_SHEETS,
    PartRequest,
    StockBar,
    StockSheet,
)
from stocknest.infrastructure.bin_packing import PackingConfig
from stocknest.infrastructure.linear_packing import LinearPackingConfig


def config_to_parts(config: NestingJobConfiguration) -> list[PartRequest]:
    """Convert the job's part lines to part requests, preserving order."""
    return [
        PartRequest(
            id=part.id,
            description=part.description or part.id,
            quantity=part.quantity,
            width=part.width,
            height=part.height,
            length=part.length,
            weight=part.weight,
        )
        for part in config.parts
    ]


def _to_sheet(sheet: SheetStockConfig) -> StockSheet:
    return StockSheet(
        width=sheet.width,
        height=sheet.height,
        name=sheet.name,
        unit_cost=sheet.unit_cost,
    )


def _to_bar(bar: BarStockConfig) -> StockBar:
    return StockBar(length=bar.length, name=bar.name, unit_cost=bar.unit_cost)


def config_to_stock(config: NestingJobConfiguration) -> StockSheet | StockBar:
    """Return the job's stock: its sheet for sheet jobs, else its bar.

    Raises:
        ValueError: If the section matching the category is missing.
    """
    if config.category.is_linear:
        if config.bar is None:
            raise ValueError(f"Job category '{config.category.value}' has no bar")
        return _to_bar(config.bar)
    if config.sheet is None:
        raise ValueError("Sheet job has no sheet")
    return _to_sheet(config.sheet)


def config_to_candidates(config: NestingJobConfiguration) -> tuple[StockSheet, ...]:
    """Candidate sheets to compare; the standard sizes when none are listed."""
    if not config.candidates:
        return STANDARD_SHEETS
    return tuple(_to_sheet(sheet) for sheet in config.candidates)


def config_to_packing_config(config: PackingConfigSchema | None) -> PackingConfig:
    """Convert the packing section to a PackingConfig (defaults if None)."""
    if config is None:
        return PackingConfig()
    return PackingConfig(
        kerf=config.kerf,
        edge_margin=config.edge_margin,
        sheet_cap=config.sheet_cap,
    )


def config_to_linear_config(
    config: LinearPackingConfigSchema | None,
) -> LinearPackingConfig:
    """Convert the linear section to a LinearPackingConfig (defaults if None)."""
    if config is None:
        return LinearPackingConfig()
    return LinearPackingConfig(
        cut_spacing=config.cut_spacing,
        edge_loss=config.edge_loss,
        cutting_efficiency=config.cutting_efficiency,
        cost_per_cut=config.cost_per_cut,
    )


def config_to_estimate_config(config: EstimateConfigSchema | None) -> EstimateConfig:
    """Convert the estimate section to an EstimateConfig (defaults if None)."""
    if config is None:
        return EstimateConfig()
    return EstimateConfig(
        cut_spacing=config.cut_spacing,
        edge_loss=config.edge_loss,
        cutting_efficiency=config.cutting_efficiency,
        cutting_cost_per_meter=config.cutting_cost_per_meter,
        cost_per_cut=config.cost_per_cut,
    )
