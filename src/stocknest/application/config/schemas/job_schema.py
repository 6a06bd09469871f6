"""Section models of a nesting job: parts, stock and engine settings."""

from pydantic import BaseModel, ConfigDict, Field

__all__ = [
    "BarStockConfig",
    "EstimateConfigSchema",
    "LinearPackingConfigSchema",
    "PackingConfigSchema",
    "PartConfig",
    "SheetStockConfig",
]


class PartConfig(BaseModel):
    """One bill-of-materials line.

    Sheet parts carry width and height, linear parts carry length. Which
    dimensions are required depends on the job category and is checked
    by the compatibility validator, not here.

    Attributes:
        id: Part identifier, unique within the job.
        description: Human-readable name.
        quantity: Units required (0 allowed, yields no pieces).
        width: Width in mm.
        height: Height in mm.
        length: Length in mm.
        weight: Unit weight in kg.
    """

    model_config = ConfigDict(extra="forbid")

    id: str = Field(..., min_length=1)
    description: str = ""
    quantity: int = Field(default=1, ge=0)
    width: float | None = Field(default=None, gt=0)
    height: float | None = Field(default=None, gt=0)
    length: float | None = Field(default=None, gt=0)
    weight: float | None = Field(default=None, ge=0)


class SheetStockConfig(BaseModel):
    """A sheet size to nest onto."""

    model_config = ConfigDict(extra="forbid")

    width: float = Field(..., gt=0, description="Sheet width in mm")
    height: float = Field(..., gt=0, description="Sheet height in mm")
    name: str = ""
    unit_cost: float = Field(default=0.0, ge=0, description="Cost per sheet")


class BarStockConfig(BaseModel):
    """A bar length to cut linear parts from."""

    model_config = ConfigDict(extra="forbid")

    length: float = Field(..., gt=0, description="Bar length in mm")
    name: str = ""
    unit_cost: float = Field(default=0.0, ge=0, description="Cost per bar")


class PackingConfigSchema(BaseModel):
    """Sheet nesting settings.

    Attributes:
        kerf: Cutting width left between adjacent pieces in mm.
        edge_margin: Unusable border on every sheet side in mm.
        sheet_cap: Maximum sheets one allocation may open.
    """

    model_config = ConfigDict(extra="forbid")

    kerf: float = Field(default=5.0, ge=0, le=50, description="Kerf in mm")
    edge_margin: float = Field(
        default=5.0, ge=0, le=200, description="Edge margin in mm"
    )
    sheet_cap: int = Field(
        default=50, ge=1, le=500, description="Maximum sheets per allocation"
    )


class LinearPackingConfigSchema(BaseModel):
    """Linear (bar) packing settings."""

    model_config = ConfigDict(extra="forbid")

    cut_spacing: float = Field(default=3.0, ge=0, le=50)
    edge_loss: float = Field(default=10.0, ge=0, le=500)
    cutting_efficiency: float = Field(
        default=85.0, gt=0, le=100, description="Cutting efficiency in percent"
    )
    cost_per_cut: float = Field(default=3.0, ge=0)


class EstimateConfigSchema(BaseModel):
    """Arithmetic estimate settings."""

    model_config = ConfigDict(extra="forbid")

    cut_spacing: float = Field(default=3.0, ge=0, le=50)
    edge_loss: float = Field(default=10.0, ge=0, le=500)
    cutting_efficiency: float = Field(default=85.0, gt=0, le=100)
    cutting_cost_per_meter: float = Field(default=2.5, ge=0)
    cost_per_cut: float = Field(default=3.0, ge=0)
