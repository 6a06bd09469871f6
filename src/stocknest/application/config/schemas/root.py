"""Root configuration schema.

This module contains the NestingJobConfiguration model, the top-level
structure of a nesting job file.
"""

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

from stocknest.application.config.schemas.base import (
    SUPPORTED_VERSIONS,
    MaterialCategoryConfig,
)
from stocknest.application.config.schemas.job_schema import (
    BarStockConfig,
    EstimateConfigSchema,
    LinearPackingConfigSchema,
    PackingConfigSchema,
    PartConfig,
    SheetStockConfig,
)


class NestingJobConfiguration(BaseModel):
    """Root configuration model for a nesting job.

    A sheet job names the ``sheet`` to nest onto and may list
    ``candidates`` for comparison; a tube, profile or bar job names the
    ``bar`` to cut from.

    Attributes:
        schema_version: Version string in format "major.minor" (e.g., "1.0")
        name: Optional job name shown in reports
        category: Material category of every part in the job
        parts: Bill-of-materials lines
        sheet: Sheet stock (sheet jobs)
        bar: Bar stock (linear jobs)
        candidates: Sheet sizes to compare (sheet jobs, optional)
        packing: Sheet nesting settings
        linear: Linear packing settings
        estimate: Arithmetic estimate settings

    Example:
        >>> config = NestingJobConfiguration(
        ...     schema_version="1.0",
        ...     parts=[PartConfig(id="P1", width=900, height=600)],
        ...     sheet=SheetStockConfig(width=2000, height=1250),
        ... )
    """

    model_config = ConfigDict(extra="forbid")

    schema_version: str = Field(..., pattern=r"^\d+\.\d+$")
    name: str | None = None
    category: MaterialCategoryConfig = MaterialCategoryConfig.SHEET
    parts: list[PartConfig] = Field(default_factory=list)
    sheet: SheetStockConfig | None = None
    bar: BarStockConfig | None = None
    candidates: list[SheetStockConfig] = Field(default_factory=list, max_length=20)
    packing: PackingConfigSchema = Field(default_factory=PackingConfigSchema)
    linear: LinearPackingConfigSchema = Field(
        default_factory=LinearPackingConfigSchema
    )
    estimate: EstimateConfigSchema = Field(default_factory=EstimateConfigSchema)

    @field_validator("schema_version")
    @classmethod
    def validate_supported_version(cls, v: str) -> str:
        """Accept supported versions and newer minors of a supported major."""
        if v in SUPPORTED_VERSIONS:
            return v

        major_version = int(v.split(".")[0])
        supported_majors = {int(sv.split(".")[0]) for sv in SUPPORTED_VERSIONS}
        if major_version in supported_majors:
            return v

        raise ValueError(
            f"Unsupported schema version '{v}'. "
            f"Supported versions: {sorted(SUPPORTED_VERSIONS)}"
        )

    @field_validator("parts")
    @classmethod
    def validate_unique_part_ids(cls, v: list[PartConfig]) -> list[PartConfig]:
        """Part ids prefix piece ids, so they must be unique."""
        seen: set[str] = set()
        for part in v:
            if part.id in seen:
                raise ValueError(f"Duplicate part id '{part.id}'")
            seen.add(part.id)
        return v

    @model_validator(mode="after")
    def validate_stock_matches_category(self) -> "NestingJobConfiguration":
        """Sheet jobs need a sheet, linear jobs need a bar and nothing else."""
        if self.category is MaterialCategoryConfig.SHEET:
            if self.sheet is None:
                raise ValueError("Category 'sheet' requires a 'sheet' section")
            if self.bar is not None:
                raise ValueError("Category 'sheet' does not accept a 'bar' section")
        else:
            if self.bar is None:
                raise ValueError(
                    f"Category '{self.category.value}' requires a 'bar' section"
                )
            if self.sheet is not None or self.candidates:
                raise ValueError(
                    f"Category '{self.category.value}' does not accept sheet "
                    f"or candidate sections"
                )
        return self
