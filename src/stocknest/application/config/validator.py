"""Validation structures and pre-nesting checks for job files.

Schema validation only guarantees a well-formed job. This module adds the
checks that need the domain: material compatibility of every part, stock
left usable by the configured margins, and advisories for parts that will
come back unplaced.
"""

from dataclasses import dataclass, field
from typing import Any

from stocknest.application.config.adapters import (
    config_to_candidates,
    config_to_estimate_config,
    config_to_linear_config,
    config_to_packing_config,
    config_to_parts,
    config_to_stock,
)
from stocknest.application.config.schemas import NestingJobConfiguration
from stocknest.domain.services import expand_parts, validate_compatibility
from stocknest.domain.value_objects import (
    ORIENTATION_ORDER,
    PartRequest,
    Piece,
    StockBar,
    StockSheet,
)


@dataclass
class ValidationError:
    """A blocking validation error.

    Attributes:
        path: JSON path to the invalid field (e.g., "parts[0]")
        message: Human-readable description of the error
        value: The invalid value that caused the error
    """

    path: str
    message: str
    value: Any = None


@dataclass
class ValidationWarning:
    """A non-blocking validation warning.

    Attributes:
        path: JSON path to the concerning field
        message: Human-readable description of the concern
        suggestion: Optional suggested remediation
    """

    path: str
    message: str
    suggestion: str | None = None


@dataclass
class ValidationResult:
    """Container for validation errors and warnings."""

    errors: list[ValidationError] = field(default_factory=list)
    warnings: list[ValidationWarning] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        """Check if the job has no blocking errors."""
        return len(self.errors) == 0

    @property
    def has_warnings(self) -> bool:
        return len(self.warnings) > 0

    @property
    def exit_code(self) -> int:
        """CLI exit code: 1 with errors, 2 with only warnings, else 0."""
        if self.errors:
            return 1
        if self.warnings:
            return 2
        return 0

    def add_error(
        self, path: str, message: str, value: Any = None
    ) -> "ValidationResult":
        """Add a validation error and return self for chaining."""
        self.errors.append(ValidationError(path=path, message=message, value=value))
        return self

    def add_warning(
        self, path: str, message: str, suggestion: str | None = None
    ) -> "ValidationResult":
        """Add a validation warning and return self for chaining."""
        self.warnings.append(
            ValidationWarning(path=path, message=message, suggestion=suggestion)
        )
        return self


def _representative_piece(part: PartRequest) -> Piece:
    expanded = expand_parts([part])
    if expanded:
        return expanded[0]
    return Piece(
        id=part.id,
        description=part.description,
        width=part.width,
        height=part.height,
        length=part.length,
        weight=part.weight,
    )


def _fits_sheet(piece: Piece, usable_width: float, usable_height: float) -> bool:
    for orientation in ORIENTATION_ORDER:
        width, height = orientation.dimensions(piece)
        if width <= usable_width and height <= usable_height:
            return True
    return False


def _check_sheet_margin(
    sheet: StockSheet, margin: float, path: str, result: ValidationResult
) -> None:
    if min(sheet.width, sheet.height) - 2 * margin <= 0:
        result.add_error(
            path, f"Margin leaves no usable area on sheet {sheet.label}", margin
        )


def check_stock_margins(
    config: NestingJobConfiguration, result: ValidationResult
) -> None:
    """Report margins or edge losses that leave no usable stock."""
    stock = config_to_stock(config)
    packing = config_to_packing_config(config.packing)
    linear = config_to_linear_config(config.linear)
    estimate = config_to_estimate_config(config.estimate)

    if isinstance(stock, StockBar):
        for path, loss in (
            ("linear.edge_loss", linear.edge_loss),
            ("estimate.edge_loss", estimate.edge_loss),
        ):
            if stock.length - 2 * loss <= 0:
                result.add_error(
                    path,
                    f"Edge loss leaves no usable length on bar {stock.label}",
                    loss,
                )
        return

    _check_sheet_margin(stock, packing.edge_margin, "packing.edge_margin", result)
    _check_sheet_margin(stock, estimate.edge_loss, "estimate.edge_loss", result)
    if config.candidates:
        for i, candidate in enumerate(config_to_candidates(config)):
            _check_sheet_margin(
                candidate, packing.edge_margin, f"candidates[{i}]", result
            )


def check_parts(config: NestingJobConfiguration, result: ValidationResult) -> None:
    """Validate every part against the job category and flag misfits."""
    stock = config_to_stock(config)
    packing = config_to_packing_config(config.packing)
    linear = config_to_linear_config(config.linear)

    for i, part in enumerate(config_to_parts(config)):
        path = f"parts[{i}]"
        piece = _representative_piece(part)

        compatibility = validate_compatibility([piece], config.category)
        for message in compatibility.errors:
            result.add_error(path, message)
        if not compatibility.valid:
            continue

        if part.quantity == 0:
            result.add_warning(
                f"{path}.quantity",
                f"Part '{part.id}' has quantity 0 and contributes no pieces",
            )

        if isinstance(stock, StockSheet):
            try:
                usable_width, usable_height = packing.usable_dimensions(stock)
            except ValueError:
                # Reported by check_stock_margins
                continue
            if not _fits_sheet(piece, usable_width, usable_height):
                result.add_warning(
                    path,
                    f"Part '{part.id}' ({part.width:g}x{part.height:g}) does not "
                    f"fit on sheet {stock.label} in either orientation",
                    "Use a larger sheet or split the part",
                )
        else:
            try:
                usable_length = linear.usable_length(stock)
            except ValueError:
                # Reported by check_stock_margins
                continue
            if (part.length or 0.0) + linear.cut_spacing > usable_length:
                result.add_warning(
                    path,
                    f"Part '{part.id}' ({part.length:g} mm) is longer than the "
                    f"usable length of bar {stock.label}",
                    "Use a longer bar or split the part",
                )


def validate_config(config: NestingJobConfiguration) -> ValidationResult:
    """Run every pre-nesting check on a schema-valid job.

    Args:
        config: A job that already passed schema validation.

    Returns:
        ValidationResult with compatibility and stock errors, and
        warnings for parts that will not be placed.
    """
    result = ValidationResult()
    check_stock_margins(config, result)
    check_parts(config, result)
    return result
