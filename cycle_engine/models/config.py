"""Pipeline configuration models."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Literal

from pydantic import BaseModel, Field, model_validator

if TYPE_CHECKING:
    from cycle_engine.settings import Settings


HighPassVariant = Literal["standard", "v2", "one_pole"]
QuadratureVariant = Literal["classic", "peak_normalized", "stabilized"]


class RoofingConfig(BaseModel):
    """Roofing filter: high-pass cut-off followed by a smoothing cut-off."""

    upper_length: int = Field(default=48, ge=2)  # high-pass cut-off period
    lower_length: int = Field(default=10, ge=2)  # super smoother cut-off period
    high_pass: HighPassVariant = "standard"

    @model_validator(mode="after")
    def _check_band(self) -> "RoofingConfig":
        if self.lower_length > self.upper_length:
            raise ValueError(
                f"lower_length ({self.lower_length}) must not exceed "
                f"upper_length ({self.upper_length})"
            )
        return self


class EstimatorConfig(BaseModel):
    """Dominant-cycle estimator selection and period band."""

    name: str = "homodyne"
    min_period: int = Field(default=10, ge=1)
    max_period: int = Field(default=48, ge=1)
    smooth_length: int = Field(default=20, ge=2)

    # Only consulted by estimators that consume a quadrature pair
    quadrature: QuadratureVariant = "peak_normalized"

    # Estimator-specific keyword arguments (e.g. smoothing, bandwidth)
    params: dict[str, Any] = {}

    @model_validator(mode="after")
    def _check_band(self) -> "EstimatorConfig":
        if self.min_period > self.max_period:
            raise ValueError(
                f"min_period ({self.min_period}) must not exceed "
                f"max_period ({self.max_period})"
            )
        return self


class AdaptiveConfig(BaseModel):
    """Adaptive oscillator driven by the estimated period."""

    indicator: str = "stochastic"
    fraction: float | None = Field(default=None, gt=0)  # None = indicator default
    cap: int | None = Field(default=None, ge=1)  # None = estimator max_period
    smooth_length: int = Field(default=10, ge=2)


class PipelineConfig(BaseModel):
    """Full roofing -> estimator -> adaptive indicator chain."""

    roofing: RoofingConfig = RoofingConfig()
    estimator: EstimatorConfig = EstimatorConfig()
    adaptive: AdaptiveConfig | None = None

    @classmethod
    def from_settings(cls, settings: "Settings") -> "PipelineConfig":
        """Build a config from environment-backed settings."""
        adaptive = None
        if settings.adaptive_indicator:
            adaptive = AdaptiveConfig(
                indicator=settings.adaptive_indicator,
                cap=settings.adaptive_cap,
            )
        return cls(
            roofing=RoofingConfig(
                upper_length=settings.roofing_upper_length,
                lower_length=settings.roofing_lower_length,
                high_pass=settings.high_pass_variant,
            ),
            estimator=EstimatorConfig(
                name=settings.estimator,
                min_period=settings.min_period,
                max_period=settings.max_period,
                smooth_length=settings.smooth_length,
                quadrature=settings.quadrature,
            ),
            adaptive=adaptive,
        )
