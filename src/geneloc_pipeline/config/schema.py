"""Pydantic models for pipeline configuration."""

import hashlib
import json
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator


class AnnotationConfig(BaseModel):
    """Annotation service selection."""

    backend: Literal["biomart", "mygene"] = Field(
        default="biomart",
        description="Annotation backend used to resolve gene coordinates",
    )
    biomart_host: str = Field(
        default="https://www.ensembl.org",
        description="Base URL of the Ensembl BioMart server",
    )


class APIConfig(BaseModel):
    """Configuration for API clients."""

    rate_limit_per_second: int = Field(
        default=5,
        ge=1,
        description="Maximum API requests per second",
    )
    max_retries: int = Field(
        default=5,
        ge=1,
        le=20,
        description="Maximum retry attempts for failed requests",
    )
    cache_ttl_seconds: int = Field(
        default=86400,
        ge=0,
        description="Cache time-to-live in seconds (0 = infinite)",
    )
    timeout_seconds: int = Field(
        default=120,
        ge=1,
        description="Request timeout in seconds",
    )


class PlotStyle(BaseModel):
    """Canvas and typography settings shared by both genome plots."""

    karyoplot_width_cm: float = Field(default=14.0, gt=0)
    karyoplot_height_cm: float = Field(default=10.0, gt=0)
    circos_width_cm: float = Field(default=5.0, gt=0)
    circos_height_cm: float = Field(default=5.0, gt=0)
    point_size: float = Field(
        default=6.0,
        gt=0,
        description="Base font size in points",
    )
    fallback_dpi: int = Field(
        default=300,
        ge=72,
        description="Resolution for rasterized elements in vector output",
    )
    background: str = Field(default="white")
    font_family: str = Field(default="Arial")
    marker_r1: float = Field(
        default=0.3,
        gt=0.0,
        le=1.0,
        description="Marker stem height as a fraction of the data panel",
    )
    label_scale: float = Field(
        default=0.6,
        gt=0.0,
        description="Gene label size relative to point_size",
    )
    genome_cache_dir: Path | None = Field(
        default=None,
        description="Where downloaded chromosome/cytoband files are cached",
    )

    def karyoplot_figsize(self) -> tuple[float, float]:
        """Karyotype canvas size in inches."""
        return (self.karyoplot_width_cm / 2.54, self.karyoplot_height_cm / 2.54)

    def circos_figsize(self) -> tuple[float, float]:
        """Circular plot canvas size in inches."""
        return (self.circos_width_cm / 2.54, self.circos_height_cm / 2.54)

    def rc_params(self) -> dict:
        """matplotlib rcParams applied while a plot is rendered."""
        return {
            "font.size": self.point_size,
            "font.family": "sans-serif",
            "font.sans-serif": [self.font_family, "DejaVu Sans"],
            "figure.facecolor": self.background,
            "savefig.facecolor": self.background,
            "pdf.fonttype": 42,
        }


class PipelineConfig(BaseModel):
    """Main pipeline configuration."""

    cache_dir: Path = Field(
        default=Path(".cache/geneloc"),
        description="Directory for API response caching",
    )
    annotation: AnnotationConfig = Field(default_factory=AnnotationConfig)
    api: APIConfig = Field(default_factory=APIConfig)
    plots: PlotStyle = Field(default_factory=PlotStyle)

    @field_validator("cache_dir")
    @classmethod
    def create_directory(cls, v: Path) -> Path:
        """Create directory if it doesn't exist."""
        v.mkdir(parents=True, exist_ok=True)
        return v

    @classmethod
    def default(cls) -> "PipelineConfig":
        """Configuration with every field at its default value."""
        return cls()

    def config_hash(self) -> str:
        """
        Compute SHA-256 hash of the configuration.

        Returns a deterministic hash based on all config values,
        useful for tracking config changes between runs.
        """
        config_dict = self.model_dump(mode="python")
        config_json = json.dumps(
            config_dict,
            sort_keys=True,
            default=str,
        )
        return hashlib.sha256(config_json.encode()).hexdigest()
