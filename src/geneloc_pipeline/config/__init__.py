from .loader import load_config, load_config_with_overrides
from .schema import PipelineConfig, AnnotationConfig, APIConfig, PlotStyle

__all__ = [
    "load_config",
    "load_config_with_overrides",
    "PipelineConfig",
    "AnnotationConfig",
    "APIConfig",
    "PlotStyle",
]
