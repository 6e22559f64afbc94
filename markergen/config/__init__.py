from .config import (
    Config,
    GenerationConfig,
    LabelConfig,
    OutputConfig,
    load_config,
    parse_args,
)

__all__ = [
    "Config",
    "GenerationConfig",
    "LabelConfig",
    "OutputConfig",
    "load_config",
    "parse_args",
]
