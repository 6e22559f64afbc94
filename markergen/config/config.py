"""
Configuration management for the marker generator CLI.
"""

import argparse
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple

import yaml

from ..modules.prng import INT32_MAX, INT32_MIN
from ..modules.profiles import MarkerKind


def positive_int(value: str) -> int:
    """argparse type for counts and sizes of at least one."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}")
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def int32_seed(value: str) -> int:
    """argparse type for seeds in the signed 32-bit range."""
    try:
        seed = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}")
    if not INT32_MIN <= seed <= INT32_MAX:
        raise argparse.ArgumentTypeError(
            f"must be between {INT32_MIN} and {INT32_MAX}, got {seed}"
        )
    return seed


def marker_kind(value: str) -> str:
    """argparse type accepting a marker family name or number."""
    try:
        return MarkerKind.parse(value).name.lower()
    except ValueError:
        names = ", ".join(kind.name.lower() for kind in MarkerKind)
        raise argparse.ArgumentTypeError(
            f"unknown marker kind {value!r} (choose from {names})"
        )


@dataclass
class OutputConfig:
    output_dir: Path = Path("markers")
    size: int = 1024
    max_size: int = 2048
    format: str = "jpg"
    download_name: str = "ar_marker.jpg"


@dataclass
class GenerationConfig:
    count: int = 1
    seed: Optional[int] = None
    kind: str = "vuforia"


@dataclass
class LabelConfig:
    template: Optional[str] = None
    font_path: Optional[Path] = None
    color: Tuple[int, int, int] = (255, 255, 255)
    strip_ratio: float = 0.0625


@dataclass
class Config:
    output: OutputConfig = field(default_factory=OutputConfig)
    generation: GenerationConfig = field(default_factory=GenerationConfig)
    label: LabelConfig = field(default_factory=LabelConfig)
    download: bool = False
    verbose: bool = False


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="markergen",
        description="Fiducial Marker Generator",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("id", help="Print a fresh random marker seed")

    generate = subparsers.add_parser(
        "generate",
        help="Generate marker images",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    generate.add_argument(
        "--output-dir", type=Path, default=None,
        help="Directory for generated markers"
    )
    generate.add_argument(
        "--size", type=positive_int, default=1024,
        help="Output side length in pixels (clamped to the maximum)"
    )
    generate.add_argument(
        "--kind", type=marker_kind, default="vuforia",
        help="Marker family (vuforia/artoolkit or 1/2)"
    )
    generate.add_argument(
        "--seed", type=int32_seed, default=None,
        help="Seed of the first marker; random when omitted"
    )
    generate.add_argument(
        "--count", type=positive_int, default=1,
        help="Number of markers to generate"
    )
    generate.add_argument(
        "--label", type=str, default=None,
        help="Label template, e.g. 'ID: {id}'"
    )
    generate.add_argument(
        "--format", type=str, default="jpg", choices=["jpg", "png"],
        help="Image encoding"
    )
    generate.add_argument(
        "--download", action="store_true",
        help="Write a single marker to the download filename"
    )
    generate.add_argument(
        "--config", type=Path, default=None,
        help="YAML config file (CLI args override YAML)"
    )
    generate.add_argument(
        "--verbose", action="store_true",
        help="Log debug output to the console"
    )

    return parser


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    return build_parser().parse_args(argv)


def load_yaml_config(config_path: Path) -> dict:
    """Load configuration from YAML file."""
    with open(config_path, "r") as f:
        return yaml.safe_load(f) or {}


def merge_configs(yaml_config: dict, args: argparse.Namespace) -> Config:
    """Merge YAML config with CLI arguments (CLI takes precedence)."""

    output_cfg = yaml_config.get("output", {})
    gen_cfg = yaml_config.get("generation", {})
    label_cfg = yaml_config.get("label", {})

    output_config = OutputConfig(
        output_dir=args.output_dir or Path(output_cfg.get("output_dir", "markers")),
        size=args.size if args.size != 1024 else output_cfg.get("size", 1024),
        max_size=output_cfg.get("max_size", 2048),
        format=args.format if args.format != "jpg" else output_cfg.get("format", "jpg"),
        download_name=output_cfg.get("download_name", "ar_marker.jpg")
    )

    generation_config = GenerationConfig(
        count=args.count if args.count != 1 else gen_cfg.get("count", 1),
        seed=args.seed if args.seed is not None else gen_cfg.get("seed"),
        kind=args.kind if args.kind != "vuforia" else gen_cfg.get("kind", "vuforia")
    )

    font_path = label_cfg.get("font_path")
    label_config = LabelConfig(
        template=args.label if args.label is not None else label_cfg.get("template"),
        font_path=Path(font_path) if font_path else None,
        color=tuple(label_cfg.get("color", [255, 255, 255])),
        strip_ratio=label_cfg.get("strip_ratio", 0.0625)
    )

    return Config(
        output=output_config,
        generation=generation_config,
        label=label_config,
        download=args.download,
        verbose=args.verbose
    )


def load_config(args: Optional[argparse.Namespace] = None) -> Config:
    """Load configuration from CLI args and optional YAML file."""
    if args is None:
        args = parse_args()

    if args.config and args.config.exists():
        yaml_config = load_yaml_config(args.config)
    else:
        yaml_config = {}

    return merge_configs(yaml_config, args)
