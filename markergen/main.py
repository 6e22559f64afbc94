"""
Command line entry point for the Fiducial Marker Generator.
"""

import logging
import sys
import time
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional

from tqdm import tqdm

from .config import Config, load_config, parse_args
from .modules.label import LabelRenderer
from .modules.pipeline import MarkerData, check_seed, generate_marker
from .modules.prng import GENERATOR_VERSION, to_int32
from .modules.profiles import MarkerKind
from .modules.seed_source import next_seed
from .utils import normalize_format, save_image, save_report, setup_logging

logger = logging.getLogger("markergen")


class MarkerBatchGenerator:
    """Generates a batch of markers to disk and writes a report."""

    REPORT_FILE = "report.json"

    def __init__(self, config: Config):
        self.config = config
        self.output_dir = Path(config.output.output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)

        self.logger = setup_logging(self.output_dir, verbose=config.verbose)

        self.kind = MarkerKind.parse(config.generation.kind)
        self.format = normalize_format(config.output.format)
        self.renderer = LabelRenderer(
            font_path=config.label.font_path,
            color=config.label.color,
            strip_ratio=config.label.strip_ratio
        )

        self.markers: List[Dict] = []
        self.stats = {
            "start_time": None,
            "end_time": None,
            "markers_generated": 0,
            "markers_failed": 0,
        }

    def seeds(self) -> List[int]:
        """Seeds for this batch: consecutive from the configured seed, else random."""
        count = self.config.generation.count
        first = self.config.generation.seed

        if first is None:
            return [next_seed() for _ in range(count)]

        first = check_seed(first)
        return [to_int32(first + i) for i in range(count)]

    def output_path(self, marker: MarkerData) -> Path:
        if self.config.download and self.config.generation.count == 1:
            name = Path(self.config.output.download_name).with_suffix(f".{self.format}")
            return self.output_dir / name
        return self.output_dir / f"marker_{marker.seed}.{self.format}"

    def generate_one(self, seed: int) -> MarkerData:
        marker = generate_marker(
            seed=seed,
            size=self.config.output.size,
            label=self.config.label.template,
            kind=self.kind,
            max_size=self.config.output.max_size,
            renderer=self.renderer
        )

        path = self.output_path(marker)
        save_image(marker.image, path)

        self.markers.append({
            "seed": marker.seed,
            "kind": marker.kind.name.lower(),
            "size": marker.size,
            "path": str(path),
        })

        return marker

    def save_report(self) -> Dict:
        """Save the generation report."""
        start = datetime.fromisoformat(self.stats["start_time"])
        end = datetime.fromisoformat(self.stats["end_time"])
        duration = (end - start).total_seconds()

        report = {
            "generator_version": GENERATOR_VERSION,
            "config": {
                "kind": self.kind.name.lower(),
                "size": self.config.output.size,
                "max_size": self.config.output.max_size,
                "format": self.format,
                "label": self.config.label.template,
            },
            "stats": self.stats,
            "performance": {
                "duration_seconds": duration,
                "markers_per_second": self.stats["markers_generated"] / max(duration, 1e-6),
            },
            "markers": self.markers,
        }

        save_report(report, self.output_dir / self.REPORT_FILE)
        self.logger.info(f"Report saved to {self.output_dir / self.REPORT_FILE}")

        return report

    def run(self) -> Dict:
        """Generate every marker in the batch."""
        self.stats["start_time"] = datetime.now().isoformat()

        if self.config.download and self.config.generation.count > 1:
            self.logger.warning("--download only applies to a single marker, writing by seed instead")

        seeds = self.seeds()
        self.logger.info(
            f"Generating {len(seeds)} {self.kind.name} markers at "
            f"{self.config.output.size}px into {self.output_dir}"
        )

        for seed in tqdm(seeds, desc="Generating markers", disable=len(seeds) < 2):
            try:
                self.generate_one(seed)
                self.stats["markers_generated"] += 1
            except OSError as e:
                self.logger.error(f"Failed to write marker {seed}: {e}")
                self.stats["markers_failed"] += 1

        self.stats["end_time"] = datetime.now().isoformat()
        return self.save_report()


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    if args.command == "id":
        print(next_seed())
        return 0

    config = load_config(args)

    started = time.time()
    generator = MarkerBatchGenerator(config)
    report = generator.run()

    print("\n" + "=" * 50)
    print("Generation Complete")
    print("=" * 50)
    print(f"Markers generated: {report['stats']['markers_generated']}")
    print(f"Markers failed: {report['stats']['markers_failed']}")
    print(f"Total time: {time.time() - started:.1f} seconds")
    print("=" * 50)

    return 0 if report["stats"]["markers_failed"] == 0 else 1


if __name__ == "__main__":
    sys.exit(main())
