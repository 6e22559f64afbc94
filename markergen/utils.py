"""
Common utilities for the marker generator: logging, encoding, reports.
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Union

import cv2
import numpy as np

ENCODE_PARAMS = {
    "jpg": [cv2.IMWRITE_JPEG_QUALITY, 95],
    "png": [cv2.IMWRITE_PNG_COMPRESSION, 3],
}


def setup_logging(output_dir: Path, verbose: bool = False) -> logging.Logger:
    """Setup logging to file and console."""
    log_dir = output_dir / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_file = log_dir / f"generation_{timestamp}.log"

    logger = logging.getLogger("markergen")
    logger.setLevel(logging.DEBUG)

    for handler in logger.handlers[:]:
        handler.close()
        logger.removeHandler(handler)

    file_handler = logging.FileHandler(log_file)
    file_handler.setLevel(logging.DEBUG)
    file_formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
    file_handler.setFormatter(file_formatter)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.DEBUG if verbose else logging.INFO)
    console_formatter = logging.Formatter("%(levelname)s: %(message)s")
    console_handler.setFormatter(console_formatter)

    logger.addHandler(file_handler)
    logger.addHandler(console_handler)

    return logger


def normalize_format(fmt: str) -> str:
    fmt = fmt.lower().lstrip(".")
    if fmt == "jpeg":
        fmt = "jpg"
    if fmt not in ENCODE_PARAMS:
        raise ValueError(f"Unsupported image format: {fmt}")
    return fmt


def encode_image(img: np.ndarray, fmt: str = "jpg") -> bytes:
    """Encode an RGB numpy array to JPEG or PNG bytes."""
    fmt = normalize_format(fmt)

    if img.ndim == 3 and img.shape[2] == 3:
        img = cv2.cvtColor(img, cv2.COLOR_RGB2BGR)

    ok, buffer = cv2.imencode(f".{fmt}", img, ENCODE_PARAMS[fmt])
    if not ok:
        raise ValueError(f"Failed to encode image as {fmt}")

    return buffer.tobytes()


def save_image(img: np.ndarray, path: Union[str, Path]) -> None:
    """Save RGB numpy array as image, format taken from the extension."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    path.write_bytes(encode_image(img, path.suffix))


def save_report(report: Dict[str, Any], output_path: Path) -> None:
    """Save generation report as JSON."""
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, "w") as f:
        json.dump(report, f, indent=2, default=str)
