"""
Tests for configuration loading, image encoding and the batch CLI.
Run with: pytest markergen
"""

import json
import logging

import cv2
import numpy as np
import pytest
import yaml

from markergen.config.config import load_config, parse_args
from markergen.main import main
from markergen.modules.pipeline import generate_marker
from markergen.modules.prng import INT32_MAX, INT32_MIN
from markergen.utils import encode_image, normalize_format


def _read_rgb(path):
    img = cv2.imread(str(path))
    assert img is not None
    return cv2.cvtColor(img, cv2.COLOR_BGR2RGB)


def test_config_defaults(tmp_path):
    config = load_config(parse_args(["generate", "--output-dir", str(tmp_path)]))
    assert config.output.size == 1024
    assert config.output.max_size == 2048
    assert config.output.format == "jpg"
    assert config.output.download_name == "ar_marker.jpg"
    assert config.generation.kind == "vuforia"
    assert config.generation.seed is None
    assert config.label.template is None


def test_config_yaml_and_cli_precedence(tmp_path):
    config_path = tmp_path / "markers.yaml"
    config_path.write_text(yaml.safe_dump({
        "output": {"size": 300, "format": "png", "max_size": 512},
        "generation": {"seed": 10, "kind": "artoolkit", "count": 3},
        "label": {"template": "YAML {id}", "color": [0, 255, 0]},
    }))

    config = load_config(parse_args([
        "generate", "--config", str(config_path), "--seed", "99", "--label", "CLI {id}",
    ]))

    assert config.output.size == 300
    assert config.output.format == "png"
    assert config.output.max_size == 512
    assert config.generation.kind == "artoolkit"
    assert config.generation.count == 3
    assert config.generation.seed == 99
    assert config.label.template == "CLI {id}"
    assert config.label.color == (0, 255, 0)


def test_normalize_format():
    assert normalize_format(".JPEG") == "jpg"
    assert normalize_format("png") == "png"
    with pytest.raises(ValueError):
        normalize_format("gif")


def test_encode_png_is_lossless():
    marker = generate_marker(seed=12, size=96, label="ID: {id}")
    data = encode_image(marker.image, "png")
    decoded = cv2.imdecode(np.frombuffer(data, dtype=np.uint8), cv2.IMREAD_COLOR)
    assert np.array_equal(cv2.cvtColor(decoded, cv2.COLOR_BGR2RGB), marker.image)


def test_encode_jpeg_header():
    data = encode_image(generate_marker(seed=12, size=64).image, "jpg")
    assert data[:2] == b"\xff\xd8"


def test_cli_generates_batch(tmp_path):
    code = main([
        "generate", "--output-dir", str(tmp_path), "--seed", "7",
        "--count", "2", "--size", "128", "--format", "png", "--label", "ID: {id}",
    ])
    assert code == 0

    for seed in (7, 8):
        path = tmp_path / f"marker_{seed}.png"
        assert path.exists()
        expected = generate_marker(seed=seed, size=128, label="ID: {id}").image
        assert np.array_equal(_read_rgb(path), expected)

    report = json.loads((tmp_path / "report.json").read_text())
    assert report["stats"]["markers_generated"] == 2
    assert [m["seed"] for m in report["markers"]] == [7, 8]
    assert report["markers"][0]["size"] == 128
    assert report["generator_version"] == "subtractive-v1"


def test_cli_seed_sequence_wraps(tmp_path):
    main([
        "generate", "--output-dir", str(tmp_path), "--seed", str(INT32_MAX),
        "--count", "2", "--size", "16", "--format", "png",
    ])
    assert (tmp_path / f"marker_{INT32_MAX}.png").exists()
    assert (tmp_path / f"marker_{INT32_MIN}.png").exists()


def test_cli_download_name(tmp_path):
    main(["generate", "--output-dir", str(tmp_path), "--size", "5000", "--download"])

    path = tmp_path / "ar_marker.jpg"
    assert path.exists()
    assert _read_rgb(path).shape == (2048, 2048, 3)


def test_cli_id(capsys):
    assert main(["id"]) == 0
    seed = int(capsys.readouterr().out.strip())
    assert INT32_MIN <= seed <= INT32_MAX


def test_repeated_runs_do_not_stack_log_handlers(tmp_path):
    logger = logging.getLogger("markergen")

    main(["generate", "--output-dir", str(tmp_path / "first"), "--seed", "1", "--size", "16"])
    first_handlers = list(logger.handlers)
    assert len(first_handlers) == 2

    main(["generate", "--output-dir", str(tmp_path / "second"), "--seed", "2", "--size", "16"])
    assert len(logger.handlers) == 2
    assert not any(handler in logger.handlers for handler in first_handlers)

    file_handler = next(h for h in first_handlers if isinstance(h, logging.FileHandler))
    assert file_handler.stream is None


@pytest.mark.parametrize("option, value", [
    ("--size", "0"),
    ("--size", "-5"),
    ("--count", "0"),
    ("--kind", "aruco"),
    ("--seed", "5000000000"),
    ("--seed", str(INT32_MIN - 1)),
])
def test_cli_rejects_invalid_options(tmp_path, capsys, option, value):
    with pytest.raises(SystemExit) as exc:
        main(["generate", "--output-dir", str(tmp_path), option, value])

    assert exc.value.code == 2
    assert option in capsys.readouterr().err
    assert not (tmp_path / "report.json").exists()


def test_cli_kind_accepts_number(tmp_path):
    config = load_config(parse_args(["generate", "--output-dir", str(tmp_path), "--kind", "2"]))
    assert config.generation.kind == "artoolkit"
