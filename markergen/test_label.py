"""
Tests for label templating and rendering.
Run with: pytest markergen  (or python -m markergen.test_label)
"""

import numpy as np

from markergen.modules.label import LabelRenderer, compose_label, expand_template, strip_height
from markergen.modules.pipeline import generate_marker, system_parameters


def test_expand_known_placeholder():
    assert expand_template("ID: {id}", {"id": 42}) == "ID: 42"


def test_expand_unknown_placeholder():
    assert expand_template("{unknown}", {"id": 42}) == "unknown"
    assert expand_template("a{X1}b{id}", {"id": -7}) == "aX1b-7"


def test_expand_is_case_insensitive():
    assert expand_template("{ID}/{Id}", {"id": 5}) == "5/5"
    assert expand_template("{id}", {"ID": 5}) == "5"


def test_expand_leaves_malformed_text():
    for template in ["{}", "{a-b}", "{id", "id}", "{{id}}", "plain text"]:
        expected = "{5}" if template == "{{id}}" else template
        assert expand_template(template, {"id": 5}) == expected


def test_strip_height_rounding():
    assert strip_height(1024) == 64
    assert strip_height(2048) == 128
    assert strip_height(8) == 0  # 0.5 rounds to even
    assert strip_height(24) == 2  # 1.5 rounds to even
    assert strip_height(100) == 6


def test_label_only_touches_top_strip():
    marker = generate_marker(seed=42, size=512)
    before = marker.image.copy()

    out = compose_label(marker.image, "ID: {id}", system_parameters(marker.seed))
    assert out is marker.image

    strip = strip_height(512)
    assert np.array_equal(out[strip:], before[strip:])
    assert not np.array_equal(out[:strip], before[:strip])


def test_label_through_generate_marker():
    plain = generate_marker(seed=3, size=256)
    labelled = generate_marker(seed=3, size=256, label="Marker {id}")

    strip = strip_height(256)
    assert np.array_equal(plain.image[strip:], labelled.image[strip:])
    assert not np.array_equal(plain.image[:strip], labelled.image[:strip])


def test_blank_label_is_noop():
    base = generate_marker(seed=8, size=128).image
    for template in [None, "", "   ", "\t\n"]:
        image = base.copy()
        compose_label(image, template, {"id": 8})
        assert np.array_equal(image, base)


def test_label_on_tiny_image_is_noop():
    base = generate_marker(seed=8, size=6).image
    image = base.copy()
    compose_label(image, "ID: {id}", {"id": 8})
    assert np.array_equal(image, base)


def test_renderer_uses_configured_color():
    image = np.zeros((512, 512, 3), dtype=np.uint8)
    LabelRenderer(color=(255, 0, 0)).render(image, "HELLO", {})

    strip = image[:strip_height(512)]
    assert strip[..., 0].max() > 0
    assert strip[..., 1].max() == 0
    assert strip[..., 2].max() == 0


def test_renderer_falls_back_without_fonts():
    renderer = LabelRenderer(font_path="/nonexistent/font.ttf", font_candidates=[])
    image = np.zeros((256, 256, 3), dtype=np.uint8)
    renderer.render(image, "ABC", {})

    strip = strip_height(256)
    assert image[:strip].any()
    assert not image[strip:].any()


def main():
    """Run all tests without pytest."""
    tests = [
        test_expand_known_placeholder,
        test_expand_unknown_placeholder,
        test_expand_is_case_insensitive,
        test_expand_leaves_malformed_text,
        test_strip_height_rounding,
        test_label_only_touches_top_strip,
        test_label_through_generate_marker,
        test_blank_label_is_noop,
        test_label_on_tiny_image_is_noop,
        test_renderer_uses_configured_color,
        test_renderer_falls_back_without_fonts,
    ]

    all_passed = True
    for test in tests:
        try:
            test()
            status = "PASS"
        except AssertionError:
            status = "FAIL"
            all_passed = False
        print(f"  {test.__name__}: {status}")

    print()
    print("All tests PASSED!" if all_passed else "Some tests FAILED!")

    return 0 if all_passed else 1


if __name__ == "__main__":
    exit(main())
