"""
Label templating and rendering into the marker's top strip.
"""

import logging
import re
from pathlib import Path
from typing import Mapping, Optional, Sequence, Tuple, Union

import numpy as np
from PIL import Image, ImageDraw, ImageFont

logger = logging.getLogger("markergen.label")

PLACEHOLDER_PATTERN = re.compile(r"\{([a-zA-Z0-9]+)\}")

STRIP_RATIO = 0.0625

MONOSPACE_FONTS = [
    "DejaVuSansMono.ttf",
    "LiberationMono-Regular.ttf",
    "FreeMono.ttf",
    "cour.ttf",
    "Courier New.ttf",
    "Menlo.ttc",
]


def expand_template(template: str, params: Mapping[str, object]) -> str:
    """
    Replace ``{name}`` placeholders with values from ``params``.

    Keys are matched case-insensitively. A placeholder with no matching key
    is replaced by its bare name.
    """
    lookup = {str(key).lower(): value for key, value in params.items()}

    def _substitute(match: re.Match) -> str:
        key = match.group(1)
        value = lookup.get(key.lower())
        return key if value is None else str(value)

    return PLACEHOLDER_PATTERN.sub(_substitute, template)


def strip_height(size: int, ratio: float = STRIP_RATIO) -> int:
    """Height of the label strip for an image side of ``size``."""
    return int(round(size * ratio))


class LabelRenderer:
    """Draws label text centred in the top strip of a marker image."""

    def __init__(
        self,
        font_path: Optional[Union[str, Path]] = None,
        color: Tuple[int, int, int] = (255, 255, 255),
        strip_ratio: float = STRIP_RATIO,
        font_candidates: Sequence[str] = MONOSPACE_FONTS
    ):
        self.font_path = Path(font_path) if font_path else None
        self.color = tuple(color)
        self.strip_ratio = strip_ratio
        self.font_candidates = list(font_candidates)

    def get_font(self, size: int) -> ImageFont.ImageFont:
        """Load a monospace font at ``size`` pixels, falling back to Pillow's default."""
        candidates = [str(self.font_path)] if self.font_path else []
        candidates.extend(self.font_candidates)

        for candidate in candidates:
            try:
                return ImageFont.truetype(candidate, size)
            except OSError:
                continue

        logger.warning(f"No monospace font found, using Pillow default at {size}px")
        return ImageFont.load_default(size=size)

    def render(
        self,
        image: np.ndarray,
        template: Optional[str],
        params: Mapping[str, object]
    ) -> np.ndarray:
        """
        Render the expanded ``template`` onto ``image`` in place.

        Only the top ``strip_height`` rows are ever written. A blank template
        or a strip of zero height leaves the image untouched.

        Returns:
            The same array that was passed in
        """
        if template is None or not template.strip():
            return image

        size = image.shape[1]
        height = strip_height(image.shape[0], self.strip_ratio)
        if height <= 0:
            logger.debug(f"Image of {size}px has no room for a label")
            return image

        text = expand_template(template, params)
        font = self.get_font(max(1, height // 3))

        strip = Image.fromarray(image[:height])
        draw = ImageDraw.Draw(strip)
        draw.fontmode = "L"
        draw.text(
            (size / 2, height / 2),
            text,
            font=font,
            fill=self.color,
            anchor="mm"
        )

        image[:height] = np.asarray(strip)

        return image


def compose_label(
    image: np.ndarray,
    template: Optional[str],
    params: Mapping[str, object],
    renderer: Optional[LabelRenderer] = None
) -> np.ndarray:
    """Expand ``template`` and draw it into ``image``'s top strip."""
    if renderer is None:
        renderer = LabelRenderer()
    return renderer.render(image, template, params)
