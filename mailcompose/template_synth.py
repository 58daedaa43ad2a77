"""Heuristics that turn a free-text description into an HTML email body."""

from __future__ import annotations

import logging
from typing import Sequence

from .inline_images import find_image, reference_for
from .models import InlineImage

logger = logging.getLogger(__name__)

SKELETON_HEAD = (
    '<!DOCTYPE html><html lang="en"><head><meta charset="UTF-8">'
    '<meta name="viewport" content="width=device-width, initial-scale=1">'
    "<style>body{font-family:Arial,sans-serif;margin:0;padding:0;background:#f4f4f4}"
    ".container{max-width:600px;margin:0 auto;background:#fff}"
    ".header{width:100%;height:auto}.content{padding:20px}"
    ".footer{width:100%;height:auto}</style></head>"
    '<body><div class="container">'
)
SKELETON_TAIL = "</div></body></html>"


def _image_slot(slot: str, prompt: str, images: Sequence[InlineImage]) -> str:
    """Render the header/footer <img>, or "" when neither an image nor the prompt asks for it."""
    image = find_image(images, slot)
    if image is None and slot not in prompt.lower():
        return ""
    if image is not None:
        logger.debug("Image '%s' fills the %s slot", image.filename, slot)
        ref = reference_for(image.filename)
    else:
        logger.debug("Prompt mentions %s but no image matches; using %s.png", slot, slot)
        ref = reference_for(f"{slot}.png")
    return f'<img class="{slot}" src="{ref}" alt="{slot.capitalize()}" />'


def synthesize(prompt: str, images: Sequence[InlineImage]) -> str:
    """Build the HTML body for auto-generate mode.

    The prompt is embedded verbatim, without escaping, so any markup in it
    reaches the recipient as-is.
    """
    return "".join(
        (
            SKELETON_HEAD,
            _image_slot("header", prompt, images),
            f'<div class="content"><p>{prompt}</p></div>',
            _image_slot("footer", prompt, images),
            SKELETON_TAIL,
        )
    )
