"""Scale images down to a variant width, keeping aspect ratio."""
import logging

from PIL import Image

logger = logging.getLogger("converter.resize")


def calculate_target_size(width: int, height: int, target_width: int) -> tuple[int, int]:
    """
    Size of the variant for a width x height source.
    Images no wider than target_width keep their size (no upscaling).
    """
    if width <= target_width:
        return width, height
    ratio = target_width / width
    return target_width, max(1, round(height * ratio))


def resize_for_variant(img: Image.Image, target_width: int) -> Image.Image:
    """Return a new image fitted to target_width; img itself is never modified."""
    size = calculate_target_size(img.width, img.height, target_width)
    if size == img.size:
        return img.copy()
    return img.resize(size, Image.Resampling.LANCZOS)


def prepare_for_webp(img: Image.Image) -> Image.Image:
    """Convert a decoded image to RGBA when it carries transparency, else RGB."""
    has_alpha = img.mode in ("RGBA", "LA", "PA") or "transparency" in img.info
    target_mode = "RGBA" if has_alpha else "RGB"
    if img.mode == target_mode:
        return img
    return img.convert(target_mode)
