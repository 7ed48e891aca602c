"""Build the list of output variants, from the fixed table or from user input."""
import logging
import math
from typing import Optional, Union

from optimizer.config import (
    DEFAULT_BASE_WIDTH,
    DEFAULT_MEDIUM_PERCENT,
    DEFAULT_QUALITY_LARGE,
    DEFAULT_QUALITY_MEDIUM,
    DEFAULT_QUALITY_SMALL,
    DEFAULT_SMALL_PERCENT,
    FIXED_VARIANTS,
    VARIANT_NAMES,
)
from optimizer.conversion.models import InvalidInputError, VariantSpec
from optimizer.messages import message, resolve_language

logger = logging.getLogger("converter.variants")

Number = Union[str, int, float]


def variant_names(lang: Optional[str] = None) -> tuple[str, str, str]:
    return VARIANT_NAMES[resolve_language(lang)]


def fixed_variants(lang: Optional[str] = None) -> list[VariantSpec]:
    """small=400/q75, medium=800/q80, large=1200/q85."""
    names = variant_names(lang)
    return [VariantSpec(name, width, quality) for name, (width, quality) in zip(names, FIXED_VARIANTS)]


def default_custom_config() -> dict:
    return {
        "width": DEFAULT_BASE_WIDTH,
        "medium_percent": DEFAULT_MEDIUM_PERCENT,
        "small_percent": DEFAULT_SMALL_PERCENT,
        "quality_small": DEFAULT_QUALITY_SMALL,
        "quality_medium": DEFAULT_QUALITY_MEDIUM,
        "quality_large": DEFAULT_QUALITY_LARGE,
    }


def parse_width(value: Optional[Number], lang: Optional[str] = None) -> int:
    text = str(value if value is not None else "").strip()
    if text.startswith("+"):
        text = text[1:]
    if not text.isdecimal() or int(text) <= 0:
        raise InvalidInputError("width", message("invalid_width", lang))
    return int(text)


def parse_percent(value: Optional[Number], field_name: str, label: str, lang: Optional[str] = None) -> float:
    """Accepts "70", "70.5" and "70,5"."""
    text = str(value if value is not None else "").strip().replace(",", ".")
    try:
        percent = float(text)
    except ValueError:
        raise InvalidInputError(field_name, message("invalid_percent", lang, label=label)) from None
    if not math.isfinite(percent) or percent <= 0:
        raise InvalidInputError(field_name, message("invalid_percent", lang, label=label))
    return percent


def parse_quality(value: Optional[Number], field_name: str, label: str, lang: Optional[str] = None) -> int:
    text = str(value if value is not None else "").strip()
    digits = text[1:] if text[:1] in "+-" else text
    if not digits.isdecimal():
        raise InvalidInputError(field_name, message("invalid_quality", lang, label=label))
    quality = int(text)
    if not 0 <= quality <= 100:
        raise InvalidInputError(field_name, message("invalid_quality", lang, label=label))
    return quality


def derived_width(base_width: int, percent: float, field_name: str, label: str, lang: Optional[str] = None) -> int:
    width = base_width * percent / 100
    if not math.isfinite(width):
        raise InvalidInputError(field_name, message("invalid_percent", lang, label=label))
    return max(1, round(width))


def custom_variants(
    width: Optional[Number],
    medium_percent: Optional[Number],
    small_percent: Optional[Number],
    quality_small: Optional[Number],
    quality_medium: Optional[Number],
    quality_large: Optional[Number],
    lang: Optional[str] = None,
) -> list[VariantSpec]:
    """
    Variants derived from a base width (the large variant) and two percentages.
    Fields are validated in order; the first invalid one raises InvalidInputError.
    """
    small_name, medium_name, large_name = variant_names(lang)
    base = parse_width(width, lang)
    pm = parse_percent(medium_percent, "medium_percent", medium_name, lang)
    medium_width = derived_width(base, pm, "medium_percent", medium_name, lang)
    ps = parse_percent(small_percent, "small_percent", small_name, lang)
    small_width = derived_width(base, ps, "small_percent", small_name, lang)
    qs = parse_quality(quality_small, "quality_small", small_name, lang)
    qm = parse_quality(quality_medium, "quality_medium", medium_name, lang)
    ql = parse_quality(quality_large, "quality_large", large_name, lang)
    variants = [
        VariantSpec(small_name, small_width, qs),
        VariantSpec(medium_name, medium_width, qm),
        VariantSpec(large_name, base, ql),
    ]
    logger.info("Resolved custom variants: %s", ", ".join(f"{v.name}={v.target_width}/q{v.quality}" for v in variants))
    return variants


def resolve_variants(mode: str = "fixed", config: Optional[dict] = None, lang: Optional[str] = None) -> list[VariantSpec]:
    """mode: fixed | custom. config keys match custom_variants arguments; missing keys are invalid."""
    mode = (mode or "fixed").strip().lower()
    if mode == "fixed":
        return fixed_variants(lang)
    if mode == "custom":
        config = config or {}
        return custom_variants(
            config.get("width"),
            config.get("medium_percent"),
            config.get("small_percent"),
            config.get("quality_small"),
            config.get("quality_medium"),
            config.get("quality_large"),
            lang=lang,
        )
    raise InvalidInputError("mode", message("invalid_mode", lang, mode=mode))
