"""Command-line entry point: convert a folder in the foreground and print progress."""
import argparse
import sys
from typing import Optional

from optimizer.config import WEBP_ENCODING, WEBP_ENCODINGS
from optimizer.conversion.discovery import find_images
from optimizer.conversion.models import ConversionProgress, InvalidInputError, ProcessingError
from optimizer.conversion.service import ConversionService
from optimizer.conversion.variants import default_custom_config, resolve_variants
from optimizer.messages import format_percentage, message, status_text

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_INVALID = 2

CUSTOM_FIELDS = ("width", "medium_percent", "small_percent", "quality_small", "quality_medium", "quality_large")


def build_parser() -> argparse.ArgumentParser:
    defaults = default_custom_config()
    parser = argparse.ArgumentParser(
        prog="image-optimizer",
        description="Convert the images of a folder into small, medium and large WebP variants.",
    )
    parser.add_argument("folder", help="folder with the source images")
    parser.add_argument("--lang", choices=["es", "en"], default=None, help="variant names and messages")
    parser.add_argument("--encoding", choices=list(WEBP_ENCODINGS), default=WEBP_ENCODING)
    custom = parser.add_argument_group(
        "custom variants",
        "Passing any of these switches to custom mode; all six are then required.",
    )
    custom.add_argument("--width", help=f"large variant width in px (e.g. {defaults['width']})")
    custom.add_argument("--medium-percent", help=f"medium width as %% of --width (e.g. {defaults['medium_percent']})")
    custom.add_argument("--small-percent", help=f"small width as %% of --width (e.g. {defaults['small_percent']})")
    custom.add_argument("--quality-small", help="0-100")
    custom.add_argument("--quality-medium", help="0-100")
    custom.add_argument("--quality-large", help="0-100")
    return parser


def _print_progress(lang: Optional[str]):
    def on_progress(progress: ConversionProgress) -> None:
        print(f"[{format_percentage(progress):>4}] {status_text(progress, lang)}", flush=True)
    return on_progress


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    lang = args.lang
    config = {name: getattr(args, name) for name in CUSTOM_FIELDS}
    mode = "custom" if any(v is not None for v in config.values()) else "fixed"

    try:
        variants = resolve_variants(mode, config, lang)
        if not find_images(args.folder, lang):
            print(message("no_images", lang))
            return EXIT_OK
        svc = ConversionService(encoding=args.encoding)
        print(message("preparing", lang), flush=True)
        result = svc.run(args.folder, variants, on_progress=_print_progress(lang), lang=lang)
    except InvalidInputError as e:
        print(e.message, file=sys.stderr)
        return EXIT_INVALID
    except ProcessingError as e:
        print(message("failed_detail", lang, error=e.message), file=sys.stderr)
        return EXIT_FAILED

    if result.is_empty:
        print(message("no_images", lang))
        return EXIT_OK
    print(message("finished", lang, folder=result.output_folder.name))
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
