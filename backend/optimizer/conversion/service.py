"""Batch WebP variant conversion with progress reporting."""
import logging
from pathlib import Path
from typing import Optional, Union

from PIL import Image

from optimizer.config import OUTPUT_FOLDER_NAME, WEBP_ENCODING, WEBP_ENCODINGS, WEBP_METHOD
from optimizer.conversion.discovery import find_images, resolve_folder
from optimizer.conversion.models import BatchResult, ConversionProgress, ProcessingError, ProgressCallback, VariantSpec
from optimizer.conversion.resize import prepare_for_webp, resize_for_variant

logger = logging.getLogger("converter.service")


def output_file_name(src: Path, variant: VariantSpec) -> str:
    return f"{src.stem}_{variant.name}.webp"


class ConversionService:
    """Converts every image of a folder into one WebP file per variant, sequentially."""

    def __init__(
        self,
        output_folder_name: str = OUTPUT_FOLDER_NAME,
        encoding: str = WEBP_ENCODING,
        method: int = WEBP_METHOD,
    ):
        encoding = (encoding or "lossy").lower()
        if encoding not in WEBP_ENCODINGS:
            logger.warning("Unknown WebP encoding %s, using lossy", encoding)
            encoding = "lossy"
        self.output_folder_name = output_folder_name
        self.encoding = encoding
        self.method = max(0, min(6, method))

    def output_folder_for(self, folder: Path) -> Path:
        return folder / self.output_folder_name

    def _save_kwargs(self, variant: VariantSpec) -> dict:
        save_kw = {"format": "WEBP", "quality": variant.quality, "method": self.method}
        if self.encoding == "lossless":
            save_kw["lossless"] = True
        return save_kw

    def _convert_image(
        self,
        src: Path,
        variants: list[VariantSpec],
        output_folder: Path,
        step: int,
        total: int,
        on_progress: Optional[ProgressCallback],
    ) -> list[Path]:
        outputs: list[Path] = []
        with Image.open(src) as img:
            img.load()
            base_img = prepare_for_webp(img)
            try:
                for variant in variants:
                    out_path = output_folder / output_file_name(src, variant)
                    try:
                        with resize_for_variant(base_img, variant.target_width) as work:
                            work.save(str(out_path), **self._save_kwargs(variant))
                            logger.info("Converted %s -> %s (%sx%s)", src.name, out_path.name, work.width, work.height)
                    except Exception as e:
                        logger.exception("Variant %s failed for %s: %s", variant.name, src, e)
                        raise ProcessingError(str(e), file_name=src.name, variant=variant.name) from e
                    outputs.append(out_path)
                    step += 1
                    if on_progress:
                        on_progress(ConversionProgress(step, total, src.name, variant.name))
            finally:
                if base_img is not img:
                    base_img.close()
        return outputs

    def process_images(
        self,
        folder: Path,
        files: list[Path],
        variants: list[VariantSpec],
        on_progress: Optional[ProgressCallback] = None,
    ) -> list[Path]:
        """
        Decode each file once and write one WebP per variant into the output folder.
        The first failure aborts the remaining batch; files already written are kept.
        """
        output_folder = self.output_folder_for(folder)
        try:
            output_folder.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.exception("Could not create output folder %s: %s", output_folder, e)
            raise ProcessingError(str(e)) from e
        total = len(files) * len(variants)
        outputs: list[Path] = []
        for src in files:
            try:
                outputs.extend(
                    self._convert_image(src, variants, output_folder, len(outputs), total, on_progress)
                )
            except ProcessingError:
                raise
            except Exception as e:
                logger.exception("Image conversion failed for %s: %s", src, e)
                raise ProcessingError(str(e), file_name=src.name) from e
        return outputs

    def run(
        self,
        folder: Union[str, Path],
        variants: list[VariantSpec],
        on_progress: Optional[ProgressCallback] = None,
        lang: Optional[str] = None,
    ) -> BatchResult:
        """Convert a whole folder. An empty result (no supported images) has no side effects."""
        source = resolve_folder(folder, lang)
        files = find_images(source, lang)
        result = BatchResult(
            source_folder=source,
            output_folder=self.output_folder_for(source),
            files=files,
            total_steps=len(files) * len(variants),
        )
        if result.is_empty:
            logger.info("No supported images in %s", source)
            return result

        def track(progress: ConversionProgress) -> None:
            result.completed_steps = progress.completed_steps
            if on_progress:
                on_progress(progress)

        logger.info("Converting %s images x %s variants from %s", len(files), len(variants), source)
        result.output_paths = self.process_images(source, files, variants, track)
        logger.info("Batch finished: %s files written to %s", len(result.output_paths), result.output_folder)
        return result


# Singleton
_conversion_service: Optional[ConversionService] = None


def get_conversion_service() -> ConversionService:
    global _conversion_service
    if _conversion_service is None:
        _conversion_service = ConversionService()
    return _conversion_service
