"""Find the images of a folder that can be converted."""
import logging
from pathlib import Path
from typing import Optional, Union

from optimizer.config import IMAGE_EXTENSIONS
from optimizer.conversion.models import InvalidInputError
from optimizer.messages import message

logger = logging.getLogger("converter.discovery")


def is_supported(path: Path) -> bool:
    return path.suffix.lower() in IMAGE_EXTENSIONS


def resolve_folder(folder: Union[str, Path, None], lang: Optional[str] = None) -> Path:
    """Return folder as a Path; raise InvalidInputError if it is blank or not a directory."""
    if folder is None or not str(folder).strip():
        raise InvalidInputError("folder", message("invalid_folder", lang))
    path = Path(str(folder).strip()).expanduser()
    if not path.is_dir():
        raise InvalidInputError("folder", message("invalid_folder", lang))
    return path


def find_images(folder: Union[str, Path], lang: Optional[str] = None) -> list[Path]:
    """
    Top-level files of folder with a supported extension, sorted by path.
    Subdirectories are not searched. An empty list means nothing to convert.
    """
    path = resolve_folder(folder, lang)
    files = sorted((p for p in path.iterdir() if p.is_file() and is_supported(p)), key=str)
    logger.debug("Found %s supported images in %s", len(files), path)
    return files
