"""User-facing status and error strings (es/en) and progress rendering."""
from typing import Optional

from optimizer.config import VARIANT_LANGUAGE
from optimizer.conversion.models import ConversionProgress

MESSAGES = {
    "es": {
        "invalid_folder": "Selecciona una carpeta de origen válida.",
        "no_images": "La carpeta seleccionada no contiene imágenes compatibles.",
        "preparing": "Preparando conversión...",
        "converting": "Convirtiendo {file} ({variant})",
        "finished": "Conversión finalizada. Encontrarás los archivos en la carpeta '{folder}'.",
        "failed": "Ocurrió un error durante la conversión.",
        "failed_detail": "Ocurrió un error al convertir las imágenes: {error}",
        "busy": "Ya hay una conversión en curso.",
        "invalid_width": "El ancho debe ser un número entero mayor que cero.",
        "invalid_percent": "El porcentaje {label} debe ser un número mayor que cero.",
        "invalid_quality": "La calidad {label} debe ser un número entero entre 0 y 100.",
        "invalid_mode": "Modo de variantes desconocido: {mode}.",
    },
    "en": {
        "invalid_folder": "Select a valid source folder.",
        "no_images": "The selected folder contains no supported images.",
        "preparing": "Preparing conversion...",
        "converting": "Converting {file} ({variant})",
        "finished": "Conversion finished. Output files are in the '{folder}' folder.",
        "failed": "An error occurred during conversion.",
        "failed_detail": "An error occurred while converting the images: {error}",
        "busy": "A conversion is already running.",
        "invalid_width": "Width must be a whole number greater than zero.",
        "invalid_percent": "The {label} percentage must be a number greater than zero.",
        "invalid_quality": "The {label} quality must be a whole number between 0 and 100.",
        "invalid_mode": "Unknown variant mode: {mode}.",
    },
}


def resolve_language(lang: Optional[str] = None) -> str:
    lang = (lang or VARIANT_LANGUAGE or "es").strip().lower()
    return lang if lang in MESSAGES else "es"


def message(key: str, lang: Optional[str] = None, **kwargs) -> str:
    text = MESSAGES[resolve_language(lang)][key]
    return text.format(**kwargs) if kwargs else text


def format_percentage(progress: ConversionProgress) -> str:
    return f"{progress.percentage:.0f}%"


def status_text(progress: ConversionProgress, lang: Optional[str] = None) -> str:
    return message("converting", lang, file=progress.current_file_name, variant=progress.current_variant)
