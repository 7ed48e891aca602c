"""API routes for folder batch conversion."""
import asyncio
import logging
from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Body, HTTPException, Query

from optimizer.batch import create_batch, get_batch, has_active_batch, run_batch
from optimizer.config import IMAGE_EXTENSIONS, OUTPUT_FOLDER_NAME
from optimizer.conversion.discovery import find_images
from optimizer.conversion.models import InvalidInputError, VariantSpec
from optimizer.conversion.variants import default_custom_config, fixed_variants, resolve_variants
from optimizer.messages import message, resolve_language

logger = logging.getLogger("converter.api")
router = APIRouter(prefix="/api", tags=["converter"])


def _variant_to_dict(v: VariantSpec) -> dict:
    return {"name": v.name, "width": v.target_width, "quality": v.quality}


def _invalid(e: InvalidInputError) -> HTTPException:
    return HTTPException(400, {"field": e.field, "message": e.message})


@router.get("/health")
def health():
    return {"status": "ok"}


@router.get("/formats")
def get_formats():
    return {"image": sorted(IMAGE_EXTENSIONS), "output_image": ["webp"], "output_folder": OUTPUT_FOLDER_NAME}


@router.get("/variants")
def get_variants(lang: Optional[str] = Query(None, description="es | en")):
    """Fixed variant table and the defaults offered for custom variants."""
    return {
        "lang": resolve_language(lang),
        "fixed": [_variant_to_dict(v) for v in fixed_variants(lang)],
        "custom_defaults": default_custom_config(),
    }


@router.post("/variants/resolve")
def resolve_variant_config(
    mode: str = Body("fixed", embed=True),
    config: Optional[dict] = Body(None, embed=True),
    lang: Optional[str] = Query(None),
):
    """Validate a variant configuration and return the resulting variants."""
    try:
        variants = resolve_variants(mode, config, lang)
    except InvalidInputError as e:
        raise _invalid(e)
    return {"variants": [_variant_to_dict(v) for v in variants]}


@router.get("/images")
def list_images(folder: str = Query(...), lang: Optional[str] = Query(None)):
    """Supported images of a folder, in conversion order."""
    try:
        files = find_images(folder, lang)
    except InvalidInputError as e:
        raise _invalid(e)
    out = {"folder": folder, "count": len(files), "files": [p.name for p in files]}
    if not files:
        out["message"] = message("no_images", lang)
    return out


@router.post("/batch")
def start_batch(
    background_tasks: BackgroundTasks,
    folder: str = Body(...),
    mode: str = Body("fixed"),
    config: Optional[dict] = Body(None),
    lang: Optional[str] = Query(None),
):
    """Convert every supported image of folder in the background. Poll /api/batch/{batch_id} for progress."""
    if has_active_batch():
        raise HTTPException(409, message("busy", lang))
    try:
        variants = resolve_variants(mode, config, lang)
        files = find_images(folder, lang)
    except InvalidInputError as e:
        raise _invalid(e)
    if not files:
        return {"batch_id": None, "status": "empty", "total_steps": 0, "message": message("no_images", lang)}

    job = create_batch(folder, variants, len(files) * len(variants), lang=lang)

    async def run_batch_async():
        await asyncio.to_thread(run_batch, job)

    background_tasks.add_task(run_batch_async)
    logger.info("Batch %s queued for %s (%s steps)", job.batch_id, folder, job.total_steps)
    return {
        "batch_id": job.batch_id,
        "status": "processing",
        "total_steps": job.total_steps,
        "variants": [_variant_to_dict(v) for v in variants],
        "message": message("preparing", lang),
    }


@router.get("/batch/{batch_id}")
def batch_status(batch_id: str):
    """Batch status, progress and output file names."""
    job = get_batch(batch_id)
    if not job:
        raise HTTPException(404, "Batch not found")
    return job.snapshot()
