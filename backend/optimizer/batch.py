"""Background batch job state. Kept in process memory; progress is never persisted."""
import logging
import threading
import uuid
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from optimizer.conversion.models import BatchStatus, ConversionProgress, VariantSpec
from optimizer.conversion.service import get_conversion_service
from optimizer.messages import format_percentage, message, status_text

logger = logging.getLogger("converter.batch")


@dataclass
class BatchJob:
    batch_id: str
    folder: str
    variants: list[VariantSpec]
    lang: Optional[str] = None
    status: BatchStatus = BatchStatus.PENDING
    total_steps: int = 0
    progress: Optional[ConversionProgress] = None
    error: Optional[str] = None
    output_folder: Optional[str] = None
    output_files: list[str] = field(default_factory=list)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def publish(self, progress: ConversionProgress) -> None:
        """Progress sink for the worker thread."""
        with self._lock:
            self.progress = progress

    def snapshot(self) -> dict:
        with self._lock:
            progress = self.progress
            status = self.status
            error = self.error
            output_files = list(self.output_files)
        completed = progress.completed_steps if progress else 0
        total = progress.total_steps if progress else self.total_steps
        if status == BatchStatus.COMPLETED:
            text = message("finished", self.lang, folder=Path(self.output_folder or "").name)
        elif status == BatchStatus.FAILED:
            text = message("failed", self.lang)
        elif status == BatchStatus.EMPTY:
            text = message("no_images", self.lang)
        elif progress:
            text = status_text(progress, self.lang)
        else:
            text = message("preparing", self.lang)
        current = ConversionProgress(completed, total, "", "")
        return {
            "batch_id": self.batch_id,
            "folder": self.folder,
            "status": status.value,
            "completed_steps": completed,
            "total_steps": total,
            "percentage": current.percentage,
            "percentage_text": format_percentage(current),
            "current_file": progress.current_file_name if progress else None,
            "current_variant": progress.current_variant if progress else None,
            "status_text": text,
            "error": message("failed_detail", self.lang, error=error) if error else None,
            "output_folder": self.output_folder,
            "output_files": output_files,
        }


_batches: dict[str, BatchJob] = {}
_batches_lock = threading.Lock()


def get_batch(batch_id: str) -> Optional[BatchJob]:
    return _batches.get(batch_id)


def has_active_batch() -> bool:
    with _batches_lock:
        return any(job.status in (BatchStatus.PENDING, BatchStatus.PROCESSING) for job in _batches.values())


def create_batch(folder: str, variants: list[VariantSpec], total_steps: int, lang: Optional[str] = None) -> BatchJob:
    job = BatchJob(
        batch_id=str(uuid.uuid4()),
        folder=folder,
        variants=list(variants),
        lang=lang,
        total_steps=total_steps,
    )
    with _batches_lock:
        _batches[job.batch_id] = job
    return job


def set_batch_completed(job: BatchJob, output_folder: Path, output_paths: list[Path]) -> None:
    with job._lock:
        job.status = BatchStatus.COMPLETED if output_paths else BatchStatus.EMPTY
        job.output_folder = str(output_folder)
        job.output_files = [p.name for p in output_paths]


def set_batch_failed(job: BatchJob, error: str) -> None:
    with job._lock:
        job.status = BatchStatus.FAILED
        job.error = error


def run_batch(job: BatchJob) -> None:
    """Blocking: convert the whole folder. Called in a worker thread; failures are recorded on the job."""
    svc = get_conversion_service()
    with job._lock:
        job.status = BatchStatus.PROCESSING
    try:
        result = svc.run(job.folder, job.variants, on_progress=job.publish, lang=job.lang)
        set_batch_completed(job, result.output_folder, result.output_paths)
        logger.info("Batch %s completed (%s/%s steps)", job.batch_id, result.completed_steps, result.total_steps)
    except Exception as e:
        logger.exception("Batch %s failed: %s", job.batch_id, e)
        set_batch_failed(job, str(e))
