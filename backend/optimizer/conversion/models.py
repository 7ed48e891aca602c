"""Conversion data models and errors."""
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable


class BatchStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"
    EMPTY = "empty"


@dataclass(frozen=True)
class VariantSpec:
    """Named output size: images wider than target_width are scaled down to it."""
    name: str
    target_width: int
    quality: int


@dataclass(frozen=True)
class ConversionProgress:
    completed_steps: int
    total_steps: int
    current_file_name: str
    current_variant: str

    @property
    def percentage(self) -> float:
        if self.total_steps == 0:
            return 0.0
        return self.completed_steps / self.total_steps * 100.0


ProgressCallback = Callable[[ConversionProgress], None]


@dataclass
class BatchResult:
    source_folder: Path
    output_folder: Path
    files: list[Path] = field(default_factory=list)
    total_steps: int = 0
    completed_steps: int = 0
    output_paths: list[Path] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.files


class InvalidInputError(ValueError):
    """Rejected folder or configuration field, raised before any processing."""

    def __init__(self, field_name: str, message: str):
        super().__init__(message)
        self.field = field_name
        self.message = message


class ProcessingError(RuntimeError):
    """Decode, resize or encode failure that aborted a batch."""

    def __init__(self, message: str, file_name: str = "", variant: str = ""):
        super().__init__(message)
        self.message = message
        self.file_name = file_name
        self.variant = variant
