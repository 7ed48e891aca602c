from .models import BatchResult, ConversionProgress, InvalidInputError, ProcessingError, VariantSpec

__all__ = ["BatchResult", "ConversionProgress", "InvalidInputError", "ProcessingError", "VariantSpec"]
