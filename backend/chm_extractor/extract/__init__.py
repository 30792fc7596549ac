"""Class-definition extraction from CHM buffers."""

from .pipeline import ExtractionPipeline, extract_class_records, extract_from_text
from .signature import validate_signature
from .types import ClassRecord, Invalid, Valid, ValidationResult

__all__ = [
    "ExtractionPipeline",
    "extract_class_records",
    "extract_from_text",
    "validate_signature",
    "ClassRecord",
    "Invalid",
    "Valid",
    "ValidationResult",
]
