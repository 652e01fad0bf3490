from igview.core.diagnostics import Diagnostics
from igview.core.exceptions import (
    EncodingRepairFailure,
    ExtractionError,
    FileNotFound,
    InsufficientDataError,
    ParseFailure,
    SchemaMismatch,
)
from igview.core.types import ExportFile

__all__ = [
    "Diagnostics",
    "EncodingRepairFailure",
    "ExportFile",
    "ExtractionError",
    "FileNotFound",
    "InsufficientDataError",
    "ParseFailure",
    "SchemaMismatch",
]
