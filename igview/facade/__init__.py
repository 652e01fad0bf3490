from igview.facade.core import parse_export, parse_export_sync
from igview.facade.types import DebugReport, ExportStats, ParseResult

__all__ = [
    "DebugReport",
    "ExportStats",
    "ParseResult",
    "parse_export",
    "parse_export_sync",
]
