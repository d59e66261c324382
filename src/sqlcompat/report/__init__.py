from .builder import (
    CompatibilityReport,
    EntryStatus,
    ExitStatus,
    ReportBuilder,
    ReportEntry,
    build_report,
    render_matrix,
)

__all__ = [
    "CompatibilityReport",
    "EntryStatus",
    "ExitStatus",
    "ReportBuilder",
    "ReportEntry",
    "build_report",
    "render_matrix",
]
