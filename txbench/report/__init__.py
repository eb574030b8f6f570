from .render import default_csv_name, render_rows, write_csv
from .summary import AssetRow, AssetSummary, Report, ReportSection, summarize

__all__ = [
    "default_csv_name",
    "render_rows",
    "write_csv",
    "AssetRow",
    "AssetSummary",
    "Report",
    "ReportSection",
    "summarize",
]
