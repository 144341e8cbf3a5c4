from dupscan.report.render import render_console, render_csv, render_report
from dupscan.report.types import OutputFormat

__all__ = [
    "OutputFormat",
    "render_console",
    "render_csv",
    "render_report",
]
