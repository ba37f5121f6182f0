"""
Export DTOs

Request/response pair for writing prediction, metrics and Markdown reports.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class ExportReportsRequest:
    """
    Request to export reports.

    Attributes:
        output_dir: Directory the report files are written to
        model_filter: Restrict the prediction export to one model (None = all models)
        include_markdown: Also write the Markdown leaderboard report
    """
    output_dir: str
    model_filter: Optional[str] = None
    include_markdown: bool = True

    def __post_init__(self):
        """Validate request parameters"""
        if not self.output_dir:
            raise ValueError("output_dir cannot be empty")


@dataclass
class ExportReportsResponse:
    """
    Response from exporting reports.

    Paths are None for files that were not written. A failed export keeps
    the paths of files written before the failure.
    """
    prediction_path: Optional[str] = None
    metrics_path: Optional[str] = None
    report_path: Optional[str] = None
    prediction_rows: int = 0
    model_count: int = 0
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.error is None

    @property
    def message(self) -> str:
        """User-facing status line."""
        if self.error:
            return f"Export failed: {self.error}"
        return f"Exported {self.prediction_rows} predictions for {self.model_count} models"
