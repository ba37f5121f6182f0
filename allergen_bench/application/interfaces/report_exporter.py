"""
Report Exporter Interfaces

Contracts for writing evaluation results to report files.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Sequence

from allergen_bench.domain.value_objects import BenchmarkRecord, Leaderboard, ModelSummary


class IReportExporter(ABC):
    """
    Interface for tabular report exports.

    Implementations raise OSError when a destination cannot be written;
    the export use case turns that into a user-facing message.
    """

    @abstractmethod
    def export_predictions(
        self,
        records: Sequence[BenchmarkRecord],
        output_path: Path,
        model_filter: Optional[str] = None,
    ) -> int:
        """
        Write one row per benchmark record.

        Args:
            records: Normalised records
            output_path: Destination file
            model_filter: Only export this model's records (None = all)

        Returns:
            Number of data rows written
        """
        pass

    @abstractmethod
    def export_metrics(self, summaries: Sequence[ModelSummary], output_path: Path) -> None:
        """Write the safety, quality and efficiency tables for every model."""
        pass


class IReportGenerator(ABC):
    """Interface for human-readable leaderboard reports."""

    @abstractmethod
    def generate(self, leaderboard: Leaderboard, output_path: Path) -> None:
        """Render the leaderboard to output_path."""
        pass
