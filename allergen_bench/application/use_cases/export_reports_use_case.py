"""
Export Reports Use Case

Writes the prediction CSV, the metrics CSV and the Markdown leaderboard
report from one evaluation pass.
"""

import logging
import time
import uuid
from pathlib import Path
from typing import Optional

from allergen_bench.application.dtos import ExportReportsRequest, ExportReportsResponse
from allergen_bench.application.interfaces import IReportExporter, IReportGenerator
from allergen_bench.logging_utils import StructuredLogger
from allergen_bench.models import ComponentType, EventType
from .evaluate_models_use_case import EvaluateModelsUseCase


class ExportReportsUseCase:
    """
    Use case for exporting evaluation results.

    Error Handling:
    - Write failures (OSError, or text the file encoding cannot hold)
      are returned in response.error; files finished before the failure
      are kept and their paths reported, the partial file is removed
    - Evaluation failures are returned in response.error before any file
      is touched
    """

    def __init__(
        self,
        evaluate_use_case: EvaluateModelsUseCase,
        exporter: IReportExporter,
        report_generator: Optional[IReportGenerator] = None,
    ):
        self._evaluate = evaluate_use_case
        self._exporter = exporter
        self._report_generator = report_generator
        self._logger = StructuredLogger(ComponentType.EXPORTER)

    def execute(self, request: ExportReportsRequest) -> ExportReportsResponse:
        """
        Evaluate the record store and export every report.

        Args:
            request: Output directory and optional model filter

        Returns:
            ExportReportsResponse with the written paths
        """
        trace_id = str(uuid.uuid4())[:8]
        evaluation = self._evaluate.execute()
        if not evaluation.succeeded:
            return ExportReportsResponse(error=evaluation.error)

        response = ExportReportsResponse(model_count=len(evaluation.summaries))
        stamp = int(time.time() * 1000)
        output_dir = Path(request.output_dir)

        in_progress: Optional[Path] = None
        try:
            output_dir.mkdir(parents=True, exist_ok=True)

            in_progress = output_dir / f"prediction_export_{stamp}.csv"
            response.prediction_rows = self._exporter.export_predictions(
                evaluation.records, in_progress, model_filter=request.model_filter
            )
            response.prediction_path = str(in_progress)

            in_progress = output_dir / f"metrics_export_{stamp}.csv"
            self._exporter.export_metrics(evaluation.summaries, in_progress)
            response.metrics_path = str(in_progress)

            if request.include_markdown and self._report_generator is not None:
                in_progress = output_dir / f"LEADERBOARD_{stamp}.md"
                self._report_generator.generate(evaluation.leaderboard, in_progress)
                response.report_path = str(in_progress)
            in_progress = None

        except (OSError, UnicodeError) as e:
            response.error = f"{type(e).__name__}: {str(e)}"
            if in_progress is not None:
                # drop the half-written file, keep the finished ones
                in_progress.unlink(missing_ok=True)
            self._logger.log_event(
                trace_id, EventType.EXPORT_FAILED, response.error,
                metrics={"output_dir": str(output_dir)}, level=logging.ERROR,
            )
            return response

        self._logger.log_event(
            trace_id,
            EventType.EXPORT_COMPLETED,
            {"predictions": response.prediction_path, "metrics": response.metrics_path},
            metrics={"prediction_rows": response.prediction_rows, "models": response.model_count},
        )
        return response
