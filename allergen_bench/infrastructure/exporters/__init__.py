"""Report export adapters"""
from .csv_report_exporter import CsvReportExporter, prediction_outcome
from .markdown_report_generator import MarkdownReportGenerator

__all__ = ["CsvReportExporter", "MarkdownReportGenerator", "prediction_outcome"]
