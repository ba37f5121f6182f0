"""Interfaces - Callback and output contracts for use cases"""
from .progress_observer import IProgressObserver
from .report_exporter import IReportExporter, IReportGenerator

__all__ = ["IProgressObserver", "IReportExporter", "IReportGenerator"]
