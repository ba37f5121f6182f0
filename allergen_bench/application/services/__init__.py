"""Application services shared by the use cases."""
from .record_writer import RecordWriter, WriteReport

__all__ = ["RecordWriter", "WriteReport"]
