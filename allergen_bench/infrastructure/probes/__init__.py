"""Memory probe adapters"""
from .psutil_memory_probe import PsutilMemoryProbe

__all__ = ["PsutilMemoryProbe"]
