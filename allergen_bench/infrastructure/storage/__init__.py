"""Record store adapters"""
from .jsonl_record_store import JsonlRecordStore
from .in_memory_record_store import InMemoryRecordStore

__all__ = ["JsonlRecordStore", "InMemoryRecordStore"]
