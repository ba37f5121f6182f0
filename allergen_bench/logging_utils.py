import logging
import json
import os
import time
import hashlib
from typing import Any, Dict, Optional
from pythonjsonlogger.json import JsonFormatter
from .models import LogEntry, ComponentType, EventType

LOG_LEVEL = os.getenv("ALLERGEN_BENCH_LOG_LEVEL", "INFO").upper()


class BenchJSONFormatter(JsonFormatter):
    def add_fields(self, log_record, record, message_dict):
        super().add_fields(log_record, record, message_dict)
        if not log_record.get('timestamp'):
            log_record['timestamp'] = time.time()
        if log_record.get('level'):
            log_record['level'] = log_record['level'].upper()
        else:
            log_record['level'] = record.levelname


def get_logger(name: str) -> logging.Logger:
    logger = logging.getLogger(name)
    # get_logger is called once per StructuredLogger; avoid stacking handlers
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = BenchJSONFormatter('%(timestamp)s %(level)s %(name)s %(message)s')
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    logger.setLevel(LOG_LEVEL)
    logger.propagate = False
    return logger


class StructuredLogger:
    def __init__(self, component: ComponentType):
        self.logger = get_logger(component.value)
        self.component = component

    def hash_payload(self, payload: Any) -> str:
        """Create a hash of the payload for audit."""
        dumped = json.dumps(payload, sort_keys=True, default=str)
        return hashlib.md5(dumped.encode()).hexdigest()[:16]

    def log_event(self,
                  trace_id: str,
                  event_type: EventType,
                  payload: Any,
                  metrics: Optional[Dict[str, Any]] = None,
                  level: int = logging.INFO):

        entry = LogEntry(
            trace_id=trace_id,
            component=self.component,
            event_type=event_type,
            payload_hash=self.hash_payload(payload),
            metrics=metrics or {},
            message=str(payload)[:200]  # snippet for debugging
        )

        self.logger.log(level, json.dumps(entry.model_dump(mode="json"), default=str))
