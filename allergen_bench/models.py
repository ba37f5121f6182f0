from pydantic import BaseModel, Field
from typing import Optional, Dict, Any
from enum import Enum
import time


class ComponentType(str, Enum):
    ORCHESTRATOR = "BenchmarkOrchestrator"
    EVALUATOR = "ModelEvaluator"
    EXPORTER = "ReportExporter"
    RECORD_WRITER = "RecordWriter"
    INFERENCE = "InferenceEngine"


class EventType(str, Enum):
    RUN_STARTED = "Run_Started"
    ITEM_COMPLETED = "Item_Completed"
    ITEM_FAILED = "Item_Failed"
    RUN_COMPLETED = "Run_Completed"
    RUN_CANCELLED = "Run_Cancelled"
    RUN_FAILED = "Run_Failed"
    WRITE_FAILED = "Write_Failed"
    OBSERVER_FAILED = "Observer_Failed"
    EVALUATION_COMPLETED = "Evaluation_Completed"
    EVALUATION_FAILED = "Evaluation_Failed"
    EXPORT_COMPLETED = "Export_Completed"
    EXPORT_FAILED = "Export_Failed"


class LogEntry(BaseModel):
    trace_id: str
    timestamp: float = Field(default_factory=time.time)
    component: ComponentType
    event_type: EventType
    payload_hash: Optional[str] = None
    metrics: Dict[str, Any] = Field(default_factory=dict)
    message: Optional[str] = None
