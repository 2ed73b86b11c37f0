from .base import FarmRepository, LotRepository, ActivityRepository, TraceabilityRepository
from .sql import SqlTraceabilityRepository
from .memory import InMemoryTraceabilityRepository

__all__ = [
    "FarmRepository",
    "LotRepository",
    "ActivityRepository",
    "TraceabilityRepository",
    "SqlTraceabilityRepository",
    "InMemoryTraceabilityRepository",
]
