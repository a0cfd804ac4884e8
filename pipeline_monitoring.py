"""
Pipeline Monitoring
===================

Tracks the run state machine and per-stage throughput for a compression run.
"""

import logging
import os
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional

import psutil

logger = logging.getLogger(__name__)


class RunState(Enum):
    """Lifecycle of a single pipeline run"""
    NOT_STARTED = "not_started"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass
class StageMetrics:
    """Metrics for a pipeline stage"""
    stage_name: str
    start_time: float
    end_time: Optional[float] = None
    items_processed: int = 0
    bytes_in: int = 0
    bytes_out: int = 0
    errors: int = 0
    memory_start: int = 0
    memory_peak: int = 0

    @property
    def duration(self) -> float:
        if self.end_time:
            return self.end_time - self.start_time
        return time.time() - self.start_time

    @property
    def throughput_mb_per_sec(self) -> float:
        if self.duration > 0:
            return (self.bytes_in / 1024 / 1024) / self.duration
        return 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'stage': self.stage_name,
            'duration': self.duration,
            'items_processed': self.items_processed,
            'bytes_in': self.bytes_in,
            'bytes_out': self.bytes_out,
            'errors': self.errors,
            'memory_peak_mb': self.memory_peak / 1024 / 1024,
            'throughput_mb_per_sec': self.throughput_mb_per_sec,
        }


class RunMonitor:
    """Records state transitions and stage metrics for one run"""

    _TRANSITIONS = {
        RunState.NOT_STARTED: {RunState.RUNNING},
        RunState.RUNNING: {RunState.COMPLETED, RunState.FAILED},
        RunState.COMPLETED: set(),
        RunState.FAILED: set(),
    }

    def __init__(self):
        self.state = RunState.NOT_STARTED
        self.stages: Dict[str, StageMetrics] = {}
        self.error: Optional[BaseException] = None
        self._process = psutil.Process(os.getpid())
        self._order: List[str] = []

    def _transition(self, new_state: RunState) -> None:
        if new_state not in self._TRANSITIONS[self.state]:
            raise RuntimeError(f"Invalid run state transition: {self.state.value} -> {new_state.value}")
        logger.debug(f"Run state {self.state.value} -> {new_state.value}")
        self.state = new_state

    def start(self) -> None:
        self._transition(RunState.RUNNING)

    def complete(self) -> None:
        self._transition(RunState.COMPLETED)

    def fail(self, error: BaseException) -> None:
        self.error = error
        for metrics in self.stages.values():
            if metrics.end_time is None:
                metrics.errors += 1
                metrics.end_time = time.time()
        self._transition(RunState.FAILED)

    def _memory(self) -> int:
        try:
            return self._process.memory_info().rss
        except psutil.Error:
            return 0

    def start_stage(self, stage_name: str) -> StageMetrics:
        memory = self._memory()
        metrics = StageMetrics(
            stage_name=stage_name,
            start_time=time.time(),
            memory_start=memory,
            memory_peak=memory,
        )
        self.stages[stage_name] = metrics
        self._order.append(stage_name)
        return metrics

    def record_item(self, stage_name: str, bytes_in: int = 0, bytes_out: int = 0,
                    items: int = 1) -> None:
        metrics = self.stages[stage_name]
        metrics.items_processed += items
        metrics.bytes_in += bytes_in
        metrics.bytes_out += bytes_out
        metrics.memory_peak = max(metrics.memory_peak, self._memory())

    def end_stage(self, stage_name: str) -> StageMetrics:
        metrics = self.stages[stage_name]
        metrics.end_time = time.time()
        metrics.memory_peak = max(metrics.memory_peak, self._memory())
        logger.debug(f"Stage {stage_name} finished in {metrics.duration:.3f}s "
                     f"({metrics.items_processed} items)")
        return metrics

    def summary(self) -> Dict[str, Any]:
        return {
            'state': self.state.value,
            'error': str(self.error) if self.error else None,
            'stages': [self.stages[name].to_dict() for name in self._order],
        }
