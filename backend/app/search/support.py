"""
Provider call monitoring: latency, outcome and result counts per image provider.
"""

import time
from dataclasses import dataclass, field
from threading import Lock
from typing import Optional


@dataclass
class ProviderCallMetrics:
    query: str
    provider: str
    start_time: float
    end_time: Optional[float] = None
    success: bool = False
    result_count: int = 0
    failure_reason: Optional[str] = None

    @property
    def duration_seconds(self) -> float:
        return (self.end_time or 0.0) - self.start_time


@dataclass
class ProviderStats:
    total_calls: int = 0
    successful_calls: int = 0
    unavailable_calls: int = 0
    avg_duration_seconds: float = 0.0
    max_duration_seconds: float = 0.0
    total_results: int = 0
    avg_results_per_call: float = 0.0
    last_failure: Optional[str] = None
    by_reason: dict[str, int] = field(default_factory=dict)


class ProviderMonitor:
    def __init__(self, max_metrics: int = 1000):
        self._metrics: list[ProviderCallMetrics] = []
        self._lock = Lock()
        self._max_metrics = max_metrics

    def start_call(self, query: str, provider: str) -> ProviderCallMetrics:
        return ProviderCallMetrics(query=query, provider=provider, start_time=time.time())

    def record_success(self, metric: ProviderCallMetrics, result_count: int):
        metric.end_time = time.time()
        metric.success = True
        metric.result_count = result_count
        self._append(metric)

    def record_unavailable(self, metric: ProviderCallMetrics, reason: str):
        metric.end_time = time.time()
        metric.success = False
        metric.failure_reason = reason
        self._append(metric)

    def _append(self, metric: ProviderCallMetrics):
        with self._lock:
            self._metrics.append(metric)
            if len(self._metrics) > self._max_metrics:
                self._metrics = self._metrics[-self._max_metrics :]

    def get_stats(self, provider: Optional[str] = None) -> ProviderStats:
        with self._lock:
            metrics = self._metrics.copy()
        if provider:
            metrics = [m for m in metrics if m.provider == provider]
        if not metrics:
            return ProviderStats()
        successful = [m for m in metrics if m.success]
        failed = [m for m in metrics if not m.success]
        durations = [m.duration_seconds for m in metrics if m.end_time]
        total_results = sum(m.result_count for m in successful)
        by_reason: dict[str, int] = {}
        for m in failed:
            reason = (m.failure_reason or "unknown").split(":", 1)[0]
            by_reason[reason] = by_reason.get(reason, 0) + 1
        return ProviderStats(
            total_calls=len(metrics),
            successful_calls=len(successful),
            unavailable_calls=len(failed),
            avg_duration_seconds=sum(durations) / len(durations) if durations else 0.0,
            max_duration_seconds=max(durations) if durations else 0.0,
            total_results=total_results,
            avg_results_per_call=total_results / len(successful) if successful else 0.0,
            last_failure=failed[-1].failure_reason if failed else None,
            by_reason=by_reason,
        )


_provider_monitor = ProviderMonitor()


def get_provider_monitor() -> ProviderMonitor:
    return _provider_monitor
