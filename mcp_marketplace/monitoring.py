"""
Request monitoring and health indicators for the marketplace server.
"""

from __future__ import annotations

import functools
import logging
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, TypeVar

import psutil

from .store import MarketStore

logger = logging.getLogger("mcp_marketplace.monitoring")

F = TypeVar("F", bound=Callable[..., Awaitable[Any]])


class HealthStatus(Enum):
    """Health status levels."""

    HEALTHY = "healthy"
    DEGRADED = "degraded"
    UNHEALTHY = "unhealthy"


@dataclass
class HealthCheck:
    """Individual health check result."""

    name: str
    status: HealthStatus
    message: str
    details: dict[str, Any] = field(default_factory=dict)


class PerformanceMonitor:
    """Tracks tool request durations and outcomes."""

    def __init__(self, max_history_size: int = 100) -> None:
        self.start_time = time.time()
        self.request_times: list[float] = []
        self.total_requests = 0
        self.failed_requests = 0
        self.max_history_size = max_history_size

    def record_request(self, duration: float, success: bool) -> None:
        self.total_requests += 1
        if not success:
            self.failed_requests += 1
        self.request_times.append(duration)
        if len(self.request_times) > self.max_history_size:
            self.request_times = self.request_times[-self.max_history_size :]

    def reset(self) -> None:
        self.start_time = time.time()
        self.request_times.clear()
        self.total_requests = 0
        self.failed_requests = 0

    def check_memory_health(self) -> HealthCheck:
        memory_info = psutil.virtual_memory()
        process_memory_mb = psutil.Process().memory_info().rss / 1024 / 1024

        if memory_info.percent > 90.0:
            status = HealthStatus.UNHEALTHY
            message = f"High system memory usage: {memory_info.percent:.1f}%"
        elif process_memory_mb > 500.0:
            status = HealthStatus.DEGRADED
            message = f"High process memory usage: {process_memory_mb:.1f}MB"
        else:
            status = HealthStatus.HEALTHY
            message = "Memory usage is normal"

        return HealthCheck(
            name="memory",
            status=status,
            message=message,
            details={
                "system_memory_percent": memory_info.percent,
                "process_memory_mb": process_memory_mb,
            },
        )

    def check_response_time_health(self) -> HealthCheck:
        if not self.request_times:
            return HealthCheck("response_time", HealthStatus.HEALTHY, "No requests to analyze")

        average = sum(self.request_times) / len(self.request_times)
        slowest = max(self.request_times)
        # Searches are in-memory; anything near a second is suspicious
        if slowest > 5.0:
            status, message = HealthStatus.UNHEALTHY, f"Very slow request detected (max: {slowest:.2f}s)"
        elif average > 1.0:
            status, message = HealthStatus.DEGRADED, f"Slow average response time: {average:.2f}s"
        else:
            status, message = HealthStatus.HEALTHY, "Response times are normal"

        return HealthCheck(
            name="response_time",
            status=status,
            message=message,
            details={"average_response_time": average, "max_response_time": slowest},
        )

    @staticmethod
    def check_store_health(store: MarketStore | None) -> HealthCheck:
        if store is None:
            return HealthCheck("store", HealthStatus.UNHEALTHY, "Store not initialized")
        snapshot = store.snapshot()
        return HealthCheck(
            name="store",
            status=HealthStatus.HEALTHY,
            message="Store is readable",
            details={
                "vendors": len(snapshot.vendors),
                "products": len(snapshot.products),
                "reviews": len(snapshot.reviews),
                "persistent": store.path is not None,
            },
        )

    def get_health_status(self, store: MarketStore | None) -> dict[str, Any]:
        """Get comprehensive health status."""
        checks = [
            self.check_store_health(store),
            self.check_memory_health(),
            self.check_response_time_health(),
        ]

        overall = HealthStatus.HEALTHY
        for check in checks:
            if check.status == HealthStatus.UNHEALTHY:
                overall = HealthStatus.UNHEALTHY
            elif check.status == HealthStatus.DEGRADED and overall == HealthStatus.HEALTHY:
                overall = HealthStatus.DEGRADED

        if overall != HealthStatus.HEALTHY:
            logger.warning("Health status %s", overall.value)

        return {
            "status": overall.value,
            "timestamp": time.time(),
            "uptime_seconds": time.time() - self.start_time,
            "requests": {
                "total": self.total_requests,
                "failed": self.failed_requests,
            },
            "checks": {
                check.name: {
                    "status": check.status.value,
                    "message": check.message,
                    "details": check.details,
                }
                for check in checks
            },
        }


# Global performance monitor instance
performance_monitor = PerformanceMonitor()


def monitor_request(func: F) -> F:
    """Decorator recording duration and outcome of an async tool call."""

    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        start_time = time.perf_counter()
        success = False
        try:
            result = await func(*args, **kwargs)
            success = True
            return result
        finally:
            performance_monitor.record_request(time.perf_counter() - start_time, success)

    return wrapper  # type: ignore[return-value]
