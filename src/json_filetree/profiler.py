"""Performance profiler for conversion operations."""

import json
import time
import psutil
import logging
from typing import Dict, Any, Optional, List
from dataclasses import dataclass, field
from contextlib import contextmanager


@dataclass
class PerformanceMetrics:
    """Performance metrics for one conversion operation."""
    operation_name: str
    start_time: float
    end_time: float
    duration: float
    input_size: int
    output_size: int
    memory_peak_mb: float
    memory_start_mb: float
    memory_end_mb: float
    cpu_percent: float
    throughput_mbps: float
    items_created: int


@dataclass
class ProfileSession:
    """State of one in-flight profiled operation."""
    operation_name: str
    input_size: int
    start_time: float
    start_memory: float
    peak_memory: float
    cpu_samples: List[float] = field(default_factory=list)
    output_size: int = 0
    items_created: int = 0

    def record_output(self, output_size: int = 0, items_created: int = 0) -> None:
        """Record what the operation produced."""
        self.output_size = output_size
        self.items_created = items_created


class PerformanceProfiler:
    """
    Performance profiler for conversion operations.

    Each profiled operation gets its own session, so overlapping
    operations do not share state. Finished metrics are kept in
    ``metrics_history``.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the performance profiler.

        Args:
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)
        self.metrics_history: List[PerformanceMetrics] = []

    @contextmanager
    def profile_operation(self, operation_name: str, input_size: int = 0):
        """
        Context manager for profiling operations.

        Args:
            operation_name: Name of the operation being profiled
            input_size: Size of input data in bytes

        Yields:
            ProfileSession for sampling and recording output
        """
        session = self.start_profiling(operation_name, input_size)
        try:
            yield session
        finally:
            self.stop_profiling(session)

    def start_profiling(self, operation_name: str, input_size: int = 0) -> ProfileSession:
        """
        Start profiling an operation.

        Args:
            operation_name: Name of the operation
            input_size: Size of input data in bytes

        Returns:
            New ProfileSession
        """
        start_memory = self._current_memory_mb()
        session = ProfileSession(
            operation_name=operation_name,
            input_size=input_size,
            start_time=time.time(),
            start_memory=start_memory,
            peak_memory=start_memory
        )
        self.logger.debug(f"Started profiling: {operation_name}")
        return session

    def sample_performance(self, session: ProfileSession) -> None:
        """Sample current memory and CPU usage into a session."""
        try:
            process = psutil.Process()
            current_memory = process.memory_info().rss / 1024 / 1024  # MB
            cpu_percent = process.cpu_percent()
        except psutil.Error as e:
            self.logger.warning(f"Performance sampling failed: {e}")
            return

        session.peak_memory = max(session.peak_memory, current_memory)
        session.cpu_samples.append(cpu_percent)

    def stop_profiling(self, session: ProfileSession) -> PerformanceMetrics:
        """
        Finish a session and return its metrics.

        Args:
            session: Session returned by start_profiling

        Returns:
            PerformanceMetrics object with collected data
        """
        end_time = time.time()
        duration = end_time - session.start_time
        end_memory = self._current_memory_mb(default=session.start_memory)
        peak_memory = max(session.peak_memory, end_memory)
        avg_cpu = sum(session.cpu_samples) / len(session.cpu_samples) if session.cpu_samples else 0

        throughput = (session.input_size / 1024 / 1024) / duration if duration > 0 else 0  # MB/s

        metrics = PerformanceMetrics(
            operation_name=session.operation_name,
            start_time=session.start_time,
            end_time=end_time,
            duration=duration,
            input_size=session.input_size,
            output_size=session.output_size,
            memory_peak_mb=peak_memory,
            memory_start_mb=session.start_memory,
            memory_end_mb=end_memory,
            cpu_percent=avg_cpu,
            throughput_mbps=throughput,
            items_created=session.items_created
        )

        self.metrics_history.append(metrics)

        self.logger.info(f"Performance Summary - {session.operation_name}: "
                         f"{duration:.3f}s, {throughput:.2f} MB/s, "
                         f"peak {peak_memory:.1f} MB, {session.items_created} items")

        return metrics

    def get_performance_summary(self) -> Dict[str, Any]:
        """
        Get summary of all performance metrics.

        Returns:
            Dictionary with performance summary
        """
        if not self.metrics_history:
            return {"total_operations": 0}

        count = len(self.metrics_history)
        total_input = sum(m.input_size for m in self.metrics_history)
        total_output = sum(m.output_size for m in self.metrics_history)

        return {
            "total_operations": count,
            "total_duration": sum(m.duration for m in self.metrics_history),
            "total_input_mb": total_input / 1024 / 1024,
            "total_output_mb": total_output / 1024 / 1024,
            "total_items_created": sum(m.items_created for m in self.metrics_history),
            "average_throughput_mbps": sum(m.throughput_mbps for m in self.metrics_history) / count,
            "average_memory_peak_mb": sum(m.memory_peak_mb for m in self.metrics_history) / count,
            "average_cpu_percent": sum(m.cpu_percent for m in self.metrics_history) / count,
            "operations": [
                {
                    "name": m.operation_name,
                    "duration": m.duration,
                    "throughput": m.throughput_mbps,
                    "memory_peak": m.memory_peak_mb,
                    "items": m.items_created
                }
                for m in self.metrics_history
            ]
        }

    def export_metrics(self, format: str = "json") -> str:
        """
        Export performance metrics in specified format.

        Args:
            format: Export format ("json", "csv")

        Returns:
            Formatted metrics string
        """
        if format == "json":
            return json.dumps([
                {
                    "operation": m.operation_name,
                    "duration": m.duration,
                    "input_size": m.input_size,
                    "output_size": m.output_size,
                    "memory_peak_mb": m.memory_peak_mb,
                    "throughput_mbps": m.throughput_mbps,
                    "items_created": m.items_created
                }
                for m in self.metrics_history
            ], indent=2)

        elif format == "csv":
            lines = ["operation,duration,input_size,output_size,memory_peak_mb,throughput_mbps,items_created"]
            for m in self.metrics_history:
                lines.append(f"{m.operation_name},{m.duration},{m.input_size},{m.output_size},"
                             f"{m.memory_peak_mb},{m.throughput_mbps},{m.items_created}")
            return "\n".join(lines)

        else:
            raise ValueError(f"Unsupported export format: {format}")

    def _current_memory_mb(self, default: float = 0.0) -> float:
        try:
            return psutil.Process().memory_info().rss / 1024 / 1024
        except psutil.Error as e:
            self.logger.warning(f"Memory sampling failed: {e}")
            return default
