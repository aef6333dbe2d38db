"""Connection pool and query statistics for diagnostics.

Query timings are collected through SQLAlchemy engine events and combined
with the pool's own counters into one nested report with ``pool``,
``config`` and ``performance`` groupings.
"""

from __future__ import annotations

import logging
import time
from typing import Any

from flask import current_app
from sqlalchemy import event
from sqlalchemy.engine import Engine

from models import db

logger = logging.getLogger(__name__)


class QueryMetrics:
    """Running counters for statements executed on one engine."""

    def __init__(self, slow_query_threshold_ms: float = 1000) -> None:
        self.slow_query_threshold_ms = float(slow_query_threshold_ms)
        self.started_at = time.monotonic()
        self.query_count = 0
        self.slow_query_count = 0
        self.query_error_count = 0
        self.average_query_time_ms = 0.0

    def record(self, duration_ms: float) -> None:
        self.query_count += 1
        # Running average
        self.average_query_time_ms += (
            duration_ms - self.average_query_time_ms
        ) / self.query_count
        if duration_ms > self.slow_query_threshold_ms:
            self.slow_query_count += 1
            logger.warning("Slow query took %.1f ms", duration_ms)

    def record_error(self) -> None:
        self.query_error_count += 1

    @property
    def uptime_seconds(self) -> float:
        return max(time.monotonic() - self.started_at, 1e-9)


def install_query_metrics(engine: Engine, slow_query_threshold_ms: float = 1000) -> QueryMetrics:
    """Attach timing listeners to ``engine`` and return the metrics they update."""
    metrics = QueryMetrics(slow_query_threshold_ms)

    @event.listens_for(engine, "before_cursor_execute")
    def _before_cursor_execute(conn, cursor, statement, parameters, context, executemany):
        conn.info.setdefault("query_start_time", []).append(time.perf_counter())

    @event.listens_for(engine, "after_cursor_execute")
    def _after_cursor_execute(conn, cursor, statement, parameters, context, executemany):
        starts = conn.info.get("query_start_time")
        if not starts:
            return
        metrics.record((time.perf_counter() - starts.pop()) * 1000)

    @event.listens_for(engine, "handle_error")
    def _handle_error(exception_context):
        conn = exception_context.connection
        if conn is not None and conn.info.get("query_start_time"):
            conn.info["query_start_time"].pop()
        metrics.record_error()

    return metrics


def _pool_counter(pool: Any, name: str) -> int:
    # QueuePool exposes these as methods; StaticPool and friends lack them.
    value = getattr(pool, name, None)
    if callable(value):
        value = value()
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return 0


def get_pool_stats(engine: Engine, metrics: QueryMetrics) -> dict:
    pool = engine.pool
    checked_out = _pool_counter(pool, "checkedout")
    checked_in = _pool_counter(pool, "checkedin")
    return {
        "total_connections": checked_out + checked_in,
        "idle_connections": checked_in,
        "active_connections": checked_out,
        "overflow": _pool_counter(pool, "overflow"),
        "query_errors": metrics.query_error_count,
        "query_count": metrics.query_count,
        "slow_query_count": metrics.slow_query_count,
        "average_query_time_ms": metrics.average_query_time_ms,
    }


def get_detailed_stats(engine: Engine | None = None, metrics: QueryMetrics | None = None) -> dict:
    """Return pool counters, pool configuration and derived performance ratios."""
    if engine is None:
        engine = db.engine
    if metrics is None:
        metrics = current_app.extensions["query_metrics"]

    pool_stats = get_pool_stats(engine, metrics)
    pool = engine.pool
    query_count = pool_stats["query_count"]

    return {
        "pool": pool_stats,
        "config": {
            "pool_class": type(pool).__name__,
            "pool_size": _pool_counter(pool, "size"),
            "max_overflow": _pool_counter(pool, "_max_overflow"),
            "pool_timeout": float(getattr(pool, "_timeout", 0) or 0),
            "slow_query_threshold_ms": metrics.slow_query_threshold_ms,
        },
        "performance": {
            "queries_per_second": query_count / metrics.uptime_seconds,
            "slow_query_percentage": (
                pool_stats["slow_query_count"] / query_count * 100 if query_count else 0.0
            ),
            "error_rate": (
                pool_stats["query_errors"] / query_count * 100 if query_count else 0.0
            ),
        },
    }
