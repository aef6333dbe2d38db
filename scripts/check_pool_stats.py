"""Smoke-check that the pool statistics report has the expected shape."""

from __future__ import annotations

import argparse
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from numbers import Real
from typing import Any, Sequence

from config import Config
from scripts.runner import run_task
from services.pool_stats import get_detailed_stats

logger = logging.getLogger(__name__)

GROUPS = ("pool", "config", "performance")

NUMERIC_FIELDS = (
    "pool.total_connections",
    "pool.idle_connections",
    "pool.active_connections",
    "pool.overflow",
    "pool.query_errors",
    "pool.query_count",
    "pool.slow_query_count",
    "pool.average_query_time_ms",
    "config.pool_size",
    "config.max_overflow",
    "config.pool_timeout",
    "config.slow_query_threshold_ms",
    "performance.queries_per_second",
    "performance.slow_query_percentage",
    "performance.error_rate",
)


@dataclass
class ShapeCheck:
    checked: int = 0
    failures: list[str] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return not self.failures


def _lookup(data: Mapping, path: str) -> Any:
    value: Any = data
    for part in path.split("."):
        if not isinstance(value, Mapping) or part not in value:
            raise KeyError(path)
        value = value[part]
    return value


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def check_stats_shape(stats: Mapping) -> ShapeCheck:
    """Record every mismatch instead of stopping at the first one."""
    result = ShapeCheck()

    for group in GROUPS:
        result.checked += 1
        if not isinstance(stats.get(group), Mapping):
            result.failures.append(f"{group}: expected a mapping")

    for path in NUMERIC_FIELDS:
        result.checked += 1
        try:
            value = _lookup(stats, path)
        except KeyError:
            result.failures.append(f"{path}: missing")
            continue
        if not _is_number(value):
            result.failures.append(f"{path}: expected a number, got {type(value).__name__}")

    for failure in result.failures:
        logger.warning("Stats shape mismatch: %s", failure)
    return result


def check_pool_stats() -> ShapeCheck:
    return check_stats_shape(get_detailed_stats())


def report(result: ShapeCheck) -> None:
    if result.passed:
        print(f"[OK] All {result.checked} stats checks passed")
        return
    print(f"[WARN] {len(result.failures)} of {result.checked} stats checks failed")
    for failure in result.failures:
        print(f"  - {failure}")


def main(argv: Sequence[str] | None = None, config_class: type[Config] = Config) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.parse_args(argv)
    return run_task(check_pool_stats, report, config_class=config_class)


if __name__ == "__main__":
    raise SystemExit(main())
