"""Run one admin task against the store and turn its outcome into an exit code."""

from __future__ import annotations

import logging
import sys
from typing import Callable, TypeVar

from app import create_app
from config import Config
from models import db

logger = logging.getLogger(__name__)

T = TypeVar("T")

EXIT_OK = 0
EXIT_FAILURE = 1


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="[%(asctime)s] %(levelname)s in %(module)s: %(message)s",
    )


def run_task(
    task: Callable[[], T],
    report: Callable[[T], None] | None = None,
    *,
    config_class: type[Config] = Config,
    name: str | None = None,
) -> int:
    """Build the app, run ``task`` inside its context and return an exit code.

    ``report`` prints the task's result. Any exception, including a missing
    or malformed DATABASE_URL, is reported once on stderr and mapped to exit
    code 1. The traceback is only logged at DEBUG. The store handle is
    released on every path.
    """
    label = name or getattr(task, "__name__", "task")
    configure_logging(getattr(config_class, "LOG_LEVEL", "INFO"))

    try:
        app = create_app(config_class)
    except Exception as exc:
        _report_failure(f"{label}: {exc}")
        return EXIT_FAILURE

    with app.app_context():
        try:
            result = task()
            if report is not None:
                report(result)
            return EXIT_OK
        except Exception as exc:
            db.session.rollback()
            _report_failure(f"{label} failed: {exc}")
            return EXIT_FAILURE
        finally:
            db.session.remove()
            db.engine.dispose()


def _report_failure(message: str) -> None:
    print(f"[ERROR] {message}", file=sys.stderr)
    logger.debug("Traceback for: %s", message, exc_info=True)
