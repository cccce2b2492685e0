"""Context manager for capturing local-search run telemetry."""

from __future__ import annotations

import time
from contextlib import AbstractContextManager
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Mapping
from uuid import uuid4

from .jsonl import append_jsonl

SCHEMA_VERSION = "1.0"


def _iso_now() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds")


@dataclass(slots=True)
class RunTelemetryLogger(AbstractContextManager["RunTelemetryLogger"]):
    """Append one run record (and optional per-step records) for a solver run.

    ``log_path`` receives the run record when the run is finalized or the context
    exits. Step records land in ``<log_path dir>/steps/<run_id>.jsonl`` every
    ``step_interval`` iterations; ``None`` or ``<= 0`` disables them.
    """

    log_path: Path
    solver: str
    network: str | None = None
    seed: int | None = None
    config: Mapping[str, Any] | None = None
    context: Mapping[str, Any] | None = None
    step_interval: int | None = 100
    run_id: str = field(default_factory=lambda: uuid4().hex, init=False)
    _started: float | None = field(default=None, init=False)
    _closed: bool = field(default=False, init=False)
    _steps_path: Path | None = field(default=None, init=False)

    def __post_init__(self) -> None:
        self.log_path = Path(self.log_path)
        if self.step_interval and self.step_interval > 0:
            self._steps_path = self.log_path.parent / "steps" / f"{self.run_id}.jsonl"
        else:
            self.step_interval = None

    def __enter__(self) -> RunTelemetryLogger:
        self._started = time.perf_counter()
        if self._steps_path:
            self._steps_path.parent.mkdir(parents=True, exist_ok=True)
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if exc_type:
            self._write_run(status="error", metrics=None, extra=None, error=repr(exc))
        else:
            self._write_run(status="ok", metrics=None, extra=None, error=None)
        return False

    @property
    def steps_path(self) -> Path | None:
        return self._steps_path

    def log_step(
        self,
        *,
        iteration: int,
        penalty: int,
        best_penalty: int,
        iterations_without_improvement: int,
    ) -> None:
        """Persist total penalties at ``iteration`` when step logging is enabled."""
        if not self._steps_path:
            return
        append_jsonl(
            self._steps_path,
            {
                "record_type": "step",
                "run_id": self.run_id,
                "iteration": iteration,
                "penalty": penalty,
                "best_penalty": best_penalty,
                "iterations_without_improvement": iterations_without_improvement,
            },
        )

    def finalize(
        self,
        *,
        metrics: Mapping[str, Any] | None = None,
        extra: Mapping[str, Any] | None = None,
    ) -> None:
        """Write the successful run record (later exits are no-ops)."""
        self._write_run(status="ok", metrics=metrics, extra=extra, error=None)

    def _write_run(
        self,
        *,
        status: str,
        metrics: Mapping[str, Any] | None,
        extra: Mapping[str, Any] | None,
        error: str | None,
    ) -> None:
        if self._closed:
            return
        duration = time.perf_counter() - self._started if self._started is not None else 0.0
        append_jsonl(
            self.log_path,
            {
                "record_type": "run",
                "schema_version": SCHEMA_VERSION,
                "run_id": self.run_id,
                "solver": self.solver,
                "network": self.network,
                "seed": self.seed,
                "status": status,
                "metrics": dict(metrics or {}),
                "config": dict(self.config or {}),
                "context": dict(self.context or {}),
                "extra": dict(extra or {}),
                "error": error,
                "finished_at": _iso_now(),
                "duration_seconds": round(duration, 3),
            },
        )
        self._closed = True


__all__ = ["RunTelemetryLogger"]
