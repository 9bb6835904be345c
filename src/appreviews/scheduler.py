"""Periodic trigger for review reconciliation."""

from __future__ import annotations

import threading
from collections.abc import Callable
from enum import StrEnum
from logging import getLogger

from appreviews.config.sync import DEFAULT_SYNC_INTERVAL_SECONDS

log = getLogger(__name__)

ReconcileJob = Callable[[], object]


class SchedulerState(StrEnum):
    IDLE = "idle"
    RUNNING = "running"


class ReconcileScheduler:
    """Run ``job`` every ``interval_seconds`` on a background thread.

    ``start`` and ``stop`` are idempotent and transition ``state`` under a lock.
    ``stop`` wakes the loop immediately and joins the thread, so no loop is left
    running once it returns; an in-flight job is allowed to finish first. The job
    may also be invoked out of band via ``run_now``.
    """

    def __init__(
        self,
        job: ReconcileJob,
        *,
        interval_seconds: float = DEFAULT_SYNC_INTERVAL_SECONDS,
        name: str = "review-reconciler",
    ) -> None:
        if interval_seconds <= 0:
            raise ValueError("Scheduler interval must be positive")
        self._job = job
        self._interval = interval_seconds
        self._name = name
        self._lock = threading.Lock()
        self._state = SchedulerState.IDLE
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None
        self.ticks = 0

    @property
    def state(self) -> SchedulerState:
        with self._lock:
            return self._state

    @property
    def interval_seconds(self) -> float:
        return self._interval

    def start(self) -> None:
        with self._lock:
            if self._state is SchedulerState.RUNNING:
                return
            self._stop_event = threading.Event()
            self._thread = threading.Thread(
                target=self._run,
                args=(self._stop_event,),
                name=self._name,
                daemon=True,
            )
            self._state = SchedulerState.RUNNING
            self._thread.start()
        log.info("Review reconciliation scheduled every %ss", self._interval)

    def stop(self, *, timeout: float | None = None) -> None:
        with self._lock:
            if self._state is SchedulerState.IDLE:
                return
            self._stop_event.set()
            thread = self._thread
            self._thread = None
            self._state = SchedulerState.IDLE

        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout=timeout)
            if thread.is_alive():
                log.warning("Scheduler thread %s did not exit within %ss", thread.name, timeout)
        log.info("Review reconciliation scheduler stopped")

    def run_now(self) -> object:
        """Run the job synchronously on the calling thread."""

        return self._job()

    def _run(self, stop_event: threading.Event) -> None:
        while not stop_event.wait(self._interval):
            self._tick()

    def _tick(self) -> None:
        self.ticks += 1
        try:
            self._job()
        except Exception:  # noqa: BLE001
            log.exception("Scheduled review reconciliation failed")


__all__ = ["ReconcileJob", "ReconcileScheduler", "SchedulerState"]
