"""Background worker for fire-and-forget side effects."""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from queue import Empty, Queue
from typing import Any, Callable

from service_request.services.events import EventLog

logger = logging.getLogger(__name__)


@dataclass
class Task:
    name: str
    func: Callable[[], Any]
    context: dict | None = None


class TaskQueue:
    """Serial worker that runs each task once and records failures.

    Tasks never retry. A failing task is logged and added to the event log;
    the exception stops there.
    """

    def __init__(self, events: EventLog | None = None) -> None:
        self.events = events or EventLog()
        self._queue: Queue[Task] = Queue()
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None
        self._lock = threading.Lock()

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        with self._lock:
            if self.running:
                return
            self._stop.clear()
            self._thread = threading.Thread(target=self._worker, name="task-queue", daemon=True)
            self._thread.start()

    def submit(self, task: Task) -> None:
        self._queue.put(task)
        if not self.running:
            self.start()

    def join(self, timeout: float | None = None) -> bool:
        """Wait until every submitted task has run. Returns False on timeout."""

        deadline = None if timeout is None else time.monotonic() + timeout
        done = self._queue.all_tasks_done
        with done:
            while self._queue.unfinished_tasks:
                if deadline is None:
                    done.wait()
                    continue
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    return False
                done.wait(remaining)
        return True

    def stop(self, timeout: float | None = None) -> None:
        if timeout is not None and self.running:
            self.join(timeout)
        self._stop.set()
        thread = self._thread
        if thread is not None:
            thread.join(timeout=1.0)
        self._thread = None

    def _worker(self) -> None:
        while not self._stop.is_set():
            try:
                task = self._queue.get(timeout=0.2)
            except Empty:
                continue
            try:
                self._run(task)
            finally:
                self._queue.task_done()

    def _run(self, task: Task) -> None:
        extra = {"task": task.name, **(task.context or {})}
        try:
            task.func()
        except Exception as exc:
            logger.warning("Task %s failed: %s", task.name, exc, extra=extra)
            context = dict(task.context or {})
            context["error"] = str(exc)
            self.events.add("error", f"Task {task.name} failed", context)
        else:
            logger.info("Task %s finished", task.name, extra=extra)


__all__ = ["Task", "TaskQueue"]
