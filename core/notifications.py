"""Transient user-facing notifications (toasts) and task tracking.

View controllers publish a toast for every rejected or failed action and for
confirmations such as a saved version. Front ends subscribe to the centre and
render toasts however they like; the CLI prints them to stderr.

Updates:
  v0.2.1 - 2026-10-19 - Drop the module-level hub; callers own their centre.
  v0.2.0 - 2026-10-10 - Add ``notify`` shortcuts used by view controllers for toasts.
  v0.1.0 - 2026-10-05 - Introduce notification hub with task tracking helpers.
"""
from __future__ import annotations

import itertools
import logging
import threading
import time
import uuid
from collections import deque
from collections.abc import Callable
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import TYPE_CHECKING, Any, TypeAlias

if TYPE_CHECKING:
    from collections.abc import Iterator

logger = logging.getLogger("prompt_testing.notifications")


class NotificationLevel(str, Enum):
    """Toast severity."""
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


class NotificationStatus(str, Enum):
    """Lifecycle stage; plain toasts are always ``TRANSIENT``."""
    TRANSIENT = "transient"
    STARTED = "started"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


def _now() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True, slots=True)
class Notification:
    """One published event."""
    message: str
    level: NotificationLevel
    title: str = ""
    status: NotificationStatus = NotificationStatus.TRANSIENT
    task_id: str | None = None
    duration_ms: int | None = None
    metadata: dict[str, Any] = field(default_factory=dict)
    id: uuid.UUID = field(default_factory=uuid.uuid4)
    timestamp: datetime = field(default_factory=_now)

    @property
    def is_error(self) -> bool:
        return self.level is NotificationLevel.ERROR

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON friendly mapping."""
        payload: dict[str, Any] = {
            "id": str(self.id),
            "timestamp": self.timestamp.isoformat(),
            "level": self.level.value,
            "status": self.status.value,
            "title": self.title,
            "message": self.message,
            "metadata": dict(self.metadata),
        }
        if self.task_id is not None:
            payload["task_id"] = self.task_id
            payload["duration_ms"] = self.duration_ms
        return payload


NotificationCallback: TypeAlias = Callable[[Notification], None]


class NotificationSubscription:
    """Handle returned by :meth:`NotificationCenter.subscribe`."""
    def __init__(self, center: NotificationCenter, token: int) -> None:
        self._center = center
        self._token: int | None = token

    @property
    def active(self) -> bool:
        return self._token is not None

    def close(self) -> None:
        """Stop delivery; closing twice is harmless."""
        if self._token is None:
            return
        self._center._detach(self._token)  # noqa: SLF001
        self._token = None

    def __enter__(self) -> NotificationSubscription:
        return self

    def __exit__(self, *_: object) -> None:
        self.close()


class NotificationCenter:
    """Publish/subscribe hub that also remembers the latest events."""
    def __init__(self, history_limit: int = 200) -> None:
        self._lock = threading.RLock()
        self._tokens = itertools.count(1)
        self._subscribers: dict[int, NotificationCallback] = {}
        self._history: deque[Notification] = deque(maxlen=history_limit)

    def subscribe(self, callback: NotificationCallback) -> NotificationSubscription:
        """Deliver future notifications to *callback* until the handle closes."""
        with self._lock:
            token = next(self._tokens)
            self._subscribers[token] = callback
        return NotificationSubscription(self, token)

    def unsubscribe(self, callback: NotificationCallback) -> None:
        """Drop every registration of *callback*."""
        with self._lock:
            for token in [key for key, value in self._subscribers.items() if value == callback]:
                del self._subscribers[token]

    def _detach(self, token: int) -> None:
        with self._lock:
            self._subscribers.pop(token, None)

    def publish(self, notification: Notification) -> None:
        """Record *notification* and hand it to each subscriber in turn."""
        with self._lock:
            self._history.append(notification)
            callbacks = tuple(self._subscribers.values())
        logger.debug(
            "%s notification (%s): %s",
            notification.level.value,
            notification.status.value,
            notification.message,
        )
        for callback in callbacks:
            try:
                callback(notification)
            except Exception:  # pragma: no cover - a broken listener must not stop delivery
                logger.exception("Notification subscriber raised an exception")

    def notify(
        self,
        level: NotificationLevel,
        message: str,
        *,
        title: str = "",
        metadata: dict[str, Any] | None = None,
    ) -> Notification:
        """Publish a transient toast and return it."""
        notification = Notification(
            message=message,
            level=level,
            title=title,
            metadata=dict(metadata or {}),
        )
        self.publish(notification)
        return notification

    def success(self, message: str, *, title: str = "") -> Notification:
        return self.notify(NotificationLevel.SUCCESS, message, title=title)

    def error(self, message: str, *, title: str = "") -> Notification:
        return self.notify(NotificationLevel.ERROR, message, title=title)

    def history(self) -> tuple[Notification, ...]:
        """Return the retained notifications, oldest first."""
        with self._lock:
            return tuple(self._history)

    @contextmanager
    def track_task(
        self,
        *,
        title: str,
        start_message: str,
        success_message: str,
        failure_message: str | None = None,
        task_id: str | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> Iterator[None]:
        """Publish started/succeeded/failed events around the wrapped block.

        The exception that ends the block is re-raised after the failure
        event; its text is appended to *failure_message*.
        """
        task = task_id or f"task:{uuid.uuid4()}"
        details = dict(metadata or {})
        started = time.perf_counter()

        def emit(status: NotificationStatus, level: NotificationLevel, message: str) -> None:
            elapsed: int | None = None
            if status is not NotificationStatus.STARTED:
                elapsed = int((time.perf_counter() - started) * 1000)
            self.publish(
                Notification(
                    message=message,
                    level=level,
                    title=title,
                    status=status,
                    task_id=task,
                    duration_ms=elapsed,
                    metadata=details,
                )
            )

        emit(NotificationStatus.STARTED, NotificationLevel.INFO, start_message)
        try:
            yield
        except Exception as exc:
            prefix = failure_message or f"{title} failed"
            emit(NotificationStatus.FAILED, NotificationLevel.ERROR, f"{prefix}: {exc}")
            raise
        emit(NotificationStatus.SUCCEEDED, NotificationLevel.SUCCESS, success_message)


__all__ = [
    "Notification",
    "NotificationCenter",
    "NotificationLevel",
    "NotificationStatus",
    "NotificationSubscription",
]
