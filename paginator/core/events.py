"""Event channels between the renderer and the bridge, and host messages."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

READY_STATE_CHANGED = "readyStateChanged"
NAVIGATION_FINISHED = "navigationFinished"
CHANNELS = (READY_STATE_CHANGED, NAVIGATION_FINISHED)

# Message names the host listens for.
READY_STATE_DID_CHANGE = "readyStateDidChange"
DID_FINISH_NAVIGATION = "didFinishNavigation"

EventCallback = Callable[[Any], None]


class ReadyState(str, Enum):
    LOADING = "loading"
    INTERACTIVE = "interactive"
    COMPLETE = "complete"


@dataclass(frozen=True)
class HostNotification:
    name: str
    object: Any = None

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"name": self.name}
        if self.object is not None:
            payload["object"] = self.object
        return payload


def _channel_key(channel: str) -> str:
    key = str(channel or "").strip()
    if key not in CHANNELS:
        raise ValueError(f"Unknown renderer event channel: {channel!r}")
    return key


class RendererEvents:
    """Publish/subscribe hub with the two renderer channels."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, List[EventCallback]] = {
            channel: [] for channel in CHANNELS
        }
        self._logger = logging.getLogger("paginator.events")

    def subscribe(self, channel: str, callback: EventCallback) -> None:
        self._subscribers[_channel_key(channel)].append(callback)

    def unsubscribe(self, channel: str, callback: EventCallback) -> None:
        callbacks = self._subscribers[_channel_key(channel)]
        if callback in callbacks:
            callbacks.remove(callback)

    def subscriber_count(self, channel: str) -> int:
        return len(self._subscribers[_channel_key(channel)])

    def emit(self, channel: str, payload: Optional[Any] = None) -> None:
        key = _channel_key(channel)
        for callback in list(self._subscribers[key]):
            try:
                callback(payload)
            except Exception as exc:
                self._logger.error(
                    "Renderer event callback failed for channel=%s: %s", key, exc
                )


__all__ = [
    "CHANNELS",
    "DID_FINISH_NAVIGATION",
    "EventCallback",
    "HostNotification",
    "NAVIGATION_FINISHED",
    "READY_STATE_CHANGED",
    "READY_STATE_DID_CHANGE",
    "ReadyState",
    "RendererEvents",
]
