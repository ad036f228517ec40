"""The operations the host calls, and the notifications it receives."""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional

from paginator.core.events import (
    DID_FINISH_NAVIGATION,
    NAVIGATION_FINISHED,
    READY_STATE_CHANGED,
    READY_STATE_DID_CHANGE,
    HostNotification,
)
from paginator.core.extractor import elements_of_page
from paginator.core.page_index import PageIndex
from paginator.core.renderer import DocumentOptions, Renderer
from paginator.utils.logger import logger

NotifyCallback = Callable[[Dict[str, Any]], None]


class PaginatorBridge:
    def __init__(
        self,
        renderer: Renderer,
        notify: Optional[NotifyCallback] = None,
        options: Optional[DocumentOptions] = None,
    ) -> None:
        self._renderer = renderer
        self._notify = notify
        self._options = options or DocumentOptions()
        self._page_index = PageIndex()
        renderer.events.subscribe(READY_STATE_CHANGED, self._on_ready_state_changed)
        renderer.events.subscribe(NAVIGATION_FINISHED, self._on_navigation_finished)

    @property
    def current_page_index(self) -> int:
        reported = self._renderer.current_page_index()
        if reported is not None:
            return int(reported)
        return self._page_index.value

    def load_document(self, url: str, zoom: Optional[float] = None) -> None:
        options = DocumentOptions(
            zoom=self._options.zoom if zoom is None else float(zoom),
            page_view_mode=self._options.page_view_mode,
            auto_resize=self._options.auto_resize,
        )
        logger.info("Loading document %s (zoom=%s)", url, options.zoom)
        self._renderer.load_document(url, options)

    def show_page(self, index: int) -> None:
        self._renderer.navigate_to_page(index)
        self._page_index.record(index)

    def elements_of_current_page(self) -> List[Dict[str, Any]]:
        page_index = self.current_page_index
        root = self._renderer.document_snapshot(page_index)
        descriptors = elements_of_page(root, page_index)
        logger.debug(
            "Described %d elements on page %d", len(descriptors), page_index
        )
        return [descriptor.to_dict() for descriptor in descriptors]

    def get_page_sizes(self) -> List[Dict[str, float]]:
        return self._renderer.get_page_sizes()

    def _post(self, notification: HostNotification) -> None:
        if self._notify is None:
            return
        self._notify(notification.to_dict())

    def _on_ready_state_changed(self, state: Any) -> None:
        self._post(HostNotification(READY_STATE_DID_CHANGE, state))

    def _on_navigation_finished(self, _payload: Any = None) -> None:
        try:
            self._renderer.run_post_navigation_hooks()
        except Exception as exc:
            logger.warning("Post-navigation hook failed: %s", exc)
        self._post(HostNotification(DID_FINISH_NAVIGATION))


__all__ = ["NotifyCallback", "PaginatorBridge"]
