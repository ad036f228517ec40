from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from qtpy import QtCore, QtWidgets

from paginator.core.bridge import PaginatorBridge
from paginator.core.events import ReadyState
from paginator.core.renderer import DocumentOptions
from paginator.gui.viewer_server import register_document
from paginator.gui.web_renderer import WebEngineRenderer
from paginator.utils.logger import logger


def document_url(target: str) -> str:
    """URL for ``target``; local files are served through the viewer server."""
    parsed = QtCore.QUrl(target)
    if parsed.scheme() in {"http", "https"}:
        return target
    path = Path(parsed.toLocalFile() if parsed.isLocalFile() else target)
    return register_document(path)


class PaginatorWindow(QtWidgets.QMainWindow):
    """Main window hosting the paginated view with page navigation."""

    notification = QtCore.Signal(dict)

    def __init__(
        self,
        config: Dict[str, Any],
        *,
        on_page_described: Optional[Callable[[list], None]] = None,
        parent: Optional[QtWidgets.QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self._config = config
        self._on_page_described = on_page_described
        self._page_count = 0
        self.renderer = WebEngineRenderer(
            self,
            js_timeout_ms=int(config.get("js_timeout_ms", 5000)),
            module_url=config.get("vivliostyle_module_url"),
        )
        self.bridge = PaginatorBridge(
            self.renderer,
            notify=self._handle_notification,
            options=DocumentOptions(
                zoom=float(config.get("zoom", 1.0)),
                page_view_mode=str(config.get("page_view_mode", "singlePage")),
                auto_resize=bool(config.get("auto_resize", False)),
            ),
        )

        window = config.get("window") or {}
        self.resize(int(window.get("width", 900)), int(window.get("height", 1100)))
        self.setWindowTitle("Paginator")
        if self.renderer.web_view is not None:
            self.setCentralWidget(self.renderer.web_view)

        toolbar = self.addToolBar("Pages")
        prev_action = toolbar.addAction("Previous")
        prev_action.triggered.connect(self.previous_page)
        next_action = toolbar.addAction("Next")
        next_action.triggered.connect(self.next_page)
        describe_action = toolbar.addAction("Describe page")
        describe_action.triggered.connect(self.describe_current_page)
        self.statusBar()
        self.renderer.viewer_ready.connect(self._on_viewer_ready)
        self.renderer.ready_state_changed.connect(self._on_ready_state_changed)
        self.renderer.navigation_finished.connect(self._on_navigation_finished)
        self.renderer.start()

    def open_document(self, target: str, zoom: Optional[float] = None) -> None:
        url = document_url(target)
        self._page_count = 0
        self.bridge.load_document(url, zoom)

    def show_page(self, index: int) -> None:
        index = max(0, int(index))
        if self._page_count:
            index = min(index, self._page_count - 1)
        self.bridge.show_page(index)

    def next_page(self) -> None:
        self.show_page(self.bridge.current_page_index + 1)

    def previous_page(self) -> None:
        self.show_page(self.bridge.current_page_index - 1)

    def describe_current_page(self) -> list:
        if not self.renderer.is_ready:
            logger.warning("Viewer is not ready; nothing to describe")
            elements = []
        else:
            elements = self.bridge.elements_of_current_page()
        logger.info(
            "Page %d: %d addressable elements",
            self.bridge.current_page_index,
            len(elements),
        )
        if self._on_page_described is not None:
            self._on_page_described(elements)
        return elements

    def save_snapshot(self, destination: Path) -> bool:
        """Write the current page's raw DOM snapshot for ``paginator describe``."""
        root = self.renderer.document_snapshot(self.bridge.current_page_index)
        if root is None:
            logger.warning("No rendered page to snapshot")
            return False
        destination.write_text(
            json.dumps({"root": root.to_dict()}, indent=2),
            encoding="utf-8",
        )
        logger.info("Saved page snapshot to %s", destination)
        return True

    def _on_viewer_ready(self) -> None:
        self.statusBar().showMessage("Viewer ready")

    def _on_ready_state_changed(self, state: str) -> None:
        self.statusBar().showMessage(f"Renderer: {state}")
        if state == ReadyState.COMPLETE:
            self._page_count = len(self.bridge.get_page_sizes())

    def _on_navigation_finished(self) -> None:
        self.statusBar().showMessage(
            f"Page {self.bridge.current_page_index + 1}"
            + (f" / {self._page_count}" if self._page_count else "")
        )

    def _handle_notification(self, payload: Dict[str, Any]) -> None:
        self.notification.emit(payload)


def dump_elements(elements: list, destination: Optional[Path] = None) -> str:
    text = json.dumps(elements, indent=2)
    if destination is not None:
        destination.write_text(text, encoding="utf-8")
    return text


__all__ = ["PaginatorWindow", "document_url", "dump_elements"]
