"""Vivliostyle running in an embedded QtWebEngine view, as a ``Renderer``."""

from __future__ import annotations

from typing import Dict, List, Optional

from qtpy import QtCore, QtWidgets

try:
    from qtpy import QtWebEngineWidgets  # type: ignore

    _WEBENGINE_AVAILABLE = True
except Exception:
    QtWebEngineWidgets = None  # type: ignore
    _WEBENGINE_AVAILABLE = False

try:
    from qtpy import QtWebChannel  # type: ignore

    _WEBCHANNEL_AVAILABLE = True
except Exception:
    QtWebChannel = None  # type: ignore
    _WEBCHANNEL_AVAILABLE = False

from paginator.core.dom import DomNode, parse_snapshot
from paginator.core.events import (
    NAVIGATION_FINISHED,
    READY_STATE_CHANGED,
    RendererEvents,
)
from paginator.core.renderer import DocumentOptions
from paginator.gui.snapshot_script import (
    call_script,
    page_sizes_script,
    snapshot_script,
)
from paginator.gui.viewer_server import configure_viewer, viewer_url
from paginator.utils.logger import logger


class _PaginatorChannelBridge(QtCore.QObject):
    def __init__(self, renderer: "WebEngineRenderer") -> None:
        super().__init__(renderer)
        self._renderer = renderer

    @QtCore.Slot(str)
    def readyStateChanged(self, state: str) -> None:  # noqa: N802 - Qt slot name
        self._renderer._handle_ready_state(state)

    @QtCore.Slot()
    def navigationFinished(self) -> None:  # noqa: N802 - Qt slot name
        self._renderer._handle_navigation_finished()

    @QtCore.Slot()
    def viewerReady(self) -> None:  # noqa: N802 - Qt slot name
        self._renderer._handle_viewer_ready()

    @QtCore.Slot("QVariant")
    def logEvent(self, payload: object) -> None:  # noqa: N802 - Qt slot name
        self._renderer._handle_log_event(payload)


if _WEBENGINE_AVAILABLE:
    # type: ignore[misc]
    class _PaginatorWebEnginePage(QtWebEngineWidgets.QWebEnginePage):
        def javaScriptConsoleMessage(  # noqa: N802 - Qt override
            self,
            # type: ignore[name-defined]
            level: "QtWebEngineWidgets.QWebEnginePage.JavaScriptConsoleMessageLevel",
            message: str,
            lineNumber: int,
            sourceID: str,
        ) -> None:
            logger.info(f"QtWebEngine js: {message} ({sourceID}:{lineNumber})")


class WebEngineRenderer(QtCore.QObject):
    """Drives the viewer page and answers snapshot queries synchronously."""

    ready_state_changed = QtCore.Signal(str)
    navigation_finished = QtCore.Signal()
    viewer_ready = QtCore.Signal()

    def __init__(
        self,
        parent: Optional[QtWidgets.QWidget] = None,
        *,
        js_timeout_ms: int = 5000,
        module_url: Optional[str] = None,
    ) -> None:
        super().__init__(parent)
        self.events = RendererEvents()
        self._js_timeout_ms = max(100, int(js_timeout_ms))
        self._js_running = False
        self._viewer_is_ready = False
        self._pending_scripts: List[str] = []
        self._web_view = None
        self._web_channel = None
        self._channel_bridge = None
        configure_viewer(module_url)

        if not _WEBENGINE_AVAILABLE:
            logger.warning("QtWebEngine is unavailable; pages cannot be rendered.")
            return

        self._web_view = QtWebEngineWidgets.QWebEngineView(parent)
        self._web_view.setPage(_PaginatorWebEnginePage(self._web_view))
        if _WEBCHANNEL_AVAILABLE:
            try:
                self._web_channel = QtWebChannel.QWebChannel(self._web_view.page())
                self._channel_bridge = _PaginatorChannelBridge(self)
                self._web_channel.registerObject(
                    "paginatorBridge", self._channel_bridge
                )
                self._web_view.page().setWebChannel(self._web_channel)
            except Exception as exc:
                logger.info("QtWebChannel unavailable: %s", exc)
                self._web_channel = None
                self._channel_bridge = None
        else:
            logger.warning("QtWebChannel is unavailable; renderer events are lost.")
        try:
            settings = self._web_view.settings()
            for name in (
                "LocalContentCanAccessRemoteUrls",
                "LocalContentCanAccessFileUrls",
            ):
                attr = getattr(QtWebEngineWidgets.QWebEngineSettings, name, None)
                if attr is not None:
                    settings.setAttribute(attr, True)
        except Exception as exc:
            logger.debug("Could not adjust QtWebEngine settings: %s", exc)
        self._web_view.loadFinished.connect(self._on_load_finished)

    @property
    def web_view(self):
        return self._web_view

    @property
    def is_ready(self) -> bool:
        return self._viewer_is_ready

    def start(self) -> None:
        """Load the viewer page; calls made before it is ready are queued."""
        if self._web_view is None:
            return
        self._viewer_is_ready = False
        self._web_view.load(QtCore.QUrl(viewer_url()))

    # Renderer interface -------------------------------------------------

    def load_document(self, url: str, options: DocumentOptions) -> None:
        self._run_js(call_script("loadDocument", str(url), options.to_dict()))

    def navigate_to_page(self, index: int) -> None:
        self._run_js(call_script("showPage", int(index)))

    def get_page_sizes(self) -> List[Dict[str, float]]:
        result = self._run_js_sync(page_sizes_script())
        if not isinstance(result, dict) or result.get("error"):
            logger.info("Page size query failed: %s", result)
            return []
        sizes = result.get("sizes")
        if not isinstance(sizes, list):
            return []
        return [dict(size) for size in sizes if isinstance(size, dict)]

    def document_snapshot(self, page_index: int) -> Optional[DomNode]:
        if not self._viewer_is_ready:
            return None
        return parse_snapshot(self._run_js_sync(snapshot_script(page_index)))

    def current_page_index(self) -> Optional[int]:
        # CoreViewer has no query for the page it shows.
        return None

    def run_post_navigation_hooks(self) -> None:
        self._run_js(call_script("fixMathJaxBaselines"))

    # JavaScript plumbing --------------------------------------------------

    def _run_js(self, script: str) -> None:
        if self._web_view is None:
            return
        if not self._viewer_is_ready:
            self._pending_scripts.append(script)
            return
        self._web_view.page().runJavaScript(script)

    def _run_js_sync(self, script: str) -> object:
        if self._web_view is None:
            return {"error": "Embedded web view is unavailable."}
        if self._js_running:
            return {"error": "Another JavaScript task is already running."}
        page = self._web_view.page()
        if page is None:
            return {"error": "Web page object is unavailable."}

        self._js_running = True
        loop = QtCore.QEventLoop(self)
        timer = QtCore.QTimer(self)
        timer.setSingleShot(True)
        result: dict[str, object] = {"done": False, "value": None}

        def _finish(value: object) -> None:
            if bool(result.get("done")):
                return
            result["done"] = True
            result["value"] = value
            loop.quit()

        timer.timeout.connect(lambda: _finish({"error": "JavaScript timed out."}))
        try:
            page.runJavaScript(script, _finish)
            if not result["done"]:
                timer.start(self._js_timeout_ms)
                loop.exec_()
        finally:
            timer.stop()
            self._js_running = False
        return result.get("value")

    def _flush_pending_scripts(self) -> None:
        pending, self._pending_scripts = self._pending_scripts, []
        for script in pending:
            self._run_js(script)

    # Notifications from the page ------------------------------------------

    def _on_load_finished(self, ok: bool) -> None:
        if not ok:
            logger.warning("Viewer page failed to load")

    def _handle_viewer_ready(self) -> None:
        logger.info("Viewer page is ready")
        self._viewer_is_ready = True
        self._flush_pending_scripts()
        self.viewer_ready.emit()

    def _handle_ready_state(self, state: str) -> None:
        state = str(state or "")
        logger.debug("Renderer ready state: %s", state)
        self.ready_state_changed.emit(state)
        self.events.emit(READY_STATE_CHANGED, state)

    def _handle_navigation_finished(self) -> None:
        self.navigation_finished.emit()
        self.events.emit(NAVIGATION_FINISHED)

    def _handle_log_event(self, payload: object) -> None:
        if not isinstance(payload, dict):
            logger.info("Viewer: %s", payload)
            return
        level = str(payload.get("level") or "info").lower()
        message = payload.get("message")
        if level == "error":
            logger.error("Viewer: %s", message)
        elif level in {"warn", "warning"}:
            logger.warning("Viewer: %s", message)
        else:
            logger.info("Viewer: %s", message)


__all__ = ["WebEngineRenderer"]
