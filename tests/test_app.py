import os

import pytest

qtpy = pytest.importorskip("qtpy")

os.environ.setdefault("QT_QPA_PLATFORM", "minimal")

from paginator.gui.app import PaginatorWindow, dump_elements  # noqa: E402


class _DummyStatusBar:
    def __init__(self) -> None:
        self.messages: list[str] = []

    def showMessage(self, text: str) -> None:  # noqa: N802
        self.messages.append(text)


class _DummyBridge:
    def __init__(self) -> None:
        self.current_page_index = 0
        self.size_queries = 0
        self.describe_calls = 0

    def get_page_sizes(self) -> list:
        self.size_queries += 1
        return [{"width": 595.0, "height": 842.0}] * 4

    def elements_of_current_page(self) -> list:
        self.describe_calls += 1
        return [{"tag": "a"}]


class _DummyRenderer:
    def __init__(self, ready: bool) -> None:
        self.is_ready = ready


def _window(*, ready: bool = True) -> PaginatorWindow:
    window = PaginatorWindow.__new__(PaginatorWindow)
    bar = _DummyStatusBar()
    window.statusBar = lambda: bar
    window.bridge = _DummyBridge()
    window.renderer = _DummyRenderer(ready)
    window._page_count = 0
    window._on_page_described = None
    return window


def test_complete_ready_state_counts_pages() -> None:
    window = _window()
    window._on_ready_state_changed("loading")
    assert window._page_count == 0
    window._on_ready_state_changed("complete")
    assert window._page_count == 4
    assert window.bridge.size_queries == 1
    assert window.statusBar().messages == ["Renderer: loading", "Renderer: complete"]


def test_navigation_and_viewer_ready_update_status() -> None:
    window = _window()
    window._on_viewer_ready()
    window._on_navigation_finished()
    window._page_count = 4
    window.bridge.current_page_index = 2
    window._on_navigation_finished()
    assert window.statusBar().messages == ["Viewer ready", "Page 1", "Page 3 / 4"]


def test_describe_before_viewer_is_ready_is_empty() -> None:
    window = _window(ready=False)
    described: list[list] = []
    window._on_page_described = described.append
    assert window.describe_current_page() == []
    assert window.bridge.describe_calls == 0
    assert described == [[]]


def test_describe_current_page_when_ready() -> None:
    window = _window()
    assert window.describe_current_page() == [{"tag": "a"}]
    assert window.bridge.describe_calls == 1


def test_dump_elements_escapes_lone_surrogates(tmp_path) -> None:
    destination = tmp_path / "page.json"
    text = dump_elements([{"href": "#\ud83d"}], destination)
    assert "\\ud83d" in text
    assert destination.read_text(encoding="utf-8") == text
