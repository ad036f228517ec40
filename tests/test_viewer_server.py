import urllib.error
import urllib.request
from pathlib import Path

import pytest

from paginator.gui.viewer_server import (
    configure_viewer,
    ensure_viewer_server,
    register_document,
    render_viewer_html,
    resolve_document_file,
    viewer_url,
)


def _get(url: str) -> tuple[int, bytes]:
    with urllib.request.urlopen(url, timeout=5) as response:
        return response.status, response.read()


def test_viewer_html_embeds_module_url() -> None:
    html = render_viewer_html("https://cdn.example/vivliostyle.js").decode("utf-8")
    assert 'window.__paginatorModuleUrl = "https://cdn.example/vivliostyle.js";' in html
    assert "pagination-viewport" in html


def test_server_is_started_once() -> None:
    assert ensure_viewer_server() == ensure_viewer_server()


def test_viewer_page_and_assets_are_served() -> None:
    configure_viewer("https://cdn.example/core.js")
    status, body = _get(viewer_url())
    assert status == 200
    assert b"https://cdn.example/core.js" in body
    status, body = _get(ensure_viewer_server() + "/assets/paginator.js")
    assert status == 200
    assert b"CoreViewer" in body


def test_unknown_asset_is_404() -> None:
    with pytest.raises(urllib.error.HTTPError) as excinfo:
        _get(ensure_viewer_server() + "/assets/paginator.html")
    assert excinfo.value.code == 404


def test_registered_document_and_siblings_are_served(tmp_path: Path) -> None:
    doc = tmp_path / "book.html"
    doc.write_text("<html><body><p id='x'>hi</p></body></html>", encoding="utf-8")
    (tmp_path / "style.css").write_text("p { color: red; }", encoding="utf-8")
    url = register_document(doc)
    assert url.endswith("/book.html")
    status, body = _get(url)
    assert status == 200 and b"id='x'" in body
    status, body = _get(url.rsplit("/", 1)[0] + "/style.css")
    assert status == 200 and b"color: red" in body


def test_path_traversal_is_rejected(tmp_path: Path) -> None:
    root = tmp_path / "docs"
    root.mkdir()
    (root / "index.html").write_text("ok", encoding="utf-8")
    (tmp_path / "secret.txt").write_text("secret", encoding="utf-8")
    url = register_document(root / "index.html")
    token = url.split("/doc/", 1)[1].split("/", 1)[0]
    assert resolve_document_file(token, "index.html") == (root / "index.html").resolve()
    assert resolve_document_file(token, "../secret.txt") is None
    assert resolve_document_file("unknown", "index.html") is None
