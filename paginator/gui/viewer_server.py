from __future__ import annotations

import json
import mimetypes
import threading
import uuid
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path
from typing import Optional
from urllib.parse import quote, unquote, urlparse

from paginator.utils.logger import logger

DEFAULT_MODULE_URL = "https://cdn.jsdelivr.net/npm/@vivliostyle/core@2/+esm"
_ASSET_NAMES = {"paginator.js"}

_VIEWER_HTTP_SERVER: Optional[ThreadingHTTPServer] = None
_VIEWER_HTTP_PORT: Optional[int] = None
_VIEWER_HTTP_THREAD: Optional[threading.Thread] = None
_VIEWER_HTTP_LOCK = threading.Lock()
# token -> (document root directory, entry file name)
_VIEWER_HTTP_DOCUMENTS: dict[str, tuple[Path, str]] = {}
_VIEWER_MODULE_URL = DEFAULT_MODULE_URL


def _asset_path(filename: str) -> Optional[Path]:
    if filename not in _ASSET_NAMES and filename != "paginator.html":
        return None
    candidate = Path(__file__).resolve().parent / "assets" / filename
    if candidate.is_file():
        return candidate
    return None


def render_viewer_html(module_url: str) -> bytes:
    template_path = _asset_path("paginator.html")
    if template_path is None:
        raise FileNotFoundError("paginator.html asset is missing")
    template = template_path.read_text(encoding="utf-8")
    encoded = json.dumps(str(module_url)).replace("</", "<\\/")
    return (template % {"module_url": encoded}).encode("utf-8")


def resolve_document_file(token: str, relative: str) -> Optional[Path]:
    """Map a ``/doc/<token>/<relative>`` request onto a file inside the document root."""
    with _VIEWER_HTTP_LOCK:
        entry = _VIEWER_HTTP_DOCUMENTS.get(token)
    if entry is None:
        return None
    root, _name = entry
    try:
        candidate = (root / relative).resolve()
        candidate.relative_to(root)
    except (OSError, ValueError):
        return None
    if not candidate.is_file():
        return None
    return candidate


def configure_viewer(module_url: Optional[str] = None) -> None:
    global _VIEWER_MODULE_URL
    _VIEWER_MODULE_URL = str(module_url or DEFAULT_MODULE_URL)


def ensure_viewer_server() -> str:
    global _VIEWER_HTTP_SERVER, _VIEWER_HTTP_PORT, _VIEWER_HTTP_THREAD
    with _VIEWER_HTTP_LOCK:
        if _VIEWER_HTTP_SERVER is not None and _VIEWER_HTTP_PORT is not None:
            return f"http://127.0.0.1:{_VIEWER_HTTP_PORT}"

        class _Handler(BaseHTTPRequestHandler):
            server_version = "PaginatorViewerServer/1.0"

            def log_message(self, fmt: str, *args: object) -> None:  # noqa: D401
                return

            def do_HEAD(self) -> None:  # noqa: N802 - BaseHTTPRequestHandler
                self._serve(send_body=False)

            def do_GET(self) -> None:  # noqa: N802 - BaseHTTPRequestHandler
                self._serve(send_body=True)

            def _send_payload(
                self, payload: bytes, content_type: str, *, send_body: bool
            ) -> None:
                self.send_response(200)
                self.send_header("Content-Type", content_type)
                self.send_header("Cache-Control", "no-store")
                self.send_header("Access-Control-Allow-Origin", "*")
                self.send_header("Content-Length", str(len(payload)))
                self.end_headers()
                if send_body:
                    try:
                        self.wfile.write(payload)
                    except OSError:
                        return

            def _serve(self, *, send_body: bool) -> None:
                try:
                    path = urlparse(self.path).path or ""
                except ValueError:
                    self.send_error(400)
                    return

                if path in {"/", "/viewer"}:
                    try:
                        payload = render_viewer_html(_VIEWER_MODULE_URL)
                    except OSError as exc:
                        logger.error("Viewer page unavailable: %s", exc)
                        self.send_error(500)
                        return
                    self._send_payload(
                        payload, "text/html; charset=utf-8", send_body=send_body
                    )
                    return

                if path.startswith("/assets/"):
                    name = unquote(path[len("/assets/") :]).strip().lstrip("/")
                    asset = _asset_path(name) if name in _ASSET_NAMES else None
                    if asset is None:
                        self.send_error(404)
                        return
                    self._send_payload(
                        asset.read_bytes(),
                        "application/javascript",
                        send_body=send_body,
                    )
                    return

                if not path.startswith("/doc/"):
                    self.send_error(404)
                    return

                token, _, relative = unquote(path[len("/doc/") :]).partition("/")
                file_path = resolve_document_file(token, relative)
                if file_path is None:
                    self.send_error(404)
                    return
                content_type = (
                    mimetypes.guess_type(file_path.name)[0]
                    or "application/octet-stream"
                )
                try:
                    payload = file_path.read_bytes()
                except OSError:
                    self.send_error(404)
                    return
                self._send_payload(payload, content_type, send_body=send_body)

        httpd = ThreadingHTTPServer(("127.0.0.1", 0), _Handler)
        _VIEWER_HTTP_SERVER = httpd
        _VIEWER_HTTP_PORT = int(getattr(httpd, "server_port", 0) or 0)
        thread = threading.Thread(target=httpd.serve_forever, daemon=True)
        thread.start()
        _VIEWER_HTTP_THREAD = thread
        logger.info(f"Viewer HTTP server started on 127.0.0.1:{_VIEWER_HTTP_PORT}")
        return f"http://127.0.0.1:{_VIEWER_HTTP_PORT}"


def viewer_url() -> str:
    return f"{ensure_viewer_server()}/viewer"


def register_document(path: Path) -> str:
    """Serve a local document (and its sibling resources) and return its URL."""
    path = Path(path).expanduser().resolve()
    base = ensure_viewer_server()
    token = uuid.uuid4().hex
    with _VIEWER_HTTP_LOCK:
        _VIEWER_HTTP_DOCUMENTS[token] = (path.parent, path.name)
    logger.debug(f"Serving {path} via token {token}")
    return f"{base}/doc/{token}/{quote(path.name)}"


__all__ = [
    "DEFAULT_MODULE_URL",
    "configure_viewer",
    "ensure_viewer_server",
    "register_document",
    "render_viewer_html",
    "resolve_document_file",
    "viewer_url",
]
