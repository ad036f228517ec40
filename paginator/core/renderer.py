from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Protocol

from paginator.core.dom import DomNode
from paginator.core.events import RendererEvents


@dataclass
class DocumentOptions:
    zoom: float = 1.0
    page_view_mode: str = "singlePage"
    auto_resize: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "pageViewMode": self.page_view_mode,
            "zoom": float(self.zoom),
            "autoResize": bool(self.auto_resize),
        }


class Renderer(Protocol):
    """The pagination engine as seen from the bridge.

    ``load_document`` and ``navigate_to_page`` return immediately; completion
    is reported on ``events``.
    """

    events: RendererEvents

    def load_document(self, url: str, options: DocumentOptions) -> None: ...

    def navigate_to_page(self, index: int) -> None: ...

    def get_page_sizes(self) -> List[Dict[str, float]]: ...

    def document_snapshot(self, page_index: int) -> Optional[DomNode]: ...

    def current_page_index(self) -> Optional[int]: ...

    def run_post_navigation_hooks(self) -> None: ...


__all__ = ["DocumentOptions", "Renderer"]
