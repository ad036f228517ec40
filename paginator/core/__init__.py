"""Page-state introspection: href demangling and page element extraction."""

from .bridge import PaginatorBridge
from .dom import DomNode, parse_snapshot
from .events import HostNotification, ReadyState, RendererEvents
from .extractor import ElementDescriptor, elements_of_page, resolve_page_box
from .geometry import Rect, relative_client_rects
from .href import demangled_href, unescape_string
from .page_index import PageIndex
from .renderer import DocumentOptions, Renderer

__all__ = [
    "DocumentOptions",
    "DomNode",
    "ElementDescriptor",
    "HostNotification",
    "PageIndex",
    "PaginatorBridge",
    "ReadyState",
    "Rect",
    "Renderer",
    "RendererEvents",
    "demangled_href",
    "elements_of_page",
    "parse_snapshot",
    "relative_client_rects",
    "resolve_page_box",
    "unescape_string",
]
