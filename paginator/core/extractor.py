"""Describe the addressable elements of a rendered page.

An element is addressable when it has an ``id``, a ``name`` or, for anchors,
an ``href``. Each description carries the element's boxes relative to the
page box so the host can place PDF annotations over them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from paginator.core.dom import DomNode
from paginator.core.geometry import Rect, rects_to_dicts, relative_client_rects
from paginator.core.href import demangled_href

SPREAD_CONTAINER_ATTR = "data-vivliostyle-spread-container"
PAGE_BOX_ATTR = "data-vivliostyle-page-box"
# Vivliostyle adds an anchor with a mangled copy of every authored id.
SYNTHETIC_ID_PREFIX = "viv-id-"


@dataclass
class ElementDescriptor:
    tag: str
    class_names: List[str] = field(default_factory=list)
    id: str = ""
    name: Optional[str] = None
    href: Optional[str] = None
    rects: List[Rect] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "tag": self.tag,
            "classNames": list(self.class_names),
            "id": self.id,
            "name": self.name,
            "href": self.href,
            "rects": rects_to_dicts(self.rects),
        }


def find_spread_container(root: Optional[DomNode]) -> Optional[DomNode]:
    if root is None:
        return None
    if root.has_attribute(SPREAD_CONTAINER_ATTR):
        return root
    return root.find_first(lambda node: node.has_attribute(SPREAD_CONTAINER_ATTR))


def resolve_page_box(root: Optional[DomNode], page_index: int) -> Optional[DomNode]:
    """Return the page box of the page container at ``page_index``, if any."""
    container = find_spread_container(root)
    if container is None:
        return None
    if page_index < 0 or page_index >= len(container.children):
        return None
    page_container = container.children[page_index]
    return page_container.find_first(lambda node: node.has_attribute(PAGE_BOX_ATTR))


def is_candidate(node: DomNode) -> bool:
    if node.has_attribute("id") or node.has_attribute("name"):
        return True
    return node.tag == "a" and node.has_attribute("href")


def is_synthetic_id(element_id: str) -> bool:
    return element_id.startswith(SYNTHETIC_ID_PREFIX)


def describe_element(node: DomNode, page_box: DomNode) -> Optional[ElementDescriptor]:
    if is_synthetic_id(node.id):
        return None
    rects = relative_client_rects(node, page_box)
    if not rects:
        return None
    return ElementDescriptor(
        tag=node.tag,
        class_names=list(node.class_list),
        id=node.id,
        name=node.get_attribute("name"),
        href=demangled_href(node.get_attribute("href")),
        rects=rects,
    )


def elements_of_page(root: Optional[DomNode], page_index: int) -> List[ElementDescriptor]:
    """Describe every addressable element on the page at ``page_index``.

    Returns an empty list when the page cannot be found, e.g. before the
    first layout or for an out-of-range index.
    """
    page_box = resolve_page_box(root, page_index)
    if page_box is None:
        return []
    descriptors: List[ElementDescriptor] = []
    for node in page_box.iter_descendants():
        if not is_candidate(node):
            continue
        descriptor = describe_element(node, page_box)
        if descriptor is not None:
            descriptors.append(descriptor)
    return descriptors


__all__ = [
    "ElementDescriptor",
    "PAGE_BOX_ATTR",
    "SPREAD_CONTAINER_ATTR",
    "SYNTHETIC_ID_PREFIX",
    "describe_element",
    "elements_of_page",
    "find_spread_container",
    "is_candidate",
    "is_synthetic_id",
    "resolve_page_box",
]
