"""In-memory model of the DOM snapshot produced inside the web view.

The snapshot is a nested JSON object, one per element::

    {
        "tag": "A",
        "attributes": {"href": "#...", "class": "ref"},
        "classList": ["ref"],
        "rects": [{"x": 110, "y": 210, "width": 50, "height": 20}],
        "bounds": {"x": 110, "y": 210, "width": 50, "height": 20},
        "children": [...]
    }
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional

from paginator.core.geometry import ZERO_RECT, Rect
from paginator.utils.logger import logger


def _parse_rects(raw: object) -> List[Rect]:
    if not isinstance(raw, list):
        return []
    rects: List[Rect] = []
    for item in raw:
        if not isinstance(item, Mapping):
            continue
        try:
            rects.append(Rect.from_dict(item))
        except (TypeError, ValueError) as exc:
            logger.debug("Dropping malformed rect %r: %s", item, exc)
    return rects


@dataclass
class DomNode:
    tag: str
    attributes: Dict[str, str] = field(default_factory=dict)
    class_list: List[str] = field(default_factory=list)
    client_rects: List[Rect] = field(default_factory=list)
    bounding_rect: Rect = ZERO_RECT
    children: List["DomNode"] = field(default_factory=list)

    @property
    def id(self) -> str:
        return self.attributes.get("id", "")

    def get_attribute(self, name: str) -> Optional[str]:
        return self.attributes.get(name)

    def has_attribute(self, name: str) -> bool:
        return name in self.attributes

    def iter_descendants(self) -> Iterator["DomNode"]:
        """Yield all descendants depth-first in document order."""
        stack = list(reversed(self.children))
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def find_first(self, predicate: Callable[["DomNode"], bool]) -> Optional["DomNode"]:
        for node in self.iter_descendants():
            if predicate(node):
                return node
        return None

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "DomNode":
        tag = str(payload.get("tag") or "").strip().lower()
        if not tag:
            raise ValueError("snapshot node requires a 'tag'")

        raw_attrs = payload.get("attributes")
        attributes: Dict[str, str] = {}
        if isinstance(raw_attrs, Mapping):
            for key, value in raw_attrs.items():
                if value is None:
                    continue
                attributes[str(key)] = str(value)

        raw_classes = payload.get("classList")
        if isinstance(raw_classes, list):
            class_list = [str(name) for name in raw_classes if name]
        else:
            class_list = attributes.get("class", "").split()

        bounds = _parse_rects([payload.get("bounds")])
        children: List[DomNode] = []
        raw_children = payload.get("children")
        if isinstance(raw_children, list):
            for child in raw_children:
                if not isinstance(child, Mapping):
                    continue
                try:
                    children.append(cls.from_dict(child))
                except ValueError as exc:
                    logger.debug("Skipping malformed snapshot node: %s", exc)

        return cls(
            tag=tag,
            attributes=attributes,
            class_list=class_list,
            client_rects=_parse_rects(payload.get("rects")),
            bounding_rect=bounds[0] if bounds else ZERO_RECT,
            children=children,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "tag": self.tag,
            "attributes": dict(self.attributes),
            "classList": list(self.class_list),
            "rects": [rect.to_dict() for rect in self.client_rects],
            "bounds": self.bounding_rect.to_dict(),
            "children": [child.to_dict() for child in self.children],
        }


def parse_snapshot(payload: object) -> Optional[DomNode]:
    """Turn a snapshot payload into a tree; anything unusable yields ``None``."""
    if not isinstance(payload, Mapping) or not payload:
        return None
    if payload.get("error"):
        logger.info("Renderer snapshot failed: %s", payload.get("error"))
        return None
    root = payload.get("root", payload)
    if not isinstance(root, Mapping) or not root:
        return None
    try:
        return DomNode.from_dict(root)
    except ValueError as exc:
        logger.debug("Unusable snapshot root: %s", exc)
        return None


__all__ = ["DomNode", "parse_snapshot"]
