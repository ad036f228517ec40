from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict, Iterable, List, Mapping

if TYPE_CHECKING:  # pragma: no cover
    from paginator.core.dom import DomNode


@dataclass(frozen=True)
class Rect:
    """A DOMRect-like box in CSS pixels."""

    x: float
    y: float
    width: float
    height: float

    def to_dict(self) -> Dict[str, float]:
        return {
            "x": float(self.x),
            "y": float(self.y),
            "width": float(self.width),
            "height": float(self.height),
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, object]) -> "Rect":
        """Build a rect from a serialized DOMRect.

        ``x``/``y`` win over ``left``/``top`` when both are present.
        """
        x = payload.get("x", payload.get("left"))
        y = payload.get("y", payload.get("top"))
        width = payload.get("width")
        height = payload.get("height")
        if x is None or y is None or width is None or height is None:
            raise ValueError(f"Incomplete rect: {dict(payload)!r}")
        return cls(float(x), float(y), float(width), float(height))


ZERO_RECT = Rect(0.0, 0.0, 0.0, 0.0)


def relative_rect(rect: Rect, origin: Rect) -> Rect:
    return Rect(rect.x - origin.x, rect.y - origin.y, rect.width, rect.height)


def relative_client_rects(element: "DomNode", page_box: "DomNode") -> List[Rect]:
    """Client rects of ``element`` relative to the page box origin, in native order."""
    origin = page_box.bounding_rect
    return [relative_rect(rect, origin) for rect in element.client_rects]


def rects_to_dicts(rects: Iterable[Rect]) -> List[Dict[str, float]]:
    return [rect.to_dict() for rect in rects]


__all__ = [
    "Rect",
    "ZERO_RECT",
    "relative_rect",
    "relative_client_rects",
    "rects_to_dicts",
]
