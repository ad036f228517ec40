"""JavaScript that serializes the renderer's spread container for Python."""

from __future__ import annotations

import json

_SNAPSHOT_JS = """
(() => {
  try {
    const pageIndex = %(page_index)s;
    const spread = document.querySelector("[data-vivliostyle-spread-container]");
    if (!spread) return { root: null };

    const rectOf = (r) => ({ x: r.x, y: r.y, width: r.width, height: r.height });
    const attributesOf = (el) => {
      const attrs = {};
      for (const attr of Array.from(el.attributes)) attrs[attr.name] = attr.value;
      return attrs;
    };
    const stub = (el) => ({
      tag: el.tagName,
      attributes: attributesOf(el),
      classList: Array.from(el.classList),
      rects: [],
      bounds: null,
      children: [],
    });
    const serialize = (el) => ({
      tag: el.tagName,
      attributes: attributesOf(el),
      classList: Array.from(el.classList),
      rects: Array.from(el.getClientRects()).map(rectOf),
      bounds: rectOf(el.getBoundingClientRect()),
      children: Array.from(el.children).map(serialize),
    });

    const root = stub(spread);
    root.children = Array.from(spread.children).map((child, index) =>
      index === pageIndex ? serialize(child) : stub(child)
    );
    return { root: root };
  } catch (err) {
    return { error: String(err && err.message ? err.message : err) };
  }
})();
"""

_PAGE_SIZES_JS = """
(() => {
  try {
    const sizes = window.paginator ? window.paginator.getPageSizes() : [];
    return { sizes: sizes || [] };
  } catch (err) {
    return { error: String(err && err.message ? err.message : err) };
  }
})();
"""


def snapshot_script(page_index: int) -> str:
    return _SNAPSHOT_JS % {"page_index": json.dumps(int(page_index))}


def page_sizes_script() -> str:
    return _PAGE_SIZES_JS


def call_script(function: str, *args: object) -> str:
    """A guarded ``window.paginator.<function>(...)`` call with JSON arguments."""
    encoded = ", ".join(json.dumps(arg, ensure_ascii=False) for arg in args)
    encoded = encoded.replace("</", "<\\/")
    return (
        f"window.paginator && window.paginator.{function}"
        f" && window.paginator.{function}({encoded});"
    )


__all__ = ["call_script", "page_sizes_script", "snapshot_script"]
