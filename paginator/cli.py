import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from paginator.configs import get_config
from paginator.core.dom import parse_snapshot
from paginator.core.extractor import elements_of_page
from paginator.core.href import demangled_href
from paginator.utils.logger import logger, set_log_level
from paginator.version import get_version

__all__ = ["build_parser", "main"]


def build_parser() -> argparse.ArgumentParser:
    """Construct the argument parser for the ``paginator`` command."""
    parser = argparse.ArgumentParser(
        prog="paginator",
        description="Describe addressable elements of paginated documents.",
    )
    parser.add_argument(
        "--version",
        "-V",
        action="store_true",
        help="show version and exit",
    )
    parser.add_argument(
        "--config",
        dest="config",
        default=None,
        help="config file or yaml format string",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="enable debug logging",
    )
    subparsers = parser.add_subparsers(dest="command")

    describe = subparsers.add_parser(
        "describe", help="describe a page of a saved DOM snapshot"
    )
    describe.add_argument("snapshot", help="snapshot JSON file")
    describe.add_argument("--page", type=int, default=0, help="page index")

    demangle = subparsers.add_parser(
        "demangle", help="print the authored form of renderer hrefs"
    )
    demangle.add_argument("hrefs", nargs="+")

    view = subparsers.add_parser("view", help="open a document in the viewer")
    view.add_argument("document", help="local file or http(s) URL")
    view.add_argument("--page", type=int, default=0, help="page index to show")
    view.add_argument(
        "--zoom", type=float, default=argparse.SUPPRESS, help="zoom factor"
    )
    view.add_argument(
        "--dump",
        default=None,
        help="write the page description to this JSON file",
    )
    view.add_argument(
        "--snapshot",
        default=None,
        help="also save the raw DOM snapshot of the page to this JSON file",
    )
    view.add_argument(
        "--exit-after-dump",
        action="store_true",
        help="quit once the page has been described",
    )
    return parser


def _describe_snapshot(snapshot_path: str, page: int) -> int:
    try:
        payload = json.loads(Path(snapshot_path).read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        logger.error("Cannot read snapshot %s: %s", snapshot_path, exc)
        return 1
    root = parse_snapshot(payload)
    elements = [item.to_dict() for item in elements_of_page(root, page)]
    print(json.dumps(elements, indent=2))
    return 0


def _demangle(hrefs: Sequence[str]) -> int:
    for href in hrefs:
        # Lone surrogates survive unescaping; print them as \u escapes.
        text = demangled_href(href)
        print(text.encode("utf-8", "backslashreplace").decode("utf-8"))
    return 0


def _view(args: argparse.Namespace, config: dict) -> int:
    from qtpy import QtWidgets

    from paginator.core.events import DID_FINISH_NAVIGATION
    from paginator.gui.app import PaginatorWindow, dump_elements

    app = QtWidgets.QApplication.instance() or QtWidgets.QApplication(sys.argv)
    dump_path = Path(args.dump).expanduser() if args.dump else None
    target_page = max(0, int(args.page))
    state = {"navigated": False, "described": False}

    def _on_described(elements: list) -> None:
        text = dump_elements(elements, dump_path)
        if dump_path is None:
            print(text)
        else:
            logger.info("Wrote %d elements to %s", len(elements), dump_path)

    window = PaginatorWindow(config, on_page_described=_on_described)

    def _on_notification(payload: dict) -> None:
        if payload.get("name") != DID_FINISH_NAVIGATION or state["described"]:
            return
        if target_page and not state["navigated"]:
            state["navigated"] = True
            window.show_page(target_page)
            return
        state["described"] = True
        window.describe_current_page()
        if args.snapshot:
            window.save_snapshot(Path(args.snapshot).expanduser())
        if args.exit_after_dump:
            app.quit()

    window.notification.connect(_on_notification)
    window.open_document(args.document, getattr(args, "zoom", None))
    window.show()
    return int(app.exec_())


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(f"paginator {get_version()}")
        return 0

    config_from_args = {}
    if getattr(args, "zoom", None) is not None:
        config_from_args["zoom"] = args.zoom
    try:
        config = get_config(args.config, config_from_args)
    except (OSError, ValueError) as exc:
        logger.error("Invalid configuration: %s", exc)
        return 2
    set_log_level("DEBUG" if args.debug else config.get("log_level", "INFO"))

    if args.command == "describe":
        return _describe_snapshot(args.snapshot, args.page)
    if args.command == "demangle":
        return _demangle(args.hrefs)
    if args.command == "view":
        return _view(args, config)
    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
