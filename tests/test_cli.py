import json
from pathlib import Path

from paginator.cli import build_parser, main


def _write_snapshot(path: Path, href: str = "#viv-id-:002fx:002ehtml:0023abc") -> None:
    snapshot = {
        "root": {
            "tag": "DIV",
            "attributes": {"data-vivliostyle-spread-container": ""},
            "children": [
                {
                    "tag": "DIV",
                    "children": [
                        {
                            "tag": "DIV",
                            "attributes": {"data-vivliostyle-page-box": ""},
                            "bounds": {"x": 100, "y": 200, "width": 600, "height": 800},
                            "children": [
                                {
                                    "tag": "A",
                                    "attributes": {
                                        "id": "viv-id-abc",
                                        "href": "#viv-id-:002fx:002ehtml:0023abc",
                                    },
                                    "rects": [{"x": 100, "y": 200, "width": 5, "height": 5}],
                                },
                                {
                                    "tag": "A",
                                    "attributes": {"href": href},
                                    "classList": ["ref"],
                                    "rects": [{"x": 110, "y": 210, "width": 50, "height": 20}],
                                },
                            ],
                        }
                    ],
                }
            ],
        }
    }
    path.write_text(json.dumps(snapshot), encoding="utf-8")


def test_describe_prints_descriptors(tmp_path: Path, capsys) -> None:
    snapshot = tmp_path / "snapshot.json"
    _write_snapshot(snapshot)
    assert main(["describe", str(snapshot)]) == 0
    elements = json.loads(capsys.readouterr().out)
    assert elements == [
        {
            "tag": "a",
            "classNames": ["ref"],
            "id": "",
            "name": None,
            "href": "#abc",
            "rects": [{"x": 10.0, "y": 10.0, "width": 50.0, "height": 20.0}],
        }
    ]


def test_describe_out_of_range_page_prints_empty_list(tmp_path: Path, capsys) -> None:
    snapshot = tmp_path / "snapshot.json"
    _write_snapshot(snapshot)
    assert main(["describe", str(snapshot), "--page", "5"]) == 0
    assert json.loads(capsys.readouterr().out) == []


def test_describe_missing_file_fails(tmp_path: Path) -> None:
    assert main(["describe", str(tmp_path / "missing.json")]) == 1


def test_demangle_prints_each_href(capsys) -> None:
    assert main(["demangle", "#aehtml:0023b:0020c", "https://x.org"]) == 0
    assert capsys.readouterr().out.splitlines() == ["#b c", "https://x.org"]


def test_version_flag(capsys) -> None:
    assert main(["--version"]) == 0
    assert capsys.readouterr().out.startswith("paginator ")


def test_invalid_config_is_reported() -> None:
    assert main(["--config", "{zoom: -1}", "demangle", "#x"]) == 2


def test_view_parser_options() -> None:
    args = build_parser().parse_args(
        ["view", "book.html", "--page", "2", "--zoom", "1.5", "--exit-after-dump"]
    )
    assert args.command == "view"
    assert args.page == 2
    assert args.zoom == 1.5
    assert args.exit_after_dump is True


def test_no_command_prints_help(capsys) -> None:
    assert main([]) == 1
    assert "usage:" in capsys.readouterr().out


def test_describe_escapes_lone_surrogate_in_href(tmp_path: Path, capsys) -> None:
    snapshot = tmp_path / "snapshot.json"
    _write_snapshot(snapshot, href="#viv-id-:002fx:002ehtml:0023:d83d")
    assert main(["describe", str(snapshot)]) == 0
    out = capsys.readouterr().out
    assert "\\ud83d" in out
    assert json.loads(out)[0]["href"] == "#\ud83d"


def test_describe_non_utf8_snapshot_fails(tmp_path: Path) -> None:
    snapshot = tmp_path / "snapshot.json"
    snapshot.write_bytes(b"\xff\xfe{}")
    assert main(["describe", str(snapshot)]) == 1


def test_demangle_escapes_lone_surrogate(capsys) -> None:
    assert main(["demangle", "#xehtml:0023:d83dx", "#aehtml:0023:d83d:de00"]) == 0
    assert capsys.readouterr().out.splitlines() == ["#\\ud83dx", "#\U0001f600"]
