import json
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from frame_slideshow import cli  # noqa: E402


def write_document(path: Path) -> Path:
    path.write_text(json.dumps({
        "pages": [{
            "name": "Deck",
            "children": [
                {"type": "FRAME", "name": "Right", "x": 300, "y": 0, "width": 40, "height": 20, "fill": "#AA0000"},
                {"type": "FRAME", "name": "Left", "x": 0, "y": 0, "width": 40, "height": 20, "fill": "#00AA00"},
            ],
        }],
    }))
    return path


def write_settings(path: Path, **values) -> Path:
    path.write_text(json.dumps(values))
    return path


def test_build_writes_slideshow_document_and_previews(tmp_path):
    document = write_document(tmp_path / "deck.json")
    config = write_settings(tmp_path / "slideshow.json", page_name="Slides")
    output = tmp_path / "deck.slideshow.json"

    exit_code = cli.main([
        "--config", str(config),
        "build", str(document),
        "--output", str(output),
        "--previews-dir", str(tmp_path / "previews"),
    ])

    assert exit_code == 0
    data = json.loads(output.read_text())
    slides_page = data["pages"][1]
    assert slides_page["name"] == "Slides"
    assert [child["x"] for child in slides_page["children"]] == [0, 300]
    assert sorted(p.name for p in (tmp_path / "previews").iterdir()) == ["slide_000.png", "slide_001.png"]
    assert "Slideshow" not in document.read_text()


def test_build_overwrites_input_by_default(tmp_path):
    document = write_document(tmp_path / "deck.json")
    config = write_settings(tmp_path / "slideshow.json")

    assert cli.main(["--config", str(config), "build", str(document)]) == 0
    assert len(json.loads(document.read_text())["pages"]) == 2


def test_build_reports_bad_document(tmp_path):
    document = tmp_path / "broken.json"
    document.write_text(json.dumps({"pages": "nope"}))
    config = write_settings(tmp_path / "slideshow.json")

    assert cli.main(["--config", str(config), "build", str(document)]) == 1


def test_inspect_lists_frames(tmp_path):
    document = write_document(tmp_path / "deck.json")
    config = write_settings(tmp_path / "slideshow.json")

    exit_code = cli.main(["--config", str(config), "inspect", str(document), "--order", "x"])

    assert exit_code == 0


def test_build_reports_missing_document(tmp_path):
    config = write_settings(tmp_path / "slideshow.json")

    assert cli.main(["--config", str(config), "build", str(tmp_path / "absent.json")]) == 1


def test_inspect_reports_missing_document(tmp_path):
    config = write_settings(tmp_path / "slideshow.json")

    assert cli.main(["--config", str(config), "inspect", str(tmp_path / "absent.json")]) == 1


def test_build_reports_malformed_settings(tmp_path):
    document = write_document(tmp_path / "deck.json")
    config = tmp_path / "slideshow.json"
    config.write_text("{not json")

    assert cli.main(["--config", str(config), "build", str(document)]) == 1
    assert len(json.loads(document.read_text())["pages"]) == 1


def test_inspect_reports_malformed_settings(tmp_path):
    document = write_document(tmp_path / "deck.json")
    config = tmp_path / "slideshow.json"
    config.write_text("{not json")

    assert cli.main(["--config", str(config), "inspect", str(document)]) == 1
