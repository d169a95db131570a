import sys
from pathlib import Path
from unittest.mock import MagicMock

import cv2
import numpy as np
import pytest
import requests

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from frame_slideshow.canvas import CanvasHost  # noqa: E402
from frame_slideshow.errors import ExportError  # noqa: E402
from frame_slideshow.exporters import FillExporter, HttpExporter  # noqa: E402


def decode(data: bytes) -> np.ndarray:
    return cv2.imdecode(np.frombuffer(data, dtype=np.uint8), cv2.IMREAD_COLOR)


def make_region():
    host = CanvasHost()
    page = host.add_page("Deck")
    frame = host.new_node("FRAME", "Card", node_id="12:34")
    frame.resize(20, 10)
    frame.fill_color = "#0000FF"
    page.append_child(frame)

    badge = host.new_node("RECTANGLE", "Badge")
    badge.set_position(2, 2)
    badge.resize(4, 4)
    badge.fill_color = [255, 0, 0]
    frame.append_child(badge)

    overflow = host.new_node("RECTANGLE", "Overflow")
    overflow.set_position(18, 8)
    overflow.resize(10, 10)
    overflow.fill_color = "#00FF00"
    frame.append_child(overflow)
    return frame


def test_fill_exporter_paints_background_and_children():
    image = decode(FillExporter().export(make_region()))

    assert image.shape == (10, 20, 3)
    assert tuple(int(v) for v in image[0, 0]) == (255, 0, 0)
    assert tuple(int(v) for v in image[3, 3]) == (0, 0, 255)
    assert tuple(int(v) for v in image[9, 19]) == (0, 255, 0)
    assert tuple(int(v) for v in image[7, 3]) == (255, 0, 0)


def test_fill_exporter_scales_output():
    image = decode(FillExporter(scale=2).export(make_region()))
    assert image.shape == (20, 40, 3)
    assert tuple(int(v) for v in image[5, 5]) == (0, 0, 255)


def test_fill_exporter_uses_background_when_region_has_no_fill():
    region = make_region()
    region.fill_color = None
    image = decode(FillExporter(background_color=(10, 20, 30)).export(region))
    assert tuple(int(v) for v in image[0, 0]) == (10, 20, 30)


def test_http_exporter_fetches_region_png():
    response = MagicMock()
    response.content = b"\x89PNG fake"
    session = MagicMock()
    session.get.return_value = response

    exporter = HttpExporter("https://render.example/frames/", http_timeout=3, session=session)
    data = exporter.export(make_region())

    assert data == b"\x89PNG fake"
    session.get.assert_called_once_with("https://render.example/frames/12%3A34.png", timeout=3)
    response.raise_for_status.assert_called_once()


def test_http_exporter_wraps_request_errors():
    response = MagicMock()
    response.raise_for_status.side_effect = requests.HTTPError("404 Client Error")
    session = MagicMock()
    session.get.return_value = response

    with pytest.raises(ExportError) as excinfo:
        HttpExporter("https://render.example", session=session).export(make_region())
    assert isinstance(excinfo.value.__cause__, requests.HTTPError)


def test_http_exporter_rejects_empty_body():
    response = MagicMock()
    response.content = b""
    session = MagicMock()
    session.get.return_value = response

    with pytest.raises(ExportError):
        HttpExporter("https://render.example", session=session).export(make_region())
