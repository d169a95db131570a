import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from frame_slideshow.progress import eta_string  # noqa: E402


def test_eta_before_first_completion():
    assert eta_string(0.0, 0, 5) == "ETA estimating"
    assert eta_string(3.0, 6, 5) == "ETA estimating"


def test_eta_extrapolates_remaining_time():
    assert eta_string(10.0, 2, 5) == "3 left, ETA 15s"
    assert eta_string(60.0, 1, 3) == "2 left, ETA 2m00s"


def test_eta_reports_total_when_finished():
    assert eta_string(0.2, 4, 4) == "done in <1s"
