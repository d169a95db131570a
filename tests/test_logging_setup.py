import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from frame_slideshow.logging_setup import configure_logging  # noqa: E402


def _console_handler():
    return next(
        handler for handler in logging.getLogger().handlers
        if isinstance(handler, logging.StreamHandler) and not isinstance(handler, logging.FileHandler)
    )


def test_console_level_follows_verbose_flag():
    configure_logging()
    assert _console_handler().level == logging.INFO

    configure_logging(verbose=True)
    assert _console_handler().level == logging.DEBUG
    assert _console_handler().stream is sys.stdout


def test_log_file_records_debug_output(tmp_path):
    log_path = tmp_path / "logs" / "build.log"
    logger = configure_logging(log_file=log_path)

    logging.getLogger("frame_slideshow.composer").debug("Composed frame 0")
    logger.info("Slideshow complete")
    for handler in logging.getLogger().handlers:
        handler.flush()

    text = log_path.read_text(encoding="utf-8")
    assert "frame_slideshow.composer - DEBUG - Composed frame 0" in text
    assert "Slideshow complete" in text
    assert logging.getLogger("urllib3").level == logging.WARNING


def test_unwritable_log_file_falls_back_to_console(tmp_path):
    blocker = tmp_path / "not-a-directory"
    blocker.write_text("")

    logger = configure_logging(log_file=blocker / "build.log")

    assert logger.name == "frame_slideshow"
    assert not any(isinstance(handler, logging.FileHandler) for handler in logging.getLogger().handlers)
