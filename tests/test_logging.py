import logging

import pytest

from blocksig.core.config import Settings
from blocksig.core.logging import configure_logging, mode_prefix


@pytest.fixture
def restore_root():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    for h in root.handlers[:]:
        if h not in handlers:
            root.removeHandler(h)
            h.close()
    root.setLevel(level)
    logging.disable(logging.NOTSET)


def test_mode_prefix():
    assert mode_prefix(True, False) == "[File] "
    assert mode_prefix(False, True) == "[Server] "
    assert mode_prefix(False, False) == ""


def test_log_file_receives_prefixed_lines(tmp_path, restore_root):
    log_file = tmp_path / "blocksig.log"
    configure_logging("[File] ", log_file, Settings(LOG_LEVEL="INFO"))

    logging.getLogger("blocksig.test").info("hello")
    for h in restore_root.handlers:
        h.flush()

    line = log_file.read_text(encoding="utf-8").strip()
    assert line.startswith("[File] ")
    assert line.endswith("INFO blocksig.test hello")


def test_unopenable_log_file_falls_back_to_stdout(tmp_path, restore_root, capsys):
    configure_logging("", tmp_path / "missing" / "x.log", Settings())
    handler = restore_root.handlers[0]
    assert not isinstance(handler, logging.FileHandler)
    assert "Unable to open log file" in capsys.readouterr().err


def test_mute_disables_logging(restore_root):
    configure_logging(settings=Settings(MUTE_ALL_LOGS=True))
    assert logging.getLogger("blocksig").isEnabledFor(logging.CRITICAL) is False


def test_access_log_can_be_disabled(restore_root):
    access = logging.getLogger("uvicorn.access")
    try:
        configure_logging(settings=Settings(ACCESS_LOG=False))
        assert access.disabled
    finally:
        access.disabled = False
