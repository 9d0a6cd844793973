import hashlib

import pytest

from blocksig import cli
from blocksig.io.signature_file import read_signature

MIB = 1024 * 1024


@pytest.fixture(autouse=True)
def _no_global_logging(monkeypatch):
    # Keep pytest's log capture intact; the CLI would otherwise reconfigure root.
    monkeypatch.setattr(cli, "configure_logging", lambda *a, **kw: None)
    for name in ("BLOCKSIG_TARGET_WORKERS", "BLOCKSIG_MAX_BLOCK_SIZE_MB"):
        monkeypatch.delenv(name, raising=False)


def test_file_mode_writes_signature(tmp_path):
    payload = b"\x07" * (MIB + 10)
    src = tmp_path / "in.bin"
    src.write_bytes(payload)
    out = tmp_path / "out.sig"

    assert cli.main(["-i", str(src), "-o", str(out)]) == 0
    assert read_signature(out) == [
        hashlib.sha256(payload[:MIB]).hexdigest(),
        hashlib.sha256(payload[MIB:]).hexdigest(),
    ]


def test_file_mode_block_size_option(tmp_path):
    payload = b"\x01" * (3 * MIB)
    src = tmp_path / "in.bin"
    src.write_bytes(payload)
    out = tmp_path / "out.sig"

    assert cli.main(["-i", str(src), "-o", str(out), "-b", "2"]) == 0
    assert len(read_signature(out)) == 2


def test_missing_input_file_fails(tmp_path):
    out = tmp_path / "out.sig"
    assert cli.main(["-i", str(tmp_path / "absent.bin"), "-o", str(out)]) == 1
    assert not out.exists()


@pytest.mark.parametrize(
    ("argv", "message"),
    [
        (["-s", "8080", "-i", "a", "-o", "b"], "mutually exclusive"),
        (["-i", "a"], "'-o' output file argument is missing"),
        (["-o", "b"], "'-i' input file argument is missing"),
        (["-i", "a", "-o", "b", "-b", "0"], "unsupported block size"),
        (["-i", "a", "-o", "b", "-b", "2048"], "unsupported block size"),
        ([], "either '-s' or '-i/-o' is required"),
    ],
)
def test_argument_errors_exit_nonzero(argv, message, capsys):
    assert cli.main(argv) == 1
    assert message in capsys.readouterr().err


def test_worker_override_reaches_settings(tmp_path, monkeypatch):
    seen = {}

    def _sign_file(inp, outp, block_size_mb, settings):
        seen["workers"] = settings.TARGET_WORKERS
        seen["block_size_mb"] = block_size_mb

    monkeypatch.setattr(cli, "sign_file", _sign_file)
    assert cli.main(["-i", "in", "-o", "out", "-w", "3"]) == 0
    assert seen == {"workers": 3, "block_size_mb": 1}


def test_invalid_worker_count_is_rejected(capsys):
    assert cli.main(["-i", "in", "-o", "out", "-w", "0"]) == 1
    assert "TARGET_WORKERS" in capsys.readouterr().err


def test_server_mode_runs_uvicorn(monkeypatch):
    calls = {}

    def _run(app, **kwargs):
        calls["app"] = app
        calls.update(kwargs)

    monkeypatch.setattr("uvicorn.run", _run)
    assert cli.main(["-s", "8123"]) == 0
    assert calls["port"] == 8123
    assert calls["timeout_graceful_shutdown"] == 5
    assert calls["app"].state.settings.TARGET_WORKERS == 30
