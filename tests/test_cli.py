"""The pusher-mcp command line."""

import io
import json

import pytest

from pusher_mcp import __version__
from pusher_mcp.__main__ import main
from pusher_mcp.config import REQUIRED_ENV_VARS


@pytest.fixture
def clean_env(monkeypatch):
    for name in REQUIRED_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def full_env(clean_env):
    clean_env.setenv("PUSHER_APP_ID", "123456")
    clean_env.setenv("PUSHER_KEY", "test-key")
    clean_env.setenv("PUSHER_SECRET", "test-secret")
    clean_env.setenv("PUSHER_CLUSTER", "eu")
    return clean_env


def test_version(capsys):
    assert main(["version"]) == 0
    assert capsys.readouterr().out.strip() == f"pusher-mcp version {__version__}"


def test_check_fails_without_credentials(clean_env, capsys):
    assert main(["check"]) == 1
    err = capsys.readouterr().err
    assert "PUSHER_APP_ID, PUSHER_KEY, PUSHER_SECRET, PUSHER_CLUSTER" in err


def test_check_passes_with_credentials(full_env, capsys):
    assert main(["check"]) == 0
    assert capsys.readouterr().out.strip() == "Configuration OK (app 123456, cluster eu)"


def test_tools_prints_tool_list(clean_env, capsys):
    assert main(["tools"]) == 0
    listing = json.loads(capsys.readouterr().out)
    assert len(listing["tools"]) == 7


def test_serve_runs_until_eof(clean_env, monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO('{"jsonrpc": "2.0", "id": 1, "method": "ping"}\n'))

    assert main(["serve"]) == 0

    captured = capsys.readouterr()
    assert json.loads(captured.out) == {"jsonrpc": "2.0", "result": {}, "id": 1}
    assert "Pusher MCP Server running on stdio" in captured.err


@pytest.mark.parametrize("command", ["version", "tools"])
def test_root_launcher_forwards_commands(clean_env, monkeypatch, capsys, command):
    import main as launcher

    monkeypatch.setattr("sys.argv", ["main.py", command])

    with pytest.raises(SystemExit) as exc_info:
        launcher.main()

    assert exc_info.value.code == 0
    assert capsys.readouterr().out.strip()


def test_root_launcher_defaults_to_serve(clean_env, monkeypatch, capsys):
    import main as launcher

    monkeypatch.setattr("sys.argv", ["main.py"])
    monkeypatch.setattr("sys.stdin", io.StringIO(""))

    with pytest.raises(SystemExit) as exc_info:
        launcher.main()

    assert exc_info.value.code == 0
    assert "Pusher MCP Server running on stdio" in capsys.readouterr().err
