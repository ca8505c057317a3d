"""Command-line entry point."""

from __future__ import annotations

import json

from penumbra_mcp.__main__ import EXIT_OK, EXIT_PROTOCOL_ERROR, EXIT_STARTUP_FAILURE, main


def test_list_tools(capsys):
    assert main(["--list-tools"]) == EXIT_OK
    tools = json.loads(capsys.readouterr().out)
    assert tools[0]["name"] == "get_validator_set"
    assert "inputSchema" in tools[0]


def test_call_prints_envelope(capsys):
    code = main(["--call", "estimate_fees", "--arguments", '{"actions": [{"type": "output", "params": {}}]}'])
    assert code == EXIT_OK
    envelope = json.loads(capsys.readouterr().out)
    assert json.loads(envelope["content"][0]["text"])["estimatedFee"] == "0.001300"


def test_call_with_bad_arguments(capsys):
    assert main(["--call", "get_transaction"]) == EXIT_PROTOCOL_ERROR
    error = json.loads(capsys.readouterr().err.strip().splitlines()[-1])
    assert error["error"]["code"] == -32602


def test_invalid_configuration_exits_nonzero(monkeypatch):
    monkeypatch.setenv("PENUMBRA_REQUEST_TIMEOUT", "-5")
    assert main(["--list-tools"]) == EXIT_STARTUP_FAILURE


def test_list_tools_does_not_open_node_client(monkeypatch, capsys):
    opened = []

    class RecordingNodeClient:
        def __init__(self, settings):
            opened.append(settings)

    monkeypatch.setattr("penumbra_mcp.__main__.NodeClient", RecordingNodeClient)
    monkeypatch.setenv("PENUMBRA_NODE_LIVE", "1")

    assert main(["--list-tools"]) == EXIT_OK
    assert opened == []
    assert len(json.loads(capsys.readouterr().out)) == 8
