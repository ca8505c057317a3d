"""
Client-side stdio transport.

Launches a tool server as a child process and exchanges JSON-RPC lines
with it: requests go to its stdin, one response line is read back from
its stdout per request.
"""

from __future__ import annotations

import json
import logging
import os
import subprocess
from dataclasses import dataclass, field
from typing import Any

logger = logging.getLogger(__name__)

STOP_TIMEOUT_SECONDS = 5


@dataclass
class JsonRpcRequest:
    """JSON-RPC 2.0 request, or a notification when id is None."""
    method: str
    params: dict[str, Any] = field(default_factory=dict)
    id: int | str | None = None

    def to_json(self) -> str:
        message: dict[str, Any] = {"jsonrpc": "2.0", "method": self.method, "params": self.params}
        if self.id is not None:
            message["id"] = self.id
        return json.dumps(message)


@dataclass
class JsonRpcResponse:
    """JSON-RPC 2.0 response."""
    id: int | str | None
    result: Any = None
    error: dict | None = None

    @classmethod
    def from_json(cls, data: str) -> "JsonRpcResponse":
        """
        Decode one response line.

        Raises:
            ValueError: The line is not JSON, or not a JSON-RPC 2.0 response
                carrying exactly one of result/error.
        """
        parsed = json.loads(data)
        if not isinstance(parsed, dict) or parsed.get("jsonrpc") != "2.0":
            raise ValueError(f"Not a JSON-RPC 2.0 response: {data[:200]}")
        if ("result" in parsed) == ("error" in parsed):
            raise ValueError("JSON-RPC response must carry exactly one of 'result' and 'error'")
        error = parsed.get("error")
        if error is not None and not isinstance(error, dict):
            raise ValueError(f"JSON-RPC error must be an object, got {type(error).__name__}")
        return cls(id=parsed.get("id"), result=parsed.get("result"), error=error)

    @property
    def is_error(self) -> bool:
        return self.error is not None


class StdioTransport:
    """JSON-RPC over stdin/stdout pipes to a subprocess."""

    def __init__(self, command: list[str], env: dict[str, str] | None = None):
        """
        Args:
            command: Command to launch the tool server process.
                     e.g., ["python", "-m", "penumbra_mcp"]
            env: Extra environment variables for the subprocess, layered
                 over the current environment.
        """
        self.command = command
        self.env = env
        self._process: subprocess.Popen | None = None
        self._request_id = 0

    def start(self) -> None:
        """Launch the tool server subprocess."""
        if self._process and self._process.poll() is None:
            logger.warning("Transport already running, stopping first")
            self.stop()

        env = {**os.environ, **self.env} if self.env else None
        logger.info(f"Starting stdio transport: {' '.join(self.command)}")
        self._process = subprocess.Popen(
            self.command,
            stdin=subprocess.PIPE,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            env=env,
            bufsize=1,  # Line-buffered
        )

    def stop(self) -> None:
        """Close the server's stdin and wait for it to exit, killing it if needed."""
        if self._process:
            if self._process.stdin:
                self._process.stdin.close()
            try:
                self._process.wait(timeout=STOP_TIMEOUT_SECONDS)
            except subprocess.TimeoutExpired:
                self._process.kill()
                self._process.wait()
            for stream in (self._process.stdout, self._process.stderr):
                if stream:
                    stream.close()
            self._process = None
            logger.info("Stdio transport stopped")

    def is_alive(self) -> bool:
        return self._process is not None and self._process.poll() is None

    def _write(self, request: JsonRpcRequest) -> None:
        if not self.is_alive():
            raise RuntimeError("Transport not running. Call start() first.")
        self._process.stdin.write(request.to_json() + "\n")
        self._process.stdin.flush()

    def notify(self, method: str, params: dict[str, Any] | None = None) -> None:
        """Send a notification; no response is read."""
        self._write(JsonRpcRequest(method=method, params=params or {}))

    def send(self, request: JsonRpcRequest) -> JsonRpcResponse:
        """Send JSON-RPC request via stdin, read response from stdout."""
        self._write(request)

        response_line = self._process.stdout.readline()
        if not response_line:
            stderr = self._process.stderr.read() if self._process.stderr else ""
            raise RuntimeError(f"Tool server process died. stderr: {stderr[:500]}")

        response = JsonRpcResponse.from_json(response_line.strip())
        # id is null when the server could not read the request at all
        if response.id is not None and response.id != request.id:
            raise RuntimeError(f"Response id {response.id!r} does not match request id {request.id!r}")
        return response

    def next_id(self) -> int:
        """Generate the next request ID."""
        self._request_id += 1
        return self._request_id
