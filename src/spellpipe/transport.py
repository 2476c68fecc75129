"""Session transport speaking to one speller process."""

from __future__ import annotations

import queue
import subprocess
from contextlib import suppress
from typing import IO, Protocol

from loguru import logger

from .errors import ProcessError, ProtocolError, SpellPipeError
from .protocol import ESCAPE_MARKER
from .relay import OutputRelay, RelayItem

KILL_WAIT_SECONDS = 1.0


class ProcessHandle(Protocol):
    """The parts of ``subprocess.Popen`` the transport relies on."""

    stdin: IO[bytes] | None
    stdout: IO[bytes] | None

    def kill(self) -> None: ...

    def wait(self, timeout: float | None = None) -> int: ...


class SessionTransport:
    """Write requests to the speller and receive its frames with a timeout.

    Use :meth:`open` to build one: it starts the output relay and checks the
    ``@`` version banner before handing the session out.
    """

    def __init__(self, process: ProcessHandle, timeout: float) -> None:
        if process.stdin is None or process.stdout is None:
            raise ProcessError("spell checker process has no stdin/stdout pipe")
        self.process = process
        self.timeout = timeout
        self.banner = ""
        self._stdin = process.stdin
        self._queue: queue.Queue[RelayItem] = queue.Queue()
        self._relay = OutputRelay(process.stdout, self._queue)
        self._closed = False
        self._failure: ProcessError | None = None

    @classmethod
    def open(cls, process: ProcessHandle, timeout: float) -> SessionTransport:
        transport = cls(process, timeout)
        transport._relay.start()
        try:
            transport._handshake()
        except SpellPipeError:
            transport.close()
            raise
        return transport

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def relay(self) -> OutputRelay:
        return self._relay

    def _handshake(self) -> None:
        frame = self.receive_frame()
        if not frame.startswith("@"):
            raise ProtocolError(f"spell checker did not send a version banner: {frame!r}")
        self.banner = frame.strip()
        logger.debug("transport.handshake banner={}", self.banner)

    def send(self, text: str) -> None:
        """Submit one line for checking.

        Raises the relay's failure instead of writing once it has stopped reading.
        """
        self.drain()
        if self._failure is not None:
            raise ProcessError(self._failure.message) from self._failure
        self._write(f"{ESCAPE_MARKER}{text}\n".encode())
        logger.debug("transport.send words={}", len(text.split()))

    def send_command(self, line: str) -> None:
        """Write a raw control line such as ``@word`` or ``#``."""
        self._write(f"{line}\n".encode())
        logger.debug("transport.command line={!r}", line)

    def drain(self) -> list[RelayItem]:
        """Drop every frame already waiting, leftovers of a previous exchange.

        A queued relay failure is kept and reported by the next :meth:`send`.
        """
        discarded: list[RelayItem] = []
        while True:
            try:
                discarded.append(self._queue.get_nowait())
            except queue.Empty:
                break
        for item in discarded:
            if isinstance(item, ProcessError):
                self._failure = item
            logger.debug("transport.drain discarded={!r}", item)
        return discarded

    def receive_frame(self) -> str:
        try:
            item = self._queue.get(timeout=self.timeout)
        except queue.Empty:
            raise ProcessError(f"spell checker sent no response in time ({self.timeout}s)") from None
        if isinstance(item, ProcessError):
            self._failure = item
        if isinstance(item, SpellPipeError):
            raise item
        return item

    def _write(self, payload: bytes) -> None:
        if self._closed:
            raise ProcessError("session is closed")
        try:
            self._stdin.write(payload)
            self._stdin.flush()
        except (OSError, ValueError) as exc:
            raise ProcessError(f"could not write to spell checker: {exc}") from exc

    def close(self) -> None:
        """Stop listening and kill the process. Never raises."""
        if self._closed:
            return
        self._closed = True
        self._relay.stop_event.set()
        with suppress(OSError, ValueError):
            self._stdin.close()
        try:
            self.process.kill()
            self.process.wait(timeout=KILL_WAIT_SECONDS)
        except (OSError, subprocess.SubprocessError) as exc:
            logger.debug("transport.close kill failed: {}", exc)
        self._relay.join(KILL_WAIT_SECONDS)
        logger.debug("transport.closed")
