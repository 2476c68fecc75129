"""Background reader relaying the speller's output to a queue."""

from __future__ import annotations

import queue
import threading
from typing import BinaryIO, TypeAlias

from loguru import logger

from .errors import EncodingError, ProcessError, SpellPipeError

RelayItem: TypeAlias = str | SpellPipeError


def is_frame_complete(buffer: bytes) -> bool:
    """Tell whether the accumulated output forms a whole protocol frame.

    A frame ends with a blank line, is a lone newline, or is the ``@``
    version banner which the speller prints once without a trailing blank
    line.
    """
    return buffer == b"\n" or buffer.endswith(b"\n\n") or buffer.startswith(b"@")


class OutputRelay:
    """Read frames from a binary stream and put them on a queue.

    The relay is the only reader of ``stream``. Each item put on ``sink`` is
    either a decoded frame or the error that prevented reading one.
    """

    def __init__(
        self,
        stream: BinaryIO,
        sink: queue.Queue[RelayItem],
        *,
        stop_event: threading.Event | None = None,
    ) -> None:
        self._stream = stream
        self._sink = sink
        self._stop_event = stop_event or threading.Event()
        self._worker = threading.Thread(target=self.run, name="spellpipe-relay", daemon=True)

    @property
    def stop_event(self) -> threading.Event:
        return self._stop_event

    def start(self) -> None:
        if not self._worker.is_alive():
            self._worker.start()

    def is_alive(self) -> bool:
        return self._worker.is_alive()

    def join(self, timeout: float | None = None) -> None:
        if self._worker.is_alive() and self._worker is not threading.current_thread():
            self._worker.join(timeout)

    def run(self) -> None:
        while not self._stop_event.is_set():
            try:
                frame = self.read_frame()
            except ProcessError as exc:
                self._put(exc)
                return
            except EncodingError as exc:
                if not self._put(exc):
                    return
                continue
            if not self._put(frame):
                return

    def read_frame(self) -> str:
        """Block until one complete frame has been read and decode it."""
        buffer = b""
        while True:
            try:
                line = self._stream.readline()
            except (OSError, ValueError) as exc:
                raise ProcessError(f"could not read from spell checker: {exc}") from exc
            if not line:
                if buffer:
                    logger.debug("relay.eof dropped partial frame={!r}", buffer)
                raise ProcessError("spell checker closed its output stream")
            buffer += line
            if is_frame_complete(buffer):
                break

        try:
            frame = buffer.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise EncodingError(f"spell checker output is not valid UTF-8: {exc}") from exc
        logger.debug("relay.frame size={}", len(frame))
        return frame

    def _put(self, item: RelayItem) -> bool:
        # Nobody is listening any more once the transport has closed.
        if self._stop_event.is_set():
            logger.debug("relay.stopped discarded={!r}", item)
            return False
        self._sink.put(item)
        return True
