import codecs
import contextlib
import logging
import os
import select
import sys
import termios
import tty
import typing

from . import utils
from .classes import Event, KeyCode, KeyEvent, KeyEventKind

logger = logging.getLogger("phrasey.events")

ESCAPE_SEQUENCE_WAIT = 0.05
QUIT_CHORDS = frozenset("cd")
BACK_CHORDS = frozenset("b")


@contextlib.contextmanager
def raw_mode(fd: int) -> typing.Iterator[None]:
    old_attrs = termios.tcgetattr(fd)
    try:
        tty.setraw(fd)
        logger.log(utils.TRACE, "Raw mode enabled")
        yield
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, old_attrs)
        logger.log(utils.TRACE, "Raw mode disabled")


class KeyReader(typing.Protocol):
    def raw(self) -> contextlib.AbstractContextManager[None]:
        ...

    def read_key(self) -> KeyEvent:
        ...


class TerminalKeyReader:
    """
    Reads single key presses from a terminal file descriptor.
    Only meaningful while the terminal is in raw mode, see `raw()`.
    """
    _fd: int | None
    _unread: bytes

    def __init__(self, fd: int | None = None):
        self._fd = fd
        self._unread = b""

    @property
    def fd(self) -> int:
        # resolved on first use, stdin may be replaced before the app starts reading
        if self._fd is None:
            self._fd = sys.stdin.fileno()
        return self._fd

    def raw(self) -> contextlib.AbstractContextManager[None]:
        return raw_mode(self.fd)

    def _read_byte(self) -> bytes:
        if self._unread:
            data, self._unread = self._unread, b""
            return data
        data = os.read(self.fd, 1)
        if not data:
            raise EOFError("Terminal input closed")
        return data

    def _pending(self) -> bool:
        ready, _, _ = select.select([self.fd], [], [], ESCAPE_SEQUENCE_WAIT)
        return bool(ready)

    def read_key(self) -> KeyEvent:
        data = self._read_byte()
        byte = data[0]
        if data in (b"\r", b"\n"):
            return KeyEvent(code=KeyCode.Enter)
        if data in (b"\x7f", b"\x08"):
            return KeyEvent(code=KeyCode.Backspace)
        if data == b"\x1b":
            if not self._pending():
                return KeyEvent(code=KeyCode.Esc)
            # arrows, function keys and the like
            sequence = os.read(self.fd, 16)
            logger.log(utils.TRACE, f"Escape sequence read: {sequence!r}")
            return KeyEvent(code=KeyCode.Other)
        if 1 <= byte <= 26:
            return KeyEvent(code=KeyCode.Char, char=chr(byte + ord("a") - 1), ctrl=True)
        if byte < 32:
            return KeyEvent(code=KeyCode.Other)
        decoder = codecs.getincrementaldecoder("utf-8")()
        sequence = data
        try:
            char = decoder.decode(data)
            while not char:
                data = self._read_byte()
                sequence += data
                char = decoder.decode(data)
        except UnicodeDecodeError:
            logger.debug(f"Invalid UTF-8 input dropped: {sequence!r}")
            if len(sequence) > 1:
                # the byte that broke the sequence may start the next key
                self._unread = data
            return KeyEvent(code=KeyCode.Other)
        return KeyEvent(code=KeyCode.Char, char=char)


def translate_key(key: KeyEvent) -> Event | None:
    if key.code == KeyCode.Enter:
        return Event.enter()
    if key.code == KeyCode.Esc:
        return Event.quit()
    if key.code == KeyCode.Backspace:
        return Event.remove_character()
    if key.code == KeyCode.Char and key.char is not None:
        if not key.ctrl:
            return Event.character(key.char)
        if key.char.lower() in QUIT_CHORDS:
            return Event.quit()
        if key.char.lower() in BACK_CHORDS:
            return Event.back()
    return None


class EventDispatcher:
    reader: KeyReader

    def __init__(self, reader: KeyReader | None = None):
        self.reader = TerminalKeyReader() if reader is None else reader

    def get(self) -> Event:
        """
        Blocks until a key press maps to an event.
        The terminal is in raw mode only for the duration of this call.
        """
        with self.reader.raw():
            while True:
                key = self.reader.read_key()
                logger.log(utils.TRACE, f"Received key event: {key}")
                if key.kind == KeyEventKind.Release:
                    logger.log(utils.TRACE, "Ignoring key release event")
                    continue
                event = translate_key(key)
                if event is None:
                    logger.log(utils.TRACE, "Unhandled key event, ignoring")
                    continue
                return event
