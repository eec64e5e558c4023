"""Command text entry supporting escaped ASCII and spaced hexadecimal input."""

from __future__ import annotations

import logging
import re
from enum import Enum

_log = logging.getLogger(__name__)

_HEX_FULL = re.compile(r"(?:[0-9A-F]{2} )+[0-9A-F]{2}|[0-9A-F]{2}")
_HEX_PARTIAL = re.compile(r"(?:[0-9A-F]{2} )*[0-9A-F]{0,2}")
_HEX_PAIR_NOT_LAST = re.compile(r"([0-9A-F]{2}(?!$))")
_ASCII = re.compile(r"[\x00-\x7F]+")

_UNESCAPES = {
    "\\\\": "\\",
    "\\n": "\n",
    "\\r": "\r",
    "\\t": "\t",
}


class ValidatorState(Enum):
    """Outcome of validating entered text."""

    INVALID = 0
    INTERMEDIATE = 1
    ACCEPTABLE = 2


def escape(text: str) -> str:
    """Replace backslash, newline, carriage return and tab with escapes."""
    return (
        text.replace("\\", "\\\\")
        .replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\t", "\\t")
    )


def unescape(text: str) -> str:
    """Turn ``\\\\``, ``\\n``, ``\\r`` and ``\\t`` escapes back into characters."""
    result: list[str] = []
    i = 0
    while i < len(text):
        replacement = _UNESCAPES.get(text[i:i + 2])
        if replacement is not None:
            result.append(replacement)
            i += 2
        else:
            result.append(text[i])
            i += 1
    return "".join(result)


def _hex_state(text: str) -> ValidatorState:
    if _HEX_FULL.fullmatch(text):
        return ValidatorState.ACCEPTABLE
    if _HEX_PARTIAL.fullmatch(text):
        return ValidatorState.INTERMEDIATE
    return ValidatorState.INVALID


def validate_hex(text: str, pos: int = 0) -> tuple[ValidatorState, str, int]:
    """Validate space separated hex bytes, fixing case and spacing.

    Returns the state, the corrected text and the corrected cursor position.
    """
    text = text.upper()
    state = _hex_state(text)
    if state is not ValidatorState.ACCEPTABLE:
        text = _HEX_PAIR_NOT_LAST.sub(r"\1 ", text.replace(" ", ""))
        if pos == len(text) - 1:
            pos = len(text)
        state = _hex_state(text)
    return state, text, pos


def validate_ascii(text: str) -> ValidatorState:
    """Validate that ``text`` holds only 7-bit ASCII characters."""
    if _ASCII.fullmatch(text):
        return ValidatorState.ACCEPTABLE
    if not text:
        return ValidatorState.INTERMEDIATE
    return ValidatorState.INVALID


class CommandEdit:
    """Editable command text in ASCII (escaped) or hex mode.

    ASCII mode is the default. Switching modes converts the current text.
    """

    def __init__(self, text: str = "") -> None:
        self._ascii_mode = True
        self._text = ""
        self.set_text(text)

    @property
    def ascii_mode(self) -> bool:
        return self._ascii_mode

    @property
    def text(self) -> str:
        return self._text

    def set_mode(self, ascii: bool) -> None:
        """Switch to ASCII (``True``) or hex (``False``) mode, converting the text."""
        self._ascii_mode = ascii
        if ascii:
            hex_text = self._text.replace(" ", "")
            # patch a missing nibble so the text does not turn into gibberish
            if len(hex_text) % 2 == 1:
                hex_text = hex_text[:-1] + "3F"
                _log.warning("Broken byte in hex command is replaced. Check your command!")
            self._text = escape(bytes.fromhex(hex_text).decode("latin-1"))
        else:
            raw = unescape(self._text).encode("latin-1", errors="replace")
            self._text = raw.hex()

    def set_text(self, text: str) -> None:
        """Enter ``text`` as the user would; raises ``ValueError`` if rejected."""
        if self._ascii_mode:
            if validate_ascii(text) is ValidatorState.INVALID:
                raise ValueError("command must contain ASCII characters only")
            self._text = text
        else:
            state, fixed, _ = validate_hex(text, len(text))
            if state is ValidatorState.INVALID:
                raise ValueError(f"invalid hex command: {text!r}")
            self._text = fixed

    def unescaped_text(self) -> str:
        """The text with escapes resolved; meaningful in ASCII mode."""
        return unescape(self._text)

    def backspace(self, cursor: int) -> int:
        """Delete the character before ``cursor``; return the new cursor position.

        In hex mode a separating space is skipped so that a digit is deleted.
        """
        if not 0 <= cursor <= len(self._text):
            raise IndexError(f"cursor {cursor} out of range")
        if not self._ascii_mode and cursor != 0 and self._text[cursor - 1] == " ":
            cursor -= 1
        if cursor == 0:
            return cursor

        candidate = self._text[: cursor - 1] + self._text[cursor:]
        new_cursor = cursor - 1
        if self._ascii_mode:
            self._text = candidate
            return new_cursor

        state, fixed, pos = validate_hex(candidate, new_cursor)
        if state is ValidatorState.INVALID:
            return cursor
        self._text = fixed
        return pos