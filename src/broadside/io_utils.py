# io_utils.py
"""
Terminal collaborators used by GameSession
––––––––––––––––––––––––––––––––––––––––––
• parse_int()      – lenient leading-integer parse, None for non-numeric text
• safe_readline()  – readline() that turns EOF into PromptClosedError
• TerminalPrompt   – question → answer over a pair of text streams
• TerminalPrinter  – info lines to stdout, diagnostics to stderr

The session only depends on the PromptSource / LinePrinter protocols, so tests
can swap in scripted answers and a recording printer.
"""

from __future__ import annotations

import logging
import re
import sys
from typing import Optional, Protocol, TextIO

logger = logging.getLogger(__name__)

# optional sign and digits at the start; anything after is ignored ("3abc" -> 3, "2.9" -> 2)
_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")


class PromptClosedError(Exception):
    """Raised when the input stream ends while the game is waiting for an answer."""


class PromptSource(Protocol):
    def ask_int(self, question: str, default: str = "") -> Optional[int]: ...

    def ask_str(self, question: str, default: str = "") -> str: ...


class LinePrinter(Protocol):
    def info(self, text: str) -> None: ...

    def error(self, text: str) -> None: ...


def parse_int(text: str) -> Optional[int]:
    """Return the integer at the start of *text*, or None when there isn't one."""
    match = _LEADING_INT_RE.match(text)
    if match is None:
        return None
    return int(match.group(1))


def safe_readline(reader: TextIO) -> str:
    """Read one line without its newline; raise PromptClosedError on EOF."""
    try:
        line = reader.readline()
    except (OSError, UnicodeDecodeError) as e:
        logger.debug("safe_readline() error – %s", e)
        line = ""
    if not line:
        logger.debug("safe_readline() EOF")
        raise PromptClosedError("Input closed before the game finished")
    logger.debug("safe_readline() got line %r", line)
    return line.rstrip("\r\n")


class TerminalPrompt:
    """Blocking prompt source over text streams (stdin/stdout by default)."""

    def __init__(self, reader: TextIO | None = None, writer: TextIO | None = None) -> None:
        self.reader = reader if reader is not None else sys.stdin
        self.writer = writer if writer is not None else sys.stdout

    def ask_str(self, question: str, default: str = "") -> str:
        self.writer.write(question)
        self.writer.flush()
        answer = safe_readline(self.reader)
        # blank answer falls back to the default, like pressing enter on a pre-filled prompt
        return answer if answer.strip() else default

    def ask_int(self, question: str, default: str = "") -> Optional[int]:
        return parse_int(self.ask_str(question, default))


class TerminalPrinter:
    """Line printer: informational output to *out*, diagnostics to *err*."""

    def __init__(self, out: TextIO | None = None, err: TextIO | None = None) -> None:
        self.out = out if out is not None else sys.stdout
        self.err = err if err is not None else sys.stderr

    def info(self, text: str) -> None:
        print(text, file=self.out, flush=True)

    def error(self, text: str) -> None:
        print(text, file=self.err, flush=True)
