"""Line-oriented extraction of import paths from Go source files.

The scan does not parse Go. It walks the lines of a file through a small
state machine that recognises the two import forms::

    import "github.com/owner/repo"

    import (
        "fmt"
        alias "github.com/owner/repo"
    )

Block comments are skipped and the scan stops at the first closing
parenthesis after a grouped import, since imports precede all other code.
Anything the lexical rules cannot see (an import after a ``//`` marker on the
same line, a same-line ``/* ... */`` pair) is simply missed.
"""

import enum
import logging
from pathlib import Path
from typing import Iterable, Iterator, List, NamedTuple, Optional, Tuple

from .classifier import domain_segment, is_external
from .errors import FileReadError

logger = logging.getLogger(__name__)


BLOCK_COMMENT_OPEN = "/*"
BLOCK_COMMENT_CLOSE = "*/"
LINE_COMMENT = "//"
IMPORT_BLOCK_OPEN = "import ("
IMPORT_BLOCK_CLOSE = ")"
SINGLE_IMPORT = 'import "'
QUOTE = '"'


class Mode(enum.Enum):
    SEEKING = "seeking"
    IN_COMMENT_BLOCK = "in_comment_block"
    IN_IMPORT_BLOCK = "in_import_block"
    DONE = "done"


class ScanState(NamedTuple):
    """
    Per-file scan state.

    ``resume`` is the mode to go back to once a block comment closes, so a
    comment inside an import block does not end the block.
    """

    mode: Mode = Mode.SEEKING
    resume: Mode = Mode.SEEKING

    @property
    def inside_import_block(self) -> bool:
        return self.mode is Mode.IN_IMPORT_BLOCK

    @property
    def inside_block_comment(self) -> bool:
        return self.mode is Mode.IN_COMMENT_BLOCK

    @property
    def block_just_ended(self) -> bool:
        return self.mode is Mode.DONE


INITIAL_STATE = ScanState()


class ImportPath(NamedTuple):
    """A candidate import path and the 1-based line it was found on."""

    path: str
    line: int

    @property
    def domain_segment(self) -> str:
        return domain_segment(self.path)

    @property
    def is_external(self) -> bool:
        return is_external(self.path)


def _strip_alias(token: str) -> str:
    """Drop a leading alias, blank identifier or dot before the quoted path."""
    if token.startswith(QUOTE):
        return token
    # The path starts at the first quote, with or without whitespace after the alias.
    start = token.find(QUOTE)
    if start == -1:
        return token
    return token[start:]


def _block_candidate(line: str) -> str:
    token = line.strip(" \t\r")
    token = _strip_alias(token)
    return token.strip(QUOTE)


def _single_candidate(line: str) -> str:
    start = line.find(SINGLE_IMPORT)
    if LINE_COMMENT in line[:start]:
        return ""
    parts = line[start:].split(None, 1)
    if len(parts) < 2:
        return ""
    quoted = parts[1]
    # Keep only the quoted segment, dropping anything after the closing quote.
    if quoted.startswith(QUOTE):
        end = quoted.find(QUOTE, 1)
        if end != -1:
            quoted = quoted[: end + 1]
    return quoted.strip(QUOTE)


def step(state: ScanState, line: str) -> Tuple[ScanState, Optional[str]]:
    """
    Advance the scan state by one physical line.

    Rules are evaluated top to bottom and the first match wins. A line that
    opens a block comment is always skipped, even if it also closes the
    comment or contains import syntax.

    Args:
        state: Current scan state.
        line: The line being classified, without its trailing newline.

    Returns:
        A tuple of the next state and the raw candidate token found on the
        line, or None when the line yields nothing.
    """
    mode = state.mode

    if mode is Mode.DONE:
        return state, None

    if BLOCK_COMMENT_OPEN in line:
        resume = state.resume if mode is Mode.IN_COMMENT_BLOCK else mode
        return ScanState(Mode.IN_COMMENT_BLOCK, resume), None

    if mode is Mode.IN_COMMENT_BLOCK:
        if BLOCK_COMMENT_CLOSE in line:
            return ScanState(state.resume, state.resume), None
        return state, None

    if IMPORT_BLOCK_OPEN in line:
        return ScanState(Mode.IN_IMPORT_BLOCK, Mode.IN_IMPORT_BLOCK), None

    if mode is Mode.IN_IMPORT_BLOCK:
        if IMPORT_BLOCK_CLOSE in line:
            return ScanState(Mode.DONE, Mode.DONE), None
        if LINE_COMMENT in line:
            return state, None
        if QUOTE not in line:
            return state, None
        return state, _block_candidate(line)

    if SINGLE_IMPORT in line:
        return state, _single_candidate(line)

    return state, None


def extract_imports(lines: Iterable[str]) -> Iterator[ImportPath]:
    """
    Run the state machine over the lines of one file.

    Args:
        lines: Lines of a source file.

    Yields:
        ImportPath for every non-empty candidate, builtin paths included.
        Classification is left to the caller.
    """
    state = INITIAL_STATE
    for number, line in enumerate(lines, start=1):
        state, candidate = step(state, line)
        if candidate:
            yield ImportPath(candidate, number)
        if state.block_just_ended:
            break


def read_lines(file_path: Path) -> List[str]:
    """Read a source file and split it into lines."""
    try:
        content = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise FileReadError(file_path, str(e)) from e
    return content.split("\n")


def parse_file(file_path: Path, debug: bool = False) -> List[ImportPath]:
    """
    Extract candidate import paths from a Go source file.

    Args:
        file_path: Path to the file to scan.
        debug: If True, log diagnostics about the file and each import.

    Returns:
        Candidate import paths in line order.

    Raises:
        FileReadError: If the file cannot be read or is not valid UTF-8.
    """
    if debug:
        logger.debug("Reading file: '%s'...", file_path)

    lines = read_lines(file_path)
    if debug:
        logger.debug("File contains %d lines", len(lines))

    imports = list(extract_imports(lines))
    if debug:
        for found in imports:
            logger.debug("Found import: %s (line %d)", found.path, found.line)
    return imports
