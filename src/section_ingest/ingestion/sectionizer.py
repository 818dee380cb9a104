"""Blank-line sectioning with code-fence awareness."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

logger = logging.getLogger(__name__)

CODE_FENCE = "```"
CHAR_SOFT_LIMIT = 20000
CHAR_SOFT_MINIMUM = 100


def iter_lines(text: str) -> Iterator[str]:
    """Yield the lines of *text* without their terminators.

    Lines end at ``\\n`` (optionally preceded by ``\\r``).  A trailing
    newline does not produce a final empty line.
    """
    if not text:
        return
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    for line in lines:
        yield line[:-1] if line.endswith("\r") else line


class Sectionizer:
    """Split a document into sections at blank lines outside code fences.

    Parameters
    ----------
    char_soft_limit:
        Once a section holds this many characters, further lines are
        dropped (with a warning) until the next boundary.
    char_soft_minimum:
        A blank line only closes a section when the section is longer
        than this.
    flush_trailing:
        Also emit whatever is left after the last boundary.  Off by
        default: text after the final qualifying blank line is discarded.
    """

    def __init__(
        self,
        char_soft_limit: int = CHAR_SOFT_LIMIT,
        char_soft_minimum: int = CHAR_SOFT_MINIMUM,
        *,
        flush_trailing: bool = False,
    ) -> None:
        self.char_soft_limit = char_soft_limit
        self.char_soft_minimum = char_soft_minimum
        self.flush_trailing = flush_trailing

    def split(self, lines: Iterable[str]) -> Iterator[str]:
        """Lazily yield sections built from *lines*, in input order.

        Each yielded section is the raw accumulated text, every line
        followed by ``\\n``; sections that are blank after stripping are
        never yielded.
        """
        parts: list[str] = []
        length = 0
        in_code_block = False

        for line in lines:
            if length < self.char_soft_limit:
                parts.append(line + "\n")
                length += len(line) + 1
            else:
                logger.warning(
                    "Section already has %d chars. Exceeded soft limit of %d. Skipped line: %s",
                    length,
                    self.char_soft_limit,
                    line,
                )

            stripped = line.strip()
            if stripped.startswith(CODE_FENCE):
                in_code_block = not in_code_block

            if not stripped and not in_code_block and length > self.char_soft_minimum:
                section = "".join(parts)
                if section.strip():
                    yield section
                parts.clear()
                length = 0

        if parts:
            section = "".join(parts)
            if self.flush_trailing and section.strip():
                yield section
            else:
                logger.debug("Discarding %d trailing chars after the last section boundary", length)

    def split_text(self, text: str) -> Iterator[str]:
        """Same as :meth:`split` but takes the raw document text."""
        return self.split(iter_lines(text))
