"""
Line scanner for minigrep.

Reads an open binary stream one line at a time so files of any size can be
searched without loading them into memory. Each line is decoded on its own,
so an invalid byte only affects the line it appears on.
"""

import logging
from typing import BinaryIO, Iterator

from ..errors import SearchIOError
from ..models.search_results import Line


logger = logging.getLogger(__name__)


def scan_lines(stream: BinaryIO, encoding: str = "utf-8") -> Iterator[Line]:
    """
    Yield the lines of a stream in file order.

    Lines are split on ``\\n`` and their terminator (``\\n`` or ``\\r\\n``) is
    removed. A last line without a terminator is still yielded, and a lone
    ``\\r`` is kept as part of the line text. The encoding must encode
    ``\\n`` as the single byte ``0x0A``.

    Args:
        stream: Readable binary stream positioned at the start of the data
        encoding: Encoding used to decode each line

    Yields:
        Line objects numbered from 1

    Raises:
        SearchIOError: If reading fails part way through, or a line cannot be
            decoded. Lines already yielded remain valid.
    """
    name = getattr(stream, 'name', None)
    number = 0
    lines = iter(stream)

    while True:
        try:
            raw = next(lines)
        except StopIteration:
            break
        except OSError as e:
            raise SearchIOError(f"cannot read source after line {number}: {e}", name) from e

        number += 1
        if raw.endswith(b'\n'):
            raw = raw[:-1]
            if raw.endswith(b'\r'):
                raw = raw[:-1]

        try:
            text = raw.decode(encoding)
        except UnicodeDecodeError as e:
            raise SearchIOError(f"cannot decode source at line {number}: {e}", name) from e

        yield Line(number=number, text=text)

    logger.debug(f"Scanned {number} lines from {name or 'stream'}")
