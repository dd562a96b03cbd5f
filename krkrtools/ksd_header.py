"""The five-byte header that opens a scrambled KSD text file."""

from enum import IntEnum

HEADER_SIZE = 5


class Mode(IntEnum):
    """Scrambling mode recorded in the third header byte."""

    MODE0 = 0
    MODE1 = 1
    MODE2 = 2

    def header(self) -> bytes:
        """Return the header bytes that announce this mode."""
        return bytes((0xFE, 0xFE, self.value, 0xFF, 0xFE))


MODE0 = Mode.MODE0.header()
MODE1 = Mode.MODE1.header()
MODE2 = Mode.MODE2.header()


def file_mode(header: bytes) -> Mode:
    """Return the mode announced by a five-byte header.

    Raises ``ValueError`` for anything that is not a known header.
    """
    raw = bytes(header)
    for mode in Mode:
        if raw == mode.header():
            return mode
    raise ValueError("unknown input file")