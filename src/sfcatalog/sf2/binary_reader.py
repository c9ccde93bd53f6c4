from typing import BinaryIO

from sfcatalog.sf2.exceptions import SF2FormatError


class BinaryReaderEx:
    """Little-endian primitives over a binary stream. Short reads raise."""

    @staticmethod
    def read_exact(reader: BinaryIO, size: int) -> bytes:
        data = reader.read(size)
        if len(data) != size:
            raise SF2FormatError(
                f"Unexpected end of file: wanted {size} bytes, got {len(data)}."
            )
        return data

    @staticmethod
    def read_uint32(reader: BinaryIO) -> int:
        return int.from_bytes(
            BinaryReaderEx.read_exact(reader, 4), byteorder="little", signed=False
        )

    @staticmethod
    def read_uint16(reader: BinaryIO) -> int:
        return int.from_bytes(
            BinaryReaderEx.read_exact(reader, 2), byteorder="little", signed=False
        )

    @staticmethod
    def read_four_cc(reader: BinaryIO) -> str:
        data = bytearray(BinaryReaderEx.read_exact(reader, 4))
        for i, value in enumerate(data):
            if not (32 <= value and value <= 126):
                data[i] = 63  # '?'
        return data.decode("ascii")

    @staticmethod
    def read_fixed_length_string(reader: BinaryIO, length: int) -> str:
        """Read a zero-terminated string stored in a fixed-size field."""
        data = BinaryReaderEx.read_exact(reader, length)
        end = data.find(b"\x00")
        if end >= 0:
            data = data[:end]
        # Names are nominally ASCII; real files carry Latin-1 bytes too
        return data.decode("latin-1").strip()

    @staticmethod
    def skip(reader: BinaryIO, size: int) -> None:
        """Skip a chunk body, including the RIFF pad byte after odd sizes."""
        reader.seek(size + (size & 1), 1)
