from typing import BinaryIO, Sequence

from sfcatalog.sf2.binary_reader import BinaryReaderEx
from sfcatalog.sf2.exceptions import SF2FormatError

RECORD_SIZE = 38
TERMINAL_NAME = "EOP"


class PresetHeader:
    """One 38-byte record of the SF2 'phdr' sub-chunk."""

    def __init__(self, reader: BinaryIO) -> None:
        self._name = BinaryReaderEx.read_fixed_length_string(reader, 20)
        self._patch_number = BinaryReaderEx.read_uint16(reader)
        self._bank_number = BinaryReaderEx.read_uint16(reader)
        self._zone_start_index = BinaryReaderEx.read_uint16(reader)
        # library, genre and morphology are reserved
        BinaryReaderEx.read_exact(reader, 12)

    @staticmethod
    def read_from_chunk(reader: BinaryIO, size: int) -> Sequence["PresetHeader"]:
        """Read every record of the chunk, dropping the terminal 'EOP' record."""
        if size % RECORD_SIZE != 0:
            raise SF2FormatError("The preset list is invalid.")

        headers = [PresetHeader(reader) for _ in range(size // RECORD_SIZE)]
        if headers and headers[-1].name == TERMINAL_NAME:
            headers.pop()
        return headers

    @property
    def name(self) -> str:
        return self._name

    @property
    def patch_number(self) -> int:
        return self._patch_number

    @property
    def bank_number(self) -> int:
        return self._bank_number

    @property
    def zone_start_index(self) -> int:
        return self._zone_start_index

    def __repr__(self) -> str:
        return (
            f"PresetHeader(name={self._name!r}, bank={self._bank_number}, "
            f"patch={self._patch_number})"
        )
