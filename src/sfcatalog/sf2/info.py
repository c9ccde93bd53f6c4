from typing import BinaryIO

from sfcatalog.sf2.binary_reader import BinaryReaderEx
from sfcatalog.sf2.exceptions import SF2FormatError


class SoundFontInfo:
    """
    The descriptive fields of an SF2 INFO list.

    Only the bank name (INAM), author (IENG), comment (ICMT) and copyright
    (ICOP) are kept; every other sub-chunk is skipped.
    """

    def __init__(self, reader: BinaryIO, size: int) -> None:
        self._bank_name = ""
        self._author = ""
        self._comments = ""
        self._copyright = ""

        end = reader.tell() + size
        while reader.tell() < end:
            sub_id = BinaryReaderEx.read_four_cc(reader)
            sub_size = BinaryReaderEx.read_uint32(reader)
            if reader.tell() + sub_size > end:
                raise SF2FormatError(
                    f"The INFO sub-chunk '{sub_id}' overruns its list."
                )

            match sub_id:
                case "INAM":
                    self._bank_name = BinaryReaderEx.read_fixed_length_string(
                        reader, sub_size
                    )
                case "IENG":
                    self._author = BinaryReaderEx.read_fixed_length_string(
                        reader, sub_size
                    )
                case "ICMT":
                    self._comments = BinaryReaderEx.read_fixed_length_string(
                        reader, sub_size
                    )
                case "ICOP":
                    self._copyright = BinaryReaderEx.read_fixed_length_string(
                        reader, sub_size
                    )
                case _:
                    BinaryReaderEx.skip(reader, sub_size)
                    continue

            if sub_size & 1:
                reader.seek(1, 1)

    @property
    def bank_name(self) -> str:
        return self._bank_name

    @property
    def author(self) -> str:
        return self._author

    @property
    def comments(self) -> str:
        return self._comments

    @property
    def copyright(self) -> str:
        return self._copyright
