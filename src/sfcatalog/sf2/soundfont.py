from pathlib import Path
from typing import BinaryIO, Optional, Sequence, Union

from sfcatalog.sf2.binary_reader import BinaryReaderEx
from sfcatalog.sf2.exceptions import SF2FormatError
from sfcatalog.sf2.info import SoundFontInfo
from sfcatalog.sf2.preset_header import PresetHeader


class SoundFontMetadata:
    """
    The catalog-relevant parts of an SF2 file: INFO fields and preset headers.

    Sample data ('sdta') is skipped without being read, as are all 'pdta'
    sub-chunks other than 'phdr'.
    """

    def __init__(self, reader: BinaryIO) -> None:
        chunk_id = BinaryReaderEx.read_four_cc(reader)
        if chunk_id != "RIFF":
            raise SF2FormatError("The RIFF chunk was not found.")

        riff_size = BinaryReaderEx.read_uint32(reader)
        end = reader.tell() + riff_size

        form_type = BinaryReaderEx.read_four_cc(reader)
        if form_type != "sfbk":
            raise SF2FormatError(
                f"The type of the RIFF chunk must be 'sfbk', but was '{form_type}'."
            )

        info: Optional[SoundFontInfo] = None
        preset_headers: Optional[Sequence[PresetHeader]] = None

        while reader.tell() < end:
            chunk_id = BinaryReaderEx.read_four_cc(reader)
            size = BinaryReaderEx.read_uint32(reader)
            if chunk_id != "LIST":
                BinaryReaderEx.skip(reader, size)
                continue

            list_type = BinaryReaderEx.read_four_cc(reader)
            body_size = size - 4
            match list_type:
                case "INFO":
                    info = SoundFontInfo(reader, body_size)
                case "pdta":
                    preset_headers = self._read_parameters(reader, body_size)
                case _:
                    BinaryReaderEx.skip(reader, body_size)

        if info is None:
            raise SF2FormatError("The INFO list was not found.")
        if preset_headers is None:
            raise SF2FormatError("The PHDR sub-chunk was not found.")

        self._info = info
        self._preset_headers = preset_headers

    @staticmethod
    def _read_parameters(reader: BinaryIO, size: int) -> Optional[Sequence[PresetHeader]]:
        preset_headers = None
        end = reader.tell() + size
        while reader.tell() < end:
            sub_id = BinaryReaderEx.read_four_cc(reader)
            sub_size = BinaryReaderEx.read_uint32(reader)
            if sub_id == "phdr":
                preset_headers = PresetHeader.read_from_chunk(reader, sub_size)
            else:
                BinaryReaderEx.skip(reader, sub_size)
        return preset_headers

    @classmethod
    def from_file(cls, file_path: Union[str, Path]) -> "SoundFontMetadata":
        with open(file_path, "rb") as f:
            return cls(f)

    @property
    def info(self) -> SoundFontInfo:
        return self._info

    @property
    def preset_headers(self) -> Sequence[PresetHeader]:
        return self._preset_headers
