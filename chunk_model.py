from chunk_type import ChunkType
from crc import crc32, crc32_bytes
from errors import CrcMismatch, InvalidFormat, InvalidUtf8, UnexpectedEof

# CC - critical chunk | AC - ancillary chunk
chunk_types = {
    b"IHDR": "image header",  # CC
    b"PLTE": "palette",  # CC
    b"IDAT": "image data",  # CC
    b"IEND": "image trailer",  # CC
    b"sRGB": "standard RGB colour space",  # AC
    b"gAMA": "image gamma",  # AC
    b"pHYs": "physical pixel dimensions",  # AC
    b"sBIT": "significant bits",  # AC
    b"sPLT": "suggested palette",  # AC
    b"tIME": "last modification time",  # AC
    b"cHRM": "primary chromaticities",  # AC
    b"tEXt": "textual data",  # AC
    b"zTXt": "compressed textual data",  # AC
    b"iTXt": "international textual data",  # AC
    b"hIST": "palette histogram",  # AC
    b"tRNS": "transparency",  # AC
    b"bKGD": "background colour",  # AC
    b"iCCP": "embedded ICC profile",  # AC
}

LENGTH_SIZE = 4
TYPE_SIZE = 4
CRC_SIZE = 4
# length + type + crc around an empty data field
MIN_CHUNK_SIZE = LENGTH_SIZE + TYPE_SIZE + CRC_SIZE
MAX_DATA_LENGTH = 2**32 - 1


class Chunk:
    """Single length-prefixed, typed and CRC-protected PNG record.

    A chunk is a value: the type and data never change after construction,
    and length and CRC are always computed from them.
    """

    __slots__ = ("_chunk_type", "_data")

    def __init__(self, chunk_type, data):
        data = bytes(data)
        if len(data) > MAX_DATA_LENGTH:
            raise InvalidFormat(
                f"Chunk data of {len(data)} bytes does not fit the length field"
            )
        self._chunk_type = ChunkType.coerce(chunk_type)
        self._data = data

    @classmethod
    def read(cls, buffer, offset=0):
        """Parse the chunk starting at ``offset``.

        Returns the chunk and the offset just past its CRC. Raises
        ``UnexpectedEof`` when the buffer ends inside the record and
        ``CrcMismatch`` when the stored CRC does not cover type and data.
        """
        buffer = memoryview(buffer)
        available = len(buffer) - offset
        if available < MIN_CHUNK_SIZE:
            raise UnexpectedEof(
                f"Chunk at offset {offset} needs at least {MIN_CHUNK_SIZE} bytes, "
                f"{available} left"
            )

        length = int.from_bytes(buffer[offset : offset + LENGTH_SIZE], byteorder="big")
        type_start = offset + LENGTH_SIZE
        data_start = type_start + TYPE_SIZE
        data_end = data_start + length
        crc_end = data_end + CRC_SIZE
        if crc_end > len(buffer):
            raise UnexpectedEof(
                f"Chunk at offset {offset} declares {length} data bytes, "
                f"but only {available} bytes are left"
            )

        chunk = cls(buffer[type_start:data_start], buffer[data_start:data_end])
        stored_crc = int.from_bytes(buffer[data_end:crc_end], byteorder="big")
        computed = chunk.crc
        if stored_crc != computed:
            raise CrcMismatch(expected=computed, found=stored_crc)
        return chunk, crc_end

    @classmethod
    def from_bytes(cls, raw):
        chunk, end = cls.read(raw)
        if end != len(raw):
            raise InvalidFormat(
                f"Invalid data length, found {len(raw) - MIN_CHUNK_SIZE} bytes, "
                f"expected {chunk.length} bytes"
            )
        return chunk

    @property
    def chunk_type(self):
        return self._chunk_type

    @property
    def data(self):
        return self._data

    @property
    def length(self):
        return len(self._data)

    @property
    def crc(self):
        return crc32(self._chunk_type.to_bytes() + self._data)

    def data_as_string(self, encoding="utf-8"):
        try:
            return self._data.decode(encoding)
        except UnicodeDecodeError as exc:
            raise InvalidUtf8(
                f"Data of {self._chunk_type} chunk is not valid {encoding} text: {exc}"
            ) from exc

    def as_bytes(self):
        return b"".join(
            (
                self.length.to_bytes(LENGTH_SIZE, byteorder="big"),
                self._chunk_type.to_bytes(),
                self._data,
                crc32_bytes(self._chunk_type.to_bytes() + self._data),
            )
        )

    def __eq__(self, other):
        if not isinstance(other, Chunk):
            return NotImplemented
        return self._chunk_type == other._chunk_type and self._data == other._data

    def __hash__(self):
        return hash((self._chunk_type, self._data))

    def __str__(self):
        type_bytes = self._chunk_type.to_bytes()
        name = chunk_types.get(type_bytes, "unknown")
        kind = "critical" if self._chunk_type.is_critical() else "ancillary"
        return f"Type:{self._chunk_type} ({name}, {kind})    Length:{self.length}    CRC:{self.crc:08x}"

    def __repr__(self):
        return f"Chunk({str(self._chunk_type)!r}, length={self.length})"
