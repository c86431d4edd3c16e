from errors import InvalidFormat

# Bit 5 of each type byte is the ASCII case bit (lowercase when set)
PROPERTY_BIT = 0x20


def is_ascii_letter(byte):
    return 0x41 <= byte <= 0x5A or 0x61 <= byte <= 0x7A


class ChunkType:
    """4-byte chunk type code.

    The PNG spec encodes four flags in the case of the type letters:
    byte 0 ancillary/critical, byte 1 private/public, byte 2 reserved and
    byte 3 safe-to-copy. Construction from raw bytes is permissive, validity
    is something to ask for with ``is_valid()``.
    """

    __slots__ = ("_bytes",)

    def __init__(self, raw):
        raw = bytes(raw)
        if len(raw) != 4:
            raise InvalidFormat(
                f"Chunk types must be 4 bytes long, got {len(raw)} bytes"
            )
        self._bytes = raw

    @classmethod
    def from_bytes(cls, raw):
        return cls(raw)

    @classmethod
    def from_string(cls, text):
        raw = text.encode("utf-8")
        if len(raw) != 4:
            raise InvalidFormat(f"Chunk types must be 4 characters long: {text!r}")
        for byte in raw:
            if not is_ascii_letter(byte):
                raise InvalidFormat(f"Invalid byte in chunk type {text!r}: {byte}")
        return cls(raw)

    @classmethod
    def coerce(cls, value):
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            return cls.from_string(value)
        return cls.from_bytes(value)

    def to_bytes(self):
        return self._bytes

    def is_critical(self):
        return not self._bytes[0] & PROPERTY_BIT

    def is_public(self):
        return not self._bytes[1] & PROPERTY_BIT

    def is_reserved_bit_valid(self):
        return not self._bytes[2] & PROPERTY_BIT

    def is_safe_to_copy(self):
        return bool(self._bytes[3] & PROPERTY_BIT)

    def is_valid(self):
        return all(is_ascii_letter(b) for b in self._bytes) and self.is_reserved_bit_valid()

    def __eq__(self, other):
        if not isinstance(other, ChunkType):
            return NotImplemented
        return self._bytes == other._bytes

    def __hash__(self):
        return hash(self._bytes)

    def __str__(self):
        return self._bytes.decode("latin-1")

    def __repr__(self):
        return f"ChunkType({self._bytes!r})"
