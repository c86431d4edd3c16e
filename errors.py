class PngError(ValueError):
    """Base class for every failure raised while handling a PNG stream."""


class InvalidSignature(PngError):
    def __init__(self, header=b""):
        self.header = bytes(header)
        super().__init__(f"Not a valid PNG file (header: {self.header.hex() or 'empty'})")


class InvalidFormat(PngError):
    pass


class UnexpectedEof(PngError):
    pass


class CrcMismatch(PngError):
    def __init__(self, expected, found):
        self.expected = expected
        self.found = found
        super().__init__(f"Invalid CRC, stored {found:#010x}, computed {expected:#010x}")


class ChunkNotFound(PngError):
    def __init__(self, chunk_type):
        self.chunk_type = chunk_type
        super().__init__(f"No chunk of type {chunk_type} found")


class InvalidUtf8(PngError):
    pass


class DecryptionError(PngError):
    pass
