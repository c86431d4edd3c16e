from chunk_model import Chunk
from chunk_type import ChunkType
from errors import ChunkNotFound, InvalidSignature

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


class Png:
    """Ordered list of chunks behind the fixed PNG signature."""

    STANDARD_HEADER = PNG_SIGNATURE

    def __init__(self, chunks=()):
        self._chunks = list(chunks)

    @classmethod
    def from_bytes(cls, raw):
        raw = bytes(raw)
        # Check if the buffer is a valid PNG file
        if raw[: len(PNG_SIGNATURE)] != PNG_SIGNATURE:
            raise InvalidSignature(raw[: len(PNG_SIGNATURE)])

        # Read the chunks until the input is exhausted
        chunks = []
        offset = len(PNG_SIGNATURE)
        while offset < len(raw):
            chunk, offset = Chunk.read(raw, offset)
            chunks.append(chunk)
        return cls(chunks)

    def header(self):
        return self.STANDARD_HEADER

    def chunks(self):
        return tuple(self._chunks)

    def critical_chunks(self):
        return [chunk for chunk in self._chunks if chunk.chunk_type.is_critical()]

    def append_chunk(self, chunk):
        self._chunks.append(chunk)

    def chunk_by_type(self, chunk_type):
        chunk_type = ChunkType.coerce(chunk_type)
        return next(
            (chunk for chunk in self._chunks if chunk.chunk_type == chunk_type), None
        )

    def chunks_by_type(self, chunk_type):
        chunk_type = ChunkType.coerce(chunk_type)
        return [chunk for chunk in self._chunks if chunk.chunk_type == chunk_type]

    def remove_first_chunk(self, chunk_type):
        chunk_type = ChunkType.coerce(chunk_type)
        for index, chunk in enumerate(self._chunks):
            if chunk.chunk_type == chunk_type:
                return self._chunks.pop(index)
        raise ChunkNotFound(chunk_type)

    remove_first_chunk_by_type = remove_first_chunk

    def as_bytes(self):
        return self.STANDARD_HEADER + b"".join(chunk.as_bytes() for chunk in self._chunks)

    def __len__(self):
        return len(self._chunks)

    def __str__(self):
        lines = [f"PNG with {len(self._chunks)} chunks"]
        lines.extend(str(chunk) for chunk in self._chunks)
        return "\n".join(lines)
