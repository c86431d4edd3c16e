import struct
import zlib

import pytest

SIGNATURE = b"\x89PNG\r\n\x1a\n"


def raw_chunk(chunk_type, data):
    crc = zlib.crc32(chunk_type + data) & 0xFFFFFFFF
    return struct.pack(">I", len(data)) + chunk_type + data + struct.pack(">I", crc)


@pytest.fixture
def make_chunk():
    return raw_chunk


@pytest.fixture
def png_bytes():
    # 1x1 RGB image with a text chunk between header and data
    ihdr = struct.pack(">IIBBBBB", 1, 1, 8, 2, 0, 0, 0)
    idat = zlib.compress(b"\x00\xff\x00\x00")
    return b"".join(
        (
            SIGNATURE,
            raw_chunk(b"IHDR", ihdr),
            raw_chunk(b"tEXt", b"Comment\x00hello"),
            raw_chunk(b"IDAT", idat),
            raw_chunk(b"IEND", b""),
        )
    )


@pytest.fixture
def png_file(tmp_path, png_bytes):
    path = tmp_path / "image.png"
    path.write_bytes(png_bytes)
    return path


@pytest.fixture(scope="session")
def key_pair():
    import _rsa

    return _rsa.generate_rsa_key_pair(512)
