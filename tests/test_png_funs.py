import pytest

import _rsa
from chunk_model import Chunk
from errors import ChunkNotFound, DecryptionError, InvalidFormat, InvalidUtf8
from png_funs import (
    anon_path,
    anonymize,
    chunk_text,
    decode,
    decode_bytes,
    describe_chunks,
    encode,
    read_png,
    remove,
    write_png,
)
from png_model import Png


def test_hide_and_reveal(png_bytes):
    encoded = encode(Png.from_bytes(png_bytes), "ruSt", "hidden message")

    assert decode(Png.from_bytes(encoded), "ruSt") == "hidden message"


def test_encoded_png_keeps_original_chunks(png_bytes):
    encoded = encode(Png.from_bytes(png_bytes), "ruSt", "hidden message")
    assert encoded.startswith(png_bytes)


def test_decode_unknown_type(png_bytes):
    encoded = encode(Png.from_bytes(png_bytes), "ruSt", "hidden message")

    with pytest.raises(ChunkNotFound):
        decode(Png.from_bytes(encoded), "FAKE")


def test_remove_scrubs_message(png_bytes):
    encoded = encode(Png.from_bytes(png_bytes), "ruSt", "hidden message")

    removed, scrubbed = remove(Png.from_bytes(encoded), "ruSt")

    assert removed.data == b"hidden message"
    assert scrubbed == png_bytes
    with pytest.raises(ChunkNotFound):
        decode(Png.from_bytes(scrubbed), "ruSt")


def test_binary_payload(png_bytes):
    payload = bytes(range(256))
    encoded = encode(Png.from_bytes(png_bytes), "biNy", payload)

    assert decode_bytes(Png.from_bytes(encoded), "biNy") == payload
    with pytest.raises(InvalidUtf8):
        decode(Png.from_bytes(encoded), "biNy")


@pytest.mark.parametrize("chunk_type", ["Rust", "ru1t", "toolong"])
def test_encode_rejects_invalid_types(png_bytes, chunk_type):
    with pytest.raises(InvalidFormat):
        encode(Png.from_bytes(png_bytes), chunk_type, "hidden message")


def test_encrypted_hide_and_reveal(png_bytes, key_pair):
    private_key, public_key = key_pair
    message = "hidden message " * 10

    encoded = encode(Png.from_bytes(png_bytes), "ruSt", message, public_key)
    png = Png.from_bytes(encoded)

    assert message.encode() not in encoded
    assert decode(png, "ruSt", private_key) == message


def test_encrypted_message_needs_key(png_bytes, key_pair):
    _, public_key = key_pair
    other_private_key, _ = _rsa.generate_rsa_key_pair(512)
    encoded = encode(Png.from_bytes(png_bytes), "ruSt", "hidden message", public_key)

    with pytest.raises(DecryptionError):
        decode(Png.from_bytes(encoded), "ruSt", other_private_key)


def test_anonymize(png_bytes):
    encoded = encode(Png.from_bytes(png_bytes), "ruSt", "hidden message")

    stripped = Png.from_bytes(anonymize(Png.from_bytes(encoded)))

    assert [str(c.chunk_type) for c in stripped.chunks()] == ["IHDR", "IDAT", "IEND"]


def test_chunk_text():
    assert chunk_text(Chunk("ruSt", "żółw".encode("utf-8"))) == "żółw"
    assert chunk_text(Chunk("ruSt", b"")) is None


def test_describe_chunks(png_bytes):
    encoded = encode(Png.from_bytes(png_bytes), "ruSt", "hidden message")

    lines = describe_chunks(Png.from_bytes(encoded))

    assert len(lines) == 5
    assert "IHDR" in lines[0] and "critical" in lines[0]
    assert "Comment hello" in lines[1]
    assert "'hidden message'" in lines[4]


def test_read_and_write(tmp_path, png_file, png_bytes):
    png = read_png(png_file)
    target = tmp_path / "copy.png"
    write_png(target, png.as_bytes())
    assert target.read_bytes() == png_bytes


def test_anon_path():
    assert anon_path("dir/cat.png") == "dir/cat_anon.png"
    assert anon_path("cat") == "cat_anon.png"
