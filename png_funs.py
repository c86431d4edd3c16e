import os

import chardet

import _rsa
from chunk_model import Chunk
from chunk_type import ChunkType
from errors import ChunkNotFound, InvalidFormat, InvalidUtf8
from png_model import Png


def read_png(image):
    # Open the PNG file in binary mode
    with open(image, "rb") as file:
        return Png.from_bytes(file.read())


def write_png(image, data):
    with open(image, "wb") as file:
        file.write(data)


def anon_path(image_name):
    root, ext = os.path.splitext(image_name)
    return f"{root}_anon{ext or '.png'}"


def encode(png, chunk_type, message, public_key=None):
    """Hide ``message`` in a new chunk of ``chunk_type`` appended to ``png``.

    Text is stored as UTF-8. With a public key the payload is RSA encrypted
    first, so only the private key holder can read it back.
    """
    chunk_type = ChunkType.coerce(chunk_type)
    if not chunk_type.is_valid():
        raise InvalidFormat(f"{chunk_type} is not a valid chunk type for a hidden message")

    payload = message.encode("utf-8") if isinstance(message, str) else bytes(message)
    if public_key is not None:
        payload = _rsa.rsa_encrypt(payload, public_key)

    png.append_chunk(Chunk(chunk_type, payload))
    return png.as_bytes()


def decode_bytes(png, chunk_type, private_key=None):
    chunk = png.chunk_by_type(chunk_type)
    if chunk is None:
        raise ChunkNotFound(ChunkType.coerce(chunk_type))
    if private_key is None:
        return chunk.data
    return _rsa.rsa_decrypt(chunk.data, private_key)


def decode(png, chunk_type, private_key=None):
    payload = decode_bytes(png, chunk_type, private_key)
    try:
        return payload.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise InvalidUtf8(f"Hidden payload is not valid utf-8 text: {exc}") from exc


def remove(png, chunk_type):
    removed = png.remove_first_chunk(chunk_type)
    return removed, png.as_bytes()


def anonymize(png):
    # Keep only the chunks a decoder needs to render the image
    return Png(png.critical_chunks()).as_bytes()


def chunk_text(chunk):
    """Best effort text view of a chunk payload, ``None`` for binary data."""
    if not chunk.data:
        return None
    try:
        return chunk.data_as_string()
    except InvalidUtf8:
        pass

    # Attempt to decode the data using the detected encoding
    detected_encoding = chardet.detect(chunk.data)["encoding"]
    if detected_encoding is None:
        return None
    try:
        return chunk.data.decode(detected_encoding)
    except (UnicodeDecodeError, LookupError):
        return None


def describe_chunks(png):
    lines = []
    for index, chunk in enumerate(png.chunks()):
        line = f"{index:3}: {chunk}"
        if not chunk.chunk_type.is_critical():
            text = chunk_text(chunk)
            if text is not None:
                text = text.replace("\0", " ")
            if text is not None and text.isprintable():
                line += f"    Text:{text!r}"
        lines.append(line)
    return lines
