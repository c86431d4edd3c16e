import zlib


def crc32(data):
    # Same CRC-32 as the PNG spec (reflected 0xEDB88320, init/xorout 0xFFFFFFFF)
    return zlib.crc32(bytes(data)) & 0xFFFFFFFF


def crc32_bytes(data):
    return crc32(data).to_bytes(4, byteorder="big")
