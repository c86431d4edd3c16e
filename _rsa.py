from math import gcd

import libnum
import rsa
from pyasn1.error import PyAsn1Error

from errors import DecryptionError, InvalidFormat

DEFAULT_BITS = 1024
PUBLIC_EXPONENT = 65537
# PKCS#1 v1.5 padding takes at least 11 bytes of every block
PKCS1_OVERHEAD = 11


def generate_rsa_key_pair(bits=DEFAULT_BITS):
    n = 0
    while n.bit_length() != bits:
        p = libnum.generate_prime(bits // 2 + 1)
        q = libnum.generate_prime(bits // 2 - 1)
        if gcd(PUBLIC_EXPONENT, (p - 1) * (q - 1)) != 1:
            continue

        n = p * q

    phi_n = (p - 1) * (q - 1)
    e = PUBLIC_EXPONENT
    d = modular_inverse(e, phi_n)

    public_key = rsa.PublicKey(n, e)
    private_key = rsa.PrivateKey(n, e, d, p, q)
    return private_key, public_key


def modular_inverse(a, m):
    t1, t2 = 0, 1
    r1, r2 = m, a
    while r2 != 0:
        quotient = r1 // r2
        t1, t2 = t2, t1 - quotient * t2
        r1, r2 = r2, r1 - quotient * r2
    if r1 > 1:
        raise ValueError("a is not invertible")
    if t1 < 0:
        t1 += m
    return t1


def key_size(key):
    return (key.n.bit_length() + 7) // 8


def block_size(key):
    return key_size(key) - PKCS1_OVERHEAD


def rsa_encrypt(plaintext_bytes, public_key):  # ECB
    size = block_size(public_key)
    if size <= 0:
        raise InvalidFormat(f"Key of {key_size(public_key)} bytes is too short to encrypt")

    blocks = []
    for i in range(0, len(plaintext_bytes), size):
        block = plaintext_bytes[i : i + size]
        blocks.append(rsa.encrypt(block, public_key))
    return b"".join(blocks)


def rsa_decrypt(ciphertext, private_key):  # ECB
    size = key_size(private_key)
    if len(ciphertext) % size:
        raise DecryptionError(
            f"Encrypted payload of {len(ciphertext)} bytes is not a multiple of "
            f"the {size} byte key size"
        )

    blocks = []
    for i in range(0, len(ciphertext), size):
        block = ciphertext[i : i + size]
        try:
            blocks.append(rsa.decrypt(block, private_key))
        except rsa.DecryptionError as exc:
            raise DecryptionError(f"Unable to decrypt payload: {exc}") from exc
    return b"".join(blocks)


def write_keys_to_file(private_key, public_key, filename):
    with open(filename, "wb") as file:
        file.write(private_key.save_pkcs1())
        file.write(public_key.save_pkcs1())


def load_key(key_class, filename):
    with open(filename, "rb") as file:
        content = file.read()
    try:
        return key_class.load_pkcs1(content)
    except (ValueError, PyAsn1Error) as exc:
        raise InvalidFormat(f"Unreadable key file {filename}: {exc}") from exc


def read_private_key(filename):
    return load_key(rsa.PrivateKey, filename)


def read_public_key(filename):
    return load_key(rsa.PublicKey, filename)
