import argparse
import sys

import _rsa
from png_funs import (
    anon_path,
    anonymize,
    decode,
    describe_chunks,
    encode,
    read_png,
    remove,
    write_png,
)


def encode_command(args):
    png = read_png(args.image)
    public_key = _rsa.read_public_key(args.key) if args.key else None
    data = encode(png, args.chunk_type, args.message, public_key)
    write_png(args.output or args.image, data)
    print(f"Message hidden in {args.chunk_type} chunk of {args.output or args.image}")


def decode_command(args):
    png = read_png(args.image)
    private_key = _rsa.read_private_key(args.key) if args.key else None
    print(decode(png, args.chunk_type, private_key))


def remove_command(args):
    png = read_png(args.image)
    removed, data = remove(png, args.chunk_type)
    write_png(args.output or args.image, data)
    print(f"Removed {removed}")


def print_command(args):
    png = read_png(args.image)
    print(f"{args.image}: {len(png)} chunks")
    for line in describe_chunks(png):
        print(line)


def strip_command(args):
    png = read_png(args.image)
    file_name = args.output or anon_path(args.image)
    write_png(file_name, anonymize(png))
    print(f"Kept {len(png.critical_chunks())} of {len(png)} chunks in {file_name}")


def keygen_command(args):
    private_key, public_key = _rsa.generate_rsa_key_pair(args.bits)
    _rsa.write_keys_to_file(private_key, public_key, args.keyfile)
    print(f"Key length: {public_key.n.bit_length()}")
    print("Keys successfully written to", args.keyfile)


def build_parser():
    parser = argparse.ArgumentParser(
        prog="pngstash", description="Hide messages in PNG chunks"
    )
    commands = parser.add_subparsers(dest="command", required=True)

    command = commands.add_parser("encode", help="hide a message in a new chunk")
    command.add_argument("image")
    command.add_argument("chunk_type")
    command.add_argument("message")
    command.add_argument("-o", "--output", help="write the result here instead of in place")
    command.add_argument("-k", "--key", help="key file, encrypts the message with its public key")
    command.set_defaults(handler=encode_command)

    command = commands.add_parser("decode", help="print a hidden message")
    command.add_argument("image")
    command.add_argument("chunk_type")
    command.add_argument("-k", "--key", help="key file, decrypts the message with its private key")
    command.set_defaults(handler=decode_command)

    command = commands.add_parser("remove", help="remove the first chunk of a type")
    command.add_argument("image")
    command.add_argument("chunk_type")
    command.add_argument("-o", "--output", help="write the result here instead of in place")
    command.set_defaults(handler=remove_command)

    command = commands.add_parser("print", help="list the chunks of an image")
    command.add_argument("image")
    command.set_defaults(handler=print_command)

    command = commands.add_parser("strip", help="keep only the critical chunks")
    command.add_argument("image")
    command.add_argument("-o", "--output", help="defaults to <image>_anon.png")
    command.set_defaults(handler=strip_command)

    command = commands.add_parser("keygen", help="generate an RSA key file")
    command.add_argument("keyfile")
    command.add_argument("-b", "--bits", type=int, default=_rsa.DEFAULT_BITS)
    command.set_defaults(handler=keygen_command)

    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    try:
        args.handler(args)
    except (OSError, ValueError) as exc:
        # PngError is a ValueError, so are unreadable key files
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
