#!/usr/bin/env python3

import cProfile
import logging
import sys

from argparse import ArgumentParser

import english
import repeating_xor
import util

ENCODINGS = ["base64", "hex"]


def read_ciphertext(filename, encoding):
    if encoding == "raw":
        with open(filename, "rb") as f:
            return f.read()
    with open(filename) as f:
        return util.decode_ciphertext(f.read(), encoding)


def show_plaintext(plaintext):
    try:
        print(plaintext.decode("ascii"))
    except UnicodeDecodeError:
        print("Plaintext is not ASCII text, conversion failed. Hex: {}".format(
            plaintext.hex()))


def crack(args):
    ciphertext = read_ciphertext(args.file, args.encoding)
    result = repeating_xor.crack_repeating_xor(
        ciphertext, min_key_size=args.min_key_size, max_key_size=args.max_key_size,
        key_size_candidates=args.candidates, method=args.method, workers=args.workers)
    print("key: {!r} ({})".format(result.key, util.pretty_hex_bytes(result.key)))
    print("key size: {}, score: {:.3f} ({})".format(
        result.key_size, result.score, args.method))
    print()
    show_plaintext(result.plaintext)


def detect(args):
    with open(args.file) as f:
        ciphertexts = [util.decode_ciphertext(line, args.encoding)
                       for line in f.read().splitlines() if line.strip()]
    index, score_data = english.detect_single_byte_xor(ciphertexts, method=args.method)
    print("line {}: key byte 0x{:02x}, score: {:.3f}".format(
        index + 1, score_data.key, score_data.score))
    show_plaintext(score_data.message)


def encrypt(args):
    with open(args.file, "rb") as f:
        plaintext = f.read()
    ciphertext = util.apply_repeating_xor_key(plaintext, args.key.encode())
    print(util.encode_ciphertext(ciphertext, args.encoding))


def make_parser():
    parser = ArgumentParser(description="Break single-byte and repeating-key XOR.")
    parser.add_argument(
        "-v", "--verbose", help="Show debug logging.", action="store_true")
    parser.add_argument(
        "-p", "--profile", help="Profile the command.", action="store_true")
    subparsers = parser.add_subparsers(dest="command", required=True)

    crack_parser = subparsers.add_parser(
        "crack", help="Recover the key of a repeating-key XOR ciphertext.")
    crack_parser.add_argument("file", help="File containing the ciphertext.")
    crack_parser.add_argument(
        "-e", "--encoding", choices=ENCODINGS + ["raw"], default="base64",
        help="How the ciphertext is stored in the file (default: base64).")
    crack_parser.add_argument(
        "--min-key-size", type=int, default=repeating_xor.DEFAULT_MIN_KEY_SIZE)
    crack_parser.add_argument(
        "--max-key-size", type=int, default=repeating_xor.DEFAULT_MAX_KEY_SIZE)
    crack_parser.add_argument(
        "-c", "--candidates", type=int, default=1,
        help="Number of most likely key sizes to try (default: 1).")
    crack_parser.add_argument(
        "-w", "--workers", type=int,
        help="Score key sizes and columns in this many threads.")
    crack_parser.set_defaults(fn=crack)

    detect_parser = subparsers.add_parser(
        "detect", help="Find the line that was XOR'd with a single byte.")
    detect_parser.add_argument("file", help="File with one ciphertext per line.")
    detect_parser.add_argument(
        "-e", "--encoding", choices=ENCODINGS, default="hex",
        help="How each line is encoded (default: hex).")
    detect_parser.set_defaults(fn=detect)

    for subparser in crack_parser, detect_parser:
        subparser.add_argument(
            "-m", "--method", choices=sorted(english.SCORING_METHODS),
            default=english.DEFAULT_SCORING_METHOD,
            help="How to score candidate plaintexts (default: {}).".format(
                english.DEFAULT_SCORING_METHOD))

    encrypt_parser = subparsers.add_parser(
        "encrypt", help="Apply repeating-key XOR to a file.")
    encrypt_parser.add_argument("file", help="File containing the plaintext.")
    encrypt_parser.add_argument("-k", "--key", required=True)
    encrypt_parser.add_argument(
        "-e", "--encoding", choices=ENCODINGS, default="hex",
        help="How to encode the output (default: hex).")
    encrypt_parser.set_defaults(fn=encrypt)
    return parser


def main(argv=None):
    parser = make_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s", stream=sys.stderr)

    profile = cProfile.Profile() if args.profile else None
    try:
        if profile:
            profile.runcall(args.fn, args)
        else:
            args.fn(args)
    except (OSError, ValueError) as e:
        parser.error(e)
    finally:
        if profile:
            print()
            profile.print_stats(sort="cumulative")


if __name__ == "__main__":
    main()
