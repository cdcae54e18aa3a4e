#!/usr/bin/env python3
"""
huffman_cli.py : compress and restore text files with the Huffman codec

Usage:
    huffman-codec                      # encode ./input.txt -> ./input.txt.huff
    huffman-codec encode notes.txt     # encode notes.txt -> notes.txt.huff
    huffman-codec decode notes.txt.huff
    huffman-codec table notes.txt      # print the code assigned to each symbol
    huffman-codec report corpus/       # round-trip every file, write a JSON report
"""

import argparse
import sys
from pathlib import Path

from huffman_errors import HuffmanError
from huffman_report import write_report
from huffman_service import HuffmanService

DEFAULT_INPUT = "input.txt"
ENCODED_SUFFIX = ".huff"
TEXT_ENCODING = "utf-8"


#
# Input source / output sink
#

def read_source(path):
    return Path(path).read_bytes()


def write_sink(path, data):
    Path(path).write_bytes(data)


def encoded_path(path):
    return Path(str(path) + ENCODED_SUFFIX)


def decoded_path(path):
    path = Path(path)
    if path.suffix == ENCODED_SUFFIX:
        return path.with_suffix("")
    return Path(str(path) + ".txt")


def _ratio(original, compressed):
    return round(original / compressed, 3) if compressed else None


def _printable(char):
    return repr(char) if not char.isprintable() or char == " " else char


#
# Commands
#

def cmd_encode(service, args):
    data = read_source(args.path)
    text = data.decode(TEXT_ENCODING)
    blob = service.compress(text)
    output = args.output or encoded_path(args.path)
    write_sink(output, blob)
    print(f"{args.path} -> {output}: {len(data)} -> {len(blob)} bytes (ratio {_ratio(len(data), len(blob))})")


def cmd_decode(service, args):
    blob = read_source(args.path)
    data = service.decompress(blob).encode(TEXT_ENCODING)
    output = args.output or decoded_path(args.path)
    write_sink(output, data)
    print(f"{args.path} -> {output}: {len(blob)} -> {len(data)} bytes")


def cmd_table(service, args):
    text = read_source(args.path).decode(TEXT_ENCODING)
    for char, freq, value, length in service.code_table(text):
        print(f"{_printable(char):>8}  {freq:>8}  {value:0{length}b}")


def cmd_report(service, args):
    report = write_report(args.directory, args.output, service)
    if not report["success"]:
        raise HuffmanError("one or more files failed the round trip")


def build_parser():
    parser = argparse.ArgumentParser(prog="huffman-codec", description="Huffman text compression.")
    parser.set_defaults(handler=cmd_encode, path=DEFAULT_INPUT, output=None)
    commands = parser.add_subparsers(title="commands")

    encode = commands.add_parser("encode", help="compress a text file (default command)")
    encode.add_argument("path", nargs="?", default=DEFAULT_INPUT, help=f"text file (default: {DEFAULT_INPUT})")
    encode.add_argument("-o", "--output", default=None, help=f"output file (default: PATH{ENCODED_SUFFIX})")
    encode.set_defaults(handler=cmd_encode)

    decode = commands.add_parser("decode", help="restore a compressed file")
    decode.add_argument("path", help="compressed file")
    decode.add_argument("-o", "--output", default=None,
                        help=f"output file (default: PATH without {ENCODED_SUFFIX})")
    decode.set_defaults(handler=cmd_decode)

    table = commands.add_parser("table", help="print the code table of a text file")
    table.add_argument("path", nargs="?", default=DEFAULT_INPUT)
    table.set_defaults(handler=cmd_table)

    report = commands.add_parser("report", help="round-trip every file in a directory")
    report.add_argument("directory")
    report.add_argument("--output", default=None,
                        help="Output JSON file path (default: evaluation/YYYY-MM-DD/HH-MM-SS/report.json)")
    report.set_defaults(handler=cmd_report)

    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    service = HuffmanService()

    try:
        args.handler(service, args)
    except FileNotFoundError as exc:
        print(f"error: file not found: {exc.filename}", file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    except UnicodeError as exc:
        print(f"error: input is not valid {TEXT_ENCODING} text: {exc}", file=sys.stderr)
        return 1
    except HuffmanError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
