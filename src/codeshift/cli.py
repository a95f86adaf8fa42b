"""Command-line interface for codeshift."""

from __future__ import annotations

import argparse
import contextlib
import json
import logging
import sys
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import BinaryIO, TextIO

import codeshift
from codeshift._utils import DEFAULT_BUFFER_SIZE, DEFAULT_MAX_BYTES
from codeshift.catalog import chars_for
from codeshift.detector import EncodingDetector
from codeshift.enums import Category, Encoding
from codeshift.errors import CodeshiftError, UnmappableSourceError, UnmappableTargetError
from codeshift.translator import StreamingTranslator, Translator

logger = logging.getLogger("codeshift.cli")

_PROG = "codeshift"
_DEFAULT_BUFFER_KB = DEFAULT_BUFFER_SIZE // 1024

_DEFAULT_SAMPLE_BYTES = (0x41, 0x61, 0x30, 0x21)
_SAMPLE_BYTES: dict[Encoding, tuple[int, ...]] = {
    Encoding.WINDOWS_1252: (0x80, 0x99, 0xA9, 0xAE),
    Encoding.CP_437: (0xC9, 0xCD, 0xBB, 0xF8),
    Encoding.EBCDIC_037: (0xC1, 0x81, 0xF0, 0x5A),
}


class _UsageError(Exception):
    """A command-line usage problem reported as ``codeshift: <message>``."""


def _configure_logging(verbose: bool) -> None:
    if not verbose:
        return
    root = logging.getLogger("codeshift")
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    root.addHandler(handler)
    root.setLevel(logging.DEBUG)


def _yes_no(flag: bool) -> str:
    return "Yes" if flag else "No"


def _bom_hex(bom: bytes | None) -> str | None:
    return None if bom is None else " ".join(f"{b:02X}" for b in bom)


def _print_json(payload: object, file: TextIO | None = None) -> None:
    print(json.dumps(payload, indent=2), file=file or sys.stdout)


def _read_input(path: Path | None, limit: int = -1) -> bytes:
    if path is None:
        return sys.stdin.buffer.read(limit)
    with path.open("rb") as f:
        return f.read(limit)


def _open_source(path: Path | None) -> contextlib.AbstractContextManager[BinaryIO]:
    if path is None:
        return contextlib.nullcontext(sys.stdin.buffer)
    return path.open("rb")


def _chunks(source: BinaryIO, size: int) -> Iterator[bytes]:
    while chunk := source.read(size):
        yield chunk


def _convert_chunks(
    chunks: Iterable[bytes],
    args: argparse.Namespace,
    from_encoding: Encoding,
    to_encoding: Encoding,
) -> Iterator[bytes]:
    """Yield converted output for *chunks*, honouring the BOM and lossy options."""
    strip = from_encoding.bom if args.strip_bom else None
    if args.add_bom and to_encoding.bom is not None:
        yield to_encoding.bom

    if args.lossy:
        if len(args.replacement) != 1:
            msg = "replacement must be a single character"
            raise _UsageError(msg)
        data = b"".join(chunks)
        if strip:
            data = data.removeprefix(strip)
        translator = Translator(from_encoding, to_encoding)
        yield translator.convert_lossy(data, ord(args.replacement))
        return

    streamer = StreamingTranslator(
        from_encoding, to_encoding, buffer_size=args.buffer_size * 1024
    )
    first = True
    for chunk in chunks:
        if first and strip:
            if chunk.startswith(strip):
                logger.debug("Stripped BOM (%d bytes)", len(strip))
            chunk = chunk.removeprefix(strip)
        first = False
        yield streamer.process_chunk(chunk)
    yield streamer.close()


def _cmd_convert(args: argparse.Namespace) -> int:
    from_encoding = Encoding.from_name(args.from_encoding)
    to_encoding = Encoding.from_name(args.to_encoding)
    if args.in_place and args.input is None:
        msg = "--in-place requires --input"
        raise _UsageError(msg)
    if args.buffer_size < 1:
        msg = "--buffer-size must be a positive number of KiB"
        raise _UsageError(msg)
    logger.debug("Converting from %s to %s", from_encoding, to_encoding)

    chunk_size = args.buffer_size * 1024
    processed = 0
    written = 0

    def counted(source: BinaryIO) -> Iterator[bytes]:
        nonlocal processed
        for chunk in _chunks(source, chunk_size):
            processed += len(chunk)
            yield chunk

    if args.in_place:
        with args.input.open("rb") as source:
            output = b"".join(
                _convert_chunks(counted(source), args, from_encoding, to_encoding)
            )
        args.input.write_bytes(output)
        written = len(output)
    elif args.output is not None:
        with _open_source(args.input) as source, args.output.open("wb") as sink:
            for piece in _convert_chunks(counted(source), args, from_encoding, to_encoding):
                written += sink.write(piece)
    else:
        sink = sys.stdout.buffer
        with _open_source(args.input) as source:
            for piece in _convert_chunks(counted(source), args, from_encoding, to_encoding):
                written += sink.write(piece)
        sink.flush()

    logger.debug("Processed %d bytes -> %d bytes", processed, written)
    if args.format == "json":
        # Converted bytes may already occupy stdout.
        summary_stream = sys.stderr if args.output is None and not args.in_place else None
        _print_json(
            {"success": True, "bytes_processed": processed, "bytes_written": written},
            file=summary_stream,
        )
    return 0


def _cmd_detect(args: argparse.Namespace) -> int:
    if args.sample_size < 1:
        msg = "--sample-size must be a positive integer"
        raise _UsageError(msg)
    sample = _read_input(args.input, args.sample_size)
    detector = EncodingDetector(max_bytes=args.sample_size)
    if args.language:
        result = detector.detect_with_hint(sample, args.language)
    else:
        result = detector.detect(sample)

    if args.format == "json":
        payload = result.to_dict()
        payload["sample_size"] = len(sample)
        _print_json(payload)
        return 0

    print(f"Detected encoding: {result.encoding}")
    print(f"Confidence: {result.confidence * 100:.1f}%")
    if result.bom_detected:
        print("BOM detected: Yes")
    print(f"Sample size: {len(sample)} bytes")
    if args.confidence and len(result.candidates) > 1:
        print()
        print("All candidates:")
        for candidate in result.candidates:
            print(f"  {candidate.encoding}: {candidate.confidence * 100:.1f}%")
    return 0


def _category_name(encoding: Encoding) -> str:
    return (encoding.category.name or "").lower()


def _cmd_list(args: argparse.Namespace) -> int:
    encodings = list(Encoding)
    if args.category:
        try:
            category = Category[args.category.upper()]
        except KeyError:
            msg = f"Unknown category: {args.category}"
            raise _UsageError(msg) from None
        encodings = [e for e in encodings if e.category & category]
    if args.ascii_compatible:
        encodings = [e for e in encodings if e.is_ascii_compatible]
    if args.multibyte:
        encodings = [e for e in encodings if e.is_multibyte]

    if args.format == "json":
        _print_json(
            [
                {
                    "name": e.canonical_name,
                    "category": _category_name(e),
                    "description": e.description,
                    "ascii_compatible": e.is_ascii_compatible,
                    "multibyte": e.is_multibyte,
                    "has_bom": e.bom is not None,
                }
                for e in encodings
            ]
        )
        return 0

    print(f"Supported Encodings ({len(encodings)} total):")
    print()
    for e in encodings:
        print(f"{e.canonical_name:15} {'[' + _category_name(e) + ']':10} {e.description}")
        if args.details:
            print(f"{'':16}ASCII Compatible: {_yes_no(e.is_ascii_compatible)}")
            print(f"{'':16}Multibyte: {_yes_no(e.is_multibyte)}")
            if e.bom is not None:
                print(f"{'':16}BOM: {_bom_hex(e.bom)}")
            print()
    return 0


def _describe_error(error: CodeshiftError) -> str:
    if isinstance(error, UnmappableSourceError):
        return f"Error at position {error.position}: unmappable byte 0x{error.byte:02X}"
    if isinstance(error, UnmappableTargetError):
        return (
            f"Error at position {error.position}: "
            f"unmappable character {error.character!r}"
        )
    return f"Error: {error}"


def _cmd_validate(args: argparse.Namespace) -> int:
    encoding = Encoding.from_name(args.encoding)
    data = _read_input(args.input)
    error: CodeshiftError | None = None
    try:
        Translator(encoding, Encoding.UTF8).convert(data)
    except CodeshiftError as e:
        error = e

    if args.format == "json":
        _print_json(
            {
                "encoding": encoding.canonical_name,
                "valid": error is None,
                "error": None if error is None else str(error),
            }
        )
    elif error is None:
        print(f"File is valid {encoding}")
    else:
        print(f"File is not valid {encoding}")
        if args.show_errors:
            print(f"  {_describe_error(error)}")
    return 0 if error is None else 1


def _cmd_info(args: argparse.Namespace) -> int:
    encoding = Encoding.from_name(args.encoding)
    if args.format == "json":
        _print_json(
            {
                "name": encoding.canonical_name,
                "category": _category_name(encoding),
                "description": encoding.description,
                "ascii_compatible": encoding.is_ascii_compatible,
                "multibyte": encoding.is_multibyte,
                "bom": _bom_hex(encoding.bom),
            }
        )
        return 0

    print(f"Encoding Information: {encoding}")
    print(f"Description: {encoding.description}")
    print(f"ASCII Compatible: {_yes_no(encoding.is_ascii_compatible)}")
    print(f"Multibyte: {_yes_no(encoding.is_multibyte)}")
    print(f"BOM: {_bom_hex(encoding.bom) or 'None'}")
    if args.samples:
        print()
        print("Character Samples:")
        chars = chars_for(encoding)
        for byte in _SAMPLE_BYTES.get(encoding, _DEFAULT_SAMPLE_BYTES):
            scalar = chars[byte]
            shown = "(undefined)" if scalar is None else chr(scalar)
            print(f"  0x{byte:02X} -> {shown}")
    return 0


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=_PROG, description="Convert and detect character encodings."
    )
    parser.add_argument(
        "--version", action="version", version=f"{_PROG} {codeshift.__version__}"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log progress to stderr"
    )
    parser.add_argument(
        "--format", choices=("text", "json"), default="text", help="Output format"
    )
    commands = parser.add_subparsers(dest="command", required=True)

    convert = commands.add_parser("convert", help="Convert between encodings")
    convert.add_argument("-f", "--from", dest="from_encoding", required=True)
    convert.add_argument("-t", "--to", dest="to_encoding", required=True)
    convert.add_argument("-i", "--input", type=Path, help="Input file (default: stdin)")
    target = convert.add_mutually_exclusive_group()
    target.add_argument("-o", "--output", type=Path, help="Output file (default: stdout)")
    target.add_argument(
        "--in-place", action="store_true", help="Overwrite the input file"
    )
    convert.add_argument(
        "--lossy", action="store_true", help="Replace unmappable bytes instead of failing"
    )
    convert.add_argument(
        "--replacement", default="?", help="Replacement character for --lossy"
    )
    convert.add_argument(
        "--strip-bom", action="store_true", help="Strip the source BOM if present"
    )
    convert.add_argument(
        "--add-bom", action="store_true", help="Prefix the target BOM, if it has one"
    )
    convert.add_argument(
        "--buffer-size",
        type=int,
        default=_DEFAULT_BUFFER_KB,
        help="Streaming chunk size in KiB",
    )
    convert.set_defaults(handler=_cmd_convert)

    detect = commands.add_parser("detect", help="Detect the encoding of input")
    detect.add_argument("-i", "--input", type=Path, help="Input file (default: stdin)")
    detect.add_argument(
        "--confidence", action="store_true", help="List every candidate"
    )
    detect.add_argument(
        "--sample-size",
        type=int,
        default=DEFAULT_MAX_BYTES,
        help="Maximum number of bytes to examine",
    )
    detect.add_argument("--language", help="Language hint, e.g. german or ru")
    detect.set_defaults(handler=_cmd_detect)

    listing = commands.add_parser("list", help="List supported encodings")
    listing.add_argument(
        "-c",
        "--category",
        help="Filter by category (unicode, ascii, iso, windows, ebcdic, dos, mac, asian)",
    )
    listing.add_argument("--ascii-compatible", action="store_true")
    listing.add_argument("--multibyte", action="store_true")
    listing.add_argument("--details", action="store_true")
    listing.set_defaults(handler=_cmd_list)

    validate = commands.add_parser("validate", help="Check that input is well-formed")
    validate.add_argument("-e", "--encoding", required=True)
    validate.add_argument("-i", "--input", type=Path, help="Input file (default: stdin)")
    validate.add_argument(
        "--show-errors", action="store_true", help="Show the first error position"
    )
    validate.set_defaults(handler=_cmd_validate)

    info = commands.add_parser("info", help="Describe an encoding")
    info.add_argument("encoding")
    info.add_argument(
        "--samples", action="store_true", help="Show sample byte mappings"
    )
    info.set_defaults(handler=_cmd_info)

    return parser


def main(argv: list[str] | None = None) -> None:
    """Run the ``codeshift`` command-line tool.

    :param argv: Command-line arguments.  Defaults to ``sys.argv[1:]``.
    """
    args = _build_parser().parse_args(argv)
    _configure_logging(args.verbose)
    try:
        status = args.handler(args)
    except (CodeshiftError, LookupError, ValueError, OSError, _UsageError) as e:
        print(f"{_PROG}: {e}", file=sys.stderr)
        sys.exit(1)
    if status:
        sys.exit(status)


if __name__ == "__main__":
    main()
