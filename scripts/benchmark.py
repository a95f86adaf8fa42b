#!/usr/bin/env python
"""Benchmark the scalar and bulk translation kernels against each other.

Timings use ``time.perf_counter()`` only.  Every pair is also checked for
byte-identical output between the two kernels before it is timed.
"""

from __future__ import annotations

import argparse
import json
import statistics
import sys
import time

from codeshift.enums import Encoding
from codeshift.table import TranslationTable

_PAIRS = (
    (Encoding.WINDOWS_1252, Encoding.ISO_8859_15),
    (Encoding.EBCDIC_037, Encoding.ISO_8859_1),
    (Encoding.CP_437, Encoding.CP_850),
    (Encoding.ISO_8859_1, Encoding.WINDOWS_1252),
)


def _sample(table: TranslationTable, size: int) -> bytes:
    mappable = table.mappable_bytes
    return (mappable * (size // len(mappable) + 1))[:size]


def _time(table: TranslationTable, data: bytes, rounds: int) -> float:
    timings = []
    for _ in range(rounds):
        start = time.perf_counter()
        table.translate(data)
        timings.append(time.perf_counter() - start)
    return statistics.median(timings)


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Compare scalar and bulk translation throughput.",
    )
    parser.add_argument(
        "--size", type=int, default=1 << 20, help="Bytes per conversion (default: 1 MiB)"
    )
    parser.add_argument(
        "--rounds", type=int, default=5, help="Timed rounds per kernel (default: 5)"
    )
    parser.add_argument(
        "--json-only",
        action="store_true",
        default=False,
        help="Print only JSON output",
    )
    args = parser.parse_args()

    results = []
    for from_enc, to_enc in _PAIRS:
        scalar = TranslationTable(from_enc, to_enc, bulk=False)
        bulk = TranslationTable(from_enc, to_enc, bulk=True)
        data = _sample(scalar, args.size)
        if scalar.translate(data) != bulk.translate(data):
            print(f"ERROR: kernels disagree on {from_enc} -> {to_enc}", file=sys.stderr)
            sys.exit(1)
        scalar_s = _time(scalar, data, args.rounds)
        bulk_s = _time(bulk, data, args.rounds)
        results.append(
            {
                "pair": f"{from_enc} -> {to_enc}",
                "scalar_mb_s": args.size / scalar_s / 1e6,
                "bulk_mb_s": args.size / bulk_s / 1e6,
            }
        )

    if args.json_only:
        print(json.dumps(results, indent=2))
        return

    print(f"{'Pair':35} {'Scalar MB/s':>12} {'Bulk MB/s':>12}")
    for r in results:
        print(f"{r['pair']:35} {r['scalar_mb_s']:12.1f} {r['bulk_mb_s']:12.1f}")


if __name__ == "__main__":
    main()
