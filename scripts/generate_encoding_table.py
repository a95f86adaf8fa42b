#!/usr/bin/env python
"""Generate the supported encodings RST table from the Encoding enum."""

from __future__ import annotations

from codeshift.enums import Category, Encoding

CATEGORY_DISPLAY = {
    Category.UNICODE: "Unicode",
    Category.ASCII: "ASCII",
    Category.ISO: "ISO-8859",
    Category.WINDOWS: "Windows code pages",
    Category.EBCDIC: "Mainframe (EBCDIC)",
    Category.DOS: "DOS / OEM",
    Category.MAC: "Macintosh",
    Category.ASIAN: "East Asian",
}


def main() -> None:
    """Print the supported encodings RST table to stdout."""
    total = len(Encoding)
    print("Supported Encodings")
    print("===================")
    print()
    print(f"codeshift supports **{total} encodings** across eight categories.")
    print()

    for category, title in CATEGORY_DISPLAY.items():
        entries = [e for e in Encoding if e.category == category]
        print(title)
        print("-" * len(title))
        print()
        print(".. list-table::")
        print("   :header-rows: 1")
        print("   :widths: 20 50 15 15")
        print()
        print("   * - Encoding")
        print("     - Description")
        print("     - ASCII-compatible")
        print("     - Multi-byte")
        for e in entries:
            print(f"   * - {e.canonical_name}")
            print(f"     - {e.description}")
            print(f"     - {'Yes' if e.is_ascii_compatible else 'No'}")
            print(f"     - {'Yes' if e.is_multibyte else 'No'}")
        print()


if __name__ == "__main__":
    main()
