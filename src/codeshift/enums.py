"""Enumerations for codeshift."""

from __future__ import annotations

import enum


class Category(enum.IntFlag):
    """Bit flags grouping encodings by family."""

    UNICODE = 1
    ASCII = 2
    ISO = 4
    WINDOWS = 8
    EBCDIC = 16
    DOS = 32
    MAC = 64
    ASIAN = 128
    ALL = UNICODE | ASCII | ISO | WINDOWS | EBCDIC | DOS | MAC | ASIAN


_UTF8_BOM = b"\xef\xbb\xbf"
_UTF16LE_BOM = b"\xff\xfe"
_UTF16BE_BOM = b"\xfe\xff"


class Encoding(enum.Enum):
    """The closed set of supported encodings.

    Every member is declared with its canonical name, category,
    ASCII-compatibility flag, multibyte flag and byte order mark.  These are
    fixed per tag and never depend on anything else.
    """

    # Unicode
    UTF8 = ("UTF-8", Category.UNICODE, True, True, _UTF8_BOM)
    UTF16LE = ("UTF-16LE", Category.UNICODE, False, True, _UTF16LE_BOM)
    UTF16BE = ("UTF-16BE", Category.UNICODE, False, True, _UTF16BE_BOM)

    # ASCII and ISO-8859
    ASCII = ("US-ASCII", Category.ASCII, True, False, None)
    ISO_8859_1 = ("ISO-8859-1", Category.ISO, True, False, None)
    ISO_8859_2 = ("ISO-8859-2", Category.ISO, True, False, None)
    ISO_8859_3 = ("ISO-8859-3", Category.ISO, True, False, None)
    ISO_8859_4 = ("ISO-8859-4", Category.ISO, True, False, None)
    ISO_8859_5 = ("ISO-8859-5", Category.ISO, True, False, None)
    ISO_8859_6 = ("ISO-8859-6", Category.ISO, True, False, None)
    ISO_8859_7 = ("ISO-8859-7", Category.ISO, True, False, None)
    ISO_8859_8 = ("ISO-8859-8", Category.ISO, True, False, None)
    ISO_8859_9 = ("ISO-8859-9", Category.ISO, True, False, None)
    ISO_8859_10 = ("ISO-8859-10", Category.ISO, True, False, None)
    ISO_8859_11 = ("ISO-8859-11", Category.ISO, True, False, None)
    ISO_8859_13 = ("ISO-8859-13", Category.ISO, True, False, None)
    ISO_8859_14 = ("ISO-8859-14", Category.ISO, True, False, None)
    ISO_8859_15 = ("ISO-8859-15", Category.ISO, True, False, None)
    ISO_8859_16 = ("ISO-8859-16", Category.ISO, True, False, None)

    # Windows code pages
    WINDOWS_1250 = ("Windows-1250", Category.WINDOWS, True, False, None)
    WINDOWS_1251 = ("Windows-1251", Category.WINDOWS, True, False, None)
    WINDOWS_1252 = ("Windows-1252", Category.WINDOWS, True, False, None)
    WINDOWS_1253 = ("Windows-1253", Category.WINDOWS, True, False, None)
    WINDOWS_1254 = ("Windows-1254", Category.WINDOWS, True, False, None)
    WINDOWS_1255 = ("Windows-1255", Category.WINDOWS, True, False, None)
    WINDOWS_1256 = ("Windows-1256", Category.WINDOWS, True, False, None)
    WINDOWS_1257 = ("Windows-1257", Category.WINDOWS, True, False, None)
    WINDOWS_1258 = ("Windows-1258", Category.WINDOWS, True, False, None)
    WINDOWS_874 = ("Windows-874", Category.WINDOWS, True, False, None)

    # EBCDIC
    EBCDIC_037 = ("IBM037", Category.EBCDIC, False, False, None)
    EBCDIC_273 = ("IBM273", Category.EBCDIC, False, False, None)
    EBCDIC_277 = ("IBM277", Category.EBCDIC, False, False, None)
    EBCDIC_278 = ("IBM278", Category.EBCDIC, False, False, None)
    EBCDIC_280 = ("IBM280", Category.EBCDIC, False, False, None)
    EBCDIC_284 = ("IBM284", Category.EBCDIC, False, False, None)
    EBCDIC_285 = ("IBM285", Category.EBCDIC, False, False, None)
    EBCDIC_297 = ("IBM297", Category.EBCDIC, False, False, None)
    EBCDIC_500 = ("IBM500", Category.EBCDIC, False, False, None)
    EBCDIC_1047 = ("IBM1047", Category.EBCDIC, False, False, None)

    # DOS/OEM
    CP_437 = ("CP437", Category.DOS, True, False, None)
    CP_850 = ("CP850", Category.DOS, True, False, None)
    CP_852 = ("CP852", Category.DOS, True, False, None)
    CP_855 = ("CP855", Category.DOS, True, False, None)
    CP_857 = ("CP857", Category.DOS, True, False, None)
    CP_860 = ("CP860", Category.DOS, True, False, None)
    CP_861 = ("CP861", Category.DOS, True, False, None)
    CP_862 = ("CP862", Category.DOS, True, False, None)
    CP_863 = ("CP863", Category.DOS, True, False, None)
    CP_865 = ("CP865", Category.DOS, True, False, None)
    CP_866 = ("CP866", Category.DOS, True, False, None)

    # Mac
    MAC_ROMAN = ("MacRoman", Category.MAC, True, False, None)
    MAC_CYRILLIC = ("MacCyrillic", Category.MAC, True, False, None)

    # Asian placeholders: only their single-byte repertoire is mapped
    SHIFT_JIS = ("Shift_JIS", Category.ASIAN, False, True, None)
    EUC_JP = ("EUC-JP", Category.ASIAN, False, True, None)
    GB2312 = ("GB2312", Category.ASIAN, False, True, None)
    BIG5 = ("Big5", Category.ASIAN, False, True, None)
    EUC_KR = ("EUC-KR", Category.ASIAN, False, True, None)

    def __init__(
        self,
        canonical_name: str,
        category: Category,
        ascii_compatible: bool,
        multibyte: bool,
        bom: bytes | None,
    ) -> None:
        self.canonical_name = canonical_name
        self.category = category
        self.is_ascii_compatible = ascii_compatible
        self.is_multibyte = multibyte
        self.bom = bom

    def __str__(self) -> str:
        return self.canonical_name

    @property
    def description(self) -> str:
        """A one-line human readable description of the encoding."""
        return _DESCRIPTIONS.get(self, _GENERIC_DESCRIPTIONS[self.category])

    @classmethod
    def from_name(cls, name: str) -> Encoding:
        """Look up an encoding by canonical name or common alias.

        Matching ignores case, hyphens and underscores, so ``utf8``,
        ``UTF-8`` and ``utf_8`` all resolve to :attr:`Encoding.UTF8`.

        :raises LookupError: If *name* is not a known encoding.
        """
        key = _normalize(name)
        try:
            return _ALIASES[key]
        except KeyError:
            msg = f"Unknown encoding: {name}"
            raise LookupError(msg) from None


def _normalize(name: str) -> str:
    return name.strip().lower().replace("-", "").replace("_", "").replace(" ", "")


_DESCRIPTIONS: dict[Encoding, str] = {
    Encoding.UTF8: "Unicode Transformation Format 8-bit, variable-length encoding",
    Encoding.UTF16LE: "Unicode Transformation Format 16-bit, little-endian",
    Encoding.UTF16BE: "Unicode Transformation Format 16-bit, big-endian",
    Encoding.ASCII: "American Standard Code for Information Interchange (7-bit)",
    Encoding.ISO_8859_1: "Latin alphabet No. 1, Western European",
    Encoding.ISO_8859_2: "Latin alphabet No. 2, Central and Eastern European",
    Encoding.ISO_8859_5: "Latin/Cyrillic alphabet",
    Encoding.ISO_8859_15: "Latin alphabet No. 9, Western European with Euro symbol",
    Encoding.WINDOWS_1250: "Windows code page for Central and Eastern European languages",
    Encoding.WINDOWS_1251: "Windows code page for Cyrillic scripts",
    Encoding.WINDOWS_1252: "Windows code page for Western European languages",
    Encoding.CP_437: "Original IBM PC character set with box-drawing characters",
    Encoding.EBCDIC_037: "IBM Extended Binary Coded Decimal Interchange Code (US/Canada)",
    Encoding.EBCDIC_1047: "IBM EBCDIC Latin-1 / Open Systems",
    Encoding.MAC_ROMAN: "Classic Macintosh Roman character encoding",
}

_GENERIC_DESCRIPTIONS: dict[Category, str] = {
    Category.UNICODE: "Unicode transformation format",
    Category.ASCII: "7-bit ASCII",
    Category.ISO: "ISO/IEC 8859 single-byte code page",
    Category.WINDOWS: "Windows single-byte code page",
    Category.EBCDIC: "IBM EBCDIC mainframe code page",
    Category.DOS: "DOS/OEM code page",
    Category.MAC: "Classic Macintosh code page",
    Category.ASIAN: "East Asian encoding (single-byte repertoire only)",
}


def _build_aliases() -> dict[str, Encoding]:
    aliases: dict[str, Encoding] = {}
    for enc in Encoding:
        aliases[_normalize(enc.canonical_name)] = enc
        aliases[_normalize(enc.name)] = enc
    extra = {
        "ascii": Encoding.ASCII,
        "latin1": Encoding.ISO_8859_1,
        "latin2": Encoding.ISO_8859_2,
        "latin3": Encoding.ISO_8859_3,
        "latin4": Encoding.ISO_8859_4,
        "latin5": Encoding.ISO_8859_9,
        "latin6": Encoding.ISO_8859_10,
        "latin7": Encoding.ISO_8859_13,
        "latin8": Encoding.ISO_8859_14,
        "latin9": Encoding.ISO_8859_15,
        "latin10": Encoding.ISO_8859_16,
        "macintosh": Encoding.MAC_ROMAN,
        "sjis": Encoding.SHIFT_JIS,
    }
    aliases.update({_normalize(k): v for k, v in extra.items()})
    for enc in Encoding:
        if enc.category == Category.WINDOWS:
            number = enc.canonical_name.split("-")[1]
            aliases[f"win{number}"] = enc
            aliases[f"cp{number}"] = enc
        elif enc.category == Category.EBCDIC:
            number = enc.canonical_name[3:]
            aliases[f"ebcdic{number}"] = enc
            aliases[f"cp{number}"] = enc
        elif enc.category == Category.DOS:
            aliases[f"dos{enc.canonical_name[2:]}"] = enc
    return aliases


_ALIASES: dict[str, Encoding] = _build_aliases()
