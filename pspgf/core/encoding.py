# pspgf - A PostScript to PGF Converter
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Character encoding vectors.

STANDARD_ENCODING and ISO_LATIN1_ENCODING map character codes 0-255 to
glyph names (PLRM Appendix E). GLYPH_UNICODE maps the glyph names that
occur in them to Unicode text, which is what the text output needs.
"""

from typing import Dict, List

_ASCII_NAMES = [
    "space", "exclam", "quotedbl", "numbersign", "dollar", "percent",
    "ampersand", "quoteright", "parenleft", "parenright", "asterisk", "plus",
    "comma", "hyphen", "period", "slash", "zero", "one", "two", "three",
    "four", "five", "six", "seven", "eight", "nine", "colon", "semicolon",
    "less", "equal", "greater", "question", "at",
] + [chr(c) for c in range(ord("A"), ord("Z") + 1)] + [
    "bracketleft", "backslash", "bracketright", "asciicircum", "underscore",
    "quoteleft",
] + [chr(c) for c in range(ord("a"), ord("z") + 1)] + [
    "braceleft", "bar", "braceright", "asciitilde",
]

_STANDARD_HIGH = {
    161: "exclamdown", 162: "cent", 163: "sterling", 164: "fraction",
    165: "yen", 166: "florin", 167: "section", 168: "currency",
    169: "quotesingle", 170: "quotedblleft", 171: "guillemotleft",
    172: "guilsinglleft", 173: "guilsinglright", 174: "fi", 175: "fl",
    177: "endash", 178: "dagger", 179: "daggerdbl", 180: "periodcentered",
    182: "paragraph", 183: "bullet", 184: "quotesinglbase",
    185: "quotedblbase", 186: "quotedblright", 187: "guillemotright",
    188: "ellipsis", 189: "perthousand", 191: "questiondown", 193: "grave",
    194: "acute", 195: "circumflex", 196: "tilde", 197: "macron",
    198: "breve", 199: "dotaccent", 200: "dieresis", 202: "ring",
    203: "cedilla", 205: "hungarumlaut", 206: "ogonek", 207: "caron",
    208: "emdash", 225: "AE", 227: "ordfeminine", 232: "Lslash",
    233: "Oslash", 234: "OE", 235: "ordmasculine", 241: "ae",
    245: "dotlessi", 248: "lslash", 249: "oslash", 250: "oe",
    251: "germandbls",
}

_ISO_LATIN1_ACCENTS = {
    144: "dotlessi", 145: "grave", 146: "acute", 147: "circumflex",
    148: "tilde", 149: "macron", 150: "breve", 151: "dotaccent",
    152: "dieresis", 154: "ring", 155: "cedilla", 157: "hungarumlaut",
    158: "ogonek", 159: "caron",
}

_ISO_LATIN1_HIGH = [
    "space", "exclamdown", "cent", "sterling", "currency", "yen",
    "brokenbar", "section", "dieresis", "copyright", "ordfeminine",
    "guillemotleft", "logicalnot", "hyphen", "registered", "macron",
    "degree", "plusminus", "twosuperior", "threesuperior", "acute", "mu",
    "paragraph", "periodcentered", "cedilla", "onesuperior", "ordmasculine",
    "guillemotright", "onequarter", "onehalf", "threequarters",
    "questiondown", "Agrave", "Aacute", "Acircumflex", "Atilde", "Adieresis",
    "Aring", "AE", "Ccedilla", "Egrave", "Eacute", "Ecircumflex",
    "Edieresis", "Igrave", "Iacute", "Icircumflex", "Idieresis", "Eth",
    "Ntilde", "Ograve", "Oacute", "Ocircumflex", "Otilde", "Odieresis",
    "multiply", "Oslash", "Ugrave", "Uacute", "Ucircumflex", "Udieresis",
    "Yacute", "Thorn", "germandbls", "agrave", "aacute", "acircumflex",
    "atilde", "adieresis", "aring", "ae", "ccedilla", "egrave", "eacute",
    "ecircumflex", "edieresis", "igrave", "iacute", "icircumflex",
    "idieresis", "eth", "ntilde", "ograve", "oacute", "ocircumflex",
    "otilde", "odieresis", "divide", "oslash", "ugrave", "uacute",
    "ucircumflex", "udieresis", "yacute", "thorn", "ydieresis",
]


def _standard_encoding() -> List[str]:
    vector = [".notdef"] * 256
    vector[32:127] = _ASCII_NAMES
    for code, name in _STANDARD_HIGH.items():
        vector[code] = name
    return vector


def _iso_latin1_encoding() -> List[str]:
    vector = [".notdef"] * 256
    vector[32:127] = _ASCII_NAMES
    vector[45] = "minus"
    vector[39] = "quoteright"
    vector[96] = "quoteleft"
    for code, name in _ISO_LATIN1_ACCENTS.items():
        vector[code] = name
    vector[160:256] = _ISO_LATIN1_HIGH
    return vector


STANDARD_ENCODING = _standard_encoding()
ISO_LATIN1_ENCODING = _iso_latin1_encoding()


def _glyph_unicode() -> Dict[str, str]:
    table = {}
    for code, name in enumerate(_ASCII_NAMES, start=32):
        table[name] = chr(code)
    for code, name in enumerate(_ISO_LATIN1_HIGH, start=160):
        table.setdefault(name, chr(code))
    table.update({
        "quoteright": "’", "quoteleft": "‘", "quotesingle": "'",
        "minus": "−", "hyphen": "-", "fraction": "⁄",
        "florin": "ƒ", "quotedblleft": "“",
        "quotedblright": "”", "guilsinglleft": "‹",
        "guilsinglright": "›", "fi": "fi", "fl": "fl",
        "endash": "–", "emdash": "—", "dagger": "†",
        "daggerdbl": "‡", "bullet": "•",
        "quotesinglbase": "‚", "quotedblbase": "„",
        "ellipsis": "…", "perthousand": "‰", "grave": "`",
        "circumflex": "ˆ", "tilde": "˜", "breve": "˘",
        "dotaccent": "˙", "ring": "˚", "hungarumlaut": "˝",
        "ogonek": "˛", "caron": "ˇ", "Lslash": "Ł",
        "lslash": "ł", "OE": "Œ", "oe": "œ",
        "dotlessi": "ı",
    })
    return table


GLYPH_UNICODE = _glyph_unicode()

ENCODINGS = {
    b"StandardEncoding": STANDARD_ENCODING,
    b"ISOLatin1Encoding": ISO_LATIN1_ENCODING,
}
