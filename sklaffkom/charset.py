"""Conversion of 7-bit Swedish text to national character sets."""

from __future__ import annotations

import enum

_SWEDISH_ASCII = b"}{|][\\"


class Charset(enum.Enum):
    """Terminal character sets that Swedish letters can be sent in."""

    ASCII = "ascii"
    IBM = "ibm"
    ISO8859 = "iso8859"
    MAC = "mac"

    @property
    def translation(self) -> bytes | None:
        """A bytes.translate table for this character set, or None."""
        return _TABLES.get(self)


def _table(national: bytes) -> bytes:
    return bytes.maketrans(_SWEDISH_ASCII, national)


# Order of the national letters: å ä ö Å Ä Ö, matching "}{|][\".
_TABLES = {
    Charset.IBM: _table(bytes([134, 132, 148, 143, 142, 153])),
    Charset.ISO8859: _table(bytes([229, 228, 246, 197, 196, 214])),
    Charset.MAC: _table(bytes([140, 138, 154, 129, 128, 133])),
}


def to_national(text: str | bytes, charset: Charset | None) -> bytes:
    """Replace the 7-bit Swedish letters in *text* with *charset*'s letters.

    A str is taken as Latin-1. Plain ASCII (or no charset) leaves the
    bytes as they are.
    """
    data = text.encode("latin-1") if isinstance(text, str) else bytes(text)
    if charset is None:
        return data
    table = Charset(charset).translation
    if table is None:
        return data
    return data.translate(table)


def int_to_msbin(value: int) -> bytes:
    """Encode an integer as a four-byte Microsoft Binary Format float.

    Only the low 23 bits of *value* form the mantissa, as in the
    original format writer; a value whose low 23 bits are all zero
    (other than zero itself) cannot be encoded.
    """
    if value == 0:
        return bytes([0, 0, 0, 0x80])
    mantissa = value & 0x7FFFFF
    if mantissa == 0:
        raise ValueError(f"cannot encode {value} as an MBF float")
    exponent = 152
    while not mantissa & 0x800000:
        mantissa <<= 1
        exponent -= 1
    return bytes(
        [
            mantissa & 0xFF,
            (mantissa >> 8) & 0xFF,
            (mantissa >> 16) & 0x7F,
            exponent & 0xFF,
        ]
    )