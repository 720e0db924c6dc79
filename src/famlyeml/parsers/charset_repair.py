"""Repair tables for mis-encoded accented characters.

Famly exports are frequently double encoded: the UTF-8 bytes of an accented
letter get read back as Latin-1 or Windows-1252 and encoded again, so "í"
arrives as "Ã\xad". This module holds the single lookup table used to undo
that, plus the generic two-byte fallback for escapes the table misses.

The table is built from REPAIR_TARGETS. Each target character gets three
keys:
    Latin-1 misreading      "Ã\xad"  -> "í"
    Windows-1252 misreading "Ã‰"     -> "É"
    literal escape          "=C3=AD" -> "í"
"""

import re
from typing import Final

from loguru import logger

# Vowels with acute, grave, circumflex and diaeresis, then ç/Ç and ñ/Ñ
REPAIR_TARGETS: Final[str] = (
    "áéíóú" "ÁÉÍÓÚ"
    "àèìòù" "ÀÈÌÒÙ"
    "âêîôû" "ÂÊÎÔÛ"
    "äëïöü" "ÄËÏÖÜ"
    "ñÑçÇ"
)


def _misreadings(char: str) -> dict[str, str]:
    encoded = char.encode("utf-8")
    forms = {
        encoded.decode("latin-1"): char,
        "".join(f"={byte:02X}" for byte in encoded): char,
    }
    try:
        forms[encoded.decode("cp1252")] = char
    except UnicodeDecodeError:
        # 0x81, 0x8D, 0x8F, 0x90 and 0x9D are unassigned in cp1252
        pass
    return forms


def _build_repairs(targets: str) -> dict[str, str]:
    repairs: dict[str, str] = {}
    for char in targets:
        repairs.update(_misreadings(char))
    return repairs


MOJIBAKE_REPAIRS: Final[dict[str, str]] = _build_repairs(REPAIR_TARGETS)

# Longest keys first so "=C3=AD" is never split by a shorter match
_REPAIR_PATTERN = re.compile(
    "|".join(re.escape(key) for key in sorted(MOJIBAKE_REPAIRS, key=len, reverse=True))
)

# Only the 0xC3 lead byte is reconstructed; 0xC2 (°, £, ©...) stays literal
_RESIDUAL_ESCAPE_PATTERN = re.compile(r"=C3=([0-9A-F]{2})", re.IGNORECASE)
_LEAD_BYTE = 0xC3


def repair_mojibake(text: str) -> str:
    """Replace every known double-encoded sequence with its intended character.

    Args:
        text: Decoded text that may contain mojibake

    Returns:
        Text with table entries replaced
    """
    if not text:
        return text

    repaired = _REPAIR_PATTERN.sub(lambda m: MOJIBAKE_REPAIRS[m.group(0)], text)
    if repaired != text:
        logger.debug("Repaired double-encoded characters")
    return repaired


def _reconstruct(match: re.Match) -> str:
    continuation = int(match.group(1), 16)
    if continuation & 0xC0 != 0x80:
        return match.group(0)
    return chr(((_LEAD_BYTE & 0x1F) << 6) | (continuation & 0x3F))


def decode_residual_escapes(text: str) -> str:
    """Rebuild leftover ``=C3=XX`` escapes as two-byte UTF-8 characters.

    Escapes whose second byte is not a continuation byte are left as-is.
    """
    if "=" not in text:
        return text
    return _RESIDUAL_ESCAPE_PATTERN.sub(_reconstruct, text)
