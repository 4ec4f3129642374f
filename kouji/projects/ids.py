"""
Stable project ids.

A project's id is a 5-character code derived from its start date, company
name and location name, so the same folder gets the same id on every scan
and can be matched against the side-car store. The alphabet leaves out
0, I, O and Q so ids can be read back and typed by hand.
"""

import hashlib

from kouji.projects.instant import Instant

ID_ALPHABET = "123456789ABCDEFGHJKLMNPRSTUVWXYZ"
ID_LENGTH = 5
KEY_DELIMITER = "_"

_BITS_PER_SYMBOL = 5  # len(ID_ALPHABET) == 32


def project_key(start: Instant, company_name: str, location_name: str) -> str:
    """Composite key ``YYYY-MM-DD_company_location``."""
    return KEY_DELIMITER.join((start.date_string(), company_name, location_name))


def derive_id(key: str) -> str:
    """
    Map a key onto ``ID_LENGTH`` alphabet symbols.

    The leading 25 bits of the key's SHA-256 digest are read five at a time.
    Never fails; identical keys always give identical ids.
    """
    digest = hashlib.sha256(key.encode("utf-8")).digest()
    value = int.from_bytes(digest[:4], "big")
    shift = 32 - _BITS_PER_SYMBOL
    symbols = []
    for _ in range(ID_LENGTH):
        symbols.append(ID_ALPHABET[(value >> shift) & 0x1F])
        shift -= _BITS_PER_SYMBOL
    return "".join(symbols)
