"""Content digests for block fingerprints.

Digests decide whether a block survived an edit and are written out with
the persisted document, so they must not vary between processes.  MD5 is
used for speed only; nothing here is security sensitive.
"""

from __future__ import annotations

import hashlib


def md5_hash(data: str) -> str:
    """Hex MD5 of *data* encoded as UTF-8.

    Lone surrogates (possible in text pasted from some editors) are passed
    through with ``surrogatepass`` instead of raising.

    >>> md5_hash("hello")
    '5d41402abc4b2a76b9719d911017c592'
    """
    return hashlib.md5(data.encode("utf-8", "surrogatepass")).hexdigest()
