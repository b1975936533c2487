"""Stable identifiers for query fingerprints."""

from __future__ import annotations

import hashlib

__all__ = ["fingerprint_id", "fingerprint_md5"]


def fingerprint_md5(fingerprint: str) -> str:
    """Return the lowercase hexadecimal MD5 checksum of ``fingerprint``."""
    return hashlib.md5(fingerprint.encode("utf-8")).hexdigest()


def fingerprint_id(fingerprint: str) -> str:
    """Return a short identifier: the last 16 hex digits of the MD5, uppercased."""
    return fingerprint_md5(fingerprint)[16:32].upper()