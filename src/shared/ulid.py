"""Identifiers for studios and the records inside their collections."""

import ulid

ULID_LENGTH = 26


def generate_ulid() -> str:
    """Return a new sortable identifier as its 26-character string form."""
    return ulid.new().str
