import hashlib


def hash_name(name: str) -> str:
    """SHA-256 hex digest of a participant name; stored records only ever hold these."""
    return hashlib.sha256(name.encode("utf-8")).hexdigest()
