import hashlib
import re

from .constants import HASH_PREFIX
from .errors import InvalidInputError

LABEL_RE = re.compile(r"^[a-z0-9_-]+$")


def get_hashed_name(name: str) -> bytes:
    # SNS uses SHA256 of (HASH_PREFIX + name)
    return hashlib.sha256((HASH_PREFIX + name).encode("utf-8")).digest()


def normalize_label(label: str) -> str:
    """Lowercase a single domain label and check it against the allowed charset."""
    if not isinstance(label, str):
        raise InvalidInputError(f"Domain label must be a string, got {type(label).__name__}")
    stripped = label.strip()
    if not stripped:
        raise InvalidInputError("Domain label is empty")
    # Checked before lowercasing: "ß" or the Kelvin sign would fold into ASCII
    if not stripped.isascii():
        raise InvalidInputError(f"Domain label is not ASCII: {label!r}")
    normalized = stripped.lower()
    if "." in normalized:
        raise InvalidInputError(f"Domain label contains a separator: {label!r}")
    if not LABEL_RE.match(normalized):
        raise InvalidInputError(f"Invalid characters in domain label: {label!r}")
    return normalized


def hash_label(label: str, prefix: str = "") -> bytes:
    """Hash a domain label, `prefix` is the subdomain/record marker byte if any."""
    return get_hashed_name(prefix + normalize_label(label))
