# ABOUTME: String validity rules for booklist names, owner ids, and tags, plus id generation.
# ABOUTME: Rejects blank strings, control characters, and quote/backslash characters.

import secrets
import string
import unicodedata
from collections.abc import Iterable

from booktracker.errors import InvalidAttributeError

# Characters that may never appear in a name, owner id, or tag.
INVALID_CHARACTERS = frozenset("\"'\\")

BOOKLIST_ID_LENGTH = 8
_ID_ALPHABET = string.ascii_letters + string.digits


def is_valid_string(value: str | None) -> bool:
    """Whether ``value`` is non-blank and free of control and blacklisted characters."""
    if value is None or not value.strip():
        return False
    return not any(
        char in INVALID_CHARACTERS or unicodedata.category(char) == "Cc" for char in value
    )


def require_valid(value: str | None, label: str) -> str:
    """Return ``value`` unchanged, or raise InvalidAttributeError naming ``label``."""
    if not is_valid_string(value):
        raise InvalidAttributeError(f"Booklist {label} [{value}] contains illegal characters")
    return value  # type: ignore[return-value]


def validate_tags(tags: Iterable[str] | None) -> frozenset[str]:
    """Validate every tag and collapse them into a set."""
    if not tags:
        return frozenset()
    return frozenset(require_valid(tag, "tag") for tag in tags)


def generate_booklist_id() -> str:
    """Generate a random alphanumeric booklist id."""
    return "".join(secrets.choice(_ID_ALPHABET) for _ in range(BOOKLIST_ID_LENGTH))
