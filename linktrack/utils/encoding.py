import secrets
import string

# URL-safe alphabet, ids are case-sensitive
ALPHABET = string.ascii_letters + string.digits + "_-"
SHORT_ID_LENGTH = 9
MAX_SHORT_ID_LENGTH = 64

_ALPHABET_SET = frozenset(ALPHABET)


def generate_short_id(length: int = SHORT_ID_LENGTH) -> str:
    """Generate a cryptographically secure random URL-safe identifier."""
    if length < 1:
        raise ValueError("length must be positive")
    return ''.join(secrets.choice(ALPHABET) for _ in range(length))


def is_valid_short_id(value: str) -> bool:
    """Cheap shape check so junk paths never reach the store."""
    if not value or len(value) > MAX_SHORT_ID_LENGTH:
        return False
    return all(ch in _ALPHABET_SET for ch in value)
