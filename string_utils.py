"""Small string helpers: blank checks and random string generation."""

import random
import string

# Mode flags for random_string (combine with |)
RANDOM_ALPHA = 1 << 0
RANDOM_NUM = 1 << 1
RANDOM_SPEC = 1 << 2

SPECIALS = "!@#$%^&*_-"
ALPHANUMERIC = string.ascii_letters + string.digits


def is_empty(s: str | None) -> bool:
    """Return True if s is None, empty, or only whitespace."""
    return s is None or not s.strip()


def _random_from(length: int, chars: str) -> str:
    if length <= 0:
        raise ValueError(f"length must be positive, got {length}")
    return "".join(random.choices(chars, k=length))


def random_string_alphanum(length: int) -> str:
    """Random string of ASCII letters and digits."""
    return _random_from(length, ALPHANUMERIC)


def random_string(length: int, mode: int = 0) -> str:
    """
    Random string drawn from the character sets selected by mode.
    mode is a combination of RANDOM_ALPHA, RANDOM_NUM and RANDOM_SPEC; mode <= 0 means alphanumeric.
    Raises ValueError if mode selects no character set (e.g. an unknown bit only).
    """
    if mode <= 0:
        return random_string_alphanum(length)
    chars = ""
    if mode & RANDOM_ALPHA:
        chars += string.ascii_letters
    if mode & RANDOM_NUM:
        chars += string.digits
    if mode & RANDOM_SPEC:
        chars += SPECIALS
    if not chars:
        raise ValueError(f"mode {mode} selects no character set")
    return _random_from(length, chars)
