"""CNPJ identifier utilities: unmask, validate check digits, format."""

from __future__ import annotations

CNPJ_LENGTH = 14
MASK_CHARS = ".-/"

_FIRST_DIGIT_WEIGHTS = (5, 4, 3, 2, 9, 8, 7, 6, 5, 4, 3, 2)
_SECOND_DIGIT_WEIGHTS = (6,) + _FIRST_DIGIT_WEIGHTS


def unmask(value: str) -> str:
    """Strip punctuation: '33.683.111/0002-80' -> '33683111000280'."""
    return "".join(c for c in value.strip() if c not in MASK_CHARS)


def _check_digit(digits: str, weights: tuple[int, ...]) -> int:
    remainder = sum(int(d) * w for d, w in zip(digits, weights)) % 11
    return 0 if remainder < 2 else 11 - remainder


def is_valid_cnpj(value: str) -> bool:
    """Return True if value (masked or not) is a well-formed CNPJ with valid check digits."""
    digits = unmask(value)
    if len(digits) != CNPJ_LENGTH or not digits.isascii() or not digits.isdigit():
        return False
    if len(set(digits)) == 1:
        return False
    first = _check_digit(digits[:12], _FIRST_DIGIT_WEIGHTS)
    second = _check_digit(digits[:13], _SECOND_DIGIT_WEIGHTS)
    return digits[12:] == f"{first}{second}"


def format_cnpj(value: str) -> str:
    """Return the masked form ('33.683.111/0002-80'); input returned unchanged if not 14 digits."""
    d = unmask(value)
    if len(d) != CNPJ_LENGTH:
        return value
    return f"{d[:2]}.{d[2:5]}.{d[5:8]}/{d[8:12]}-{d[12:]}"
