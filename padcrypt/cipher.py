"""One-time pad arithmetic over a 27-character alphabet (A-Z and space)."""

from __future__ import annotations

import os
from typing import Union

ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ "
_MODULUS = len(ALPHABET)
_INDEX = {ch: i for i, ch in enumerate(ALPHABET)}

PathLike = Union[str, "os.PathLike[str]"]


class CipherError(Exception):
    """Raised when a message or key cannot be used."""


class InvalidCharacterError(CipherError, ValueError):
    """Raised when text holds a character outside the allowed set."""


def _values(text: str) -> list[int]:
    try:
        return [_INDEX[ch] for ch in text]
    except KeyError as exc:
        raise InvalidCharacterError(f"Invalid character in text: {exc.args[0]!r}") from None


def _combine(text: str, key: str, sign: int) -> str:
    if len(key) < len(text):
        raise CipherError("Key is shorter than plaintext")
    text_values = _values(text)
    key_values = _values(key[: len(text)])
    return "".join(
        ALPHABET[(t + sign * k) % _MODULUS] for t, k in zip(text_values, key_values)
    )


def encrypt(plaintext: str, key: str) -> str:
    """Encrypt ``plaintext`` with ``key``; the key must be at least as long."""
    return _combine(plaintext, key, 1)


def decrypt(ciphertext: str, key: str) -> str:
    """Decrypt ``ciphertext`` with ``key``; the key must be at least as long."""
    return _combine(ciphertext, key, -1)


def validate_text(text: str) -> str:
    """Check that text holds only A-Z, space and newline; return it without newlines."""
    for ch in text:
        if ch != "\n" and ch not in _INDEX:
            raise InvalidCharacterError("Invalid character in file")
    return text.replace("\n", "")


def read_message_file(path: PathLike) -> str:
    """Read a message or key file, validate it and drop its newlines."""
    try:
        with open(path, "rb") as handle:
            raw = handle.read()
    except OSError as exc:
        raise CipherError("Cannot open file") from exc
    return validate_text(raw.decode("latin-1"))