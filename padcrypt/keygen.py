"""Generate random one-time pad keys."""

from __future__ import annotations

import random
import re
import sys
from typing import Optional, Sequence

from padcrypt.cipher import ALPHABET

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def generate_key(length: int, rng: Optional[random.Random] = None) -> str:
    """Return ``length`` characters drawn at random from A-Z and space."""
    if length <= 0:
        raise ValueError("keylength must be a positive integer.")
    chooser = rng if rng is not None else random.SystemRandom()
    return "".join(chooser.choice(ALPHABET) for _ in range(length))


def _parse_leading_int(text: str) -> int:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Print a random key of the requested length followed by a newline."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) != 1:
        sys.stderr.write("Usage: keygen keylength\n")
        return 1
    length = _parse_leading_int(args[0])
    if length <= 0:
        sys.stderr.write("Error: keylength must be a positive integer.\n")
        return 1
    sys.stdout.write(generate_key(length) + "\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())