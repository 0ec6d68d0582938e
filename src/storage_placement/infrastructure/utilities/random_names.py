"""Random account name prefixes."""

import random
import string
from typing import Optional

NAME_ALPHABET = string.ascii_lowercase + string.digits


class RandomNameGenerator:
    """Generates fixed-length lowercase alphanumeric prefixes."""

    def __init__(self, length: int = 8, rng: Optional[random.Random] = None) -> None:
        if length < 1:
            raise ValueError("prefix length must be positive")
        self.length = length
        self._rng = rng or random.SystemRandom()

    def generate(self) -> str:
        return "".join(self._rng.choice(NAME_ALPHABET) for _ in range(self.length))
