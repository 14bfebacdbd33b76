"""
Identifier generation strategies.
Uses Strategy Pattern so tests can swap in a deterministic generator.
"""

import secrets
import string
from abc import ABC, abstractmethod


URL_SAFE_ALPHABET = string.ascii_letters + string.digits + "_-"


class IdGenerator(ABC):
    """Abstract base class for identifier generators"""

    @abstractmethod
    def generate(self) -> str:
        """
        Generate a new opaque identifier.

        Used for short ids, device ids, user ids and scan ids alike.
        """
        pass


class RandomIdGenerator(IdGenerator):
    """
    Random fixed-length identifiers over a URL-safe alphabet.

    Collisions are treated as negligible: 64^10 possible ids and no
    lookup against existing keys.
    """

    def __init__(self, length: int = 10, alphabet: str = URL_SAFE_ALPHABET):
        if length <= 0:
            raise ValueError(f"Identifier length must be positive, got {length}")
        self.length = length
        self.alphabet = alphabet

    def generate(self) -> str:
        return ''.join(secrets.choice(self.alphabet) for _ in range(self.length))
