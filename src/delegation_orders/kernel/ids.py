"""
Order identifier generation

Order numbers are 12 random bytes rendered as 24 lowercase hex characters.
They are not checked against the registry for collisions - with 2^96 possible
values the chance of a repeat is negligible.

Fun fact: you would need to mint roughly 2.8e14 order numbers before a
collision became as likely as a coin flip - long after the orders expired!
"""

import secrets
from typing import Protocol

ORDER_ID_BYTES = 12


class IdFactory(Protocol):
    """Protocol for order identifier strategies"""

    def generate(self) -> str:
        """Generate a new order identifier"""
        ...


def generate_order_id() -> str:
    """
    Generate a random order identifier

    Uses the operating system CSPRNG. If the randomness source fails the
    error propagates - a predictable identifier is never returned.

    Returns:
        24-character hex string (e.g., "9f86d081884c7d659a2feaa0")
    """
    return secrets.token_bytes(ORDER_ID_BYTES).hex()


class DefaultIdFactory:
    """Default ID factory backed by the OS randomness source"""

    def generate(self) -> str:
        return generate_order_id()


# Global default factory
default_id_factory = DefaultIdFactory()
