"""Short random identifiers for tests and results."""

import secrets
import string

# URL-safe alphabet: 64 symbols, ~60 bits of entropy at length 10
ID_ALPHABET = string.ascii_letters + string.digits + "_-"


def generate_id(length: int = 10) -> str:
    """Random URL-safe id. Collisions are not checked."""
    return "".join(secrets.choice(ID_ALPHABET) for _ in range(length))
