"""
Short identifier tokens for options, criteria and projects
"""

import secrets
import string
from typing import Callable

ID_ALPHABET = string.digits + string.ascii_lowercase
ID_LENGTH = 9

IdGenerator = Callable[[], str]


def generate_id() -> str:
    """Return a random 9-character base-36 token"""
    return ''.join(secrets.choice(ID_ALPHABET) for _ in range(ID_LENGTH))
