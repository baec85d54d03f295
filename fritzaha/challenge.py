"""Challenge response calculation for the FRITZ!OS login.

The box hands out a challenge with every login attempt. Since FRITZ!OS 7.24
the challenge has the form ``2$<iter1>$<salt1>$<iter2>$<salt2>`` and the
response is derived with two rounds of PBKDF2-HMAC-SHA256::

    hash1 = pbkdf2(password, salt1, iter1)
    hash2 = pbkdf2(hash1, salt2, iter2)
    response = "<salt2>$<hash2 as hex>"

Older firmware sends a plain nonce and expects
``<challenge>-md5(utf16le("<challenge>-<password>"))``.

https://avm.de/service/schnittstellen/
"""

from __future__ import annotations

import hashlib
import logging
from dataclasses import dataclass
from enum import Enum

from .exceptions import MalformedChallengeError

_LOGGER = logging.getLogger(__name__)

PBKDF2_PREFIX = "2$"
_PBKDF2_FIELDS = 5
_HASH_BYTES = 32


def md5(payload: bytes) -> bytes:
    """Return the MD5 hash of the payload."""
    return hashlib.md5(payload).digest()  # noqa: S324


def _pbkdf2_sha256(password: bytes, salt: bytes, iterations: int) -> bytes:
    return hashlib.pbkdf2_hmac("sha256", password, salt, iterations, _HASH_BYTES)


class ChallengeKind(Enum):
    """Derivation method advertised by the challenge."""

    Pbkdf2 = "pbkdf2"
    Md5 = "md5"

    @staticmethod
    def from_challenge(challenge: str) -> ChallengeKind:
        """Return the kind of derivation the challenge asks for."""
        if challenge.startswith(PBKDF2_PREFIX):
            return ChallengeKind.Pbkdf2
        return ChallengeKind.Md5


@dataclass(frozen=True)
class LoginState:
    """Login state returned by the box before a login attempt."""

    #: Challenge to derive the response from
    challenge: str
    #: Seconds to wait before the box accepts a login attempt
    block_time: int = 0

    @property
    def kind(self) -> ChallengeKind:
        """Return the derivation method to use for the challenge."""
        return ChallengeKind.from_challenge(self.challenge)


def _parse_pbkdf2_challenge(challenge: str) -> tuple[int, bytes, int, bytes, str]:
    parts = challenge.split("$")
    if len(parts) != _PBKDF2_FIELDS:
        raise MalformedChallengeError(
            f"Expected {_PBKDF2_FIELDS} fields in challenge, got {len(parts)}"
        )
    _, iter1_str, salt1_hex, iter2_str, salt2_hex = parts
    try:
        iter1 = int(iter1_str)
        iter2 = int(iter2_str)
        salt1 = bytes.fromhex(salt1_hex)
        salt2 = bytes.fromhex(salt2_hex)
    except ValueError as ex:
        raise MalformedChallengeError(f"Unable to parse challenge: {ex}") from ex

    if iter1 < 1 or iter2 < 1:
        raise MalformedChallengeError("Challenge iteration counts must be positive")
    if not salt1 or not salt2:
        raise MalformedChallengeError("Challenge salts must not be empty")

    return iter1, salt1, iter2, salt2, salt2_hex


def calculate_pbkdf2_response(challenge: str, password: str) -> str:
    """Return the response for a version 2 challenge."""
    iter1, salt1, iter2, salt2, salt2_hex = _parse_pbkdf2_challenge(challenge)
    hash1 = _pbkdf2_sha256(password.encode(), salt1, iter1)
    hash2 = _pbkdf2_sha256(hash1, salt2, iter2)
    return f"{salt2_hex}${hash2.hex()}"


def calculate_md5_response(challenge: str, password: str) -> str:
    """Return the response for a legacy challenge."""
    response = f"{challenge}-{password}"
    return f"{challenge}-{md5(response.encode('utf-16-le')).hex()}"


def solve(challenge: str, password: str) -> str:
    """Return the response proving knowledge of the password."""
    if ChallengeKind.from_challenge(challenge) is ChallengeKind.Pbkdf2:
        _LOGGER.debug("PBKDF2 supported")
        return calculate_pbkdf2_response(challenge, password)

    _LOGGER.debug("Falling back to MD5")
    return calculate_md5_response(challenge, password)
