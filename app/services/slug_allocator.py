from __future__ import annotations

import logging
import secrets
import string
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)

SLUG_ALPHABET = string.ascii_letters + string.digits
SLUG_LENGTH = 8
MAX_SLUG_ATTEMPTS = 10


class SlugExhaustionError(RuntimeError):
    """No unused slug was found within the attempt budget."""

    def __init__(self, attempts: int):
        super().__init__(f"Failed to generate a unique short URL after {attempts} attempts")
        self.attempts = attempts


def generate_slug(length: int = SLUG_LENGTH) -> str:
    return "".join(secrets.choice(SLUG_ALPHABET) for _ in range(length))


class SlugAllocator:
    """
    Hands out redirect slugs for dynamic QR codes.

    ``lookup`` returns the record already using a slug, or None when the slug
    is free. Each attempt does exactly one lookup; there is no reservation, so
    the short_url unique constraint on the table catches concurrent winners.
    """

    def __init__(
        self,
        lookup: Callable[[str], Optional[Any]],
        max_attempts: int = MAX_SLUG_ATTEMPTS,
        generator: Callable[[], str] = generate_slug,
    ):
        self._lookup = lookup
        self._max_attempts = max_attempts
        self._generator = generator

    def allocate(self) -> str:
        for attempt in range(1, self._max_attempts + 1):
            candidate = self._generator()
            if self._lookup(candidate) is None:
                return candidate
            logger.debug("Slug collision on attempt %s: %s", attempt, candidate)
        logger.error("Slug allocation exhausted after %s attempts", self._max_attempts)
        raise SlugExhaustionError(self._max_attempts)
