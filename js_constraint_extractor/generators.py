"""Concrete boundary value generation."""

import logging
import random
import re
import string

logger = logging.getLogger(__name__)

PHONE_NUMBER_LENGTH = 10
AREA_CODE_LENGTH = 3
LEADING_DIGITS = re.compile(r"[0-9]*")


class ValueGenerator:
    """Random boundary values from a private Mersenne Twister.

    Each generator owns its own ``random.Random`` so extraction never touches
    the global random state. Pass a seed for reproducible output.

    Args:
        seed: Seed for the random engine, or None to seed from system entropy
    """

    def __init__(self, seed: int | None = None):
        self.seed = seed
        self._random = random.Random(seed)

    def concrete_integer(self, boundary: int, greater_than: bool) -> int:
        """Pick an integer just above or just below a boundary.

        Args:
            boundary: The constraint integer
            greater_than: Whether the value must be above the boundary

        Returns:
            A uniform sample from [boundary+1, boundary+10] when greater_than,
            otherwise from [boundary-10, boundary-1]
        """
        if greater_than:
            return self._random.randint(boundary + 1, boundary + 10)
        return self._random.randint(boundary - 10, boundary - 1)

    def digit_string(self, length: int = PHONE_NUMBER_LENGTH) -> str:
        """Generate a string of random decimal digits."""
        return "".join(self._random.choice(string.digits) for _ in range(length))

    def phone_number(self, prefix: str = "") -> str:
        """Generate a ten digit phone-style number.

        The leading digits among the first three characters of ``prefix``
        replace the leading random digits, so a comparison against "919"
        yields numbers in the 919 area code. Non-digit characters are never
        spliced in.
        """
        digits = self.digit_string(PHONE_NUMBER_LENGTH)
        area_code = LEADING_DIGITS.match(prefix[:AREA_CODE_LENGTH]).group()
        number = area_code + digits[len(area_code) :]
        logger.debug(f"Generated phone number {number} (prefix={prefix!r})")
        return number
