"""Find the decimal point of the leading amount in a posting's trailing text."""

__copyright__ = "Copyright (C) 2026 slimslickner"
__license__ = "GNU GPLv2"

import re
from typing import NamedTuple, Optional

# Optional sign, digits with thousands separators, optional fraction.
NUMBER_RE = re.compile(r"[-+]?\d[\d,]*(?:\.\d*)?")


class DecimalToken(NamedTuple):
    """The integer part of an amount including its decimal point.

    ``token`` is e.g. ``"-20,002."`` and ``start_offset`` is where it begins
    within the text that was searched.
    """

    token: str
    start_offset: int


def locate_decimal(amount_text: str) -> Optional[DecimalToken]:
    """Locate the decimal point of the first number in ``amount_text``.

    Only the first number is considered, so in ``10 AAPL {150.00 USD}`` the
    amount ``10`` is an integer and no token is returned.

    Args:
        amount_text: Text following the account (amount, currency, cost, ...)

    Returns:
        The token up to and including ``.``, or None for integer amounts and
        text without a number
    """
    match = NUMBER_RE.search(amount_text)
    if match is None:
        return None

    number = match.group(0)
    dot = number.find(".")
    if dot < 0:
        return None
    return DecimalToken(token=number[: dot + 1], start_offset=match.start())
