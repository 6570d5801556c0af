import math
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Any, Dict

from loguru import logger

from pytoa.errors import (
    FieldNotFoundError,
    ShapeError,
    TeamNotFoundError,
)


def round_half_away(value: float, places: int = 2) -> float:
    """Round to `places` decimals with halves going away from zero.

    Equivalent to ``round(x * 100) / 100`` where ``round`` is the
    half-away-from-zero kind, not Python's banker's rounding.

    Raises:
        ValueError: `value` is not finite, or overflows once scaled.
    """
    scaled_float = value * (10 ** places)
    if not math.isfinite(scaled_float):
        raise ValueError(f"Cannot round non-finite value {value!r}")
    # A finite double has at most 309 integer digits
    with localcontext() as ctx:
        ctx.prec = 400
        scaled = Decimal(scaled_float).quantize(Decimal(1), rounding=ROUND_HALF_UP)
        return float(scaled / (Decimal(10) ** places))


def _number(record: Dict[str, Any], query: str, context: str) -> float:
    value = record[query]
    # bool is an int subclass but never a statistic
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ShapeError(
            f"Field '{query}' in {context} is {value!r}, expected a number"
        )
    try:
        number = float(value)
    except OverflowError as e:
        raise ShapeError(f"Field '{query}' in {context} is too large") from e
    if not math.isfinite(number):
        raise ShapeError(
            f"Field '{query}' in {context} is {value!r}, expected a finite number"
        )
    return number


def sum_field(records: Any, query: str) -> float:
    """
    Sums one numeric field over every record of a results array.

    Args:
        records: Decoded JSON, expected to be a list of objects.
        query: The field to total, e.g. "wins" or "opr".

    Returns:
        The total rounded to two decimal places.

    Raises:
        ShapeError: `records` is not a list of objects, a value is not a
            finite number, or the total overflows.
        FieldNotFoundError: a record does not carry `query`.
    """
    if not isinstance(records, list):
        raise ShapeError(
            f"Expected an array of records, got {type(records).__name__}"
        )

    total = 0.0
    for index, record in enumerate(records):
        context = f"record {index}"
        if not isinstance(record, dict):
            raise ShapeError(f"{context} is a {type(record).__name__}, expected an object")
        if query not in record:
            raise FieldNotFoundError(f"Field '{query}' missing from {context}")
        total += _number(record, query, context)

    logger.debug(f"Summed '{query}' over {len(records)} records: {total}")
    if not math.isfinite(total * 100):
        raise ShapeError(f"Total of '{query}' overflows: {total!r}")
    return round_half_away(total)


def _team_number(record: Any, index: int) -> int:
    if not isinstance(record, dict):
        raise ShapeError(f"Ranking {index} is a {type(record).__name__}, expected an object")
    team = record.get("team")
    if not isinstance(team, dict) or "team_number" not in team:
        raise ShapeError(f"Ranking {index} has no team.team_number")

    number = team["team_number"]
    if isinstance(number, int) and not isinstance(number, bool):
        return number
    if isinstance(number, str) and number.isdecimal():
        return int(number)
    raise ShapeError(f"Ranking {index} has malformed team number {number!r}")


def find_team_field(records: Any, team_number: int, query: str) -> float:
    """Return `query` from the ranking record belonging to `team_number`.

    Records are scanned in order and the first match wins.
    """
    if not isinstance(records, list):
        raise ShapeError(
            f"Expected an array of rankings, got {type(records).__name__}"
        )

    for index, record in enumerate(records):
        if _team_number(record, index) != team_number:
            continue
        if query not in record:
            raise FieldNotFoundError(
                f"Field '{query}' missing from ranking of team {team_number}"
            )
        return _number(record, query, f"ranking of team {team_number}")

    raise TeamNotFoundError(f"Team {team_number} not found in rankings")
