"""
Shared scoring primitives.

Every indicator in the engine follows the same shape: read a handful of
optional numeric inputs, accumulate a weighted score, clamp it to [0, 1],
then classify it against an ordered list of threshold bands and look up the
strategy list attached to the resulting level.

Engineering approach:
- Bands are ordered (threshold, level) pairs, highest threshold first
- Classification is inclusive (score >= threshold) unless stated otherwise
- Input readers never raise: absent, None or non-numeric values fall back
  to the caller's neutral default
"""

import logging
import re
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

import numpy as np

logger = logging.getLogger(__name__)

Bands = Sequence[Tuple[float, str]]

_CAMEL_BOUNDARY = re.compile(r'(?<=[a-z0-9])(?=[A-Z])')


def clamp_score(value: float, lower: float = 0.0, upper: float = 1.0) -> float:
    """Clamp a score into [lower, upper] and return a plain float."""
    return float(np.clip(value, lower, upper))


def classify(score: float, bands: Bands, default: str, inclusive: bool = True) -> str:
    """
    Map a score to a level using ordered threshold bands.

    Args:
        score: Value to classify
        bands: (threshold, level) pairs ordered from highest threshold down
        default: Level returned when no band matches
        inclusive: Compare with >= (True) or > (False)

    Returns:
        Level name
    """
    for threshold, level in bands:
        if (score >= threshold) if inclusive else (score > threshold):
            return level
    return default


def classify_and_lookup(
    score: float,
    bands: Bands,
    default: str,
    table: Mapping[str, Sequence[str]],
    inclusive: bool = True
) -> Tuple[str, List[str]]:
    """Classify a score and return (level, fresh copy of table[level])."""
    level = classify(score, bands, default, inclusive=inclusive)
    return level, list(table.get(level, ()))


def calculate_trend(values: Sequence[float]) -> float:
    """
    Second-half mean minus first-half mean.

    The split point is len(values) // 2, so for odd lengths the middle value
    belongs to the second half. Fewer than two values give 0.0.
    """
    numbers = numeric_sequence(values)
    if len(numbers) < 2:
        return 0.0
    middle = len(numbers) // 2
    return float(np.mean(numbers[middle:]) - np.mean(numbers[:middle]))


def numeric_sequence(values: Any) -> List[float]:
    """
    Coerce a sequence of numbers into a list of floats.

    Anything that is not a list/tuple/ndarray, or that contains a
    non-numeric element, is treated as malformed and yields an empty list.
    """
    if not isinstance(values, (list, tuple, np.ndarray)):
        return []
    numbers = []
    for value in values:
        if isinstance(value, bool):
            return []
        try:
            number = float(value)
        except (ValueError, TypeError, OverflowError):
            return []
        if not np.isfinite(number):
            return []
        numbers.append(number)
    return numbers


def read_number(data: Optional[Mapping], key: str, default: float = 0.0) -> float:
    """Read a float from a mapping, falling back to default when unusable."""
    if not isinstance(data, Mapping):
        return float(default)
    value = data.get(key)
    if value is None:
        return float(default)
    try:
        number = float(value)
    except (ValueError, TypeError, OverflowError):
        return float(default)
    if not np.isfinite(number):
        return float(default)
    return number


def read_count(data: Optional[Mapping], key: str, default: float = 0.0) -> float:
    """
    Read a count-like value.

    Accepts either a number or a sequence (whose length is used), which is
    how event lists such as help requests are often reported.
    """
    if isinstance(data, Mapping) and isinstance(data.get(key), (list, tuple)):
        return float(len(data[key]))
    return read_number(data, key, default)


def read_flag(data: Optional[Mapping], key: str, default: bool = False) -> bool:
    if not isinstance(data, Mapping) or data.get(key) is None:
        return default
    return bool(data.get(key))


def read_list(data: Optional[Mapping], key: str) -> List[Any]:
    if not isinstance(data, Mapping):
        return []
    value = data.get(key)
    if isinstance(value, (list, tuple)):
        return list(value)
    return []


def to_snake_case(name: str) -> str:
    return _CAMEL_BOUNDARY.sub('_', name).lower()


def normalize_keys(data: Any) -> Dict[str, Any]:
    """
    Return a copy of a mapping with camelCase keys converted to snake_case.

    Nested mappings are normalised too; lists are kept as-is except that
    mappings inside them are normalised. Non-mapping input gives {}.
    """
    if not isinstance(data, Mapping):
        return {}
    normalized = {}
    for key, value in data.items():
        new_key = to_snake_case(key) if isinstance(key, str) else key
        normalized[new_key] = _normalize_value(value)
    return normalized


def _normalize_value(value: Any) -> Any:
    if isinstance(value, Mapping):
        return normalize_keys(value)
    if isinstance(value, list):
        return [_normalize_value(item) for item in value]
    return value
