"""Weight processing.

``process_weights`` turns a partial ``version -> percentage`` mapping into a
cumulative threshold table over ``[0, 100]``.  Versions without an explicit
weight split the remaining percentage evenly.  Every partial sum is rounded
to one decimal and the last threshold is pinned to exactly ``100`` so the
table is reproducible regardless of floating-point drift.
"""

import math
from typing import List, Mapping, Sequence, Tuple

from .exceptions import UnknownWeightedVersionError, WeightOverflowError

ThresholdTable = List[Tuple[float, str]]


def round_float(x: float) -> float:
    """Round half up to one decimal place."""
    return math.floor(x * 10 + 0.5) / 10


def process_weights(weights: Mapping[str, float], versions: Sequence[str]) -> ThresholdTable:
    """Build the cumulative threshold table for a scope.

    Args:
        weights: Explicit percentages, processed in the mapping's own order.
        versions: Every version of the scope, in declaration order.

    Returns:
        A list of ``(threshold, version)`` pairs covering every version once.
        A draw ``x`` in ``[0, 100)`` selects the first entry whose threshold
        is greater than ``x``.

    Raises:
        UnknownWeightedVersionError: A weight names a version not in
            *versions*.
        WeightOverflowError: Explicit weights add up to 100 or more.
    """
    table: ThresholdTable = []
    total_weight = 0.0
    remaining = list(versions)

    for version, weight in weights.items():
        if version not in remaining:
            raise UnknownWeightedVersionError(version, versions)
        remaining.remove(version)
        total_weight += round_float(weight)
        table.append((total_weight, version))

    if total_weight >= 100:
        raise WeightOverflowError(total_weight)

    if remaining:
        remainder = round_float((100 - total_weight) / len(remaining))
        for version in remaining:
            total_weight += remainder
            table.append((total_weight, version))

    table[-1] = (100.0, table[-1][1])
    return table


def pick_version(table: ThresholdTable, draw: float) -> str:
    """Return the version whose percentage bucket contains *draw*."""
    for threshold, version in table:
        if threshold > draw:
            return version
    # draw outside [0, 100)
    return table[-1][1]
