from typing import List, Sequence

import numpy as np

from skillcurve.custom_types import Bin


def create_bins(values: Sequence[float], bin_count: int) -> List[Bin]:
    """
    Group difficulties into equal-width value ranges.

    Each non-empty range becomes one Bin holding the mean of its members
    and how many there are. Bins come back in ascending difficulty, the
    counts always add up to len(values) and empty ranges are dropped.

    Grouping is valid because the pass probability is a product over
    independent objects:  prod p(s, d_i) ~= prod p(s, bin.d) ** bin.count
    """
    if bin_count < 1:
        raise ValueError(f"bin_count must be positive, got {bin_count}")

    values = np.asarray(values, dtype=np.float64).reshape(-1)
    if values.size == 0:
        return []

    lo = float(values.min())
    hi = float(values.max())
    span = hi - lo

    if span <= 0.0:
        return [Bin(difficulty=lo, count=int(values.size))]

    # the maximum lands exactly on the upper edge; fold it into the last bin
    index = np.floor((values - lo) / span * bin_count).astype(np.int64)
    index = np.clip(index, 0, bin_count - 1)

    counts = np.bincount(index, minlength=bin_count)
    sums = np.bincount(index, weights=values, minlength=bin_count)

    bins = []
    for count, total in zip(counts, sums):
        if count == 0:
            continue
        bins.append(Bin(difficulty=float(total / count), count=int(count)))

    return bins
