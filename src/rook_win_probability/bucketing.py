"""Score differential bucketing.

Differentials are grouped into 20-point bands so that historical games with
similar positions land in the same cell of the probability index.
"""

import math

BUCKET_WIDTH = 20
MAX_DIFF = 180  # Anything at or beyond this lands in the final bucket


def bucket_score(diff: float) -> int:
    """Map a score differential to a signed 20-point bucket.

    Args:
        diff: Us running total minus dem running total

    Returns:
        Multiple of 20 in [-180, 180]. Zero and differentials within
        (-20, 20) map to 0, as does NaN.

    Examples:
        >>> bucket_score(19), bucket_score(20), bucket_score(-37)
        (0, 20, -20)
        >>> bucket_score(999), bucket_score(-999)
        (180, -180)
    """
    if math.isnan(diff):
        return 0
    sign = -1 if diff < 0 else 1
    magnitude = min(abs(diff), MAX_DIFF)
    band = math.floor(magnitude / BUCKET_WIDTH) * BUCKET_WIDTH
    return sign * int(band)


def bucket_range(bucket: int) -> str:
    """Human-readable range label for a bucket, e.g. ``"40-59"``.

    Labels are offset by one band from the bucket value: bucket 20 reads
    "0-19", bucket 180 reads "160+".
    """
    magnitude = abs(bucket)
    if magnitude == 0:
        return "0"
    if magnitude == MAX_DIFF:
        return f"{MAX_DIFF - BUCKET_WIDTH}+"
    if magnitude % BUCKET_WIDTH == 0 and magnitude < MAX_DIFF:
        low = magnitude - BUCKET_WIDTH
        return f"{low}-{magnitude - 1}"
    return f"{magnitude}"
