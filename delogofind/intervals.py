"""Splitting frame intervals into subintervals."""


def get_subintervals(interval_start, interval_end, n_subintervals):
    """Split [interval_start, interval_end) into n consecutive subintervals.

    Every subinterval has the same length except the last, which always
    ends at interval_end.
    """
    if n_subintervals < 1:
        raise ValueError("n_subintervals must be at least 1")

    length = (interval_end - interval_start) // n_subintervals + 1
    subintervals = [
        (interval_start + i * length, interval_start + (i + 1) * length)
        for i in range(n_subintervals)
    ]
    last_start, _ = subintervals[-1]
    subintervals[-1] = (last_start, interval_end)
    return subintervals