# jobs/pagination.py
import math

ELLIPSIS = '…'

# Up to this many pages every page number is shown.
MAX_UNCOLLAPSED = 7


def total_pages_for(total_count, limit):
    """ceil(total_count / limit); zero results -> zero pages."""
    if total_count <= 0:
        return 0
    return math.ceil(total_count / limit)


def clamp_page(current, total):
    if total < 1:
        return 1
    return max(1, min(current, total))


def generate_page_labels(current, total):
    """
    Compact page labels for a pagination control, e.g. (5, 10) ->
    [1, '…', 4, 5, 6, '…', 10] and (1, 10) -> [1, 2, 3, '…', 10].

    ``current`` must already be within [1, total]; use ``clamp_page`` first.
    The window end is pinned to at least 3 so that (1, 10) renders
    [1, 2, 3, '…', 10] rather than [1, 2, '…', 10].
    """
    if total <= MAX_UNCOLLAPSED:
        return list(range(1, total + 1))

    labels = [1]
    if current > 3:
        labels.append(ELLIPSIS)

    # The window around the current page never stops short of page 3, so
    # page 1 shows the same leading run as page 2.
    start = max(2, current - 1)
    end = min(total - 1, max(current + 1, 3))
    labels.extend(range(start, end + 1))

    if current < total - 2:
        labels.append(ELLIPSIS)
    labels.append(total)
    return labels
