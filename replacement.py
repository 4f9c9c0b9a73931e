import heapq
from collections import OrderedDict, deque
from enum import Enum

from stats import PolicyResult


class Algorithm(Enum):
    # Values give the column order of the result table
    OPT = 1
    FIFO = 2
    LRU = 3
    MRU = 4

    @classmethod
    def from_name(cls, name):
        try:
            return cls[name.upper()]
        except KeyError:
            raise ValueError(f"Unknown algorithm: {name}") from None


ALGORITHMS = list(Algorithm)


def _check_frames(num_frames):
    if num_frames < 0:
        raise ValueError(f"num_frames must be >= 0, got {num_frames}")


def fifo(reference_string, num_frames):
    """Evict the page that has been resident the longest."""
    _check_frames(num_frames)
    total = len(reference_string)
    if num_frames == 0:
        return PolicyResult(total, total)

    resident = set()
    arrival = deque()
    misses = 0

    for page in reference_string:
        if page in resident:
            continue
        misses += 1
        if len(resident) == num_frames:
            resident.discard(arrival.popleft())
        resident.add(page)
        arrival.append(page)

    return PolicyResult(misses, total)


def _recency(reference_string, num_frames, evict_most_recent):
    total = len(reference_string)
    if num_frames == 0:
        return PolicyResult(total, total)

    # Ordered from least to most recently used
    resident = OrderedDict()
    misses = 0

    for page in reference_string:
        if page in resident:
            resident.move_to_end(page)
            continue
        misses += 1
        if len(resident) == num_frames:
            resident.popitem(last=evict_most_recent)
        resident[page] = None

    return PolicyResult(misses, total)


def lru(reference_string, num_frames):
    """Evict the least recently used page."""
    _check_frames(num_frames)
    return _recency(reference_string, num_frames, evict_most_recent=False)


def mru(reference_string, num_frames):
    """Evict the most recently used page."""
    _check_frames(num_frames)
    return _recency(reference_string, num_frames, evict_most_recent=True)


def next_occurrences(reference_string):
    """
    For every position, the index of the next reference to the same page,
    or len(reference_string) when the page is never referenced again.
    """
    total = len(reference_string)
    upcoming = [total] * total
    seen = {}
    for i in range(total - 1, -1, -1):
        page = reference_string[i]
        if page in seen:
            upcoming[i] = seen[page]
        seen[page] = i
    return upcoming


def opt(reference_string, num_frames):
    """
    Optimal replacement: evict the page whose next reference lies furthest
    in the future (or never comes).

    Residents are ordered by (next occurrence, page) in a max-heap with lazy
    deletion, so several pages may share a next-occurrence index.
    """
    _check_frames(num_frames)
    total = len(reference_string)
    if num_frames == 0:
        return PolicyResult(total, total)

    upcoming = next_occurrences(reference_string)
    resident = {}  # page -> index of its next reference
    heap = []
    misses = 0

    for i, page in enumerate(reference_string):
        if page not in resident:
            misses += 1
            if len(resident) == num_frames:
                while True:
                    neg_next, victim = heapq.heappop(heap)
                    if resident.get(victim) == -neg_next:
                        break
                del resident[victim]
        resident[page] = upcoming[i]
        heapq.heappush(heap, (-upcoming[i], page))

    return PolicyResult(misses, total)


POLICIES = {
    Algorithm.OPT: opt,
    Algorithm.FIFO: fifo,
    Algorithm.LRU: lru,
    Algorithm.MRU: mru,
}


def evaluate(algorithm, reference_string, num_frames):
    if not isinstance(algorithm, Algorithm):
        algorithm = Algorithm.from_name(algorithm)
    return POLICIES[algorithm](reference_string, num_frames)
