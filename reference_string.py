import random

REFERENCES_PER_PAGE = 100


def generate_reference_string(pages_per_process, rng=None):
    """
    Build a synthetic page-reference string for one process.

    Every reference is drawn uniformly from 1..pages_per_process and the
    string holds REFERENCES_PER_PAGE references per page.
    """
    if pages_per_process < 1:
        raise ValueError(f"pages_per_process must be >= 1, got {pages_per_process}")

    if rng is None:
        rng = random.Random()

    length = REFERENCES_PER_PAGE * pages_per_process
    return tuple(rng.randint(1, pages_per_process) for _ in range(length))
