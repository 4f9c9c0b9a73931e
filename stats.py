from collections import namedtuple


class PolicyResult(namedtuple('PolicyResult', ['misses', 'total'])):
    """Miss and reference counts for one policy over one or more processes."""

    __slots__ = ()

    def __new__(cls, misses, total):
        if not 0 <= misses <= total:
            raise ValueError(f"Invalid result: {misses} misses out of {total} references")
        return super().__new__(cls, misses, total)

    @property
    def hits(self):
        return self.total - self.misses

    @property
    def hit_rate(self):
        # Undefined for an empty cell
        if self.total == 0:
            return None
        return self.hits / self.total

    def __add__(self, other):
        if other is None:
            return self
        if not isinstance(other, PolicyResult):
            return NotImplemented
        return PolicyResult(self.misses + other.misses, self.total + other.total)

    __radd__ = __add__

    def __str__(self):
        return (f"Misses: {self.misses}\n"
                f"Hits: {self.hits}\n"
                f"Total References: {self.total}")


def merge_rows(existing, new_row):
    """
    Fold one process row into an accumulated row, in place.

    A skipped result (None) never displaces a real one; summing is
    order-independent.
    """
    for algorithm, result in new_row.items():
        if algorithm in existing and existing[algorithm] is not None:
            existing[algorithm] = existing[algorithm] + result
        else:
            existing[algorithm] = result
    return existing


class ResultMatrix:
    """Accumulated results indexed by page size, starting with page size 0."""

    def __init__(self, algorithms):
        self.algorithms = list(algorithms)
        self.rows = []

    def append(self, row):
        self.rows.append({algorithm: row.get(algorithm) for algorithm in self.algorithms})

    def __len__(self):
        return len(self.rows)

    def __iter__(self):
        return iter(self.rows)

    def __getitem__(self, page_size):
        return self.rows[page_size]

    def __eq__(self, other):
        if not isinstance(other, ResultMatrix):
            return NotImplemented
        return self.algorithms == other.algorithms and self.rows == other.rows

    @property
    def max_page_size(self):
        return len(self.rows) - 1

    def cell(self, page_size, algorithm):
        return self.rows[page_size][algorithm]

    def hit_rate(self, page_size, algorithm):
        result = self.cell(page_size, algorithm)
        if result is None:
            return None
        return result.hit_rate

    def hit_rates(self, algorithm):
        """Hit rate per page size for one algorithm, None where undefined."""
        return [self.hit_rate(page_size, algorithm) for page_size in range(len(self.rows))]
