from itertools import permutations

import pytest

from replacement import ALGORITHMS, Algorithm
from stats import PolicyResult, ResultMatrix, merge_rows


def test_policy_result_counts():
    result = PolicyResult(3, 12)
    assert result.hits == 9
    assert result.hit_rate == 0.75
    assert str(result) == "Misses: 3\nHits: 9\nTotal References: 12"


def test_policy_result_invariant():
    with pytest.raises(ValueError):
        PolicyResult(5, 4)
    with pytest.raises(ValueError):
        PolicyResult(-1, -1)


def test_hit_rate_undefined_for_empty_cell():
    assert PolicyResult(0, 0).hit_rate is None


def test_policy_result_addition():
    assert PolicyResult(1, 4) + PolicyResult(2, 6) == PolicyResult(3, 10)
    assert PolicyResult(1, 4) + None == PolicyResult(1, 4)
    assert None + PolicyResult(1, 4) == PolicyResult(1, 4)


def test_merge_seeds_then_sums():
    row = {}
    merge_rows(row, {Algorithm.FIFO: PolicyResult(2, 10)})
    assert row == {Algorithm.FIFO: PolicyResult(2, 10)}
    merge_rows(row, {Algorithm.FIFO: PolicyResult(3, 10), Algorithm.LRU: PolicyResult(1, 10)})
    assert row == {Algorithm.FIFO: PolicyResult(5, 20), Algorithm.LRU: PolicyResult(1, 10)}


def test_merge_skipped_results():
    row = merge_rows({}, {algorithm: None for algorithm in ALGORITHMS})
    assert row == {algorithm: None for algorithm in ALGORITHMS}
    merge_rows(row, {Algorithm.OPT: PolicyResult(1, 2)})
    assert row[Algorithm.OPT] == PolicyResult(1, 2)
    merge_rows(row, {Algorithm.OPT: None})
    assert row[Algorithm.OPT] == PolicyResult(1, 2)


def test_merge_order_does_not_matter():
    process_rows = [
        {Algorithm.OPT: PolicyResult(4, 30), Algorithm.MRU: PolicyResult(9, 30)},
        {Algorithm.OPT: PolicyResult(7, 50), Algorithm.MRU: PolicyResult(20, 50)},
        {Algorithm.OPT: PolicyResult(1, 10), Algorithm.MRU: PolicyResult(2, 10)},
    ]
    expected = {Algorithm.OPT: PolicyResult(12, 90), Algorithm.MRU: PolicyResult(31, 90)}

    for order in permutations(process_rows):
        row = {}
        for process_row in order:
            merge_rows(row, process_row)
        assert row == expected


def test_result_matrix():
    matrix = ResultMatrix(ALGORITHMS)
    matrix.append({algorithm: None for algorithm in ALGORITHMS})
    matrix.append({Algorithm.FIFO: PolicyResult(1, 4)})

    assert len(matrix) == 2
    assert matrix.max_page_size == 1
    assert matrix.cell(1, Algorithm.FIFO) == PolicyResult(1, 4)
    assert matrix[1][Algorithm.LRU] is None
    assert matrix.hit_rate(1, Algorithm.FIFO) == 0.75
    assert matrix.hit_rate(0, Algorithm.FIFO) is None
    assert matrix.hit_rates(Algorithm.FIFO) == [None, 0.75]
    assert matrix.hit_rates(Algorithm.OPT) == [None, None]
