"""
Tests for the 0/1 branch-and-bound solver.
"""

from knapsack_solvers.models import Item, Instance
from knapsack_solvers.bnb import BranchAndBound, sort_candidates, upper_bound
from knapsack_solvers.knapsack_dp import DynamicProgramming


def test_classic_instance():
    """Items (60,10), (100,20), (120,30) with budget 50 -> items 1 and 2"""
    instance = Instance.from_lists([60, 100, 120], [10, 20, 30], 50)
    solution = BranchAndBound().solve(instance)
    assert solution.get_value() == 220, f"Expected 220, got {solution.get_value()}"
    assert solution.get_cost() == 50
    assert solution.selected_indices() == [1, 2]


def test_agrees_with_dp():
    instance = Instance.from_lists([10, 40, 30], [5, 4, 6], 10)
    bnb_solution = BranchAndBound().solve(instance)
    dp_solution = DynamicProgramming().solve(instance)
    assert bnb_solution.get_value() == dp_solution.get_value() == 70
    assert bnb_solution.selected_indices() == [1, 2]


def test_zero_budget():
    instance = Instance.from_lists([5, 7, 9], [3, 2, 1], 0)
    solution = BranchAndBound().solve(instance)
    assert solution.get_value() == 0
    assert not any(solution.is_taken(i) for i in range(3))


def test_empty_instance():
    solution = BranchAndBound().solve(Instance(10))
    assert solution.get_value() == 0
    assert len(solution) == 0


def test_no_item_fits():
    instance = Instance.from_lists([5, 6], [11, 12], 10)
    solution = BranchAndBound().solve(instance)
    assert solution.selected_indices() == []


def test_single_item_exactly_fits():
    instance = Instance(7, [Item(3, 7)])
    assert BranchAndBound().solve(instance).is_taken(0)


def test_zero_cost_item_with_zero_budget():
    instance = Instance(0, [Item(5, 0), Item(1, 1)])
    solution = BranchAndBound().solve(instance)
    assert solution.is_taken(0), "Zero-cost item must be included"
    assert not solution.is_taken(1)
    assert solution.get_value() == 5


def test_zero_value_zero_cost_item_is_taken():
    instance = Instance(3, [Item(0, 0), Item(4, 2)])
    solution = BranchAndBound().solve(instance)
    assert solution.selected_indices() == [0, 1]

    only_free = Instance(0, [Item(0, 0)])
    assert BranchAndBound().solve(only_free).is_taken(0)


def test_float_costs_and_values():
    instance = Instance(4.0, [Item(3.5, 1.5), Item(2.0, 1.0), Item(4.0, 2.5)])
    solution = BranchAndBound().solve(instance)
    assert solution.selected_indices() == [0, 2]
    assert solution.get_value() == 7.5
    assert solution.get_cost() <= 4.0


def test_deterministic_selection():
    # Every item has ratio 2, so many selections tie
    instance = Instance.from_lists([4, 6, 8, 10], [2, 3, 4, 5], 12)
    solver = BranchAndBound()
    first = solver.solve(instance)
    second = solver.solve(instance)
    assert first == second, "Same instance must give the same selection"
    assert first.get_value() == 24


def test_sort_candidates_filters_and_orders():
    instance = Instance.from_lists([10, 40, 30, 100, 5], [5, 4, 6, 20, 0], 10)
    sorted_items, permuted_id = sort_candidates(instance)
    assert permuted_id == [4, 1, 2, 0], f"Unexpected permutation {permuted_id}"
    assert [it.cost for it in sorted_items] == [0, 4, 6, 5]
    assert sorted_items == sorted(it for it in instance if it.cost <= 10)


def test_sort_candidates_is_stable_on_ties():
    instance = Instance.from_lists([4, 6, 8], [2, 3, 4], 10)
    _, permuted_id = sort_candidates(instance)
    assert permuted_id == [0, 1, 2]


def test_upper_bound_is_fractional_relaxation():
    items = [Item(60, 10), Item(100, 20), Item(120, 30)]
    assert upper_bound(items, 0, 0, 50) == 240
    assert upper_bound(items, 1, 60, 40) == 60 + 100 + 20 * 120 / 30
    assert upper_bound(items, 3, 160, 20) == 160
    # Every item fits: the bound is the plain sum
    assert upper_bound(items, 0, 0, 100) == 280


def test_stats_are_recorded():
    instance = Instance.from_lists([60, 100, 120], [10, 20, 30], 50)
    solver = BranchAndBound()
    solver.solve(instance)
    assert solver.stats["nodes_explored"] > 0
    assert solver.stats["incumbent_updates"] >= 1
    assert solver.stats["nodes_pruned"] >= 0
    assert solver.stats["runtime_sec"] >= 0
