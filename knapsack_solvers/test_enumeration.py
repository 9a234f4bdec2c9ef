"""
Check the exact solvers against complete enumeration on random small instances.

For every instance we verify:
- BnB, DP and enumeration agree on the optimal value
- Every returned selection respects the budget
- Increasing the budget never decreases the optimal value
"""

import random

from knapsack_solvers.models import Item, Instance
from knapsack_solvers.bnb import BranchAndBound
from knapsack_solvers.unbounded_bnb import UnboundedBranchAndBound
from knapsack_solvers.knapsack_dp import DynamicProgramming, UnboundedDynamicProgramming
from knapsack_solvers.enumeration import enumerate_01, enumerate_unbounded


def generate_instance(n_items, max_value, min_cost, max_cost, budget, seed, zero_cost_rate=0.0):
    """Random instance with uniform values and costs."""
    rng = random.Random(seed)
    instance = Instance(budget)
    for _ in range(n_items):
        cost = 0 if rng.random() < zero_cost_rate else rng.randint(min_cost, max_cost)
        instance.add_item(rng.randint(0, max_value), cost)
    return instance


def test_enumerate_01_small_example():
    instance = Instance.from_lists([60, 100, 120], [10, 20, 30], 50)
    solution = enumerate_01(instance)
    assert solution.get_value() == 220
    assert solution.selected_indices() == [1, 2]


def test_enumerate_unbounded_small_example():
    instance = Instance(17, [Item(10, 5)])
    assert enumerate_unbounded(instance).counts == [3]
    assert enumerate_unbounded(instance, max_copies=2).counts == [2]


def test_01_solvers_agree_with_enumeration():
    for seed in range(60):
        rng = random.Random(1000 + seed)
        instance = generate_instance(
            n_items=rng.randint(0, 10), max_value=30, min_cost=1, max_cost=15,
            budget=rng.randint(0, 40), seed=seed, zero_cost_rate=0.1)

        expected = enumerate_01(instance).get_value()
        for solver in (BranchAndBound(), DynamicProgramming()):
            solution = solver.solve(instance)
            assert solution.get_value() == expected, \
                f"{type(solver).__name__} found {solution.get_value()}, enumeration {expected} (seed {seed})"
            assert solution.get_cost() <= instance.get_budget(), f"Budget violated (seed {seed})"
        assert DynamicProgramming().optimal_value(instance) == expected


def test_unbounded_solvers_agree_with_enumeration():
    for seed in range(40):
        rng = random.Random(2000 + seed)
        instance = generate_instance(
            n_items=rng.randint(1, 4), max_value=20, min_cost=3, max_cost=12,
            budget=rng.randint(0, 30), seed=seed, zero_cost_rate=0.1)

        expected = enumerate_unbounded(instance).get_value()
        for solver in (UnboundedBranchAndBound(), UnboundedDynamicProgramming()):
            solution = solver.solve(instance)
            assert solution.get_value() == expected, \
                f"{type(solver).__name__} found {solution.get_value()}, enumeration {expected} (seed {seed})"
            assert solution.get_cost() <= instance.get_budget(), f"Budget violated (seed {seed})"


def generate_close_ratio_instance(n_items, min_cost, max_cost, budget, seed, noise=10):
    """Random instance whose items all have a ratio close to 100."""
    rng = random.Random(seed)
    instance = Instance(budget)
    for _ in range(n_items):
        cost = rng.randint(min_cost, max_cost)
        instance.add_item(max(0, 100 * cost + rng.randint(-noise, noise)), cost)
    return instance


def test_unbounded_solvers_agree_with_enumeration_close_ratios():
    # Near-equal ratios make leftover budget after the greedy copies matter
    for seed in range(60):
        rng = random.Random(3000 + seed)
        instance = generate_close_ratio_instance(
            n_items=rng.randint(2, 5), min_cost=4, max_cost=15, budget=rng.randint(10, 26), seed=seed)

        expected = enumerate_unbounded(instance).get_value()
        for solver in (UnboundedBranchAndBound(), UnboundedDynamicProgramming()):
            solution = solver.solve(instance)
            assert solution.get_value() == expected, \
                f"{type(solver).__name__} found {solution.get_value()}, enumeration {expected} (seed {seed})"
            assert solution.get_cost() <= instance.get_budget(), f"Budget violated (seed {seed})"


def test_unbounded_bnb_matches_dp_close_ratios():
    for seed in range(40):
        rng = random.Random(4000 + seed)
        instance = generate_close_ratio_instance(
            n_items=rng.randint(2, 7), min_cost=5, max_cost=40, budget=rng.randint(20, 80), seed=seed)
        bnb_value = UnboundedBranchAndBound().solve(instance).get_value()
        dp_value = UnboundedDynamicProgramming().solve(instance).get_value()
        assert bnb_value == dp_value, f"BnB {bnb_value} != DP {dp_value} (seed {seed})"


def test_bnb_matches_dp_on_larger_instances():
    for seed in range(10):
        instance = generate_instance(n_items=25, max_value=100, min_cost=5, max_cost=60,
                                     budget=300, seed=seed)
        assert BranchAndBound().solve(instance).get_value() == DynamicProgramming().optimal_value(instance)
        assert UnboundedBranchAndBound().solve(instance).get_value() == \
            UnboundedDynamicProgramming().solve(instance).get_value()


def test_optimal_value_is_monotone_in_budget():
    base = generate_instance(n_items=8, max_value=30, min_cost=1, max_cost=12, budget=0, seed=7)
    previous_01 = previous_unbounded = None
    for budget in range(0, 40):
        instance = Instance(budget, base.get_items())
        value_01 = BranchAndBound().solve(instance).get_value()
        value_unbounded = UnboundedBranchAndBound().solve(instance).get_value()
        if previous_01 is not None:
            assert value_01 >= previous_01, f"0/1 value decreased at budget {budget}"
            assert value_unbounded >= previous_unbounded, f"Unbounded value decreased at budget {budget}"
        previous_01, previous_unbounded = value_01, value_unbounded
