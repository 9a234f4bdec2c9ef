"""Reference knapsack solvers using complete enumeration.

These iterate through every selection (or every feasible count vector) and
keep the best one. Only practical for small instances; they exist to check
the exact solvers.
"""

import itertools

from .models import Solution, UnboundedSolution


def enumerate_01(instance):
    """Find an optimal 0/1 selection by checking all 2^n subsets.

    Args:
        instance: Instance to solve

    Returns:
        Solution with the first best selection in itertools.product order
    """
    n = instance.item_count()
    budget = instance.get_budget()

    best_value = None
    best_selection = [False] * n
    for selection in itertools.product((False, True), repeat=n):
        cost = sum(item.cost for item, taken in zip(instance, selection) if taken)
        if cost > budget:
            continue
        value = sum(item.value for item, taken in zip(instance, selection) if taken)
        if best_value is None or value > best_value:
            best_value = value
            best_selection = selection

    solution = Solution(instance)
    for i, taken in enumerate(best_selection):
        solution.set(i, taken)
    return solution


def enumerate_unbounded(instance, max_copies=None):
    """Find an optimal unbounded selection by checking all count vectors.

    Item i is tried with 0..budget // cost[i] copies (zero-cost items at most
    once), further capped by max_copies when given.

    Args:
        instance: Instance to solve
        max_copies: Optional cap on the copies tried per item

    Returns:
        UnboundedSolution with the best count vector found
    """
    budget = instance.get_budget()

    ranges = []
    for item in instance:
        if item.cost == 0:
            limit = 1
        elif item.cost > budget:
            limit = 0
        else:
            limit = int(budget // item.cost)
        if max_copies is not None:
            limit = min(limit, max_copies)
        ranges.append(range(limit + 1))

    best_value = None
    best_counts = [0] * instance.item_count()
    for counts in itertools.product(*ranges):
        cost = sum(c * item.cost for item, c in zip(instance, counts))
        if cost > budget:
            continue
        value = sum(c * item.value for item, c in zip(instance, counts))
        if best_value is None or value > best_value:
            best_value = value
            best_counts = counts

    solution = UnboundedSolution(instance)
    for i, count in enumerate(best_counts):
        solution.set(i, count)
    return solution
