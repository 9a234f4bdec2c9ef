"""Dynamic Programming solutions for the knapsack problem.

This module implements the classic tabulation approaches:
- DynamicProgramming: 0/1 knapsack with full table and reconstruction,
  plus a value-only evaluation on a single rolling row
- UnboundedDynamicProgramming: unbounded knapsack with take-count reconstruction
- knapsack_01 / knapsack_unbounded: list-based helpers returning plain dicts

Capacities are used as list indices, so costs and budget must be integers.
"""

import numbers

from .models import Instance, Solution, UnboundedSolution


def _check_integral(instance):
    """Raise TypeError unless the budget and every cost are integers."""
    if not isinstance(instance.get_budget(), numbers.Integral):
        raise TypeError(f"DP solvers require an integral budget, got {instance.get_budget()!r}")
    for i, item in enumerate(instance):
        if not isinstance(item.cost, numbers.Integral):
            raise TypeError(f"DP solvers require integral costs, item {i} has cost {item.cost!r}")


class DynamicProgramming:
    """Solve the 0/1 knapsack problem by tabulation.

    dp[i][w] is the best value using the first i items with capacity w.
    The whole (n+1) x (budget+1) table is kept because the reconstruction
    reads previous rows.
    """

    def build_table(self, instance):
        """Fill the DP table.

        Args:
            instance: Instance with integral costs and budget

        Returns:
            list of n+1 rows, each a list of budget+1 values
        """
        _check_integral(instance)
        budget = int(instance.get_budget())

        table = [[0] * (budget + 1)]
        for item in instance:
            previous = table[-1]
            cost = int(item.cost)
            # Capacities below the item cost cannot take it
            current = previous[:min(cost, budget + 1)]
            for w in range(len(current), budget + 1):
                current.append(max(previous[w], previous[w - cost] + item.value))
            table.append(current)
        return table

    def solve(self, instance):
        """Solve the 0/1 knapsack problem.

        Args:
            instance: Instance with integral costs and budget

        Returns:
            Solution with the optimal selection
        """
        table = self.build_table(instance)
        solution = Solution(instance)

        # Backtrack from the last row: the value only increases over the
        # previous row when item i-1 is taken
        w = int(instance.get_budget())
        for i in range(instance.item_count(), 0, -1):
            item = instance[i - 1]
            if table[i][w] > table[i - 1][w] or (item.cost == 0 and item.value >= 0):
                solution.add(i - 1)
                w -= int(item.cost)
        return solution

    def optimal_value(self, instance):
        """Compute only the optimal value using a single row of memory.

        The row is updated from high to low capacity so each item is counted
        at most once. No selection can be reconstructed from it.

        Args:
            instance: Instance with integral costs and budget

        Returns:
            Maximum achievable value
        """
        _check_integral(instance)
        budget = int(instance.get_budget())
        row = [0] * (budget + 1)
        for item in instance:
            cost = int(item.cost)
            for w in range(budget, cost - 1, -1):
                candidate = row[w - cost] + item.value
                if candidate > row[w]:
                    row[w] = candidate
        return row[budget]


class UnboundedDynamicProgramming:
    """Solve the unbounded knapsack problem by tabulation.

    dp[w] is the best value with capacity w when every item can be reused.
    last_item[w] remembers which item reached dp[w] for reconstruction.
    Zero-cost items are left out of the recurrence and taken exactly once.
    """

    def solve(self, instance):
        """Solve the unbounded knapsack problem.

        Args:
            instance: Instance with integral costs and budget

        Returns:
            UnboundedSolution with optimal take-counts
        """
        _check_integral(instance)
        budget = int(instance.get_budget())
        paid = [(i, int(it.cost), it.value) for i, it in enumerate(instance) if it.cost > 0]

        dp = [0] * (budget + 1)
        last_item = [-1] * (budget + 1)
        for w in range(1, budget + 1):
            for i, cost, value in paid:
                if cost <= w:
                    candidate = dp[w - cost] + value
                    if candidate > dp[w]:
                        dp[w] = candidate
                        last_item[w] = i

        solution = UnboundedSolution(instance)
        for i, item in enumerate(instance):
            if item.cost == 0 and item.value >= 0:
                solution.set(i, 1)

        w = budget
        while w > 0 and last_item[w] != -1:
            i = last_item[w]
            solution.add(i)
            w -= int(instance[i].cost)
        return solution


def knapsack_01(values, costs, capacity):
    """Solve 0/1 knapsack problem using dynamic programming.

    Args:
        values: List of item values
        costs: List of item costs (integers)
        capacity: Maximum total cost (integer)

    Returns:
        dict with:
            - max_value: Maximum achievable value
            - selected: Binary list indicating which items are selected
    """
    instance = Instance.from_lists(values, costs, capacity)
    return DynamicProgramming().solve(instance).to_dict()


def knapsack_unbounded(values, costs, capacity):
    """Solve unbounded knapsack problem using dynamic programming.

    Args:
        values: List of item values
        costs: List of item costs (integers)
        capacity: Maximum total cost (integer)

    Returns:
        dict with:
            - max_value: Maximum achievable value
            - counts: List of counts for each item
    """
    instance = Instance.from_lists(values, costs, capacity)
    return UnboundedDynamicProgramming().solve(instance).to_dict()
