"""Branch-and-bound solver for the 0/1 knapsack problem.

This module implements a depth-first branch-and-bound that only stores the
included items of the current path. Items are scanned in descending ratio
order and the linear relaxation (Dantzig) bound prunes dives that cannot
beat the incumbent. The preprocessing helpers are shared with the unbounded
solver.
"""

import time
from typing import Optional

from .models import Solution
from .logger import BnBLogger, NoOpLogger


def sort_candidates(instance):
    """Filter and sort the items of an instance for the search.

    Items whose cost alone exceeds the budget can never be packed and are
    dropped. The remaining items are stably sorted by descending ratio
    (zero-cost items first).

    Args:
        instance: Instance to preprocess

    Returns:
        tuple: (sorted_items, permuted_id) where permuted_id[k] is the
            original index of sorted_items[k]
    """
    budget = instance.get_budget()
    candidates = [(item, i) for i, item in enumerate(instance) if not item.cost > budget]
    candidates.sort(key=lambda pair: pair[0])
    sorted_items = [item for item, _ in candidates]
    permuted_id = [i for _, i in candidates]
    return sorted_items, permuted_id


def upper_bound(sorted_items, position, value, budget_left):
    """Linear relaxation bound for the 0/1 problem.

    Greedily packs whole items from position onward and fills the first
    item that does not fit fractionally.

    Args:
        sorted_items: Items sorted by descending ratio
        position: First undecided position
        value: Value of the items already included
        budget_left: Remaining budget

    Returns:
        Upper bound on any completion of the current selection
    """
    for item in sorted_items[position:]:
        if budget_left < item.cost:
            return value + budget_left * item.value / item.cost
        budget_left -= item.cost
        value += item.value
    return value


class BranchAndBound:
    """Exact branch-and-bound solver for the 0/1 knapsack problem.

    The search keeps a stack of included sorted positions. Excluding an item
    is implicit: the scan cursor simply moves past it.

    Attributes:
        logger: BnBLogger receiving node and incumbent events
        verbose: Whether to print incumbent updates
        stats: Search statistics of the last solve() call
    """

    def __init__(self, logger: Optional[BnBLogger] = None, verbose: bool = False):
        self.logger = logger if logger is not None else NoOpLogger()
        self.verbose = verbose
        self.stats = {}

    def _search(self, sorted_items, budget_left):
        """Run the dive/backtrack loop and return the best stack found."""
        logger = self.logger
        trace = not isinstance(logger, NoOpLogger)
        n = len(sorted_items)

        position = 0
        value = 0
        stack = []
        best_value = None
        best_stack = []
        nodes = pruned_nodes = 0

        while True:
            # Diving phase: include every fitting item unless the bound prunes
            pruned = False
            while position < n:
                item = sorted_items[position]
                if item.cost <= budget_left:
                    if best_value is not None and upper_bound(sorted_items, position, value, budget_left) <= best_value:
                        pruned = True
                        pruned_nodes += 1
                        if trace:
                            logger.log_node_pruned("bound", {"position": position, "value": value,
                                                             "budget_left": budget_left})
                        break
                    value += item.value
                    budget_left -= item.cost
                    stack.append(position)
                    nodes += 1
                    if trace:
                        logger.log_node_visit({"position": position, "value": value,
                                               "budget_left": budget_left})
                position += 1

            if not pruned:
                if trace:
                    logger.log_leaf_evaluated(value)
                if best_value is None or value > best_value:
                    best_value = value
                    best_stack = list(stack)
                    self.stats["incumbent_updates"] += 1
                    logger.log_incumbent_update(best_value, best_stack, node_count=nodes)
                    if self.verbose:
                        print(f"New incumbent value={best_value} positions={best_stack}")

            # Backtracking phase: drop the last included item and skip it
            if not stack:
                break
            position = stack.pop()
            value -= sorted_items[position].value
            budget_left += sorted_items[position].cost
            position += 1

        self.stats["nodes_explored"] = nodes
        self.stats["nodes_pruned"] = pruned_nodes
        return best_stack

    def solve(self, instance):
        """Solve the 0/1 knapsack problem exactly.

        Args:
            instance: Instance to solve

        Returns:
            Solution with an optimal selection
        """
        self.stats = {"nodes_explored": 0, "nodes_pruned": 0, "incumbent_updates": 0}
        start = time.time()
        self.logger.start_run({"solver": "branch_and_bound", "n_items": instance.item_count(),
                               "budget": instance.get_budget()})

        solution = Solution(instance)
        sorted_items, permuted_id = sort_candidates(instance)
        if sorted_items:
            for position in self._search(sorted_items, instance.get_budget()):
                solution.add(permuted_id[position])

        self.stats["runtime_sec"] = time.time() - start
        self.logger.end_run({"value": solution.get_value(), "cost": solution.get_cost(),
                             "selected": solution.selected_indices()})
        return solution
