"""Branch-and-bound solver for the unbounded knapsack problem.

Each item may be packed any number of times. The search mirrors the 0/1
solver in bnb.py, but every stack entry carries a take-count: a dive packs
as many copies as fit, and backtracking removes one copy at a time before
giving up on the item.
"""

import time
from typing import Optional

from .models import UnboundedSolution
from .logger import BnBLogger, NoOpLogger
from .bnb import sort_candidates


def max_copies(item, budget_left):
    """Number of copies of item packed greedily into budget_left.

    A zero-cost item is packed once, since any number of copies would fit.
    """
    if item.cost == 0:
        return 1
    return int(budget_left // item.cost)


def unbounded_upper_bound(sorted_items, position, value, budget_left):
    """Linear relaxation bound for the unbounded problem.

    Packs the maximum whole number of copies of each item from position
    onward. When budget is left over after an item's copies, that same
    item is filled fractionally and the scan stops. Zero-cost items add
    their value once and never use budget.

    Args:
        sorted_items: Items sorted by descending ratio
        position: First undecided position
        value: Value of the copies already packed
        budget_left: Remaining budget

    Returns:
        Upper bound on any completion of the current selection
    """
    for item in sorted_items[position:]:
        if item.cost == 0:
            value += item.value
            continue
        count = max_copies(item, budget_left)
        budget_left -= count * item.cost
        value += count * item.value
        if budget_left > 0:
            return value + budget_left * item.value / item.cost
    return value


class UnboundedBranchAndBound:
    """Exact branch-and-bound solver for the unbounded knapsack problem.

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
        """Run the dive/backtrack loop and return the best (position, count) list."""
        logger = self.logger
        trace = not isinstance(logger, NoOpLogger)
        n = len(sorted_items)

        position = 0
        value = 0
        # Entries are [position, count] so backtracking can decrement in place
        stack = []
        best_value = None
        best_stack = []
        nodes = pruned_nodes = 0

        while True:
            pruned = False
            while position < n:
                item = sorted_items[position]
                if item.cost <= budget_left:
                    if best_value is not None and unbounded_upper_bound(sorted_items, position, value, budget_left) <= best_value:
                        pruned = True
                        pruned_nodes += 1
                        if trace:
                            logger.log_node_pruned("bound", {"position": position, "value": value,
                                                             "budget_left": budget_left})
                        break
                    count = max_copies(item, budget_left)
                    value += count * item.value
                    budget_left -= count * item.cost
                    stack.append([position, count])
                    nodes += 1
                    if trace:
                        logger.log_node_visit({"position": position, "count": count, "value": value,
                                               "budget_left": budget_left})
                position += 1

            if not pruned:
                if trace:
                    logger.log_leaf_evaluated(value)
                if best_value is None or value > best_value:
                    best_value = value
                    best_stack = [(p, c) for p, c in stack]
                    self.stats["incumbent_updates"] += 1
                    logger.log_incumbent_update(best_value, best_stack, node_count=nodes)
                    if self.verbose:
                        print(f"New incumbent value={best_value} counts={best_stack}")

            # Backtracking phase: try one copy fewer of the last packed item
            if not stack:
                break
            top = stack[-1]
            position = top[0]
            top[1] -= 1
            if top[1] == 0:
                stack.pop()
            value -= sorted_items[position].value
            budget_left += sorted_items[position].cost
            position += 1

        self.stats["nodes_explored"] = nodes
        self.stats["nodes_pruned"] = pruned_nodes
        return best_stack

    def solve(self, instance):
        """Solve the unbounded knapsack problem exactly.

        Args:
            instance: Instance to solve

        Returns:
            UnboundedSolution with optimal take-counts
        """
        self.stats = {"nodes_explored": 0, "nodes_pruned": 0, "incumbent_updates": 0}
        start = time.time()
        self.logger.start_run({"solver": "unbounded_branch_and_bound", "n_items": instance.item_count(),
                               "budget": instance.get_budget()})

        solution = UnboundedSolution(instance)
        sorted_items, permuted_id = sort_candidates(instance)
        if sorted_items:
            for position, count in self._search(sorted_items, instance.get_budget()):
                solution.set(permuted_id[position], count)

        self.stats["runtime_sec"] = time.time() - start
        self.logger.end_run({"value": solution.get_value(), "cost": solution.get_cost(),
                             "counts": solution.counts})
        return solution
