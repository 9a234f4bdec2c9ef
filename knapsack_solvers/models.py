"""Data structures for the knapsack solvers.

This module contains the passive data classes shared by every solver:
- Item: A (value, cost) pair with its efficiency ratio
- Instance: Budget plus an ordered list of items
- Solution: Boolean selection per item (0/1 variant)
- UnboundedSolution: Take-count per item (unbounded variant)
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Item:
    """Represents an item that can be packed into the knapsack.

    Attributes:
        value: Value gained for one copy of the item
        cost: Budget consumed by one copy of the item
        name: Optional identifier, only used for display
    """
    value: int
    cost: int
    name: str = ""

    @property
    def ratio(self):
        """Value per unit of cost.

        A zero-cost item is infinitely efficient so it always sorts first.

        Returns:
            float: value / cost, or +inf when cost == 0
        """
        if self.cost == 0:
            return float('inf')
        return self.value / self.cost

    def __lt__(self, other):
        # Descending ratio, so sorting items yields the greedy order
        return self.ratio > other.ratio


class Instance:
    """Container for a knapsack problem instance.

    Items are indexed 0..n-1 in insertion order. This index is the identity
    used by Solution and UnboundedSolution. The instance must not be mutated
    while a solver is working on it.

    Attributes:
        _budget: Maximum total cost a selection may consume
        _items: Ordered list of Item objects
    """

    def __init__(self, budget=0, items=None):
        """Initialize a knapsack instance.

        Args:
            budget: Maximum total cost (non-negative)
            items: Optional iterable of Item objects or (value, cost) pairs
        """
        self._budget = budget
        self._items = []
        for it in items or []:
            if isinstance(it, Item):
                self._items.append(it)
            else:
                self.add_item(*it)

    @classmethod
    def from_lists(cls, values, costs, budget):
        """Build an instance from parallel value and cost lists.

        Args:
            values: List of item values
            costs: List of item costs
            budget: Maximum total cost

        Returns:
            Instance with one item per (value, cost) pair
        """
        assert len(values) == len(costs)
        return cls(budget, [Item(v, c) for v, c in zip(values, costs)])

    def set_budget(self, budget):
        self._budget = budget

    def get_budget(self):
        return self._budget

    def add_item(self, value, cost, name=""):
        """Append an item and return its index."""
        self._items.append(Item(value, cost, name))
        return len(self._items) - 1

    def item_count(self):
        return len(self._items)

    def get_items(self):
        return list(self._items)

    def get_item(self, i):
        return self._items[i]

    def values(self):
        return [it.value for it in self._items]

    def costs(self):
        return [it.cost for it in self._items]

    def __getitem__(self, i):
        return self._items[i]

    def __len__(self):
        return len(self._items)

    def __iter__(self):
        return iter(self._items)

    def __repr__(self):
        return f"Instance(n_items={len(self._items)}, budget={self._budget})"


class Solution:
    """Selection of items for the 0/1 knapsack problem.

    Holds one boolean per item of the referenced instance. Value and cost are
    always recomputed from the selection so they can never go out of sync.
    """

    def __init__(self, instance):
        self.instance = instance
        self._taken = [False] * instance.item_count()

    def add(self, i):
        self._taken[i] = True

    def set(self, i, taken):
        self._taken[i] = bool(taken)

    def remove(self, i):
        self._taken[i] = False

    def is_taken(self, i):
        return self._taken[i]

    def __getitem__(self, i):
        return self._taken[i]

    def __setitem__(self, i, taken):
        self.set(i, taken)

    def __len__(self):
        return len(self._taken)

    def __eq__(self, other):
        if not isinstance(other, Solution):
            return NotImplemented
        return self.instance is other.instance and self._taken == other._taken

    def get_value(self):
        """Total value of the taken items."""
        total = 0
        for item, taken in zip(self.instance, self._taken):
            if taken:
                total += item.value
        return total

    def get_cost(self):
        """Total cost of the taken items."""
        total = 0
        for item, taken in zip(self.instance, self._taken):
            if taken:
                total += item.cost
        return total

    def selected_indices(self):
        return [i for i, taken in enumerate(self._taken) if taken]

    def to_dict(self):
        """Export in the plain dict format of the knapsack_dp helpers.

        Returns:
            dict with:
                - max_value: Total value of the selection
                - selected: Binary list indicating which items are selected
        """
        return {
            'max_value': self.get_value(),
            'selected': [int(t) for t in self._taken]
        }

    def __repr__(self):
        return f"Solution(value={self.get_value()}, cost={self.get_cost()}, selected={self.selected_indices()})"


class UnboundedSolution:
    """Take-counts of items for the unbounded knapsack problem.

    count[i] >= 0 copies of item i are packed; an item is taken when its
    count is positive. Value and cost are weighted by the counts.
    """

    def __init__(self, instance):
        self.instance = instance
        self._counts = [0] * instance.item_count()

    def add(self, i):
        self._counts[i] += 1

    def set(self, i, count):
        self._counts[i] = int(count)

    def remove(self, i):
        self._counts[i] = 0

    def is_taken(self, i):
        return self._counts[i] > 0

    def count(self, i):
        return self._counts[i]

    @property
    def counts(self):
        return list(self._counts)

    def __getitem__(self, i):
        return self._counts[i]

    def __setitem__(self, i, count):
        self.set(i, count)

    def __len__(self):
        return len(self._counts)

    def __eq__(self, other):
        if not isinstance(other, UnboundedSolution):
            return NotImplemented
        return self.instance is other.instance and self._counts == other._counts

    def get_value(self):
        total = 0
        for item, count in zip(self.instance, self._counts):
            total += count * item.value
        return total

    def get_cost(self):
        total = 0
        for item, count in zip(self.instance, self._counts):
            total += count * item.cost
        return total

    def selected_indices(self):
        return [i for i, count in enumerate(self._counts) if count > 0]

    def to_dict(self):
        """Export in the plain dict format of the knapsack_dp helpers.

        Returns:
            dict with:
                - max_value: Total value of the selection
                - counts: List of counts for each item
        """
        return {
            'max_value': self.get_value(),
            'counts': list(self._counts)
        }

    def __repr__(self):
        return f"UnboundedSolution(value={self.get_value()}, cost={self.get_cost()}, counts={self._counts})"
