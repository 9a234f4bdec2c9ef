"""
Compare the exact solvers with the Gurobi MIP models.

Skipped when gurobipy is not installed.
"""

import pytest

from knapsack_solvers import solvers
from knapsack_solvers.models import Item, Instance
from knapsack_solvers.bnb import BranchAndBound
from knapsack_solvers.unbounded_bnb import UnboundedBranchAndBound

requires_gurobi = pytest.mark.skipif(solvers.gp is None, reason="gurobipy is not available")


@requires_gurobi
def test_gurobi_01_matches_bnb():
    instance = Instance.from_lists([10, 5, 18, 12, 15, 1, 2, 8], [4, 2, 5, 4, 5, 1, 3, 5], 15)
    res = solvers.solve_knapsack_gurobi(instance)
    assert 'solution' in res, f"Gurobi failed: {res}"
    expected = BranchAndBound().solve(instance).get_value()
    assert abs(res['obj'] - expected) < 1e-6
    assert res['solution'].get_value() == expected
    assert res['solution'].get_cost() <= 15


@requires_gurobi
def test_gurobi_unbounded_matches_bnb():
    instance = Instance.from_lists([10, 20, 15, 1], [7, 12, 8, 1], 30)
    res = solvers.solve_unbounded_knapsack_gurobi(instance)
    assert 'solution' in res, f"Gurobi failed: {res}"
    expected = UnboundedBranchAndBound().solve(instance).get_value()
    assert abs(res['obj'] - expected) < 1e-6
    assert res['solution'].get_cost() <= 30


@requires_gurobi
def test_gurobi_unbounded_zero_cost_item_capped():
    instance = Instance(0, [Item(5, 0), Item(1, 1)])
    res = solvers.solve_unbounded_knapsack_gurobi(instance)
    assert res['solution'].counts == [1, 0]


def test_missing_gurobi_raises(monkeypatch):
    monkeypatch.setattr(solvers, "gp", None)
    instance = Instance.from_lists([1], [1], 1)
    with pytest.raises(RuntimeError):
        solvers.solve_knapsack_gurobi(instance)
    with pytest.raises(RuntimeError):
        solvers.solve_unbounded_knapsack_gurobi(instance)
