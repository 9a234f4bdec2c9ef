"""Cross-check the knapsack solvers against each other.

Runs several solvers on a set of named instances and collects the results
in a pandas DataFrame (value, cost, runtime and search statistics), then
checks that all solvers agree on the optimal value of every instance.
"""

import logging
import time

import numpy as np
import pandas as pd

from . import solvers as gurobi_solvers
from .bnb import BranchAndBound
from .unbounded_bnb import UnboundedBranchAndBound
from .knapsack_dp import DynamicProgramming, UnboundedDynamicProgramming
from .enumeration import enumerate_01, enumerate_unbounded

logger = logging.getLogger(__name__)


def _gurobi_solution(solve_fn):
    def run(instance):
        res = solve_fn(instance)
        if 'solution' not in res:
            raise RuntimeError(f"Gurobi returned status {res['status']}: {res.get('message')}")
        return res['solution']
    return run


def default_solvers(unbounded=False, include_enumeration=False, include_gurobi=None):
    """Return the built-in solvers for one problem variant.

    Args:
        unbounded: Select the unbounded solvers instead of the 0/1 ones
        include_enumeration: Add the exhaustive reference solver
        include_gurobi: Add the Gurobi model; None adds it when gurobipy imports

    Returns:
        dict mapping a label to a solver object or a callable instance -> solution
    """
    if include_gurobi is None:
        include_gurobi = gurobi_solvers.gp is not None

    if unbounded:
        result = {
            "unbounded_bnb": UnboundedBranchAndBound(),
            "unbounded_dp": UnboundedDynamicProgramming(),
        }
        if include_enumeration:
            result["enumeration"] = enumerate_unbounded
        if include_gurobi:
            result["gurobi"] = _gurobi_solution(gurobi_solvers.solve_unbounded_knapsack_gurobi)
    else:
        result = {
            "bnb": BranchAndBound(),
            "dp": DynamicProgramming(),
        }
        if include_enumeration:
            result["enumeration"] = enumerate_01
        if include_gurobi:
            result["gurobi"] = _gurobi_solution(gurobi_solvers.solve_knapsack_gurobi)
    return result


def compare_solvers(instances, solvers=None, repetitions=1):
    """Run every solver on every instance and collect the results.

    Args:
        instances: dict mapping an instance name to an Instance
        solvers: dict mapping a label to a solver object (with solve()) or a
            callable; defaults to default_solvers()
        repetitions: Number of runs per pair, the runtime is the mean

    Returns:
        pandas.DataFrame with one row per (instance, solver) and columns
        instance, solver, value, cost, budget, n_items, runtime_sec,
        feasible, nodes_explored, nodes_pruned
    """
    if solvers is None:
        solvers = default_solvers()

    rows = []
    for name, instance in instances.items():
        for label, solver in solvers.items():
            solve = solver.solve if hasattr(solver, "solve") else solver
            runtimes = []
            for _ in range(repetitions):
                start_time = time.time()
                solution = solve(instance)
                runtimes.append(time.time() - start_time)

            stats = getattr(solver, "stats", {})
            row = {
                'instance': name,
                'solver': label,
                'value': solution.get_value(),
                'cost': solution.get_cost(),
                'budget': instance.get_budget(),
                'n_items': instance.item_count(),
                'runtime_sec': float(np.mean(runtimes)),
                'feasible': solution.get_cost() <= instance.get_budget(),
                'nodes_explored': stats.get('nodes_explored', np.nan),
                'nodes_pruned': stats.get('nodes_pruned', np.nan),
            }
            logger.debug(f"{name} / {label}: value={row['value']} runtime={row['runtime_sec']:.4f}s")
            rows.append(row)

    return pd.DataFrame(rows, columns=['instance', 'solver', 'value', 'cost', 'budget', 'n_items',
                                       'runtime_sec', 'feasible', 'nodes_explored', 'nodes_pruned'])


def check_agreement(df, atol=1e-6):
    """Check that all solvers found the same optimal value per instance.

    Args:
        df: DataFrame returned by compare_solvers
        atol: Absolute tolerance (Gurobi reports float objectives)

    Returns:
        pandas.DataFrame indexed by instance with min_value, max_value,
        all_feasible and agree columns
    """
    values = df.astype({'value': float})
    summary = values.groupby('instance').agg(
        min_value=('value', 'min'),
        max_value=('value', 'max'),
        all_feasible=('feasible', 'all'),
    )
    summary['agree'] = np.isclose(summary['min_value'], summary['max_value'], rtol=0.0, atol=atol)

    for name in summary.index[~summary["agree"].to_numpy()]:
        logger.warning(f"Solvers disagree on {name}: "
                       f"min={summary.loc[name, 'min_value']} max={summary.loc[name, 'max_value']}")
    return summary
