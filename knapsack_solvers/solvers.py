"""Gurobi reference solvers for the knapsack problems.

This module formulates the knapsack variants as MIP models:
- solve_knapsack_gurobi: 0/1 knapsack with binary variables
- solve_unbounded_knapsack_gurobi: unbounded knapsack with integer variables

They are independent of the branch-and-bound and DP code and are used to
cross-check their optimal values.
"""
try:
    import gurobipy as gp
    from gurobipy import GRB
except Exception as e:
    gp = None
    GRB = None

from .models import Solution, UnboundedSolution


def _optimize(model, x, solution, time_limit, verbose):
    """Optimize a prepared model and copy the variable values into solution."""
    model.setParam('OutputFlag', 1 if verbose else 0)
    if time_limit is not None:
        model.setParam('TimeLimit', time_limit)

    model.optimize()

    status = model.Status
    if (status == GRB.OPTIMAL or status == GRB.TIME_LIMIT or status == GRB.SUBOPTIMAL) and model.SolCount > 0:
        for i, var in x.items():
            solution.set(i, int(round(var.X)))
        return {"status": status, "obj": model.ObjVal, "solution": solution, "model": model}
    else:
        return {"status": status, "message": "No feasible solution or model failed"}


def solve_knapsack_gurobi(instance, time_limit=None, verbose=False):
    """Solve the 0/1 knapsack problem with Gurobi.

    Args:
        instance: Instance to solve
        time_limit: Optional time limit in seconds for Gurobi
        verbose: Whether to show Gurobi output

    Returns:
        dict with keys:
            - status: Gurobi solution status
            - obj: Objective value (total value)
            - solution: Solution built from the binary variables
            - model: Gurobi model object

    Raises:
        RuntimeError: If gurobipy is not available
    """
    if gp is None:
        raise RuntimeError("gurobipy is not available. Install gurobipy into the active Python environment.")

    n = instance.item_count()
    model = gp.Model("knapsack_01")

    # Decision variables: x[i] = 1 if item i is packed
    x = {i: model.addVar(vtype=GRB.BINARY, name=f"x_{i}") for i in range(n)}
    model.update()

    model.addConstr(gp.quicksum(instance[i].cost * x[i] for i in range(n)) <= instance.get_budget(), name="budget")
    model.setObjective(gp.quicksum(instance[i].value * x[i] for i in range(n)), GRB.MAXIMIZE)

    return _optimize(model, x, Solution(instance), time_limit, verbose)


def solve_unbounded_knapsack_gurobi(instance, time_limit=None, verbose=False):
    """Solve the unbounded knapsack problem with Gurobi.

    Zero-cost items get an upper bound of one copy so the model stays
    bounded, the same convention as the exact solvers.

    Args:
        instance: Instance to solve
        time_limit: Optional time limit in seconds for Gurobi
        verbose: Whether to show Gurobi output

    Returns:
        dict with keys:
            - status: Gurobi solution status
            - obj: Objective value (total value)
            - solution: UnboundedSolution built from the integer variables
            - model: Gurobi model object

    Raises:
        RuntimeError: If gurobipy is not available
    """
    if gp is None:
        raise RuntimeError("gurobipy is not available. Install gurobipy into the active Python environment.")

    n = instance.item_count()
    model = gp.Model("knapsack_unbounded")

    # Decision variables: x[i] = number of copies of item i
    x = {}
    for i in range(n):
        ub = 1.0 if instance[i].cost == 0 else GRB.INFINITY
        x[i] = model.addVar(vtype=GRB.INTEGER, lb=0.0, ub=ub, name=f"x_{i}")
    model.update()

    model.addConstr(gp.quicksum(instance[i].cost * x[i] for i in range(n)) <= instance.get_budget(), name="budget")
    model.setObjective(gp.quicksum(instance[i].value * x[i] for i in range(n)), GRB.MAXIMIZE)

    return _optimize(model, x, UnboundedSolution(instance), time_limit, verbose)
