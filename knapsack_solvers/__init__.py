"""Exact solvers for the 0/1 and unbounded knapsack problems."""

from .models import Item, Instance, Solution, UnboundedSolution
from .knapsack_dp import DynamicProgramming, UnboundedDynamicProgramming, knapsack_01, knapsack_unbounded
from .bnb import BranchAndBound
from .unbounded_bnb import UnboundedBranchAndBound
from .logger import BnBLogger, NoOpLogger, create_logger
