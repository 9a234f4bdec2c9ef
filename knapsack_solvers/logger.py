"""Logging system for the branch-and-bound knapsack solvers.

This module provides structured logging for tracking search performance,
including runtime, node statistics, incumbent progression and pruning.
Solvers default to NoOpLogger so that a plain solve() call stays silent.
"""

import logging
import json
import time
from pathlib import Path
from datetime import datetime
from typing import Dict, Any, Optional


class BnBLogger:
    """Logger for branch-and-bound search with performance metrics.

    Tracks:
    - Standard log messages (debug, info, warning, error)
    - Performance metrics (nodes explored, pruned, runtime)
    - Incumbent improvements
    - Instance characteristics
    """

    def __init__(self, log_dir: Optional[str] = None, instance_name: str = "default",
                 console_level: int = logging.INFO):
        """Initialize the logger.

        Args:
            log_dir: Directory for the log file and metrics JSON, or None to
                only log to the console
            instance_name: Name of the problem instance being solved
            console_level: Level of the console handler
        """
        self.instance_name = instance_name
        self.log_dir = Path(log_dir) if log_dir is not None else None
        if self.log_dir is not None:
            self.log_dir.mkdir(parents=True, exist_ok=True)

        self.timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        self.run_id = f"{instance_name}_{self.timestamp}"

        self.metrics = {
            "instance_name": instance_name,
            "timestamp": self.timestamp,
            "start_time": None,
            "end_time": None,
            "total_runtime": None,
            "nodes_explored": 0,
            "nodes_pruned": 0,
            "leaves_evaluated": 0,
            "incumbent_updates": [],
            "pruning_reasons": {},
        }

        self._setup_logger(console_level)
        self.metrics_file = self.log_dir / f"{self.run_id}_metrics.json" if self.log_dir else None

        self.logger.debug(f"Initialized logger for instance: {instance_name}")

    def _setup_logger(self, console_level):
        """Setup the stdlib logger with console and optional file handlers."""
        self.logger = logging.getLogger(f"bnb_{self.run_id}")
        self.logger.setLevel(logging.DEBUG)
        self.logger.propagate = False

        # Remove existing handlers to avoid duplicates
        self.logger.handlers.clear()

        if self.log_dir is not None:
            file_handler = logging.FileHandler(self.log_dir / f"{self.run_id}.log", mode='w')
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(logging.Formatter(
                '%(asctime)s - %(levelname)s - %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            ))
            self.logger.addHandler(file_handler)

        console_handler = logging.StreamHandler()
        console_handler.setLevel(console_level)
        console_handler.setFormatter(logging.Formatter('%(levelname)s - %(message)s'))
        self.logger.addHandler(console_handler)

    def start_run(self, problem_data: Optional[Dict[str, Any]] = None):
        """Mark the start of a solver run.

        Args:
            problem_data: Dictionary with problem characteristics
                         (solver, n_items, budget, ...)
        """
        self.metrics["start_time"] = time.time()
        if problem_data:
            self.metrics["problem_data"] = problem_data
        self.logger.info("=" * 60)
        self.logger.info("Starting branch-and-bound solver")
        if problem_data:
            self.logger.info(f"Problem: {problem_data}")
        self.logger.info("=" * 60)

    def end_run(self, final_result: Optional[Dict[str, Any]] = None):
        """Mark the end of a solver run and save metrics.

        Args:
            final_result: Dictionary with final solution info
        """
        self.metrics["end_time"] = time.time()
        self.metrics["total_runtime"] = self.metrics["end_time"] - self.metrics["start_time"]

        if final_result:
            self.metrics["final_result"] = final_result

        if self.metrics_file is not None:
            self._save_metrics()

        self.logger.info("=" * 60)
        self.logger.info("Branch-and-bound completed")
        self.logger.info(f"Total runtime: {self.metrics['total_runtime']:.3f} seconds")
        self.logger.info(f"Nodes explored: {self.metrics['nodes_explored']}")
        self.logger.info(f"Nodes pruned: {self.metrics['nodes_pruned']}")
        self.logger.info(f"Leaves evaluated: {self.metrics['leaves_evaluated']}")
        if self.metrics['nodes_explored'] > 0:
            prune_rate = 100 * self.metrics['nodes_pruned'] / self.metrics['nodes_explored']
            self.logger.info(f"Pruning rate: {prune_rate:.2f}%")
        self.logger.info("=" * 60)

    def log_node_visit(self, node_info: Dict[str, Any]):
        """Log pushing a decision onto the search stack.

        Args:
            node_info: Dict with node details (position, count, value, budget_left)
        """
        self.metrics["nodes_explored"] += 1
        self.logger.debug(f"Node {self.metrics['nodes_explored']}: {node_info}")

    def log_node_pruned(self, reason: str, node_info: Optional[Dict[str, Any]] = None):
        """Log pruning a node.

        Args:
            reason: Why the node was pruned (e.g., "bound")
            node_info: Optional dict with node details
        """
        self.metrics["nodes_pruned"] += 1
        reasons = self.metrics["pruning_reasons"]
        reasons[reason] = reasons.get(reason, 0) + 1

        if node_info:
            self.logger.debug(f"Pruned ({reason}): {node_info}")
        else:
            self.logger.debug(f"Node pruned: {reason}")

    def log_leaf_evaluated(self, value, node_info: Optional[Dict[str, Any]] = None):
        """Log reaching the end of a dive with a complete selection."""
        self.metrics["leaves_evaluated"] += 1
        self.logger.debug(f"Evaluated leaf: value={value}")
        if node_info:
            self.logger.debug(f"  Node: {node_info}")

    def log_incumbent_update(self, new_incumbent, selection: list,
                             node_count: Optional[int] = None):
        """Log finding a new best solution.

        Args:
            new_incumbent: New best value
            selection: Sorted positions (or position/count pairs) of the incumbent
            node_count: Number of nodes explored when found
        """
        update_info = {
            "incumbent": new_incumbent,
            "selection": selection,
            "node_count": node_count or self.metrics["nodes_explored"],
            "timestamp": time.time() - (self.metrics["start_time"] or time.time())
        }
        self.metrics["incumbent_updates"].append(update_info)

        self.logger.info(f"NEW INCUMBENT: {new_incumbent} (node {update_info['node_count']})")
        self.logger.debug(f"Selection: {selection}")

    def _save_metrics(self):
        """Save metrics dictionary to JSON file."""
        with open(self.metrics_file, 'w') as f:
            json.dump(self.metrics, f, indent=2, default=str)

        self.logger.info(f"Metrics saved to: {self.metrics_file}")

    def get_metrics(self) -> Dict[str, Any]:
        """Get a copy of the current metrics dictionary."""
        return self.metrics.copy()

    def debug(self, msg: str):
        self.logger.debug(msg)

    def info(self, msg: str):
        self.logger.info(msg)

    def warning(self, msg: str):
        self.logger.warning(msg)

    def error(self, msg: str):
        self.logger.error(msg)


class NoOpLogger:
    """Drop-in replacement for BnBLogger that records nothing."""

    def start_run(self, problem_data=None):
        pass

    def end_run(self, final_result=None):
        pass

    def log_node_visit(self, node_info):
        pass

    def log_node_pruned(self, reason, node_info=None):
        pass

    def log_leaf_evaluated(self, value, node_info=None):
        pass

    def log_incumbent_update(self, new_incumbent, selection, node_count=None):
        pass

    def get_metrics(self):
        return {}

    def debug(self, msg):
        pass

    def info(self, msg):
        pass

    def warning(self, msg):
        pass

    def error(self, msg):
        pass


def create_logger(instance_name: str = "default", log_dir: Optional[str] = "logs",
                  console_level: int = logging.INFO) -> BnBLogger:
    """Factory function to create a BnBLogger.

    Args:
        instance_name: Name of the problem instance
        log_dir: Directory for log files, None for console only
        console_level: Level of the console handler

    Returns:
        Configured BnBLogger instance
    """
    return BnBLogger(log_dir=log_dir, instance_name=instance_name, console_level=console_level)
