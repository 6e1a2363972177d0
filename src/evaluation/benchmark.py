import time
import statistics
from typing import Any, Callable, Dict, List
import logging
import psutil

from bintree.search_tree import BinarySearchTree
from bintree.similarity import TreeSimilarityChecker, are_similar, are_similar_iterative

logger = logging.getLogger(__name__)

def balanced_values(n: int) -> List[int]:
    """Insertion order that yields a balanced search tree over range(n)."""
    order = []
    ranges = [(0, n)]
    while ranges:
        next_ranges = []
        for lo, hi in ranges:
            if lo >= hi:
                continue
            mid = (lo + hi) // 2
            order.append(mid)
            next_ranges.append((lo, mid))
            next_ranges.append((mid + 1, hi))
        ranges = next_ranges
    return order

class SimilarityBenchmark:
    def __init__(self, size: int, iterations: int = 20):
        self.size = size
        self.iterations = iterations
        self.process = psutil.Process()
        self.results: Dict[str, List[float]] = {}

    def measure_operation(self, operation: Callable, name: str) -> float:
        """Measure the time taken for a comparison."""
        times = []
        for _ in range(self.iterations):
            start_time = time.perf_counter()
            operation()
            end_time = time.perf_counter()
            times.append(end_time - start_time)

        avg_time = statistics.mean(times)
        self.results[name] = times
        return avg_time

    def _pair(self, values: List[int]) -> tuple[BinarySearchTree, BinarySearchTree]:
        return BinarySearchTree.from_values(values), BinarySearchTree.from_values(values)

    def balanced_test(self):
        """Compare two identical balanced trees, recursively and iteratively."""
        a, b = self._pair(balanced_values(self.size))
        rec_time = self.measure_operation(lambda: are_similar(a.root, b.root), f"balanced_recursive_{self.size}")
        it_time = self.measure_operation(lambda: are_similar_iterative(a.root, b.root), f"balanced_iterative_{self.size}")
        logger.info(f"Balanced {self.size} nodes (height {a.height()}) - recursive: {rec_time:.6f}s, iterative: {it_time:.6f}s")

    def degenerate_test(self, recursive: bool = False):
        """
        Compare two identical chains built from sorted insertion.
        Recursion over a chain needs a recursion limit above the tree size, so it is opt-in.
        """
        a, b = self._pair(list(range(self.size)))
        it_time = self.measure_operation(lambda: are_similar_iterative(a.root, b.root), f"degenerate_iterative_{self.size}")
        logger.info(f"Degenerate {self.size} nodes - iterative: {it_time:.6f}s")
        if recursive:
            rec_time = self.measure_operation(lambda: are_similar(a.root, b.root), f"degenerate_recursive_{self.size}")
            logger.info(f"Degenerate {self.size} nodes - recursive: {rec_time:.6f}s")

    def size_check_test(self):
        """Compare trees that differ only in their last inserted value, with and without the size pre-check."""
        values = balanced_values(self.size)
        a = BinarySearchTree.from_values(values)
        b = BinarySearchTree.from_values(values[:-1])
        plain = TreeSimilarityChecker(size_check=False)
        checked = TreeSimilarityChecker(size_check=True)
        plain_time = self.measure_operation(lambda: plain.compare_trees(a, b), f"mismatch_plain_{self.size}")
        checked_time = self.measure_operation(lambda: checked.compare_trees(a, b), f"mismatch_size_check_{self.size}")
        logger.info(f"Size mismatch {self.size} nodes - plain: {plain_time:.6f}s, size check: {checked_time:.6f}s")

    def memory_mb(self) -> float:
        return self.process.memory_info().rss / 1024 / 1024

    def get_results(self) -> Dict[str, Any]:
        """Get benchmark results with statistics."""
        return {
            "size": self.size,
            "memory_mb": self.memory_mb(),
            "operations": {
                name: {
                    "mean": statistics.mean(times),
                    "median": statistics.median(times),
                    "stddev": statistics.stdev(times) if len(times) > 1 else 0,
                    "min": min(times),
                    "max": max(times)
                }
                for name, times in self.results.items()
            }
        }
