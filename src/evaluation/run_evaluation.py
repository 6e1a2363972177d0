import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Dict, Any
from datetime import datetime
from .benchmark import SimilarityBenchmark

logger = logging.getLogger(__name__)

def run_benchmarks(sizes: List[int], iterations: int = 20, recursive_degenerate: bool = False) -> Dict[str, Any]:
    """Run the comparison benchmarks for every tree size."""
    results = {}

    for size in sizes:
        logger.info(f"Running benchmarks for {size} nodes")
        benchmark = SimilarityBenchmark(size, iterations)
        benchmark.balanced_test()
        benchmark.degenerate_test(recursive=recursive_degenerate)
        benchmark.size_check_test()
        results[str(size)] = benchmark.get_results()

    return results

def save_results(results: Dict[str, Any], output_dir: str) -> Path:
    """Save results to a timestamped JSON file."""
    output_path = Path(output_dir)
    output_path.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    results_file = output_path / f"results_{timestamp}.json"
    with open(results_file, "w") as f:
        json.dump(results, f, indent=2)
    logger.info(f"Results saved to {results_file}")
    return results_file

def main(argv: List[str] = None):
    parser = argparse.ArgumentParser(description="Benchmark binary tree comparison")
    parser.add_argument("--sizes", type=int, nargs="+", default=[100, 1000, 10000],
                        help="tree sizes to benchmark")
    parser.add_argument("--iterations", type=int, default=20,
                        help="repetitions per measurement")
    parser.add_argument("--recursive-degenerate", action="store_true",
                        help="also time recursive comparison of degenerate trees")
    parser.add_argument("--output-dir", default="results",
                        help="directory to write results to")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO)
    if args.recursive_degenerate:
        sys.setrecursionlimit(max(sys.getrecursionlimit(), 2 * max(args.sizes) + 100))

    results = run_benchmarks(args.sizes, args.iterations, args.recursive_degenerate)
    save_results(results, args.output_dir)
    return results

if __name__ == "__main__":
    main()
