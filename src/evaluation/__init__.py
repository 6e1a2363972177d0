from .benchmark import SimilarityBenchmark, balanced_values
from .run_evaluation import run_benchmarks, save_results

__all__ = [
    'SimilarityBenchmark',
    'balanced_values',
    'run_benchmarks',
    'save_results'
]
