"""
Parameter optimization module.

Grid search over a strategy's declared parameter ranges.
"""
from .grid_search import (
    ParameterOptimizer,
    OptimizationResult,
    ParameterResult,
    build_parameter_grid,
    iter_parameter_combinations,
)

__all__ = [
    'ParameterOptimizer',
    'OptimizationResult',
    'ParameterResult',
    'build_parameter_grid',
    'iter_parameter_combinations',
]
