"""
Orthogonalization by principal components.

Public API:
    pca(dataset, predictor_names, ...) -> Dataset
    principal_components(dataset, predictor_names, ...) -> PCASolution
"""

from pycollinear.decomposition.solvers import pca, principal_components
from pycollinear.decomposition.solution import PCASolution

__all__ = [
    "pca",
    "principal_components",
    "PCASolution",
]
