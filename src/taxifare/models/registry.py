"""Regression algorithm registry.

Maps an algorithm name to its scikit-learn estimator and default
hyperparameters. No fallbacks: unknown names are an error.

    sgd   - Stochastic linear regression (SGDRegressor, squared loss, L2).
            Default; the stochastic trainer of the fare pipeline.
    ridge - Closed-form L2-regularized least squares. Deterministic baseline.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from sklearn.linear_model import Ridge, SGDRegressor

REGRESSORS = {
    "sgd": SGDRegressor,
    "ridge": Ridge,
}

# =============================================================================
# Hyperparameters (centralized)
# =============================================================================

SGD_PARAMS = {
    "loss": "squared_error",
    "penalty": "l2",
    "alpha": 1e-4,
    "max_iter": 1000,
    "tol": 1e-4,
    "learning_rate": "invscaling",
    "eta0": 0.01,
    "shuffle": True,
}

RIDGE_PARAMS = {
    "alpha": 1.0,
}

DEFAULT_PARAMS: Dict[str, Dict[str, Any]] = {
    "sgd": SGD_PARAMS,
    "ridge": RIDGE_PARAMS,
}


def get_regressor(
    algorithm: str,
    seed: int,
    params: Optional[Mapping[str, Any]] = None,
):
    """Build an unfitted estimator for `algorithm`.

    Args:
        algorithm: One of "sgd", "ridge"
        seed: Passed as random_state so repeated fits are identical
        params: Overrides for the default hyperparameters

    Raises:
        ValueError: If algorithm is unknown
    """
    if algorithm not in REGRESSORS:
        raise ValueError(
            f"Unknown algorithm: {algorithm}. "
            f"Must be one of: {list(REGRESSORS.keys())}"
        )
    merged = {**DEFAULT_PARAMS[algorithm], **(params or {}), "random_state": seed}
    return REGRESSORS[algorithm](**merged)


__all__ = ["REGRESSORS", "DEFAULT_PARAMS", "get_regressor"]
