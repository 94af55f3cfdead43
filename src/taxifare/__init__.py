"""
taxifare - Taxi fare regression, end to end

Loads taxi trip CSVs, drops implausible fares, fits a linear regression
pipeline (one-hot categoricals, normalized numerics, concatenated features,
stochastic linear regressor), evaluates it, persists it, reloads it, and
scores a single trip.

Structure:
    data/      - Schemas, CSV loading, row filters
    features/  - Declarative column transforms
    models/    - Fitted model, regressors, persistence, scoring
    pipeline/  - Trainer, evaluator, end-to-end lifecycle
    cli        - Console entry point

Usage:
    from taxifare.pipeline import Lifecycle
    from taxifare.config import LifecycleConfig

    Lifecycle.run(LifecycleConfig.from_env())
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
