"""
Pipeline Module

End-to-end ML workflow orchestration.

Components:
    Lifecycle         - Full run (load → filter → train → evaluate → save → predict)
    RegressionTrainer - Algorithm selection, terminal pipeline stage
    TrainingPipeline  - Transform chain + trainer, fitted into a TrainedModel
    evaluate          - Metrics on a labelled table
"""

from taxifare.pipeline.trainer import RegressionTrainer, TrainingPipeline
from taxifare.pipeline.evaluator import RegressionMetrics, evaluate
from taxifare.pipeline.runner import Lifecycle

__all__ = [
    "Lifecycle",
    "RegressionTrainer",
    "TrainingPipeline",
    "RegressionMetrics",
    "evaluate",
]
