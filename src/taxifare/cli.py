"""Train → evaluate → persist → reload → predict, from the command line.

Usage:
    taxifare
    taxifare --trainDataPath data/train.csv --testDataPath data/test.csv \\
        --modelPath models/fare.joblib
    python -m taxifare --algorithm ridge --verbose

Paths default to storage/data and storage/models under the project root and
can also be set with TAXIFARE_TRAIN_DATA_PATH, TAXIFARE_TEST_DATA_PATH and
TAXIFARE_MODEL_PATH.

Exit status is 0 on success and 1 on any lifecycle error.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from taxifare.config import SAMPLE_TRIP_ACTUAL_FARE, LifecycleConfig
from taxifare.errors import TaxiFareError
from taxifare.models.registry import REGRESSORS
from taxifare.pipeline.runner import Lifecycle


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="taxifare",
        description="Train, evaluate and persist a taxi fare regression model",
    )
    parser.add_argument(
        "--trainDataPath", "--train-data-path",
        dest="train_data_path",
        help="Training CSV (default: storage/data/taxi-fare-train.csv)",
    )
    parser.add_argument(
        "--testDataPath", "--test-data-path",
        dest="test_data_path",
        help="Test CSV (default: storage/data/taxi-fare-test.csv)",
    )
    parser.add_argument(
        "--modelPath", "--model-path",
        dest="model_path",
        help="Model artifact path (default: storage/models/taxi_fare_model.joblib)",
    )
    parser.add_argument(
        "--algorithm",
        choices=sorted(REGRESSORS.keys()),
        default=None,
        help="Regression algorithm. Default: sgd",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for stochastic trainers. Default: 0",
    )
    parser.add_argument(
        "--no-header",
        dest="has_header",
        action="store_false",
        default=None,
        help="Input files have no header row",
    )
    parser.add_argument(
        "--separator",
        default=None,
        help="Field delimiter. Default: ','",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log progress to stderr",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Run the full lifecycle; return the process exit code."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    config = LifecycleConfig.from_env(
        train_data_path=args.train_data_path,
        test_data_path=args.test_data_path,
        model_path=args.model_path,
        algorithm=args.algorithm,
        seed=args.seed,
        has_header=args.has_header,
        separator=args.separator,
    )

    try:
        lifecycle = Lifecycle.run(config)
    except TaxiFareError as e:
        print(f"error: {type(e).__name__}: {e}", file=sys.stderr)
        return 1

    lifecycle.metrics.print_summary(str(lifecycle.training_pipeline.trainer))
    print(f"The model is saved to {config.model_path}")
    print(f"The metrics report is saved to {lifecycle.report_path}")

    print("*" * 70)
    print(
        f"Predicted fare: {lifecycle.prediction.fare_amount:.4f}, "
        f"actual fare: {SAMPLE_TRIP_ACTUAL_FARE}"
    )
    print("*" * 70)
    return 0


if __name__ == "__main__":
    sys.exit(main())
