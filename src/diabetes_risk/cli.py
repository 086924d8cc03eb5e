import argparse
import sys
from typing import List, Optional

import yaml

from .config import RESAMPLE_METHODS, Config
from .errors import PipelineError
from .pipeline import PipelineRunner
from .utils.logger import get_logger, setup_logging

logger = get_logger("cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="diabetes-risk",
        description="Logistic regression on the diabetes dataset under no resampling, ROS and RUS.",
    )
    parser.add_argument("--config", help="YAML config file (defaults are built in)")
    parser.add_argument("--dataset-path", help="CSV with the nine raw columns")
    parser.add_argument("--seed", type=int, help="Random seed for splitting and resampling")
    parser.add_argument("--split-ratio", type=float, help="Train share of the stratified split (default 0.8)")
    parser.add_argument(
        "--resample-method",
        choices=RESAMPLE_METHODS,
        help="Run a single strategy instead of all three",
    )
    parser.add_argument("--report-path", help="Write the text report here")
    parser.add_argument("--metrics-path", help="Write JSON metrics here")
    parser.add_argument("--figures-dir", help="Save EDA and confusion-matrix figures here")
    parser.add_argument("--log-level", default="INFO")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    try:
        config = Config.from_yaml(args.config) if args.config else Config.default()
        config = config.with_overrides(
            dataset_path=args.dataset_path,
            seed=args.seed,
            split_ratio=args.split_ratio,
            resample_method=args.resample_method,
        )
    except (OSError, ValueError, yaml.YAMLError) as exc:
        logger.error(f"Invalid configuration: {exc}")
        return 2

    for key in ("report_path", "metrics_path", "figures_dir"):
        value = getattr(args, key)
        if value is not None:
            config.output[key] = value

    try:
        output = PipelineRunner(config).run()
    except PipelineError as exc:
        logger.error(f"Run aborted: {exc}")
        return 1

    sys.stdout.write(output.report)
    return 0


if __name__ == "__main__":
    sys.exit(main())
