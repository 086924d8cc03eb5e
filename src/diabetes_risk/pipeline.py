from dataclasses import dataclass, field
from typing import Dict, Optional, Union

import pandas as pd

from .balancer import Balancer
from .cleaner import DataCleaner
from .config import Config
from .data_loader import DataLoader
from .eda import EdaSummary, ExploratoryAnalyzer
from .encoder import CategoryEncoder
from .evaluator import EvaluationResult, Evaluator
from .model_trainer import FittedModel, ModelTrainer
from .report import ReportWriter
from .scaler import ContinuousScaler
from .splitter import StratifiedSplitter
from .utils.logger import get_logger

RUN_LABELS = {"none": "baseline", "over": "ROS", "under": "RUS"}


@dataclass
class RunResult:
    label: str
    strategy: str
    n_train: int
    train_class_counts: Dict[int, int]
    model: FittedModel
    evaluation: EvaluationResult


@dataclass
class PipelineOutput:
    runs: Dict[str, RunResult]
    eda: Optional[EdaSummary] = None
    report: str = ""
    n_test: int = 0
    artifacts: list = field(default_factory=list)

    def metrics(self) -> Dict[str, dict]:
        """Run label -> accuracy, confusion matrix and rates."""
        return {label: run.evaluation.to_dict() for label, run in self.runs.items()}


class PipelineRunner:
    """End-to-end diabetes class-imbalance study.

    Steps:
      1. Load the CSV
      2. Drop incomplete rows and the smoking-history sentinel
      3. Encode categorical attributes with the fixed lookup tables
      4. Exploratory analysis (class balance, chi-square tests)
      5. Standardize continuous attributes (on the full dataset by default)
      6. Stratified train/test split
      7. Per resampling strategy (none / ROS / RUS): balance Train only,
         fit logistic regression, evaluate on the untouched Test subset
      8. Render the report (text, optional JSON metrics and figures)"""

    def __init__(self, config: Union[Config, str, None] = None):
        if config is None:
            config = Config.default()
        elif isinstance(config, str):
            config = Config.from_yaml(config)
        self.config = config
        self.logger = get_logger(self.__class__.__name__)

    def prepare(self, df: pd.DataFrame) -> pd.DataFrame:
        """Clean and encode a raw frame."""
        cfg = self.config
        df = DataCleaner(sentinel=cfg.preprocessing["sentinel"]).transform(df)
        return CategoryEncoder().transform(df)

    def split(self, df: pd.DataFrame):
        cfg = self.config
        splitter = StratifiedSplitter(
            train_ratio=float(cfg.validation["split_ratio"]),
            target_col=cfg.data["target_col"],
            random_state=int(cfg.validation["random_state"]),
        )
        scaler = ContinuousScaler()
        if cfg.preprocessing["scale_before_split"]:
            # normalization statistics include the test rows
            return splitter.split(scaler.fit_transform(df))

        train_df, test_df = splitter.split(df)
        scaler.fit(train_df)
        return scaler.transform(train_df), scaler.transform(test_df)

    def run_strategy(self, strategy: str, train_df: pd.DataFrame, test_df: pd.DataFrame) -> RunResult:
        cfg = self.config
        target_col = cfg.data["target_col"]
        label = RUN_LABELS[strategy]
        self.logger.info(f"Run '{label}' (resampling={strategy})")

        balanced = Balancer(
            strategy=strategy,
            target_col=target_col,
            random_state=int(cfg.validation["random_state"]),
        ).balance(train_df)

        model = ModelTrainer(
            target_col=target_col,
            max_iter=int(cfg.model["max_iter"]),
            tol=float(cfg.model["tol"]),
        ).fit(balanced)

        evaluation = Evaluator(
            threshold=float(cfg.model["threshold"]),
            positive_label=int(cfg.output["positive_label"]),
            target_col=target_col,
        ).evaluate(model, test_df)

        counts = balanced[target_col].value_counts().sort_index()
        return RunResult(
            label=label,
            strategy=strategy,
            n_train=len(balanced),
            train_class_counts={int(k): int(v) for k, v in counts.items()},
            model=model,
            evaluation=evaluation,
        )

    def run_frame(self, raw_df: pd.DataFrame) -> PipelineOutput:
        cfg = self.config
        df = self.prepare(raw_df)

        eda = ExploratoryAnalyzer(
            target_col=cfg.data["target_col"],
            figures_dir=cfg.output.get("figures_dir"),
        ).run(df)

        train_df, test_df = self.split(df)

        runs: Dict[str, RunResult] = {}
        for strategy in cfg.validation["resample_methods"]:
            result = self.run_strategy(strategy, train_df, test_df)
            runs[result.label] = result

        writer = ReportWriter(figures_dir=cfg.output.get("figures_dir"))
        report = writer.render(runs, eda=eda, positive_label=int(cfg.output["positive_label"]))

        output = PipelineOutput(runs=runs, eda=eda, report=report, n_test=len(test_df))
        output.artifacts.extend(eda.figures)
        if cfg.output.get("report_path"):
            output.artifacts.append(writer.write(report, cfg.output["report_path"]))
        if cfg.output.get("metrics_path"):
            output.artifacts.append(writer.write_metrics(runs, cfg.output["metrics_path"]))
        output.artifacts.extend(writer.plot_confusion_matrices(runs))
        return output

    def run(self) -> PipelineOutput:
        cfg = self.config
        self.logger.info("Starting diabetes class-imbalance pipeline")

        raw_df = DataLoader(
            cfg.data["path"],
            sample_size=cfg.data.get("sample_size"),
            random_state=int(cfg.validation["random_state"]),
        ).load()
        output = self.run_frame(raw_df)

        self.logger.info("Pipeline finished")
        return output
