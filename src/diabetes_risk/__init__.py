"""
Diabetes Risk - Logistic Regression Under Class Rebalancing

This package loads the diabetes prediction dataset, cleans and encodes it,
runs exploratory analysis, and compares logistic regression fitted with no
resampling, random oversampling (ROS) and random undersampling (RUS).

Modules:
    config          - Load YAML configuration with built-in defaults.
    data_loader     - Read and validate the CSV.
    cleaner         - Drop incomplete rows and the smoking sentinel.
    encoder         - Map categorical text to fixed integer codes.
    scaler          - Standardize continuous attributes.
    splitter        - Seeded stratified train/test split.
    balancer        - ROS / RUS on the training subset.
    model_trainer   - Binomial GLM fitted by IRLS (statsmodels).
    evaluator       - Threshold probabilities, confusion matrix and rates.
    eda             - Class balance, chi-square tests, summaries, figures.
    report          - Text report, JSON metrics, confusion-matrix figures.
    pipeline        - Orchestrates all components.
    cli             - Command-line entry point.
    utils.logger    - Unified timestamped console logger.
"""

from .config import Config
from .data_loader import DataLoader
from .cleaner import DataCleaner
from .encoder import CategoryEncoder
from .scaler import ContinuousScaler
from .splitter import StratifiedSplitter
from .balancer import Balancer
from .model_trainer import FittedModel, ModelTrainer
from .evaluator import ConfusionCounts, EvaluationResult, Evaluator
from .eda import EdaSummary, ExploratoryAnalyzer
from .report import ReportWriter
from .pipeline import PipelineOutput, PipelineRunner, RunResult

__all__ = [
    "Config",
    "DataLoader",
    "DataCleaner",
    "CategoryEncoder",
    "ContinuousScaler",
    "StratifiedSplitter",
    "Balancer",
    "ModelTrainer",
    "FittedModel",
    "Evaluator",
    "EvaluationResult",
    "ConfusionCounts",
    "ExploratoryAnalyzer",
    "EdaSummary",
    "ReportWriter",
    "PipelineRunner",
    "PipelineOutput",
    "RunResult",
]
