import copy
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import yaml

RESAMPLE_METHODS = ("none", "over", "under")

DEFAULTS: Dict[str, Dict[str, Any]] = {
    "data": {
        "path": "data/diabetes_prediction_dataset.csv",
        "target_col": "diabetes",
        "sample_size": None,
    },
    "preprocessing": {
        "sentinel": "No Info",
        "scale_before_split": True,
    },
    "model": {
        "max_iter": 100,
        "tol": 1e-8,
        "threshold": 0.5,
    },
    "validation": {
        "split_ratio": 0.8,
        "random_state": 42,
        "resample_methods": list(RESAMPLE_METHODS),
    },
    "output": {
        "report_path": None,
        "metrics_path": None,
        "figures_dir": None,
        "positive_label": 0,
    },
}


@dataclass
class Config:
    """Configuration object loaded from YAML."""
    data: Dict[str, Any] = field(default_factory=lambda: copy.deepcopy(DEFAULTS["data"]))
    preprocessing: Dict[str, Any] = field(
        default_factory=lambda: copy.deepcopy(DEFAULTS["preprocessing"])
    )
    model: Dict[str, Any] = field(default_factory=lambda: copy.deepcopy(DEFAULTS["model"]))
    validation: Dict[str, Any] = field(
        default_factory=lambda: copy.deepcopy(DEFAULTS["validation"])
    )
    output: Dict[str, Any] = field(default_factory=lambda: copy.deepcopy(DEFAULTS["output"]))

    def __post_init__(self) -> None:
        # partial sections are filled from the defaults
        for section, defaults in DEFAULTS.items():
            merged = copy.deepcopy(defaults)
            merged.update(getattr(self, section) or {})
            setattr(self, section, merged)
        self.validate()

    @classmethod
    def default(cls) -> "Config":
        return cls()

    @classmethod
    def from_yaml(cls, path: str) -> "Config":
        with open(path, "r") as f:
            cfg = yaml.safe_load(f) or {}
        unknown = set(cfg) - set(DEFAULTS)
        if unknown:
            raise ValueError(f"Unknown config sections: {sorted(unknown)}")
        return cls(**cfg)

    def with_overrides(
        self,
        dataset_path: Optional[str] = None,
        seed: Optional[int] = None,
        split_ratio: Optional[float] = None,
        resample_method: Optional[str] = None,
    ) -> "Config":
        """Return a copy with command-line values applied on top."""
        cfg = copy.deepcopy(self)
        if dataset_path is not None:
            cfg.data["path"] = dataset_path
        if seed is not None:
            cfg.validation["random_state"] = int(seed)
        if split_ratio is not None:
            cfg.validation["split_ratio"] = float(split_ratio)
        if resample_method is not None:
            cfg.validation["resample_methods"] = [resample_method]
        cfg.validate()
        return cfg

    def validate(self) -> None:
        ratio = self.validation["split_ratio"]
        if not 0.0 < float(ratio) < 1.0:
            raise ValueError(f"split_ratio must be in (0, 1), got {ratio}")

        methods = self.validation["resample_methods"]
        if isinstance(methods, str):
            methods = [methods]
            self.validation["resample_methods"] = methods
        bad = [m for m in methods if m not in RESAMPLE_METHODS]
        if bad or not methods:
            raise ValueError(
                f"resample_methods must be a non-empty subset of {RESAMPLE_METHODS}, got {methods}"
            )

        threshold = self.model["threshold"]
        if not 0.0 < float(threshold) < 1.0:
            raise ValueError(f"threshold must be in (0, 1), got {threshold}")

        if self.output["positive_label"] not in (0, 1):
            raise ValueError("positive_label must be 0 or 1")
