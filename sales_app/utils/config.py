import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

import yaml

from sales_app.utils.predictor import DEFAULT_SAMPLES, Predictor, SampleSet
from sales_app.utils.regression import Coefficients, linear_regression

MODES = ("computed", "fixed")

CONFIG_PATH = Path(
    os.environ.get("SALES_CONFIG", Path(__file__).resolve().parents[2] / "config" / "config.yaml")
)

# Constants shipped with the hand-tuned variant of the widget.
DEFAULT_FIXED = Coefficients(slope=12.66, intercept=-147.59)


@dataclass(frozen=True)
class Settings:
    samples: SampleSet = DEFAULT_SAMPLES
    mode: str = "computed"
    fixed: Coefficients = DEFAULT_FIXED
    title: str = "Ice Cream Sales vs. Temperature"
    x_label: str = "Temperature (°C)"
    y_label: str = "Ice Cream Sales (Cones)"

    def build_predictor(self, mode: Optional[str] = None) -> Predictor:
        mode = check_mode(mode or self.mode)
        if mode == "fixed":
            return Predictor.fixed(self.samples, self.fixed)
        return Predictor.computed(self.samples)

    def coefficients_for(self, mode: str) -> Coefficients:
        if check_mode(mode) == "fixed":
            return self.fixed
        return linear_regression(self.samples.temperatures, self.samples.sales)


def check_mode(mode: str) -> str:
    mode = str(mode).strip().lower()
    if mode not in MODES:
        raise ValueError(f"Unknown MODE {mode!r}; expected one of {', '.join(MODES)}")
    return mode


def load_cfg(path: Optional[Path] = None) -> dict:
    path = Path(CONFIG_PATH if path is None else path)
    if not path.exists():
        return {}
    with open(path, "r") as f:
        return yaml.safe_load(f) or {}


def load_settings(path: Optional[Path] = None, env: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Read config.yaml into Settings. A missing file means the built-in dataset;
    MODE in the environment wins over the file.
    """
    env = os.environ if env is None else env
    cfg = load_cfg(path)
    data = cfg.get("dataset", {}) or {}
    model = cfg.get("model", {}) or {}
    fixed = model.get("fixed", {}) or {}

    if "temperatures" in data or "sales" in data:
        samples = SampleSet.of(data.get("temperatures", []), data.get("sales", []))
    else:
        samples = DEFAULT_SAMPLES

    defaults = Settings()
    return Settings(
        samples=samples,
        mode=check_mode(env.get("MODE", model.get("mode", defaults.mode))),
        fixed=Coefficients(
            slope=float(fixed.get("slope", DEFAULT_FIXED.slope)),
            intercept=float(fixed.get("intercept", DEFAULT_FIXED.intercept)),
        ),
        title=data.get("title", defaults.title),
        x_label=data.get("x_label", defaults.x_label),
        y_label=data.get("y_label", defaults.y_label),
    )
