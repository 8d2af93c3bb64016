"""
Ordinary least squares for a single predictor, closed form.
Used by the predictor shell, the model details page and the scripts.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Sequence

import numpy as np

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Coefficients:
    slope: float
    intercept: float

    @property
    def is_usable(self) -> bool:
        return not (math.isnan(self.slope) or math.isnan(self.intercept))

    def predict(self, x: float) -> float:
        return self.slope * x + self.intercept

    def equation(self, y_name: str = "Sales", x_name: str = "Temperature") -> str:
        return f"{y_name} = {self.slope:.2f} * {x_name} + {self.intercept:.2f}"


UNDEFINED = Coefficients(slope=math.nan, intercept=math.nan)


def linear_regression(x: Sequence[float], y: Sequence[float]) -> Coefficients:
    """
    Fit y = slope*x + intercept from running sums.

    - Returns NaN coefficients (and logs) when the x-values have zero variance.
    - Raises ValueError for empty or mismatched inputs.
    """
    x = np.asarray(x, dtype=float).reshape(-1)
    y = np.asarray(y, dtype=float).reshape(-1)
    if x.size != y.size:
        raise ValueError(f"x and y must have the same length (got {x.size} and {y.size})")
    if x.size == 0:
        raise ValueError("Need at least 1 point for OLS")

    n = x.size
    sum_x = float(np.sum(x))
    sum_y = float(np.sum(y))
    sum_xy = float(np.sum(x * y))
    sum_xx = float(np.sum(x * x))

    mean_x = sum_x / n
    mean_y = sum_y / n

    numerator = sum_xy - n * mean_x * mean_y
    denominator = sum_xx - n * mean_x * mean_x

    if denominator == 0:
        logger.error(
            "Denominator is zero, cannot calculate slope. All %d x-values might be the same.", n
        )
        return UNDEFINED

    slope = numerator / denominator
    intercept = mean_y - slope * mean_x
    return Coefficients(slope=slope, intercept=intercept)
