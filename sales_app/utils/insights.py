"""
Fit diagnostics and plain-language model notes used by the app and unit tests.
No external deps beyond NumPy.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from sales_app.utils.regression import Coefficients


@dataclass
class FitQuality:
    y_hat: np.ndarray
    resid: np.ndarray
    r2: float
    sigma: float            # residual std (ddof=2), 0 when n <= 2
    z: np.ndarray           # standardized residuals


def fit_quality(x: Sequence[float], y: Sequence[float], coef: Coefficients) -> FitQuality:
    """
    Evaluate an already-fitted line against the samples.
    Returns predictions, residuals, R^2, residual sigma, and z-residuals.

    - Works for fixed (non-OLS) coefficients too; R^2 can then be negative.
    - NaN coefficients propagate into NaN arrays and NaN R^2.
    """
    x = np.asarray(x, dtype=float).reshape(-1)
    y = np.asarray(y, dtype=float).reshape(-1)

    y_hat = coef.slope * x + coef.intercept
    resid = y - y_hat
    if not coef.is_usable:
        return FitQuality(y_hat=y_hat, resid=resid, r2=float("nan"), sigma=float("nan"), z=resid)

    ss_res = float(np.sum(resid ** 2))
    ss_tot = float(np.sum((y - np.mean(y)) ** 2))
    r2 = 1.0 - ss_res / ss_tot if ss_tot > 0 else 0.0
    sigma = float(np.std(resid, ddof=2)) if x.size > 2 else 0.0
    z = resid / (sigma if sigma > 0 else 1.0)

    return FitQuality(y_hat=y_hat, resid=resid, r2=r2, sigma=sigma, z=z)


def describe_model(coef: Coefficients, x_unit: str = "°C", y_unit: str = "cones") -> list[str]:
    if not coef.is_usable:
        return ["The model is undefined: every temperature in the dataset is the same."]

    lines = []
    direction = "increase" if coef.slope >= 0 else "decrease"
    lines.append(
        f"**Slope ({coef.slope:.2f}):** For every 1{x_unit} increase in temperature, "
        f"ice cream sales are predicted to {direction} by {abs(coef.slope):.2f} {y_unit}."
    )
    lines.append(
        f"**Intercept ({coef.intercept:.2f}):** This is the theoretical sales at 0{x_unit}."
    )
    return lines
