"""
Prediction shell: owns the sample set and the coefficients, turns raw
temperature text into a prediction, and publishes chart payloads to
subscribers whenever the coefficients are (re)set.
"""
from __future__ import annotations

import math
import re
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Iterator, Optional, Sequence

from sales_app.utils.regression import Coefficients, linear_regression

INVALID_TEMPERATURE_MSG = "Please enter a valid number for temperature."

# What an HTML number input accepts: no inf/nan words, no underscores.
_DECIMAL_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


class InvalidInput(ValueError):
    """Temperature text that does not parse as a number."""

    def __init__(self, raw: str, message: str = INVALID_TEMPERATURE_MSG):
        super().__init__(message)
        self.raw = raw
        self.message = message


class PredictorState(Enum):
    IDLE = "idle"
    HAS_ERROR = "has_error"
    HAS_PREDICTION = "has_prediction"


@dataclass(frozen=True)
class SampleSet:
    temperatures: tuple[float, ...]
    sales: tuple[float, ...]

    def __post_init__(self) -> None:
        if len(self.temperatures) != len(self.sales):
            raise ValueError(
                f"temperatures and sales must pair up "
                f"(got {len(self.temperatures)} and {len(self.sales)})"
            )
        if len(self.temperatures) < 2:
            raise ValueError("Need at least 2 samples")

    @classmethod
    def of(cls, temperatures: Sequence[float], sales: Sequence[float]) -> "SampleSet":
        return cls(tuple(float(t) for t in temperatures), tuple(float(s) for s in sales))

    def points(self) -> list[dict]:
        return [{"x": t, "y": s} for t, s in zip(self.temperatures, self.sales)]

    def __len__(self) -> int:
        return len(self.temperatures)


# Ice cream cones sold per day at a given temperature (°C).
DEFAULT_SAMPLES = SampleSet.of(
    temperatures=[20, 22, 18, 25, 23, 19],
    sales=[100, 120, 80, 150, 130, 90],
)


@dataclass(frozen=True)
class PredictionResult:
    temperature: Optional[float] = None
    value: Optional[float] = None
    error: Optional[InvalidInput] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def display(self) -> str:
        if self.error is not None:
            return self.error.message
        return f"{self.value:.2f} cones"


@dataclass(frozen=True)
class ChartPayload:
    points: list[dict]
    endpoints: list[dict]
    label: str


Listener = Callable[[ChartPayload], None]


def parse_temperature(raw: str) -> float:
    """Plain decimal or exponent notation only, finite after conversion."""
    text = str(raw).strip()
    if not _DECIMAL_RE.fullmatch(text):
        raise InvalidInput(raw)
    value = float(text)
    if not math.isfinite(value):
        raise InvalidInput(raw)
    return value


@dataclass
class Predictor:
    samples: SampleSet
    coefficients: Coefficients
    mode: str = "computed"
    state: PredictorState = PredictorState.IDLE
    input_text: str = ""
    last_result: Optional[PredictionResult] = None
    error_message: str = ""
    _listeners: list = field(default_factory=list, repr=False, compare=False)

    @classmethod
    def computed(cls, samples: SampleSet) -> "Predictor":
        coef = linear_regression(samples.temperatures, samples.sales)
        return cls(samples=samples, coefficients=coef, mode="computed")

    @classmethod
    def fixed(cls, samples: SampleSet, coefficients: Coefficients) -> "Predictor":
        return cls(samples=samples, coefficients=coefficients, mode="fixed")

    @property
    def prediction_text(self) -> Optional[str]:
        if self.last_result is not None and self.last_result.ok:
            return self.last_result.display
        return None

    # ---- input flow ----
    def edit_input(self, text: str) -> None:
        self.input_text = text
        self.error_message = ""
        self.state = PredictorState.IDLE

    def predict(self, raw_input: Optional[str] = None) -> PredictionResult:
        if raw_input is not None:
            self.input_text = raw_input
        try:
            temp = parse_temperature(self.input_text)
        except InvalidInput as err:
            result = PredictionResult(error=err)
            self.error_message = err.message
            self.state = PredictorState.HAS_ERROR
        else:
            result = PredictionResult(temperature=temp, value=self.coefficients.predict(temp))
            self.error_message = ""
            self.state = PredictorState.HAS_PREDICTION
        self.last_result = result
        return result

    # ---- coefficients + publishing ----
    def set_coefficients(self, coefficients: Coefficients, mode: Optional[str] = None) -> None:
        if coefficients != self.coefficients:
            self.last_result = None
            self.error_message = ""
            self.state = PredictorState.IDLE
        self.coefficients = coefficients
        if mode is not None:
            self.mode = mode
        self.publish()

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    @contextmanager
    def subscribed(self, listener: Listener) -> Iterator["Predictor"]:
        unsubscribe = self.subscribe(listener)
        try:
            yield self
        finally:
            unsubscribe()

    def publish(self) -> ChartPayload:
        payload = self.chart_payload()
        for listener in list(self._listeners):
            listener(payload)
        return payload

    def chart_payload(self) -> ChartPayload:
        lo, hi = min(self.samples.temperatures), max(self.samples.temperatures)
        coef = self.coefficients
        return ChartPayload(
            points=self.samples.points(),
            endpoints=[{"x": lo, "y": coef.predict(lo)}, {"x": hi, "y": coef.predict(hi)}],
            label=f"Regression Line (Sales = {coef.slope:.2f} * Temp + {coef.intercept:.2f})",
        )
