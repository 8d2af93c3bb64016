#!/usr/bin/env python3
"""
Render the fitted regression chart as a CI artifact (no browser needed).
Outputs:
  artifacts/regression.png
"""
from __future__ import annotations

import os
from pathlib import Path

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt

from sales_app.utils.config import load_settings

ART = Path(os.environ.get("ARTIFACTS_DIR", "artifacts"))


def regression_chart(out: Path) -> Path | None:
    settings = load_settings()
    predictor = settings.build_predictor()
    payload = predictor.chart_payload()
    if not predictor.coefficients.is_usable:
        print("[snapshot] Model is undefined (zero-variance temperatures); skipping regression.png")
        return None

    plt.figure(figsize=(8, 4.5))
    plt.scatter(
        [p["x"] for p in payload.points],
        [p["y"] for p in payload.points],
        s=50,
        color=(75 / 255, 192 / 255, 192 / 255, 0.8),
        label="Actual Sales Data",
    )
    plt.plot(
        [p["x"] for p in payload.endpoints],
        [p["y"] for p in payload.endpoints],
        color="red",
        linestyle="--",
        linewidth=2,
        label=payload.label,
    )
    plt.title(settings.title)
    plt.xlabel(settings.x_label)
    plt.ylabel(settings.y_label)
    plt.ylim(bottom=0)
    plt.legend(loc="upper left", fontsize=8)
    out.parent.mkdir(parents=True, exist_ok=True)
    plt.tight_layout()
    plt.savefig(out)
    plt.close()
    print(f"[snapshot] Wrote {out} (mode={predictor.mode})")
    return out


def main():
    regression_chart(ART / "regression.png")


if __name__ == "__main__":
    main()
