#!/usr/bin/env python3
"""
Fast-fail data contracts & sanity checks on the configured dataset.

Usage:
  python scripts/quality_checks.py
  python scripts/quality_checks.py --config config/config.yaml --mode fixed
"""
from __future__ import annotations

import argparse
import math
import os
import sys
from pathlib import Path

import yaml

from sales_app.utils.config import CONFIG_PATH, check_mode, load_cfg
from sales_app.utils.regression import linear_regression


def _is_number(v) -> bool:
    return isinstance(v, (int, float)) and not isinstance(v, bool) and math.isfinite(v)


def check_dataset(cfg: dict) -> list[str]:
    """Contracts for the temperature/sales sample set."""
    failures: list[str] = []
    data = cfg.get("dataset", {}) or {}
    temps = data.get("temperatures")
    sales = data.get("sales")

    # ---------- presence ----------
    if temps is None or sales is None:
        failures.append("dataset.temperatures and dataset.sales must both be present")
        return failures

    # ---------- shape ----------
    if len(temps) != len(sales):
        failures.append(f"Length mismatch: {len(temps)} temperatures vs {len(sales)} sales")
    if len(temps) < 2:
        failures.append(f"Need at least 2 samples (have {len(temps)})")

    # ---------- value constraints ----------
    bad = [v for v in list(temps) + list(sales) if not _is_number(v)]
    if bad:
        failures.append(f"Non-numeric or non-finite values: {bad[:5]}")
        return failures
    neg = [s for s in sales if s < 0]
    if neg:
        failures.append(f"Negative sales values (violations={len(neg)})")

    # ---------- model ----------
    if len(set(temps)) < 2:
        failures.append("All temperatures are identical; slope is undefined")
    elif len(temps) == len(sales):
        coef = linear_regression(temps, sales)
        if not coef.is_usable:
            failures.append("OLS returned NaN coefficients")
    return failures


def check_model(cfg: dict, mode: str) -> list[str]:
    failures: list[str] = []
    try:
        check_mode(mode)
    except ValueError as e:
        failures.append(str(e))
    fixed = (cfg.get("model", {}) or {}).get("fixed", {}) or {}
    for k in ("slope", "intercept"):
        if k in fixed and not _is_number(fixed[k]):
            failures.append(f"model.fixed.{k} must be a finite number (got {fixed[k]!r})")
    return failures


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Dataset & model config quality checks")
    p.add_argument("--config", type=Path, default=CONFIG_PATH)
    p.add_argument("--mode", default=None, help="Override model.mode (computed|fixed)")
    return p.parse_args()


def main():
    args = parse_args()
    cfg = load_cfg(args.config)
    mode = args.mode or os.environ.get("MODE") or (cfg.get("model", {}) or {}).get("mode", "computed")

    print(f"[quality] CONFIG={args.config} MODE={mode}")

    failures = check_dataset(cfg) + check_model(cfg, mode)

    if failures:
        print("\n[QUALITY FAIL] One or more data contracts were violated:")
        for i, f in enumerate(failures, 1):
            print(f" {i:02d}. {f}")
        print("\nFix the above issues (or config file) and rerun.")
        sys.exit(2)

    print("[quality] All checks passed ✔")


if __name__ == "__main__":
    try:
        main()
    except yaml.YAMLError as e:
        print(f"[FATAL][YAML] {e}", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        print(f"[FATAL] {type(e).__name__}: {e}", file=sys.stderr)
        sys.exit(1)
