import importlib.util
from pathlib import Path

import pytest

SCRIPT = Path(__file__).resolve().parents[2] / "scripts" / "quality_checks.py"


@pytest.fixture(scope="module")
def qc():
    spec = importlib.util.spec_from_file_location("quality_checks", SCRIPT)
    mod = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(mod)
    return mod


GOOD = {"dataset": {"temperatures": [20, 22, 18], "sales": [100, 120, 80]}}


def test_good_dataset_passes(qc):
    assert qc.check_dataset(GOOD) == []
    assert qc.check_model(GOOD, "computed") == []


def test_missing_dataset(qc):
    assert qc.check_dataset({}) == ["dataset.temperatures and dataset.sales must both be present"]


def test_identical_temperatures_flagged(qc):
    failures = qc.check_dataset({"dataset": {"temperatures": [5, 5, 5], "sales": [1, 2, 3]}})
    assert any("identical" in f for f in failures)


def test_shape_and_value_failures(qc):
    failures = qc.check_dataset({"dataset": {"temperatures": [1], "sales": [-1, 2]}})
    assert any("Length mismatch" in f for f in failures)
    assert any("at least 2" in f for f in failures)
    assert any("Negative sales" in f for f in failures)


def test_non_numeric_values(qc):
    failures = qc.check_dataset({"dataset": {"temperatures": [1, "x"], "sales": [1, 2]}})
    assert any("Non-numeric" in f for f in failures)


def test_model_checks(qc):
    cfg = {"model": {"fixed": {"slope": "steep"}}}
    failures = qc.check_model(cfg, "guess")
    assert len(failures) == 2


@pytest.mark.parametrize("mode", ["Fixed", " computed "])
def test_mode_is_normalised_like_the_app(qc, mode):
    assert qc.check_model(GOOD, mode) == []


def test_unknown_mode_message(qc):
    failures = qc.check_model(GOOD, "guess")
    assert failures == ["Unknown MODE 'guess'; expected one of computed, fixed"]
