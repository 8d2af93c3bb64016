import pytest

from sales_app.utils.config import DEFAULT_FIXED, Settings, check_mode, load_settings
from sales_app.utils.predictor import DEFAULT_SAMPLES


def _write(tmp_path, text):
    p = tmp_path / "config.yaml"
    p.write_text(text)
    return p


def test_missing_file_falls_back_to_builtin_dataset(tmp_path):
    s = load_settings(tmp_path / "nope.yaml", env={})
    assert s.samples == DEFAULT_SAMPLES
    assert s.mode == "computed"
    assert s.fixed == DEFAULT_FIXED


def test_reads_dataset_and_model(tmp_path):
    p = _write(tmp_path, """
dataset:
  temperatures: [1, 2, 3]
  sales: [2, 4, 6]
  x_label: Temp
model:
  mode: fixed
  fixed: {slope: 1.5, intercept: 2}
""")
    s = load_settings(p, env={})
    assert s.samples.temperatures == (1.0, 2.0, 3.0)
    assert s.x_label == "Temp"
    assert s.y_label == Settings().y_label
    assert s.mode == "fixed"
    assert s.fixed.slope == 1.5
    assert s.fixed.intercept == 2.0


def test_env_mode_overrides_file(tmp_path):
    p = _write(tmp_path, "model:\n  mode: fixed\n")
    assert load_settings(p, env={"MODE": "computed"}).mode == "computed"


def test_unknown_mode_raises(tmp_path):
    with pytest.raises(ValueError):
        load_settings(tmp_path / "nope.yaml", env={"MODE": "guess"})


def test_mismatched_dataset_raises(tmp_path):
    p = _write(tmp_path, "dataset:\n  temperatures: [1, 2]\n  sales: [1]\n")
    with pytest.raises(ValueError):
        load_settings(p, env={})


def test_check_mode_normalises():
    assert check_mode(" Fixed ") == "fixed"


def test_build_predictor_per_mode():
    s = Settings()
    assert s.build_predictor().mode == "computed"
    assert s.build_predictor("fixed").coefficients == DEFAULT_FIXED
    assert s.coefficients_for("computed") == s.build_predictor("computed").coefficients


def test_repo_config_matches_builtin_defaults():
    s = load_settings(env={})
    assert s.samples == DEFAULT_SAMPLES
    assert s.fixed == DEFAULT_FIXED
