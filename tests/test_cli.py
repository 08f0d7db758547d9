import os

import pandas as pd
import pytest

from titanic_pipeline import cli, config


@pytest.fixture(autouse=True)
def small_search(monkeypatch, small_grid):
    monkeypatch.setattr(config, 'RF_PARAM_GRID', small_grid)


def test_full_run(csv_files, tmp_path, raw_test, capsys):
    out_dir = str(tmp_path / "out")
    train_path, test_path = csv_files
    rc = cli.run(["--train", train_path, "--test", test_path, "--out-dir", out_dir,
                  "--folds", "3", "--save-model"])
    assert rc == 0

    stdout = capsys.readouterr().out
    assert "[6/6]" in stdout
    assert "Best RF params" in stdout
    assert "ROC AUC" in stdout

    sub = pd.read_csv(os.path.join(out_dir, config.SUBMISSION_FN))
    assert list(sub.columns) == ['PassengerId', 'Survived']
    assert sub['PassengerId'].tolist() == raw_test['PassengerId'].tolist()
    assert set(sub['Survived']) <= {0, 1}

    for name in ("roc_curves.png", "confusion_matrices.png", "feature_importances.png", "survival_overview.png"):
        assert os.path.exists(os.path.join(out_dir, name))
    assert os.path.exists(os.path.join(out_dir, config.FINAL_MODEL_FN))


def test_run_repeatable(csv_files, tmp_path):
    train_path, test_path = csv_files
    subs = []
    for name in ("a", "b"):
        out_dir = str(tmp_path / name)
        assert cli.run(["--train", train_path, "--test", test_path, "--out-dir", out_dir,
                        "--folds", "3", "--no-plots", "--scoring", "roc_auc"]) == 0
        assert not os.path.exists(os.path.join(out_dir, "roc_curves.png"))
        subs.append(pd.read_csv(os.path.join(out_dir, config.SUBMISSION_FN)))
    pd.testing.assert_frame_equal(subs[0], subs[1])


def test_missing_file(tmp_path, capsys):
    rc = cli.run(["--train", str(tmp_path / "missing.csv"), "--test", str(tmp_path / "t.csv"),
                  "--out-dir", str(tmp_path)])
    assert rc == 1
    assert "[ERROR] Required file not found" in capsys.readouterr().out


def test_missing_target_column(csv_files, tmp_path, capsys):
    train_path, test_path = csv_files
    # train file without labels
    rc = cli.run(["--train", test_path, "--test", test_path, "--out-dir", str(tmp_path)])
    assert rc == 1
    assert "Survived" in capsys.readouterr().out
