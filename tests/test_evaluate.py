import numpy as np
import pytest

from titanic_pipeline import config
from titanic_pipeline.evaluate import accuracy, evaluate, format_metrics, metrics_table, predict, predict_proba, roc
from titanic_pipeline.models import train_logistic
from titanic_pipeline.split import split_train_test


def test_accuracy():
    assert accuracy([1, 0, 1, 1], [1, 0, 0, 1]) == 0.75


def test_roc_perfect_and_inverted():
    y = np.array([0, 0, 1, 1])
    perfect = roc(y, [0.1, 0.2, 0.8, 0.9])
    assert perfect.auc == 1.0
    assert perfect.fpr[0] == 0 and perfect.tpr[-1] == 1
    assert roc(y, [0.9, 0.8, 0.2, 0.1]).auc == 0.0


def test_roc_is_monotonic():
    rng = np.random.default_rng(0)
    y = rng.integers(0, 2, 50)
    curve = roc(y, rng.random(50))
    assert (np.diff(curve.fpr) >= 0).all()
    assert (np.diff(curve.tpr) >= 0).all()


@pytest.fixture
def lr_eval(train_fe):
    train, test = split_train_test(train_fe)
    model = train_logistic(train[config.FEATURES], train[config.TARGET])
    return model, test


def test_predict(lr_eval):
    model, test = lr_eval
    labels = predict(model, test[config.FEATURES])
    proba = predict_proba(model, test[config.FEATURES])
    assert set(labels) <= {0, 1}
    assert ((proba >= 0) & (proba <= 1)).all()
    np.testing.assert_array_equal(labels, (proba > 0.5).astype(int))


def test_evaluate(lr_eval):
    model, test = lr_eval
    ev = evaluate(model, test[config.FEATURES], test[config.TARGET])
    assert ev.name == model.name
    assert ev.accuracy == pytest.approx(np.mean(ev.y_pred == test[config.TARGET].to_numpy()))
    # sex drives survival in the fixture data
    assert ev.roc.auc > 0.6
    assert "precision" in ev.report


def test_format_metrics(lr_eval):
    model, test = lr_eval
    ev = evaluate(model, test[config.FEATURES], test[config.TARGET])
    table = metrics_table([ev])
    assert list(table.columns) == ['Accuracy', 'ROC AUC']
    text = format_metrics([ev])
    assert "Logistic Regression" in text and "ROC AUC" in text
