"""Prediction and held-out metrics."""

from dataclasses import dataclass
from typing import List

import numpy as np
import pandas as pd
from sklearn.metrics import accuracy_score, classification_report, roc_auc_score, roc_curve

from titanic_pipeline.models import TrainedModel


@dataclass(frozen=True)
class RocCurve:
    fpr: np.ndarray
    tpr: np.ndarray
    thresholds: np.ndarray
    auc: float


@dataclass(frozen=True)
class Evaluation:
    name: str
    accuracy: float
    roc: RocCurve
    report: str
    y_true: np.ndarray
    y_pred: np.ndarray


def predict(model: TrainedModel, X: pd.DataFrame) -> np.ndarray:
    return model.pipeline.predict(X).astype(int)


def predict_proba(model: TrainedModel, X: pd.DataFrame) -> np.ndarray:
    """Probability of the positive (survived) class."""
    return model.pipeline.predict_proba(X)[:, 1]


def accuracy(y_true, y_pred) -> float:
    return float(accuracy_score(y_true, y_pred))


def roc(y_true, scores) -> RocCurve:
    fpr, tpr, thresholds = roc_curve(y_true, scores)
    return RocCurve(fpr=fpr, tpr=tpr, thresholds=thresholds, auc=float(roc_auc_score(y_true, scores)))


def evaluate(model: TrainedModel, X: pd.DataFrame, y: pd.Series) -> Evaluation:
    y_true = np.asarray(y).astype(int)
    y_pred = predict(model, X)
    return Evaluation(
        name=model.name,
        accuracy=accuracy(y_true, y_pred),
        roc=roc(y_true, predict_proba(model, X)),
        report=classification_report(y_true, y_pred, zero_division=0),
        y_true=y_true,
        y_pred=y_pred,
    )


def metrics_table(evaluations: List[Evaluation]) -> pd.DataFrame:
    return pd.DataFrame(
        {'Accuracy': [e.accuracy for e in evaluations], 'ROC AUC': [e.roc.auc for e in evaluations]},
        index=pd.Index([e.name for e in evaluations], name='Model'),
    )


def format_metrics(evaluations: List[Evaluation]) -> str:
    return metrics_table(evaluations).round(4).to_string()
