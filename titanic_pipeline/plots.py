"""
Diagnostic plots. Every function saves one PNG under out_dir and returns
its path; figures are closed after saving so batch runs don't pile them up.
The matplotlib backend is left to the caller (the runner selects Agg).
"""

import os
from typing import List

import matplotlib.pyplot as plt
import pandas as pd
import seaborn as sns
from sklearn.metrics import confusion_matrix

from titanic_pipeline import config
from titanic_pipeline.evaluate import Evaluation


def _save(fig, out_dir: str, filename: str) -> str:
    os.makedirs(out_dir, exist_ok=True)
    path = os.path.join(out_dir, filename)
    fig.tight_layout()
    fig.savefig(path, dpi=100)
    plt.close(fig)
    return path


def plot_roc_curves(evaluations: List[Evaluation], out_dir: str, filename: str = "roc_curves.png") -> str:
    fig, ax = plt.subplots(figsize=(7, 6))
    for ev in evaluations:
        ax.plot(ev.roc.fpr, ev.roc.tpr, label=f"{ev.name} (AUC = {ev.roc.auc:.3f})")
    ax.plot([0, 1], [0, 1], linestyle='--', color='grey', label='Chance')
    ax.set_xlabel('False Positive Rate (1 - specificity)')
    ax.set_ylabel('True Positive Rate (sensitivity)')
    ax.set_title('ROC Curve Comparison')
    ax.legend(loc='lower right')
    ax.grid(alpha=0.3)
    return _save(fig, out_dir, filename)


def plot_confusion_matrices(evaluations: List[Evaluation], out_dir: str,
                            filename: str = "confusion_matrices.png") -> str:
    fig, axes = plt.subplots(1, len(evaluations), figsize=(5 * len(evaluations), 4), squeeze=False)
    for ax, ev in zip(axes[0], evaluations):
        cm = confusion_matrix(ev.y_true, ev.y_pred, labels=[0, 1])
        sns.heatmap(cm, annot=True, fmt='d', cmap='Blues', cbar=False, ax=ax,
                    xticklabels=['Died', 'Survived'], yticklabels=['Died', 'Survived'])
        ax.set_xlabel('Predicted')
        ax.set_ylabel('Actual')
        ax.set_title(f"{ev.name}\naccuracy {ev.accuracy:.3f}")
    return _save(fig, out_dir, filename)


def plot_feature_importances(importances: pd.Series, out_dir: str,
                             filename: str = "feature_importances.png") -> str:
    fig, ax = plt.subplots(figsize=(8, max(3, 0.35 * len(importances))))
    sns.barplot(x=importances.values, y=importances.index, color='skyblue', ax=ax)
    ax.set_xlabel('Importance')
    ax.set_ylabel('')
    ax.set_title('Random Forest Feature Importances')
    return _save(fig, out_dir, filename)


def plot_survival_overview(df: pd.DataFrame, out_dir: str, filename: str = "survival_overview.png") -> str:
    """Survival rate by title, class, sex and age bucket of a cleaned training frame."""
    fig, axes = plt.subplots(2, 2, figsize=(12, 9))
    for ax, col in zip(axes.ravel(), ['Title', 'Pclass', 'Sex', 'AgeBin']):
        rates = df.groupby(col)[config.TARGET].mean()
        sns.barplot(x=rates.index.astype(str), y=rates.values, color='orange', alpha=0.8, ax=ax)
        ax.set_title(f"Survival rate by {col}")
        ax.set_xlabel(col)
        ax.set_ylabel('Survival rate')
        ax.set_ylim(0, 1)
    return _save(fig, out_dir, filename)
