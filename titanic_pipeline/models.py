"""
Model trainers.

Both trainers wrap the same preprocessing ColumnTransformer in a
scikit-learn Pipeline, so a TrainedModel can be fed the engineered
feature frame directly.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

import numpy as np
import pandas as pd
from sklearn.base import clone
from sklearn.compose import ColumnTransformer
from sklearn.ensemble import RandomForestClassifier
from sklearn.impute import SimpleImputer
from sklearn.linear_model import LogisticRegression
from sklearn.model_selection import GridSearchCV, cross_val_score
from sklearn.pipeline import Pipeline
from sklearn.preprocessing import OneHotEncoder, StandardScaler

from titanic_pipeline import config


@dataclass(frozen=True)
class TrainedModel:
    name: str
    pipeline: Pipeline
    params: Dict = field(default_factory=dict)
    cv_score: Optional[float] = None


def build_preprocessor(num_cols: Optional[List[str]] = None, cat_cols: Optional[List[str]] = None) -> ColumnTransformer:
    num_cols = num_cols or config.NUM_COLS
    cat_cols = cat_cols or config.CAT_COLS
    num_pipeline = Pipeline([
        ('imputer', SimpleImputer(strategy='median')),
        ('scaler', StandardScaler())
    ])
    cat_pipeline = Pipeline([
        ('imputer', SimpleImputer(strategy='most_frequent')),
        ('onehot', OneHotEncoder(handle_unknown='ignore', sparse_output=False))
    ])
    return ColumnTransformer([
        ('num', num_pipeline, num_cols),
        ('cat', cat_pipeline, cat_cols)
    ], remainder='drop')


def train_logistic(X: pd.DataFrame, y: pd.Series, params: Optional[Dict] = None,
                   random_state: int = config.RANDOM_STATE) -> TrainedModel:
    """Fit the logistic regression baseline."""
    params = dict(config.LR_PARAMS if params is None else params)
    pipe = Pipeline([
        ('preprocessor', build_preprocessor()),
        ('clf', LogisticRegression(random_state=random_state, **params))
    ])
    pipe.fit(X, y)
    return TrainedModel(name="Logistic Regression", pipeline=pipe, params=params)


def train_random_forest(X: pd.DataFrame, y: pd.Series, param_grid: Optional[Dict] = None, cv=config.N_FOLDS,
                        scoring: str = config.SCORING,
                        random_state: int = config.RANDOM_STATE) -> TrainedModel:
    """
    Grid-search the forest over param_grid with cross-validation on (X, y),
    then refit the winning configuration once on all of X.

    cv is a fold count or a splitter (see split.make_cv). scoring is any
    scikit-learn scorer name, normally 'accuracy' or 'roc_auc'.
    """
    param_grid = param_grid or config.RF_PARAM_GRID
    pipe = Pipeline([
        ('preprocessor', build_preprocessor()),
        ('clf', RandomForestClassifier(random_state=random_state, n_jobs=-1))
    ])
    gs = GridSearchCV(pipe, param_grid=param_grid, cv=cv, scoring=scoring,
                      n_jobs=-1, refit=True)
    gs.fit(X, y)
    params = {k.replace('clf__', '', 1): v for k, v in gs.best_params_.items()}
    return TrainedModel(name="Random Forest", pipeline=gs.best_estimator_,
                        params=params, cv_score=float(gs.best_score_))


def cross_validate_model(model: TrainedModel, X: pd.DataFrame, y: pd.Series, cv=config.N_FOLDS,
                         scoring: str = config.SCORING) -> np.ndarray:
    """Per-fold scores of the model's configuration, refitted on each training fold."""
    return cross_val_score(clone(model.pipeline), X, y, cv=cv, scoring=scoring, n_jobs=-1)


def feature_importances(model: TrainedModel, top: Optional[int] = None) -> pd.Series:
    """Forest importances indexed by the processed (one-hot) feature names, largest first."""
    clf = model.pipeline.named_steps['clf']
    if not hasattr(clf, 'feature_importances_'):
        raise ValueError(f"{model.name} has no feature importances")
    names = model.pipeline.named_steps['preprocessor'].get_feature_names_out()
    imp = pd.Series(clf.feature_importances_, index=names).sort_values(ascending=False)
    return imp.head(top) if top else imp
