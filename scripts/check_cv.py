#!/usr/bin/env python3
# check_cv.py
# Quick k-fold check of both model configurations on the whole training file.
import argparse

import numpy as np

from titanic_pipeline import config
from titanic_pipeline.data import load_passengers, check_columns
from titanic_pipeline.features import build_features, fit_imputation_values
from titanic_pipeline.models import cross_validate_model, train_logistic, train_random_forest
from titanic_pipeline.split import make_cv

parser = argparse.ArgumentParser(description="Cross-validate LR and tuned RF on train.csv")
parser.add_argument("--train", type=str, default=config.TRAIN_PATH, help="Path to train.csv")
parser.add_argument("--folds", type=int, default=config.N_FOLDS)
parser.add_argument("--scoring", choices=["accuracy", "roc_auc"], default=config.SCORING)
args = parser.parse_args()

train = load_passengers(args.train)
check_columns(train, require_target=True)
train = build_features(train, fit_imputation_values(train))
X = train[config.FEATURES]
y = train[config.TARGET]
cv = make_cv(args.folds)

for model in (train_logistic(X, y), train_random_forest(X, y, cv=cv, scoring=args.scoring)):
    scores = cross_validate_model(model, X, y, cv=cv, scoring=args.scoring)
    print(f"{model.name} params={model.params}")
    print("CV scores:", np.round(scores, 4), "mean:", round(scores.mean(), 4))
