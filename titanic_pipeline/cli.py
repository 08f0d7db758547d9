"""
End-to-end Titanic run:
- Loads train.csv and test.csv
- Cleaning and feature engineering
- Stratified train/hold-out split and k-fold assignment
- Trains Logistic Regression and a grid-tuned Random Forest
- Prints accuracy / ROC AUC, writes plots
- Writes submission.csv (PassengerId, Survived) and optionally the fitted forest

Usage:
    titanic-pipeline --train train.csv --test test.csv
"""

import argparse
import os
import sys
import warnings

import joblib
import matplotlib
matplotlib.use("Agg")
import numpy as np
import pandas as pd
from sklearn.base import clone

from titanic_pipeline import config, plots
from titanic_pipeline.data import load_datasets
from titanic_pipeline.evaluate import evaluate, format_metrics
from titanic_pipeline.features import build_features, fit_imputation_values, missing_counts
from titanic_pipeline.models import (cross_validate_model, feature_importances, train_logistic,
                                     train_random_forest)
from titanic_pipeline.split import assign_folds, make_cv, split_train_test

STEPS = 6


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Titanic survival pipeline (Logistic Regression + Random Forest).")
    parser.add_argument("--train", type=str, default=config.TRAIN_PATH, help="Path to train.csv")
    parser.add_argument("--test", type=str, default=config.TEST_PATH, help="Path to test.csv")
    parser.add_argument("--out-dir", type=str, default=config.OUT_DIR, help="Directory for plots and submission")
    parser.add_argument("--folds", type=int, default=config.N_FOLDS, help="Number of cross-validation folds")
    parser.add_argument("--scoring", choices=["accuracy", "roc_auc"], default=config.SCORING,
                        help="Metric maximized by the Random Forest grid search")
    parser.add_argument("--seed", type=int, default=config.RANDOM_STATE, help="Random seed")
    parser.add_argument("--no-plots", action="store_true", help="Skip writing plot images")
    parser.add_argument("--save-model", action="store_true", help="Save the final forest pipeline under --out-dir")
    return parser


def step(n: int, msg: str):
    print(f"\n[{n}/{STEPS}] {msg}")


def run(argv=None) -> int:
    args = build_parser().parse_args(argv)
    warnings.filterwarnings("ignore")

    # 1) Load data
    step(1, "Loading data...")
    try:
        train, test = load_datasets(args.train, args.test)
    except (FileNotFoundError, ValueError) as e:
        print(f"[ERROR] {e}")
        return 1
    print(f"Train shape: {train.shape}, Test shape: {test.shape}")
    print(f"Survival rate in training data: {train[config.TARGET].mean():.2%}")

    # 2) Cleaning / feature engineering
    step(2, "Cleaning and feature engineering...")
    values = fit_imputation_values(train, test)
    train_fe = build_features(train, values)
    test_fe = build_features(test, values)
    print(f"Fill values: Embarked={values['Embarked']}, Age (overall)={values['Age']:.1f}, Fare={values['Fare']:.2f}")
    print("Median age by title:", {k: round(v, 1) for k, v in values['AgeByTitle'].items()})
    for name, df in [("train", train_fe), ("test", test_fe)]:
        left = missing_counts(df)
        if left.any():
            print(f"Warning: missing values remain in {name}:\n{left[left > 0].to_string()}")

    # 3) Split
    step(3, "Splitting (stratified hold-out and k folds)...")
    part, hold = split_train_test(train_fe, random_state=args.seed)
    folds = assign_folds(part[config.TARGET], k=args.folds, random_state=args.seed)
    print(f"Train/Hold-out: {part.shape[0]} / {hold.shape[0]} rows, survival "
          f"{part[config.TARGET].mean():.3f} / {hold[config.TARGET].mean():.3f}")
    print("Fold sizes:", folds.value_counts().sort_index().to_dict())

    X_train, y_train = part[config.FEATURES], part[config.TARGET]
    X_hold, y_hold = hold[config.FEATURES], hold[config.TARGET]
    cv = make_cv(args.folds, args.seed)

    # 4) Train
    step(4, "Training models...")
    print("Logistic Regression baseline...")
    lr = train_logistic(X_train, y_train, random_state=args.seed)
    print(f"Random Forest GridSearchCV ({args.folds}-fold, scoring={args.scoring})...")
    rf = train_random_forest(X_train, y_train, cv=cv, scoring=args.scoring, random_state=args.seed)
    print("Best RF params:", rf.params)
    print(f"Best RF CV score: {rf.cv_score:.4f}")

    # 5) Evaluate
    step(5, "Evaluating on hold-out partition...")
    evaluations = [evaluate(lr, X_hold, y_hold), evaluate(rf, X_hold, y_hold)]
    for ev in evaluations:
        print(f"\n{ev.name}: accuracy {ev.accuracy:.4f}, ROC AUC {ev.roc.auc:.4f}")
        print(ev.report)
    print(format_metrics(evaluations))

    for model in (lr, rf):
        scores = cross_validate_model(model, X_train, y_train, cv=cv, scoring=args.scoring)
        print(f"{model.name} CV {args.scoring}:", np.round(scores, 4), "mean:", np.round(np.mean(scores), 4))

    importances = feature_importances(rf)
    print("\nTop feature importances (Random Forest):")
    print(importances.head(20).to_string())

    if not args.no_plots:
        paths = [
            plots.plot_survival_overview(train_fe, args.out_dir),
            plots.plot_roc_curves(evaluations, args.out_dir),
            plots.plot_confusion_matrices(evaluations, args.out_dir),
            plots.plot_feature_importances(importances.head(20), args.out_dir),
        ]
        print("\nSaved plots:")
        for p in paths:
            print(" ", p)

    # 6) Final model on the whole training file, predict test file
    step(6, "Training final forest on full training data and creating submission...")
    final_model = clone(rf.pipeline)
    final_model.fit(train_fe[config.FEATURES], train_fe[config.TARGET])
    submission = pd.DataFrame({
        config.ID_COL: test_fe[config.ID_COL],
        config.TARGET: final_model.predict(test_fe[config.FEATURES]).astype(int)
    })
    os.makedirs(args.out_dir, exist_ok=True)
    submission_path = os.path.join(args.out_dir, config.SUBMISSION_FN)
    submission.to_csv(submission_path, index=False)
    print(f"Saved submission file: {submission_path} (shape: {submission.shape})")

    if args.save_model:
        model_path = os.path.join(args.out_dir, config.FINAL_MODEL_FN)
        os.makedirs(os.path.dirname(model_path), exist_ok=True)
        joblib.dump({'pipeline': final_model, 'params': rf.params, 'imputation': values}, model_path)
        print(f"Saved model pipeline to: {model_path}")

    print("\nAll done!")
    return 0


def main():
    sys.exit(run())


if __name__ == "__main__":
    main()
