"""
titanic_pipeline

Titanic survival analysis: cleaning, feature engineering, a logistic
regression baseline and a grid-tuned random forest, with ROC/accuracy
reporting and diagnostic plots.
"""

__version__ = "0.1.0"
