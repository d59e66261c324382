"""
Capability matrix and feature classification.
"""

from .classifier import (
    Classified,
    FeatureClassifier,
    FeatureVerdict,
    StatementVerdict,
    classify_statement,
)
from .matrix import CapabilityMatrix, RewriteRule, Verdict, VerdictStatus, default_matrix

__all__ = [
    "CapabilityMatrix",
    "Classified",
    "FeatureClassifier",
    "FeatureVerdict",
    "RewriteRule",
    "StatementVerdict",
    "Verdict",
    "VerdictStatus",
    "classify_statement",
    "default_matrix",
]
