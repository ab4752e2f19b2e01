from app.ai_core.classification.classifier import (
    QueryClassifier,
    build_classification_query,
    match_label,
)

__all__ = ["QueryClassifier", "build_classification_query", "match_label"]
