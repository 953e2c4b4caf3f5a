# ==============================================
# TOPIC 3: CLASSIFICATION
# ==============================================
#
# Applies a model's Schema to a Frame:
#
#   Step 1 (Passes):       Info → Grouped → Plain, every consumed column
#                          index recorded in one ConsumptionTracker
#   Step 2 (Completeness): every column consumed or ignored, else reject
#
# Modules:
# --------
# - observation.py  → Observation (metric name + labels + value)
# - classifier.py   → Classifier, ConsumptionTracker, ClassificationResult
# - validator.py    → CompletenessValidator
#
# ==============================================

from .observation import Observation
from .classifier import Classifier, ClassificationResult, ConsumptionTracker
from .validator import CompletenessValidator

__all__ = [
    "Observation",
    "Classifier",
    "ClassificationResult",
    "ConsumptionTracker",
    "CompletenessValidator",
]
