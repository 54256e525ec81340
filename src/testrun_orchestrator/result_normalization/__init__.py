"""Result normalization domain exports."""

from .result_models import CaseOutcome, CaseStatus, FailureDetail, ResultModel
from .result_normalizer import normalize_results

__all__ = [
    "CaseOutcome",
    "CaseStatus",
    "FailureDetail",
    "ResultModel",
    "normalize_results",
]
