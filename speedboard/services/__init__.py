"""Service layer: submission, ranking and serialisation."""

from .ranker import Ranker, weighted_score
from .reconciler import Reconciler, Step, SubmitOutcome
from .results import record_to_dict
from .validation import normalize_player_name, validate_result

__all__ = [
    "Ranker",
    "Reconciler",
    "Step",
    "SubmitOutcome",
    "normalize_player_name",
    "record_to_dict",
    "validate_result",
    "weighted_score",
]
