"""Budget evaluation package."""

from expense_tracker.evaluation.evaluator import budget_alert, evaluate
from expense_tracker.metrics.primitives import InvalidConfigurationError

__all__ = ["InvalidConfigurationError", "budget_alert", "evaluate"]
