"""Service-level exceptions."""


class ProfileNotFoundError(LookupError):
    """Raised when an operation needs a profile that has not been created."""


class FoodNotFoundError(LookupError):
    """Raised when a food id is not present in a daily log."""


class AnalysisError(RuntimeError):
    """Raised when a meal could not be analyzed."""
