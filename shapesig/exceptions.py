"""Exceptions raised by shapesig."""


class ShapeSigError(Exception):
    """Base class for shapesig errors."""


class DimensionMismatchError(ShapeSigError, ValueError):
    """Two feature vectors of different lengths were compared."""


class InvalidNormOrderError(ShapeSigError, ValueError):
    """Minkowski distance requested with a non-positive norm order."""


class UntrainedModelError(ShapeSigError, RuntimeError):
    """A classifier was queried before ``train`` was called."""

    def __init__(self, message: str = "Training data not set. Call train() before predict()."):
        super().__init__(message)
