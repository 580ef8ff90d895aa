"""shapesig: KNN and K-Means classification of shape signatures."""

__version__ = "0.1.0"
