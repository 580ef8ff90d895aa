"""Feature records: a shape signature plus its provenance.

A record is produced by the loader (one per signature file) or built
directly in code, then consumed read-only by the classifiers.
"""

import numpy as np
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from .categories import get_category_name


@dataclass(frozen=True)
class FeatureRecord:
    """An immutable feature vector with label and metadata.

    Attributes:
        values: Feature values (fixed length within a dataset).
        label: Category code, e.g. ``"07"``.
        method: Descriptor method the vector was computed with (ART, E34, ...).
        sample: Sample number within the category.
    """
    values: Tuple[float, ...]
    label: Optional[str] = None
    method: Optional[str] = None
    sample: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "values", tuple(float(v) for v in self.values))

    @property
    def dimension(self) -> int:
        """Number of features."""
        return len(self.values)

    def to_array(self) -> np.ndarray:
        """Convert to a 1-D float numpy array."""
        return np.array(self.values, dtype=float)

    @classmethod
    def from_array(
        cls,
        arr: Sequence[float],
        label: Optional[str] = None,
        method: Optional[str] = None,
        sample: Optional[str] = None,
    ) -> "FeatureRecord":
        """Create from any 1-D array-like."""
        return cls(
            values=tuple(np.asarray(arr, dtype=float).ravel().tolist()),
            label=label,
            method=method,
            sample=sample,
        )

    def with_values(self, values: Sequence[float]) -> "FeatureRecord":
        """Copy with new values and the same label, method and sample."""
        return FeatureRecord(
            values=tuple(values),
            label=self.label,
            method=self.method,
            sample=self.sample,
        )

    def describe(self) -> str:
        """Two-line human readable summary (header, then the values)."""
        header = (
            f"Method : {self.method if self.method is not None else 'Unknown'}, "
            f"Label : {self.label if self.label is not None else 'Unknown'} "
            f"({get_category_name(self.label)}), "
            f"Sample : {self.sample if self.sample is not None else 'Unknown'}"
        )
        if not self.values:
            body = "No vector data available"
        else:
            body = ", ".join(repr(v) for v in self.values)
        return f"{header}\n{body}\n"

    def __str__(self) -> str:
        return self.describe()
