"""Tests for the distance metrics."""

import math

import numpy as np
import pytest

from shapesig.data.records import FeatureRecord
from shapesig.distance import euclidean, manhattan, minkowski, squared_euclidean
from shapesig.exceptions import DimensionMismatchError, InvalidNormOrderError


class TestKnownDistances:
    """Distances between (1, 2, 3) and (4, 5, 6)."""

    def setup_method(self):
        self.a = [1.0, 2.0, 3.0]
        self.b = [4.0, 5.0, 6.0]

    def test_euclidean(self):
        assert euclidean(self.a, self.b) == pytest.approx(math.sqrt(27))
        assert euclidean(self.a, self.b) == pytest.approx(5.196, abs=1e-3)

    def test_manhattan(self):
        assert manhattan(self.a, self.b) == pytest.approx(9.0)

    def test_minkowski_order_3(self):
        assert minkowski(self.a, self.b, 3) == pytest.approx(81 ** (1 / 3))
        assert minkowski(self.a, self.b, 3) == pytest.approx(4.327, abs=1e-3)

    def test_minkowski_order_1_is_manhattan(self):
        assert minkowski(self.a, self.b, 1) == pytest.approx(manhattan(self.a, self.b))

    def test_minkowski_order_2_is_euclidean(self):
        assert minkowski(self.a, self.b, 2) == pytest.approx(euclidean(self.a, self.b))

    def test_squared_euclidean(self):
        assert squared_euclidean(self.a, self.b) == pytest.approx(27.0)

    def test_accepts_records(self):
        ra = FeatureRecord(self.a, label="01")
        rb = FeatureRecord(self.b, label="02")
        assert euclidean(ra, rb) == pytest.approx(euclidean(self.a, self.b))
        assert manhattan(ra, np.array(self.b)) == pytest.approx(9.0)


class TestDistanceProperties:
    """Symmetry and identity."""

    def test_same_vector_is_zero(self):
        v = [0.3, -1.2, 4.0]
        assert euclidean(v, v) == 0.0
        assert manhattan(v, v) == 0.0
        assert minkowski(v, v, 4) == 0.0

    def test_symmetric(self):
        np.random.seed(42)
        a = np.random.randn(8)
        b = np.random.randn(8)
        assert euclidean(a, b) == pytest.approx(euclidean(b, a))
        assert minkowski(a, b, 3) == pytest.approx(minkowski(b, a, 3))

    def test_empty_vectors(self):
        assert euclidean([], []) == 0.0
        assert manhattan([], []) == 0.0


class TestDistanceErrors:
    """Invalid inputs."""

    def test_dimension_mismatch(self):
        with pytest.raises(DimensionMismatchError, match="Vectors are not the same size"):
            euclidean([1.0, 2.0], [1.0, 2.0, 3.0])
        with pytest.raises(DimensionMismatchError):
            manhattan([1.0], [1.0, 2.0])
        with pytest.raises(DimensionMismatchError):
            minkowski([1.0], [1.0, 2.0], 3)

    def test_mismatch_is_value_error(self):
        with pytest.raises(ValueError):
            euclidean([1.0], [])

    @pytest.mark.parametrize("p", [0, -3])
    def test_non_positive_order(self, p):
        with pytest.raises(InvalidNormOrderError, match=f"p={p}"):
            minkowski([1.0, 2.0], [3.0, 4.0], p)


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
