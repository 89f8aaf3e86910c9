from __future__ import annotations

import numpy as np
import pytest

from pathnet_toolkit.network.types import Direction, DistanceMetric, check_weight_dtype


def test_direction_is_row() -> None:
    assert Direction.ROW.is_row()
    assert not Direction.COLUMN.is_row()


def test_direction_parse() -> None:
    assert Direction.parse("Column") is Direction.COLUMN
    assert Direction.parse(Direction.ROW) is Direction.ROW
    with pytest.raises(ValueError):
        Direction.parse("diagonal")


@pytest.mark.parametrize(
    "metric,expected",
    [
        (DistanceMetric.EUCLIDEAN, 5.0),
        (DistanceMetric.MANHATTAN, 7.0),
    ],
)
def test_distance_values(metric, expected) -> None:
    assert metric.distance([0.0, 0.0], [3.0, 4.0]) == pytest.approx(expected)


def test_cosine_distance() -> None:
    m = DistanceMetric.COSINE
    assert m.distance([1.0, 0.0], [2.0, 0.0]) == pytest.approx(0.0)
    assert m.distance([1.0, 0.0], [0.0, 1.0]) == pytest.approx(1.0)
    assert m.distance([0.0, 0.0], [0.0, 1.0]) == 1.0


def test_distance_shape_mismatch() -> None:
    with pytest.raises(ValueError):
        DistanceMetric.EUCLIDEAN.distance([1.0], [1.0, 2.0])


def test_metric_parse() -> None:
    assert DistanceMetric.parse("MANHATTAN") is DistanceMetric.MANHATTAN
    with pytest.raises(ValueError):
        DistanceMetric.parse("chebyshev")


def test_check_weight_dtype() -> None:
    assert check_weight_dtype("float64") == np.dtype(np.float64)
    assert check_weight_dtype(np.int32) == np.dtype(np.int32)
    for bad in (bool, np.complex128, object):
        with pytest.raises(TypeError):
            check_weight_dtype(bad)
