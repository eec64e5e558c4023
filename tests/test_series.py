import pytest

from signalacq.buffers import IndexBuffer, LinIndexBuffer, ReadOnlyBuffer
from signalacq.series import FrameBufferSeries, Rect

Y_VALUES = [3.0, -1.0, 2.0, 0.0, 4.0]


@pytest.fixture
def series():
    return FrameBufferSeries(IndexBuffer(5), ReadOnlyBuffer(Y_VALUES))


def test_rect_normalized_swaps_edges():
    r = Rect(left=4.0, top=10.0, right=1.0, bottom=-2.0).normalized()
    assert r == Rect(left=1.0, top=-2.0, right=4.0, bottom=10.0)


def test_bounding_rect_covers_limits(series):
    r = series.bounding_rect()
    assert r.left == 0.0
    assert r.right == 4.0
    assert r.top == min(Y_VALUES)
    assert r.bottom == max(Y_VALUES)


def test_rect_of_interest_widens_by_one_sample(series):
    series.set_rect_of_interest(Rect(2.0, 0.0, 2.0, 1.0))
    assert series.size() == 3
    assert series.sample(0) == (1.0, Y_VALUES[1])
    assert series.sample(2) == (3.0, Y_VALUES[3])


def test_rect_of_interest_clamped_to_buffer_edges(series):
    series.set_rect_of_interest(Rect(0.0, 0.0, 4.0, 1.0))
    assert series.size() == 5
    assert [series.sample(i) for i in range(5)] == [
        (float(i), y) for i, y in enumerate(Y_VALUES)
    ]


def test_rect_of_interest_out_of_range_uses_full_buffer(series):
    series.set_rect_of_interest(Rect(-10.0, 0.0, 100.0, 1.0))
    assert series.size() == 5
    assert series.sample(4) == (4.0, Y_VALUES[4])


def test_set_x_changes_sample_x_values(series):
    series.set_x(LinIndexBuffer(5, 0.0, 8.0))
    series.set_rect_of_interest(Rect(-1.0, 0.0, 100.0, 1.0))
    assert series.sample(1) == (2.0, Y_VALUES[1])
    assert series.bounding_rect().right == 8.0