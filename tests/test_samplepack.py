import pytest

from signalacq.samplepack import SamplePack


def test_dimensions():
    pack = SamplePack(4, 3)
    assert pack.num_samples() == 4
    assert pack.num_channels() == 3
    assert pack.has_x() is False


def test_data_initialised_to_zero():
    pack = SamplePack(5, 2)
    for ci in range(2):
        assert pack.data(ci) == [0.0] * 5


def test_data_is_mutable_per_channel():
    pack = SamplePack(2, 2)
    pack.data(1)[0] = 7.5
    assert pack.data(1) == [7.5, 0.0]
    assert pack.data(0) == [0.0, 0.0]


def test_x_data_present():
    pack = SamplePack(3, 1, True)
    assert pack.has_x() is True
    pack.x_data()[2] = 9.0
    assert pack.x_data() == [0.0, 0.0, 9.0]


def test_x_data_missing_raises():
    pack = SamplePack(3, 1)
    with pytest.raises(ValueError):
        pack.x_data()


@pytest.mark.parametrize("ns,nc", [(0, 1), (1, 0), (-1, 2)])
def test_invalid_dimensions(ns, nc):
    with pytest.raises(ValueError):
        SamplePack(ns, nc)


def test_channel_out_of_range():
    pack = SamplePack(2, 2)
    with pytest.raises(IndexError):
        pack.data(2)


def test_copy_is_independent():
    pack = SamplePack(2, 2, True)
    pack.data(0)[1] = 3.0
    pack.x_data()[0] = 1.5
    clone = pack.copy()
    assert clone.data(0) == pack.data(0)
    assert clone.x_data() == pack.x_data()
    clone.data(0)[1] = -1.0
    clone.x_data()[0] = -2.0
    assert pack.data(0)[1] == 3.0
    assert pack.x_data()[0] == 1.5


def test_copy_without_x():
    clone = SamplePack(1, 3).copy()
    assert clone.has_x() is False
    assert clone.num_channels() == 3