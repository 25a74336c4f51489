import os, sys
import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "..")))
from pinsheet.scoring import pins


@pytest.mark.parametrize(
    "standing",
    [[7, 10], [10, 7], [4, 6], [4, 6, 7, 10], [2, 7], [3, 10], [5, 7]],
)
def test_recognised_splits(standing):
    assert pins.is_split(standing) is True


@pytest.mark.parametrize(
    "standing",
    [[], [7], [1, 7, 10], [1, 2, 4, 10], [2, 4, 5], [6, 10], [7, 8]],
    ids=["empty", "single", "headpin", "washout", "cluster", "adjacent", "baby"],
)
def test_non_splits(standing):
    assert pins.is_split(standing) is False


def test_washouts_include_the_headpin():
    assert pins.is_washout([1, 2, 10])
    assert pins.is_washout([10, 4, 2, 1])
    assert pins.is_washout([1, 3, 7])
    assert not pins.is_washout([2, 10])
    assert not pins.is_washout([1])


@pytest.mark.parametrize(
    "standing, label",
    [
        ([], "Strike"),
        (list(range(1, 11)), "Gutter"),
        ([10], "10-pin"),
        ([7, 10], "7-10 Split"),
        ([6, 4], "4-6 Split"),
        ([10, 7, 6, 4], "Big Four"),
        ([5, 10], "5-10 Split"),
        ([1, 2, 4, 10], "1-2-4-10 Washout"),
        ([3, 6, 10], "3-6-10"),
    ],
)
def test_describe_leave(standing, label):
    assert pins.describe_leave(standing) == label


def test_leave_key_sorts_pins():
    assert pins.leave_key([10, 4, 7]) == "4-7-10"
    assert pins.leave_key([]) == ""


def test_knocked_down_keeps_rack_order():
    assert pins.knocked_down(pins.ALL_PINS, [7, 10]) == (1, 2, 3, 4, 5, 6, 8, 9)
    assert pins.knocked_down([7, 10], [7, 10]) == ()


def test_pocket_hit_needs_headpin_and_pocket_pin():
    assert pins.is_pocket_hit(pins.ALL_PINS, [])
    assert pins.is_pocket_hit(pins.ALL_PINS, [2, 4, 7])
    # brooklyn-side miss still counts: 1 and 2 down
    assert pins.is_pocket_hit(pins.ALL_PINS, [3, 6, 10])
    # headpin only
    assert not pins.is_pocket_hit(pins.ALL_PINS, [2, 3, 4, 5, 6, 7, 8, 9, 10])
    # missed the headpin entirely
    assert not pins.is_pocket_hit(pins.ALL_PINS, [1, 2, 4, 7])


def test_create_pin_leave():
    leave = pins.create_pin_leave([10, 7], True)
    assert leave.pins == (7, 10)
    assert leave.count == 2
    assert leave.is_split
    assert not leave.is_washout
    assert leave.is_converted
    assert leave.leave_type == "7-10 Split"


def test_pin_leave_is_immutable():
    leave = pins.create_pin_leave([10], False)
    with pytest.raises(AttributeError):
        leave.count = 3  # type: ignore[misc]
