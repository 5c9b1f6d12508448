import itertools
import math

import pytest

from swervecore.angles import AngleStrategy, convert_angle, nearest_equivalent, normalize


CURRENT_ANGLES = (-1000.5, -540, -190, -180, -45, 0, 10, 179.9, 180, 360, 725, 10000)
TARGET_ANGLES = (-180, -135, -90, -1, 0, 45, 90, 135, 180, 270)


@pytest.mark.parametrize("current, target", list(itertools.product(CURRENT_ANGLES, TARGET_ANGLES)))
def test_nearest_equivalent_is_within_half_turn(current, target):
    result = nearest_equivalent(current, target)
    assert abs(current - result) <= 180
    assert math.remainder(result - target, 360) == pytest.approx(0, abs=1e-9)


@pytest.mark.parametrize("current, target", list(itertools.product(CURRENT_ANGLES, TARGET_ANGLES)))
def test_nearest_equivalent_is_idempotent(current, target):
    once = nearest_equivalent(current, target)
    assert nearest_equivalent(current, once) == once


def test_no_unwinding_after_many_turns():
    # A module that has spun two and a half turns should not turn back to reach "forward"
    assert nearest_equivalent(900, 0) == 1080
    assert nearest_equivalent(350, 0) == 360
    assert nearest_equivalent(-350, 0) == -360


def test_half_turn_always_picks_larger_candidate():
    assert nearest_equivalent(0, 180) == 180
    assert nearest_equivalent(0, -180) == 180
    assert nearest_equivalent(90, -90) == 270
    assert nearest_equivalent(90, 270) == 270


def test_nearest_strategy_never_reverses():
    result = normalize(0, 170)
    assert result.degrees == 170
    assert not result.reverse_drive


@pytest.mark.parametrize(
    "current, target, expected",
    [
        (0, 170, -10),
        (0, -170, 10),
        (0, 180, 0),
        (360, 200, 380),
    ],
)
def test_reduced_travel_flips_and_reverses(current, target, expected):
    result = normalize(current, target, AngleStrategy.REDUCED_TRAVEL)
    assert result.degrees == pytest.approx(expected)
    assert result.reverse_drive


@pytest.mark.parametrize("current, target", list(itertools.product(CURRENT_ANGLES, TARGET_ANGLES)))
def test_reduced_travel_turns_at_most_quarter_turn(current, target):
    result = normalize(current, target, AngleStrategy.REDUCED_TRAVEL)
    assert abs(result.degrees - current) <= 90 + 1e-9


def test_reduced_travel_keeps_small_turns():
    result = normalize(0, 60, AngleStrategy.REDUCED_TRAVEL)
    assert result.degrees == 60
    assert not result.reverse_drive


def test_convert_angle_rebases_request_frame():
    # 90 degrees in the request frame points forward, which is module angle 0
    assert convert_angle(0, 90).degrees == 0
    # 0 degrees points right, which is a clockwise quarter turn
    assert convert_angle(0, 0).degrees == -90
    assert convert_angle(350, 90).degrees == 360
