"""
Steering angle normalization.

Steering actuators run a position loop on a continuous (never wrapped) angle. A raw target angle must therefore
be moved into the same 360 degree window as the module's current angle, otherwise the loop would unwind the
module through one or more full turns to reach an equivalent heading.
"""

import enum
import math
from typing import NamedTuple

# Requested vectors measure 0 degrees along the rightward axis, while module angle 0 faces the front of the chassis
REQUEST_FRAME_OFFSET = -90


class AngleStrategy(enum.Enum):
    # Move to the equivalent target angle closest to the current angle
    NEAREST = enum.auto()
    # Additionally, turn at most 90 degrees by reversing the drive direction when that is shorter
    REDUCED_TRAVEL = enum.auto()


class NormalizedAngle(NamedTuple):
    degrees: float
    reverse_drive: bool


def sign(num):
    return 1 if num > 0 else -1 if num < 0 else 0


def nearest_equivalent(current: float, target: float) -> float:
    """
    Find the angle equivalent to target (mod 360) that lies in (current - 180, current + 180].

    When target is exactly 180 degrees away, the larger of the two candidates is always chosen.

    :param current: Continuous current angle in degrees
    :param target: Target angle in degrees
    :return: Equivalent target angle in degrees
    """
    turns = math.floor((current - target + 180) / 360)
    return target + 360 * turns


def normalize(current: float, target: float, strategy: AngleStrategy = AngleStrategy.NEAREST) -> NormalizedAngle:
    """
    Normalize a target angle against a module's current continuous angle.

    :param current: Continuous current angle in degrees
    :param target: Target angle in degrees (module frame, 0 is forward)
    :param strategy: How far the module is allowed to turn
    :return: The angle to command, and whether the drive output must be reversed to reach it
    """
    target = nearest_equivalent(current, target)

    if strategy is AngleStrategy.REDUCED_TRAVEL:
        # A module facing backwards and driving in reverse moves the chassis the same way
        delta = target - current
        if abs(delta) > 90:
            return NormalizedAngle(target - 180 * sign(delta), True)

    return NormalizedAngle(target, False)


def convert_angle(current: float, requested: float, strategy: AngleStrategy = AngleStrategy.NEAREST) -> NormalizedAngle:
    """
    Convert a requested vector angle into the angle the steering actuator should hold.

    :param current: Continuous current angle of the module in degrees
    :param requested: Requested angle in degrees, where 0 points right and 90 points forward
    :param strategy: How far the module is allowed to turn
    """
    return normalize(current, requested + REQUEST_FRAME_OFFSET, strategy)
