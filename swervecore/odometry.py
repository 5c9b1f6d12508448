import math
from typing import Callable, Optional, Sequence

import wpilib
from wpimath.geometry import Pose2d, Rotation2d, Translation2d

from .abstract.system import ModuleState


class SwerveOdometry:
    """
    Dead-reckoning pose estimate for a swerve drive base.

    Position is integrated from the averaged field-relative module velocities. Heading is never integrated
    from wheel data: it is taken from the gyro, which stays accurate while the wheels slip.
    """

    def __init__(self, initial_pose: Pose2d = Pose2d(), clock: Callable[[], float] = wpilib.Timer.getFPGATimestamp):
        """
        :param initial_pose: Pose of the robot at startup
        :param clock: Returns the current time in seconds
        """
        self._clock = clock
        self._position = initial_pose.translation()
        self._heading = initial_pose.rotation().radians()
        self._last_raw_heading: Optional[float] = None
        self._last_time: Optional[float] = None

    def update(self, heading_radians: float, module_states: Sequence[ModuleState]) -> Pose2d:
        """
        Integrate one cycle of sensor readings into the pose

        :param heading_radians: CCW+ gyro heading, continuous or wrapped
        :param module_states: Current state of every module
        :return: The new pose
        """
        now = self._clock()

        if self._last_raw_heading is not None:
            # Unwrap so that a gyro wrapping from +180 to -180 (or jumping a full turn) is not a rotation
            self._heading += math.remainder(heading_radians - self._last_raw_heading, 2 * math.pi)
        self._last_raw_heading = heading_radians

        if self._last_time is not None:
            heading = Rotation2d(self._heading)
            velocity = Translation2d()
            for state in module_states:
                angle = Rotation2d.fromDegrees(state.angle_degrees)
                velocity += Translation2d(float(state.speed), angle).rotateBy(heading)
            velocity /= len(module_states)

            self._position += velocity * (now - self._last_time)
        self._last_time = now

        return self.pose

    def reset(self, pose: Pose2d):
        """
        Reset the estimate to a new pose. Heading readings continue from the next update.

        :param pose: The new pose
        """
        self._position = pose.translation()
        self._heading = pose.rotation().radians()

    @property
    def pose(self) -> Pose2d:
        return Pose2d(self._position, Rotation2d(self._heading))

    @property
    def continuous_heading(self) -> float:
        """Unwrapped heading in radians"""
        return self._heading
