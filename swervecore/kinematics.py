import enum
from typing import NamedTuple, Optional, Sequence

from pint import Quantity
from wpimath.geometry import Rotation2d, Translation2d
from wpimath.kinematics import ChassisSpeeds, SwerveDrive4Kinematics, SwerveModuleState

from . import u

# Module vectors use a frame where 0 degrees points right, while module states use a frame where 0 points forward
_VECTOR_FRAME_OFFSET = 90
_ZERO_SPEED = 1e-9


class ModulePosition(enum.IntEnum):
    TOP_LEFT = 0
    TOP_RIGHT = 1
    BACK_LEFT = 2
    BACK_RIGHT = 3


class ModuleVector(NamedTuple):
    """A requested module motion. The angle is in degrees, where 0 points right and 90 points forward (CCW+)."""

    magnitude: float
    angle: float

    @classmethod
    def from_state(cls, state: SwerveModuleState) -> "ModuleVector":
        return cls(state.speed, state.angle.degrees() + _VECTOR_FRAME_OFFSET)

    def to_state(self) -> SwerveModuleState:
        return SwerveModuleState(float(self.magnitude), Rotation2d.fromDegrees(self.angle - _VECTOR_FRAME_OFFSET))


class SwerveKinematics:
    """
    Converts a desired chassis motion into one velocity vector per swerve module.

    Every module's velocity is the chassis translation plus the rotational contribution ω × r,
    where r is the module's placement relative to the centre of the chassis.
    """

    def __init__(self, placements: Sequence[Translation2d]):
        """
        :param placements: Module placements in ModulePosition order, where +x is forward and +y is left
        """
        if len(placements) != len(ModulePosition):
            raise ValueError(f"expected {len(ModulePosition)} module placements, got {len(placements)}")

        self.placements = tuple(placements)
        self._kinematics = SwerveDrive4Kinematics(*self.placements)
        self._last_angles: tuple[float, ...] = (_VECTOR_FRAME_OFFSET,) * len(ModulePosition)

    @classmethod
    def rectangular(cls, width: Quantity, length: Quantity) -> "SwerveKinematics":
        """
        Place the four modules at the corners of a rectangle centred on the chassis

        :param width: Distance between the left and right modules
        :param length: Distance between the front and back modules
        """
        half_width = width.m_as(u.m) / 2
        half_length = length.m_as(u.m) / 2
        return cls(
            (
                Translation2d(half_length, half_width),
                Translation2d(half_length, -half_width),
                Translation2d(-half_length, half_width),
                Translation2d(-half_length, -half_width),
            )
        )

    def to_module_vectors(
        self,
        speeds: ChassisSpeeds,
        hold_angles: Optional[Sequence[float]] = None,
        max_speed: Optional[float] = None,
    ) -> tuple[ModuleVector, ...]:
        """
        Calculate the vector each module must follow to move the chassis at a set of speeds

        :param speeds: Robot-relative speeds, vx forward and vy left in m/s, omega CCW+ in rad/s
        :param hold_angles: Vector angles to keep when the chassis is not moving.
               Defaults to the angles of the previous call.
        :param max_speed: If given, scale all module speeds down together so none exceeds this speed
        :return: One vector per module in ModulePosition order
        """
        states = self._kinematics.toSwerveModuleStates(speeds)

        if all(abs(state.speed) < _ZERO_SPEED for state in states):
            angles = tuple(hold_angles) if hold_angles is not None else self._last_angles
            return tuple(ModuleVector(0, angle) for angle in angles)

        if max_speed is not None:
            states = SwerveDrive4Kinematics.desaturateWheelSpeeds(states, max_speed)

        vectors = tuple(ModuleVector.from_state(state) for state in states)
        self._last_angles = tuple(vector.angle for vector in vectors)
        return vectors

    def to_chassis_speeds(self, vectors: Sequence[ModuleVector]) -> ChassisSpeeds:
        """Calculate the chassis speeds produced by a set of module vectors"""
        return self._kinematics.toChassisSpeeds(tuple(vector.to_state() for vector in vectors))
