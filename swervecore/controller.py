"""The drivetrain controller and the state it relies on"""

import enum
import logging
import math
from typing import Callable, Iterable, Mapping, Sequence

import wpilib
from pint import Quantity
from wpimath.geometry import Pose2d, Rotation2d
from wpimath.kinematics import ChassisSpeeds

from . import u
from .abstract.motor import Actuator, PIDFGains
from .abstract.sensor import Gyro
from .abstract.system import SwerveModule, ModuleState
from .angles import REQUEST_FRAME_OFFSET, AngleStrategy, convert_angle
from .errors import ActuatorReadError
from .kinematics import ModulePosition, ModuleVector, SwerveKinematics
from .odometry import SwerveOdometry

logger = logging.getLogger(__name__)


class ControllerState(enum.Enum):
    UNINITIALIZED = enum.auto()
    CALIBRATING = enum.auto()
    READY = enum.auto()


class DrivetrainController:
    """
    Drives four swerve modules from chassis motion requests or per-module vectors, and tracks the robot's pose.

    Field sensitive control is an option available for controlling movement. It uses the gyro to lock the robot's
    translational movement to the field's axes: when a driver pushes "forward" on the stick, the robot moves
    forward relative to the field rather than relative to the chassis heading.
    """

    def __init__(
        self,
        modules: Mapping[ModulePosition, SwerveModule],
        gyro: Gyro,
        max_velocity: Quantity,
        max_angular_velocity: Quantity,
        azimuth_gains: PIDFGains,
        drive_gains: PIDFGains,
        angle_strategy: AngleStrategy = AngleStrategy.NEAREST,
        field_sensitive: bool = True,
        clock: Callable[[], float] = wpilib.Timer.getFPGATimestamp,
    ):
        """
        Construct and calibrate a swerve drivetrain.

        :param modules: One swerve module for every ModulePosition
        :param gyro: A gyro sensor that provides a CCW+ heading reading of the chassis
        :param max_velocity: The actual maximum velocity of a drive wheel
        :param max_angular_velocity: The actual maximum angular (turning) velocity of the robot
        :param azimuth_gains: Closed-loop gains for the steering actuators
        :param drive_gains: Closed-loop gains for the drive actuators
        :param angle_strategy: How far modules may turn before reversing their drive direction instead
        :param field_sensitive: Whether chassis motion requests start out field relative
        :param clock: Returns the current time in seconds, used for odometry
        """
        self.state = ControllerState.UNINITIALIZED

        missing = set(ModulePosition) - set(modules)
        if missing:
            raise ValueError(f"no swerve module given for {sorted(p.name for p in missing)}")

        self._modules = {position: modules[position] for position in ModulePosition}
        self._gyro = gyro
        self.max_velocity: float = max_velocity.m_as(u.m / u.s)
        self.max_angular_velocity: float = max_angular_velocity.m_as(u.rad / u.s)
        self.angle_strategy = angle_strategy
        self.use_motion_profile = False
        self._field_sensitive = field_sensitive
        self._heading_degrees = 0.0

        self._kinematics = SwerveKinematics([module.placement for module in self._modules.values()])

        self.state = ControllerState.CALIBRATING
        self._calibrate(azimuth_gains, drive_gains)

        self._odometry = SwerveOdometry(Pose2d(), clock)
        self.state = ControllerState.READY

    def _calibrate(self, azimuth_gains: PIDFGains, drive_gains: PIDFGains):
        # Modules that fail calibration stay uncalibrated, the drivetrain still starts
        self.apply_to_all(lambda module: module.calibrate())
        self.apply_to_all(lambda module: module.configure_gains(azimuth_gains, drive_gains))

        # Zero heading at startup to set "forward" direction
        self._gyro.zero_heading()
        self._read_heading()

    def apply_to_all(self, action: Callable[[SwerveModule], None]):
        """
        Call a function on every swerve module, for example:
        drivetrain.apply_to_all(lambda module: module.calibrate())
        """
        for module in self._modules.values():
            action(module)

    def apply_to_all_angle(self, action: Callable[[Actuator], None]):
        """Call a function on the steering actuator of every swerve module"""
        for module in self._modules.values():
            action(module.azimuth_actuator)

    def apply_to_all_drive(self, action: Callable[[Actuator], None]):
        """Call a function on the drive actuator of every swerve module"""
        for module in self._modules.values():
            action(module.drive_actuator)

    def set_field_sensitivity(self, field_sensitive: bool):
        self._field_sensitive = field_sensitive

    def toggle_field_sensitivity(self):
        self._field_sensitive = not self._field_sensitive

    @property
    def is_field_sensitive(self) -> bool:
        return self._field_sensitive

    def submit_chassis_motion(self, vx: float, vy: float, omega: float, is_percent_output: bool):
        """
        Drive the chassis. Each input is a fraction in [-1, 1] of the maximum (angular) velocity.

        :param vx: Forward velocity
        :param vy: Leftward velocity
        :param omega: CCW+ rotational velocity
        :param is_percent_output: Drive the wheels with percent output (True) or closed loop velocity control (False)
        """
        vx *= self.max_velocity
        vy *= self.max_velocity
        omega *= self.max_angular_velocity

        speeds = (
            ChassisSpeeds.fromFieldRelativeSpeeds(vx, vy, omega, self.heading)
            if self._field_sensitive
            else ChassisSpeeds(vx, vy, omega)
        )

        states = self._read_module_states()
        # Modules hold their current angle when the chassis is not moving
        hold_angles = [state.angle_degrees - REQUEST_FRAME_OFFSET for state in states]
        vectors = self._kinematics.to_module_vectors(speeds, hold_angles, self.max_velocity)

        fractions = [ModuleVector(vector.magnitude / self.max_velocity, vector.angle) for vector in vectors]
        self._dispatch(fractions, states, is_percent_output)

    def submit_per_module_vectors(self, vectors: Sequence[ModuleVector], is_percent_output: bool):
        """
        Drive each module along its own vector

        :param vectors: One vector per module in ModulePosition order. Magnitudes are fractions of the maximum
               velocity and angles are in degrees, where 0 points right and 90 points forward
        :param is_percent_output: Drive the wheels with percent output (True) or closed loop velocity control (False)
        """
        if len(vectors) != len(self._modules):
            raise ValueError(f"expected {len(self._modules)} module vectors, got {len(vectors)}")
        self._dispatch(vectors, self._read_module_states(), is_percent_output)

    def stop_all_drive(self):
        """Stop all drive motors while holding the current angle"""
        for module, state in zip(self._modules.values(), self._read_module_states()):
            module.apply_command(state.angle_degrees, 0, False, False)

    def _dispatch(self, vectors: Iterable[ModuleVector], states: Sequence[ModuleState], is_percent_output: bool):
        commands = []
        for module, vector, state in zip(self._modules.values(), vectors, states):
            speed = vector.magnitude if is_percent_output else vector.magnitude * self.max_velocity
            angle = convert_angle(state.angle_degrees, vector.angle, self.angle_strategy)
            if angle.reverse_drive:
                speed = -speed
            commands.append((module, angle.degrees, speed))

        # Every module receives a command from the same cycle
        for module, angle_degrees, speed in commands:
            module.apply_command(angle_degrees, speed, not is_percent_output, self.use_motion_profile)

    def periodic(self):
        """Update odometry from fresh module states and heading. Call once per cycle."""
        self._odometry.update(math.radians(self._read_heading()), self._read_module_states())

    def _read_heading(self) -> float:
        try:
            self._heading_degrees = self._gyro.heading_degrees
        except ActuatorReadError as e:
            logger.warning("Gyro heading unavailable, reusing %.2f degrees (%s)", self._heading_degrees, e)
        return self._heading_degrees

    def _read_module_states(self) -> tuple[ModuleState, ...]:
        return tuple(module.read_state() for module in self._modules.values())

    @property
    def modules(self) -> Mapping[ModulePosition, SwerveModule]:
        return self._modules

    @property
    def module_states(self) -> tuple[ModuleState, ...]:
        """A tuple of the swerve modules' states (continuous angle and wheel velocity) in ModulePosition order"""
        return self._read_module_states()

    @property
    def pose(self) -> Pose2d:
        """The robot's pose on the field (position and heading)"""
        return self._odometry.pose

    @property
    def heading(self) -> Rotation2d:
        """The robot's facing direction, read from the gyro (or the previous reading if the gyro cannot be read)"""
        return Rotation2d.fromDegrees(self._read_heading())

    @property
    def average_drive_distance(self) -> float:
        """Mean driven distance of the four drive wheels in metres. Diagnostic only, odometry does not use it."""
        distances = [module.read_drive_distance() for module in self._modules.values()]
        return sum(distances) / len(distances)

    def reset_odometry(self, pose: Pose2d):
        """
        Reset the drive base's pose to a new one

        :param pose: The new pose
        """
        self._odometry.reset(pose)

