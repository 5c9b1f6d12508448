import logging
from abc import abstractmethod
from dataclasses import dataclass
from typing import NamedTuple, Optional

from wpimath.geometry import Translation2d
from wpiutil import Sendable

from . import SendableABCMeta
from .motor import Actuator, PIDFGains
from ..errors import ActuatorReadError, CalibrationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ModuleCalibration:
    # Raw absolute sensor reading measured with the module facing forward
    zero_reading: int
    counts_per_degree: float = 4
    # Readings outside this inclusive range mean the sensor is unplugged or faulty.
    # An unplugged encoder reads a pulse width of 0.
    valid_range: tuple[int, int] = (1, 16384)

    def in_range(self, raw_reading: int) -> bool:
        low, high = self.valid_range
        return low <= raw_reading <= high


@dataclass(frozen=True)
class ModuleCommand:
    angle_degrees: float
    speed: float
    is_velocity_mode: bool
    is_motion_profile_mode: bool


class ModuleState(NamedTuple):
    # Continuous angle, 0 is forward and CCW+. Not wrapped to [-180, 180].
    angle_degrees: float
    speed: float


class SwerveModule(Sendable, metaclass=SendableABCMeta):
    placement: Translation2d
    calibration: ModuleCalibration
    # Drive velocity in m/s that corresponds to full output
    max_velocity: float

    calibrated: bool = False
    last_command: Optional[ModuleCommand] = None
    _last_state: ModuleState = ModuleState(0, 0)
    _last_distance: float = 0.0

    def apply_command(self, angle_degrees: float, speed: float, is_velocity_mode: bool, is_motion_profile_mode: bool):
        """
        Command the module to hold an angle and drive at a speed

        :param angle_degrees: Continuous steering angle, already normalized against the module's current angle
        :param speed: Percent output in [-1, 1], or velocity in m/s when is_velocity_mode is set
        :param is_velocity_mode: Use closed loop velocity control (True) or percent output (False)
        :param is_motion_profile_mode: Use a motion profile (True) or a plain position loop (False) for steering
        """
        limit = self.max_velocity if is_velocity_mode else 1.0
        speed = min(max(speed, -limit), limit)

        self.last_command = ModuleCommand(angle_degrees, speed, is_velocity_mode, is_motion_profile_mode)
        self.desire_azimuth_angle(angle_degrees, is_motion_profile_mode)
        self.desire_drive_output(speed, is_velocity_mode)

    def read_state(self) -> ModuleState:
        """
        Read the module's continuous angle and drive velocity.
        If the actuators cannot be read, the previous reading is returned instead.
        """
        try:
            state = ModuleState(self.azimuth_angle, self.drive_velocity)
        except ActuatorReadError as e:
            logger.warning("Module at %s: stale state reused (%s)", self.placement, e)
            return self._last_state

        self._last_state = state
        return state

    def read_drive_distance(self) -> float:
        """Driven distance in metres, or the previous reading if the drive actuator cannot be read"""
        try:
            self._last_distance = self.drive_distance
        except ActuatorReadError as e:
            logger.warning("Module at %s: stale drive distance reused (%s)", self.placement, e)
        return self._last_distance

    def apply_calibration_offset(self, raw_reading: int, calibration_constant: int) -> float:
        """
        Zero the steering angle from an absolute sensor reading, so the module does not have to
        physically move to a reference position at startup.

        :param raw_reading: Current absolute sensor reading
        :param calibration_constant: Absolute sensor reading when the module faces forward
        :return: The starting angle in degrees
        """
        if not self.calibration.in_range(raw_reading):
            raise CalibrationError(f"absolute reading {raw_reading} outside {self.calibration.valid_range}")

        start = (raw_reading - calibration_constant) / self.calibration.counts_per_degree
        self.set_azimuth_position(start)
        self.calibrated = True
        return start

    def calibrate(self):
        """Zero the steering angle using the module's calibration. Faults leave the module uncalibrated."""
        try:
            start = self.apply_calibration_offset(self.read_absolute_sensor(), self.calibration.zero_reading)
        except (ActuatorReadError, CalibrationError) as e:
            self.calibrated = False
            logger.error("Module at %s could not be calibrated: %s", self.placement, e)
            return

        logger.info("Module at %s calibrated to %.2f degrees", self.placement, start)

    @abstractmethod
    def desire_azimuth_angle(self, angle_degrees: float, motion_profile: bool):
        """
        Turn the wheel

        :param angle_degrees: Desired continuous angle of the wheel
        :param motion_profile: Follow a motion profile instead of a plain position loop
        """
        raise NotImplementedError

    @abstractmethod
    def desire_drive_output(self, speed: float, velocity_mode: bool):
        """
        Drive the wheel

        :param speed: Percent output, or velocity in m/s when velocity_mode is set
        :param velocity_mode: Use closed loop (True) or open loop (False) control
        """
        raise NotImplementedError

    @abstractmethod
    def set_azimuth_position(self, angle_degrees: float):
        """Overwrite the steering actuator's current angle"""
        raise NotImplementedError

    @abstractmethod
    def read_absolute_sensor(self) -> int:
        """Raw reading of the steering axis' absolute sensor"""
        raise NotImplementedError

    @abstractmethod
    def configure_gains(self, azimuth_gains: PIDFGains, drive_gains: PIDFGains):
        raise NotImplementedError

    @property
    @abstractmethod
    def azimuth_actuator(self) -> Actuator:
        raise NotImplementedError

    @property
    @abstractmethod
    def drive_actuator(self) -> Actuator:
        raise NotImplementedError

    @property
    @abstractmethod
    def azimuth_angle(self) -> float:
        """CCW+ continuous wheel angle in degrees"""
        raise NotImplementedError

    @property
    @abstractmethod
    def drive_velocity(self) -> float:
        """Drive wheel velocity in m/s"""
        raise NotImplementedError

    @property
    @abstractmethod
    def drive_distance(self) -> float:
        """Driven distance in metres"""
        raise NotImplementedError
