from wpimath.geometry import Translation2d
from wpiutil import SendableBuilder
from pint import Quantity

from .. import u
from ..abstract.motor import Actuator, ControlMode, PIDFGains
from ..abstract.system import SwerveModule, ModuleCalibration


class CoaxialSwerveModule(SwerveModule):
    def __init__(
        self,
        drive: Actuator,
        azimuth: Actuator,
        placement: Translation2d,
        calibration: ModuleCalibration,
        max_velocity: Quantity,
    ):
        super().__init__()

        self._drive = drive
        self._azimuth = azimuth
        self.placement = placement
        self.calibration = calibration
        self.max_velocity = max_velocity.m_as(u.m / u.s)

    @property
    def drive_actuator(self) -> Actuator:
        return self._drive

    @property
    def azimuth_actuator(self) -> Actuator:
        return self._azimuth

    def desire_azimuth_angle(self, angle_degrees: float, motion_profile: bool):
        mode = ControlMode.MOTION_PROFILE if motion_profile else ControlMode.POSITION
        self._azimuth.write_setpoint(angle_degrees, mode)

    def desire_drive_output(self, speed: float, velocity_mode: bool):
        mode = ControlMode.VELOCITY if velocity_mode else ControlMode.PERCENT_OUTPUT
        self._drive.write_setpoint(speed, mode)

    def set_azimuth_position(self, angle_degrees: float):
        self._azimuth.set_position(angle_degrees)

    def read_absolute_sensor(self) -> int:
        return self._azimuth.read_absolute_sensor()

    def configure_gains(self, azimuth_gains: PIDFGains, drive_gains: PIDFGains):
        self._azimuth.configure_gains(azimuth_gains)
        self._drive.configure_gains(drive_gains)

    @property
    def azimuth_angle(self) -> float:
        return self._azimuth.read_position()

    @property
    def drive_velocity(self) -> float:
        return self._drive.read_velocity()

    @property
    def drive_distance(self) -> float:
        return self._drive.read_position()

    def _desired(self, field: str) -> float:
        return getattr(self.last_command, field) if self.last_command else 0

    def initSendable(self, builder: SendableBuilder):
        # fmt: off
        builder.setSmartDashboardType("CoaxialSwerveModule")
        builder.addDoubleProperty("Drive Velocity (mps)", lambda: self.read_state().speed, lambda _: None)
        builder.addDoubleProperty("Azimuth Position (deg)", lambda: self.read_state().angle_degrees, lambda _: None)
        builder.addBooleanProperty("Calibrated", lambda: self.calibrated, lambda _: None)
        builder.addDoubleProperty("Desired Drive Output", lambda: self._desired("speed"), lambda _: None)
        builder.addDoubleProperty("Desired Azimuth Position (deg)", lambda: self._desired("angle_degrees"), lambda _: None)
        # fmt: on
