import wpilib
from commands2.button import JoystickButton
from wpimath.geometry import Translation2d

from constants import PHYS, MECH, ELEC, CAL, OP, SW
from swervecore import u, DrivetrainController, ModulePosition, SwerveKinematics
from swervecore.abstract import ModuleCalibration, PIDFGains
from swervecore.impl import CoaxialSwerveModule, NeutralMode, PigeonGyro, TalonSRXActuator
from swervecore.conversions import counts_per_degree, counts_per_metre
from swervecore.subsystem import DrivetrainSubsystem

KEYS = {
    ModulePosition.TOP_LEFT: "TL",
    ModulePosition.TOP_RIGHT: "TR",
    ModulePosition.BACK_LEFT: "BL",
    ModulePosition.BACK_RIGHT: "BR",
}


class RobotContainer:
    def __init__(self):
        placements = SwerveKinematics.rectangular(PHYS.width, PHYS.length).placements

        # When defining module placements, +x values represent moving toward the front of the robot, and
        # +y values represent moving toward the left of the robot
        modules = {position: self._build_module(key, placements[position]) for position, key in KEYS.items()}

        controller = DrivetrainController(
            modules,
            PigeonGyro(ELEC.pigeon_CAN_ID),
            OP.max_speed,
            OP.max_angular_velocity,
            azimuth_gains=PIDFGains(SW.angle_kP, SW.angle_kI, SW.angle_kD),
            drive_gains=PIDFGains(SW.drive_kP, SW.drive_kI, SW.drive_kD, SW.drive_kF),
            field_sensitive=SW.field_sensitive,
        )
        self.drivetrain = DrivetrainSubsystem(controller)

        self.stick = wpilib.Joystick(SW.joystick_port)

        self.drivetrain.setDefaultCommand(
            self.drivetrain.teleop_command(
                lambda: deadband(-self.stick.getRawAxis(1), 0.05),
                lambda: deadband(-self.stick.getRawAxis(0), 0.05),
                lambda: deadband(-self.stick.getRawAxis(4), 0.1),  # Invert for CCW+
                SW.percent_output,
            )
        )

        self.configure_button_bindings()

    def configure_button_bindings(self):
        JoystickButton(self.stick, SW.stop_button).onTrue(self.drivetrain.stop_command())
        JoystickButton(self.stick, SW.field_sensitivity_button).onTrue(self.drivetrain.toggle_field_sensitivity_command())

    @staticmethod
    def _build_module(key: str, placement: Translation2d) -> CoaxialSwerveModule:
        circumference = PHYS.wheel_circumference.m_as(u.m)

        drive = TalonSRXActuator(
            ELEC.drive_CAN_ID[key],
            TalonSRXActuator.Parameters(
                counts_per_unit=counts_per_metre(circumference, MECH.drive_gear_ratio),
                invert_motor=MECH.drive_inverted[key],
                sensor_phase=MECH.drive_sensor_phase[key],
                neutral_mode=NeutralMode.COAST,
            ),
        )
        azimuth = TalonSRXActuator(
            ELEC.angle_CAN_ID[key],
            TalonSRXActuator.Parameters(
                counts_per_unit=counts_per_degree(MECH.angle_gear_ratio),
                invert_motor=MECH.angle_inverted[key],
                sensor_phase=MECH.angle_sensor_phase[key],
                neutral_mode=NeutralMode.BRAKE,
            ),
        )

        calibration = ModuleCalibration(CAL.zero_reading[key], CAL.counts_per_degree)
        return CoaxialSwerveModule(drive, azimuth, placement, calibration, OP.max_speed)


def deadband(value, band):
    return value if abs(value) > band else 0
