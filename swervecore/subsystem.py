"""Adapters that let the command-based framework run a DrivetrainController"""

from typing import Callable

import commands2
import wpilib
from wpiutil import SendableBuilder

from .controller import DrivetrainController


class DrivetrainSubsystem(commands2.Subsystem):
    """
    A Subsystem that runs the drivetrain's periodic odometry update and publishes its telemetry.

    The controller is constructed by the robot and handed to this subsystem, so several independent
    drivetrains can exist side by side (e.g., in tests or simulation).
    """

    def __init__(self, controller: DrivetrainController):
        super().__init__()

        self.controller = controller

        for position, module in controller.modules.items():
            wpilib.SmartDashboard.putData(f"Module {position.name}", module)

        # Field to plot the robot pose
        self.field = wpilib.Field2d()
        wpilib.SmartDashboard.putData(self.field)

    def periodic(self):
        self.controller.periodic()

        # Visualize robot position on field
        self.field.setRobotPose(self.controller.pose)

    def initSendable(self, builder: SendableBuilder):
        super().initSendable(builder)
        builder.addBooleanProperty(
            "Field Sensitive",
            lambda: self.controller.is_field_sensitive,
            self.controller.set_field_sensitivity,
        )
        builder.addDoubleProperty("Average Drive Distance (m)", lambda: self.controller.average_drive_distance, lambda _: None)

    def teleop_command(
        self,
        translation: Callable[[], float],
        strafe: Callable[[], float],
        rotation: Callable[[], float],
        is_percent_output: bool,
    ) -> "_TeleOpCommand":
        """
        Construct a command that drives the robot using joystick (or other) inputs

        :param translation: A method that returns the desired +X (forward/backward) velocity as a percentage in [-1, 1]
        :param strafe: A method that returns the desired +Y (left/right) velocity as a percentage in [-1, 1]
        :param rotation: A method that returns the desired CCW+ rotational velocity as a percentage in [-1, 1]
        :param is_percent_output: Drive the wheels with percent output (True) or closed loop velocity control (False)
        :return: The command
        """
        return _TeleOpCommand(self, translation, strafe, rotation, is_percent_output)

    def stop_command(self) -> commands2.Command:
        """Construct a command that stops every wheel while holding the module angles"""
        return commands2.InstantCommand(self.controller.stop_all_drive, self)

    def toggle_field_sensitivity_command(self) -> commands2.Command:
        return commands2.InstantCommand(self.controller.toggle_field_sensitivity)


class _TeleOpCommand(commands2.Command):
    def __init__(
        self,
        drivetrain: DrivetrainSubsystem,
        translation: Callable[[], float],
        strafe: Callable[[], float],
        rotation: Callable[[], float],
        is_percent_output: bool,
    ):
        super().__init__()
        self.addRequirements(drivetrain)
        self.setName("TeleOp Command")

        self._controller = drivetrain.controller
        self.translation = translation
        self.strafe = strafe
        self.rotation = rotation
        self.percent_output = is_percent_output

    def execute(self):
        self._controller.submit_chassis_motion(
            self.translation(),
            self.strafe(),
            self.rotation(),
            self.percent_output,
        )

    def end(self, interrupted: bool):
        self._controller.stop_all_drive()

    def initSendable(self, builder: SendableBuilder):
        super().initSendable(builder)
        builder.addBooleanProperty(
            "Percent Output", lambda: self.percent_output, lambda val: setattr(self, "percent_output", val)
        )
