# You must either:
#   1) Install swervecore into the robot's environment OR
#   2) Copy swervecore into the robot project

import commands2

from container import RobotContainer


class Robot(commands2.TimedCommandRobot):
    def robotInit(self):
        self.container = RobotContainer()

    def disabledInit(self) -> None:
        self.container.drivetrain.controller.stop_all_drive()
