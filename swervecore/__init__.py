"""
Command synthesis and odometry for a four-module swerve drivetrain.
Converts chassis motion requests into wrap-safe steering and drive setpoints for each module.
"""

__all__ = ["u", "DrivetrainController", "ControllerState", "ModulePosition", "SwerveKinematics", "SwerveOdometry"]

# fmt: off

# Initialize the unit registry before importing anything that relies on it
from pint import UnitRegistry
u = UnitRegistry()

from .kinematics import SwerveKinematics, ModulePosition
from .odometry import SwerveOdometry
from .controller import DrivetrainController, ControllerState
