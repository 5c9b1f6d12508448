"""
Contains interfaces for components used in a swerve drive base. These are the actuators, the orientation sensor,
and the swerve module itself. Implementations can be found in the impl module, or the user may define their own.
"""

__all__ = [
    "SendableABCMeta",
    "Actuator",
    "ControlMode",
    "PIDFGains",
    "Gyro",
    "SwerveModule",
    "ModuleCalibration",
    "ModuleCommand",
    "ModuleState",
]

from abc import ABCMeta
from wpiutil import Sendable


class SendableABCMeta(ABCMeta, type(Sendable)):
    pass


from .motor import Actuator, ControlMode, PIDFGains
from .sensor import Gyro
from .system import SwerveModule, ModuleCalibration, ModuleCommand, ModuleState
