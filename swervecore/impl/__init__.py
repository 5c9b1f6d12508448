"""
Contains default implementations of components (actuators, sensors, modules). The user should instantiate these
when creating their drive base.
"""

__all__ = [
    "TalonSRXActuator",
    "SimulatedActuator",
    "NeutralMode",
    "PigeonGyro",
    "SimulatedGyro",
    "CoaxialSwerveModule",
]

from .motor import TalonSRXActuator, SimulatedActuator, NeutralMode
from .sensor import PigeonGyro, SimulatedGyro
from .system import CoaxialSwerveModule
