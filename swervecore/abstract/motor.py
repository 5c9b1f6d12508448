import enum
from abc import abstractmethod
from dataclasses import dataclass
from typing import Protocol


class ControlMode(enum.Enum):
    PERCENT_OUTPUT = enum.auto()
    VELOCITY = enum.auto()
    POSITION = enum.auto()
    MOTION_PROFILE = enum.auto()


@dataclass(frozen=True)
class PIDFGains:
    kP: float
    kI: float = 0.0
    kD: float = 0.0
    kF: float = 0.0


class Actuator(Protocol):
    """
    One motor controller of a swerve module (either the steering or the drive axis) and the sensors wired to it.

    Positions and velocities are in the axis' own units: continuous degrees for a steering axis,
    metres and m/s for a drive axis. Reads raise ActuatorReadError when no fresh value is available.
    """

    @abstractmethod
    def write_setpoint(self, value: float, mode: ControlMode):
        """
        Command the motor controller

        :param value: Percent output in [-1, 1], a velocity, or a position, depending on mode
        :param mode: How the motor controller interprets value
        """
        raise NotImplementedError

    @abstractmethod
    def read_position(self) -> float:
        """Position of the axis"""
        raise NotImplementedError

    @abstractmethod
    def read_velocity(self) -> float:
        """Velocity of the axis"""
        raise NotImplementedError

    @abstractmethod
    def read_absolute_sensor(self) -> int:
        """Raw count of the absolute position sensor attached to this motor controller"""
        raise NotImplementedError

    @abstractmethod
    def set_position(self, value: float):
        """
        Overwrite the current position of the axis without moving it

        :param value: The new position
        """
        raise NotImplementedError

    @abstractmethod
    def configure_gains(self, gains: PIDFGains):
        """Load closed-loop gains into the motor controller"""
        raise NotImplementedError
