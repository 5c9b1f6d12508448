import math
from abc import abstractmethod

from wpiutil import Sendable, SendableBuilder

from . import SendableABCMeta


class Gyro(Sendable, metaclass=SendableABCMeta):
    @abstractmethod
    def zero_heading(self):
        """Set the gyro sensor's current heading as zero"""
        raise NotImplementedError

    @property
    @abstractmethod
    def heading_degrees(self) -> float:
        """CCW+ chassis yaw angle in degrees. May be continuous or wrapped."""
        raise NotImplementedError

    @property
    def heading_radians(self) -> float:
        return math.radians(self.heading_degrees)

    def initSendable(self, builder: SendableBuilder):
        builder.setSmartDashboardType("Gyro")
        builder.addDoubleProperty("Value", lambda: self.heading_degrees, lambda _: None)
        builder.addDoubleProperty("Heading (rad)", lambda: self.heading_radians, lambda _: None)
