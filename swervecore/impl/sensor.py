import phoenix5
import phoenix5.sensors
import wpilib

from ..abstract.sensor import Gyro
from ..errors import ActuatorReadError


class PigeonGyro(Gyro):
    def __init__(self, id_: int, invert: bool = False):
        super().__init__()

        self._gyro = phoenix5.sensors.PigeonIMU(id_)
        self._gyro.configFactoryDefault()
        self.invert = invert

        wpilib.SmartDashboard.putData("Pigeon IMU", self)

    def zero_heading(self):
        self._gyro.setYaw(0)

    @property
    def heading_degrees(self) -> float:
        # The Pigeon accumulates yaw continuously rather than wrapping it
        yaw = self._gyro.getYaw()
        error = self._gyro.getLastError()
        if error != phoenix5.ErrorCode.OK:
            raise ActuatorReadError(f"Pigeon IMU yaw: {error}")
        if self.invert:
            yaw = -yaw
        return yaw


class SimulatedGyro(Gyro):
    """Gyro whose heading is set directly through raw_heading"""

    def __init__(self, heading_degrees: float = 0):
        super().__init__()
        self.raw_heading = heading_degrees
        self.connected = True
        self._zero = 0.0

    def zero_heading(self):
        self._zero = self.raw_heading

    @property
    def heading_degrees(self) -> float:
        if not self.connected:
            raise ActuatorReadError("simulated gyro disconnected")
        return self.raw_heading - self._zero
