from dataclasses import dataclass
from enum import IntEnum

import phoenix5

from .. import conversions
from ..abstract.motor import Actuator, ControlMode, PIDFGains
from ..errors import ActuatorReadError


class NeutralMode(IntEnum):
    COAST = 0
    BRAKE = 1


_CONTROL_MODES = {
    ControlMode.PERCENT_OUTPUT: phoenix5.ControlMode.PercentOutput,
    ControlMode.VELOCITY: phoenix5.ControlMode.Velocity,
    ControlMode.POSITION: phoenix5.ControlMode.Position,
    ControlMode.MOTION_PROFILE: phoenix5.ControlMode.MotionMagic,
}

_NEUTRAL_MODES = {
    NeutralMode.COAST: phoenix5.NeutralMode.Coast,
    NeutralMode.BRAKE: phoenix5.NeutralMode.Brake,
}


class TalonSRXActuator(Actuator):
    @dataclass
    class Parameters:
        # Encoder counts per unit of the axis (per degree for steering, per metre for driving)
        counts_per_unit: float

        invert_motor: bool
        sensor_phase: bool

        neutral_mode: NeutralMode

        slot: int = 0

    def __init__(self, id_: int, parameters: Parameters):
        self._params = parameters
        self._motor = phoenix5.TalonSRX(id_)
        self._config()

    def _config(self):
        self._motor.configFactoryDefault()
        self._motor.configSelectedFeedbackSensor(phoenix5.FeedbackDevice.CTRE_MagEncoder_Relative)
        self._motor.setInverted(self._params.invert_motor)
        self._motor.setSensorPhase(self._params.sensor_phase)
        self._motor.setNeutralMode(_NEUTRAL_MODES[self._params.neutral_mode])
        self._motor.selectProfileSlot(self._params.slot, 0)

    def _check(self, what: str):
        error = self._motor.getLastError()
        if error != phoenix5.ErrorCode.OK:
            raise ActuatorReadError(f"Talon SRX {self._motor.getDeviceID()} {what}: {error}")

    def write_setpoint(self, value: float, mode: ControlMode):
        if mode is ControlMode.VELOCITY:
            value = conversions.to_native_velocity(value, self._params.counts_per_unit)
        elif mode is not ControlMode.PERCENT_OUTPUT:
            value = conversions.to_native_position(value, self._params.counts_per_unit)
        self._motor.set(_CONTROL_MODES[mode], value)

    def read_position(self) -> float:
        counts = self._motor.getSelectedSensorPosition()
        self._check("position")
        return conversions.from_native_position(counts, self._params.counts_per_unit)

    def read_velocity(self) -> float:
        counts = self._motor.getSelectedSensorVelocity()
        self._check("velocity")
        return conversions.from_native_velocity(counts, self._params.counts_per_unit)

    def read_absolute_sensor(self) -> int:
        # A magnetic encoder wired to the Talon reports its absolute position as a pulse width
        pulse_width = self._motor.getSensorCollection().getPulseWidthRiseToFallUs()
        self._check("absolute sensor")
        if pulse_width == 0:
            raise ActuatorReadError(f"Talon SRX {self._motor.getDeviceID()} has no absolute encoder attached")
        return pulse_width

    def set_position(self, value: float):
        self._motor.setSelectedSensorPosition(conversions.to_native_position(value, self._params.counts_per_unit))

    def configure_gains(self, gains: PIDFGains):
        slot = self._params.slot
        self._motor.config_kP(slot, gains.kP)
        self._motor.config_kI(slot, gains.kI)
        self._motor.config_kD(slot, gains.kD)
        self._motor.config_kF(slot, gains.kF)


class SimulatedActuator(Actuator):
    """Actuator that does nothing on a real robot, but follows its setpoints in simulation"""

    def __init__(self, max_velocity: float = 1.0, absolute_reading: int = 0):
        """
        :param max_velocity: Velocity reached at full percent output
        :param absolute_reading: Value reported by the simulated absolute sensor
        """
        self.max_velocity = max_velocity
        self.absolute_reading = absolute_reading
        # Reads fail while disconnected, like a motor controller dropping off the CAN bus
        self.connected = True

        self.mode = ControlMode.PERCENT_OUTPUT
        self.setpoint = 0.0
        self.gains = None

        self._position = 0.0
        self._velocity = 0.0

    def simulation_periodic(self, delta_time: float):
        self._position += self._velocity * delta_time

    def _check(self):
        if not self.connected:
            raise ActuatorReadError("simulated actuator disconnected")

    def write_setpoint(self, value: float, mode: ControlMode):
        self.mode = mode
        self.setpoint = value
        if mode is ControlMode.PERCENT_OUTPUT:
            self._velocity = value * self.max_velocity
        elif mode is ControlMode.VELOCITY:
            self._velocity = value
        else:
            self._position = value

    def read_position(self) -> float:
        self._check()
        return self._position

    def read_velocity(self) -> float:
        self._check()
        return self._velocity

    def read_absolute_sensor(self) -> int:
        self._check()
        return self.absolute_reading

    def set_position(self, value: float):
        self._position = value

    def configure_gains(self, gains: PIDFGains):
        self.gains = gains
