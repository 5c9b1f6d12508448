import pytest

from swervecore import u, DrivetrainController, ModulePosition, SwerveKinematics
from swervecore.abstract import ModuleCalibration, PIDFGains
from swervecore.impl import CoaxialSwerveModule, SimulatedActuator, SimulatedGyro

MAX_SPEED = 4 * (u.m / u.s)
MAX_ANGULAR_VELOCITY = 2 * (u.rad / u.s)
WIDTH = 0.5 * u.m
LENGTH = 0.6 * u.m
ZERO_READING = 2212


class FakeClock:
    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


def make_module(placement, absolute_reading=ZERO_READING, zero_reading=ZERO_READING):
    return CoaxialSwerveModule(
        SimulatedActuator(max_velocity=MAX_SPEED.m_as(u.m / u.s)),
        SimulatedActuator(absolute_reading=absolute_reading),
        placement,
        ModuleCalibration(zero_reading),
        MAX_SPEED,
    )


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def gyro():
    return SimulatedGyro()


@pytest.fixture
def modules():
    placements = SwerveKinematics.rectangular(WIDTH, LENGTH).placements
    return {position: make_module(placements[position]) for position in ModulePosition}


@pytest.fixture
def drivetrain(modules, gyro, clock):
    return DrivetrainController(
        modules,
        gyro,
        MAX_SPEED,
        MAX_ANGULAR_VELOCITY,
        azimuth_gains=PIDFGains(0.5),
        drive_gains=PIDFGains(0.0, kF=0.2),
        field_sensitive=False,
        clock=clock,
    )
