"""
A collection of methods for converting between native Talon SRX units and standard units, like degrees and metres.
"""

# Counts per revolution of a CTRE magnetic encoder in relative (quadrature) mode
MAG_ENCODER_CPR = 4096
DEGREES_PER_ROTATION = 360
# Talon SRX velocities are reported per 100ms
VELOCITY_PERIODS_PER_SECOND = 10


def counts_per_degree(gear_ratio: float, cpr: int = MAG_ENCODER_CPR) -> float:
    return cpr * gear_ratio / DEGREES_PER_ROTATION


def counts_per_metre(circumference: float, gear_ratio: float, cpr: int = MAG_ENCODER_CPR) -> float:
    return cpr * gear_ratio / circumference


def to_native_position(value: float, counts_per_unit: float) -> float:
    return value * counts_per_unit


def from_native_position(counts: float, counts_per_unit: float) -> float:
    return counts / counts_per_unit


def to_native_velocity(value: float, counts_per_unit: float) -> float:
    return value * counts_per_unit / VELOCITY_PERIODS_PER_SECOND


def from_native_velocity(counts: float, counts_per_unit: float) -> float:
    return counts * VELOCITY_PERIODS_PER_SECOND / counts_per_unit
