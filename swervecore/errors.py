class SwerveError(Exception):
    """Base class for drivetrain faults"""


class ActuatorReadError(SwerveError):
    """A sensor or actuator did not return a fresh reading this cycle"""


class CalibrationError(SwerveError):
    """The absolute angle sensor could not be used to zero a module"""
