"""
This file defines constants related to your robot.  These constants include:

 * Physical constants (module spacing)

 * Mechanical constants (gear reduction ratios, motor inversion and sensor phase)

 * Electrical constants (CAN bus IDs)

 * Calibration constants (absolute encoder readings with each module facing forward)

 * Software constants (closed-loop gains, USB ID for driver joystick)
"""

import math
from collections import namedtuple

from swervecore import u

# Physical constants
phys_data = {
    # Distance between the wheels on the front or back
    "width": 16.5 * u.inch,
    # Distance between the wheels on the left or right
    "length": 20.6 * u.inch,
    "wheel_circumference": 4 * math.pi * u.inch,
}
PHYS = namedtuple("Data", phys_data.keys())(**phys_data)

# Mechanical constants
mech_data = {
    "drive_gear_ratio": 6,
    "angle_gear_ratio": 1,

    # Modules are keyed TL, TR, BL, BR
    "drive_inverted": {"TL": False, "TR": False, "BL": False, "BR": False},
    "angle_inverted": {"TL": False, "TR": True, "BL": True, "BR": True},
    "drive_sensor_phase": {"TL": True, "TR": True, "BL": True, "BR": True},
    "angle_sensor_phase": {"TL": False, "TR": True, "BL": True, "BR": True},
}
MECH = namedtuple("Data", mech_data.keys())(**mech_data)

# Electrical constants
elec_data = {
    "drive_CAN_ID": {"TL": 1, "TR": 3, "BL": 5, "BR": 7},
    "angle_CAN_ID": {"TL": 2, "TR": 4, "BL": 6, "BR": 8},
    "pigeon_CAN_ID": 9,
}
ELEC = namedtuple("Data", elec_data.keys())(**elec_data)

# Calibration constants
cal_data = {
    # Pulse width of each module's absolute encoder while facing forward
    "zero_reading": {"TL": 2212, "TR": 6730, "BL": 11327, "BR": 4605},
    "counts_per_degree": 4,
}
CAL = namedtuple("Data", cal_data.keys())(**cal_data)

# Operation constants
op_data = {
    # These maximum parameters reflect the maximum physically possible, not the
    # desired maximum limit.
    "max_speed": 13 * (u.ft / u.s),
    "max_angular_velocity": 4 * math.pi * (u.rad / u.s),
}
OP = namedtuple("Data", op_data.keys())(**op_data)

# Software constants
sw_data = {
    # field_sensitive: True if "forward" means "down the field"; False if
    # "forward" means "in the direction the robot is facing".
    "field_sensitive": True,

    # percent_output: True if the drive wheels follow a percent output, False if
    # they use closed-loop velocity control.
    "percent_output": True,

    # Steering position loop
    "angle_kP": 0.5,
    "angle_kI": 0.0,
    "angle_kD": 0.0,

    # Drive velocity loop
    "drive_kP": 0.0,
    "drive_kI": 0.0,
    "drive_kD": 0.0,
    "drive_kF": 0.2,

    "joystick_port": 0,
    "stop_button": 1,
    "field_sensitivity_button": 2,
}
SW = namedtuple("Data", sw_data.keys())(**sw_data)
