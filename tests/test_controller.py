import pytest
from wpimath.geometry import Translation2d

from swervecore import ControllerState, DrivetrainController, ModulePosition
from swervecore.abstract import ControlMode, PIDFGains
from swervecore.angles import AngleStrategy
from swervecore.impl import SimulatedGyro
from swervecore.kinematics import ModuleVector

from conftest import MAX_ANGULAR_VELOCITY, MAX_SPEED, make_module


def azimuth_setpoints(drivetrain):
    return [module.azimuth_actuator.setpoint for module in drivetrain.modules.values()]


def drive_setpoints(drivetrain):
    return [module.drive_actuator.setpoint for module in drivetrain.modules.values()]


def set_angles(drivetrain, angles):
    for module, angle in zip(drivetrain.modules.values(), angles):
        module.azimuth_actuator.set_position(angle)


def test_startup_calibrates_and_configures(drivetrain, gyro):
    assert drivetrain.state is ControllerState.READY
    for module in drivetrain.modules.values():
        assert module.calibrated
        assert module.azimuth_angle == 0
        assert module.azimuth_actuator.gains == PIDFGains(0.5)
        assert module.drive_actuator.gains == PIDFGains(0.0, kF=0.2)
    assert gyro.heading_degrees == 0


def test_startup_zeroes_gyro(modules, clock):
    gyro = SimulatedGyro(heading_degrees=123)
    drivetrain = DrivetrainController(
        modules, gyro, MAX_SPEED, MAX_ANGULAR_VELOCITY, PIDFGains(0.5), PIDFGains(0), clock=clock
    )
    assert drivetrain.heading.degrees() == pytest.approx(0)


def test_calibration_fault_does_not_stop_startup(modules, gyro, clock):
    placement = modules[ModulePosition.BACK_LEFT].placement
    modules[ModulePosition.BACK_LEFT] = make_module(placement, absolute_reading=-1)

    drivetrain = DrivetrainController(
        modules, gyro, MAX_SPEED, MAX_ANGULAR_VELOCITY, PIDFGains(0.5), PIDFGains(0), clock=clock
    )

    assert drivetrain.state is ControllerState.READY
    assert not drivetrain.modules[ModulePosition.BACK_LEFT].calibrated
    assert drivetrain.modules[ModulePosition.TOP_LEFT].calibrated


def test_requires_every_module(modules, gyro, clock):
    del modules[ModulePosition.TOP_RIGHT]
    with pytest.raises(ValueError):
        DrivetrainController(modules, gyro, MAX_SPEED, MAX_ANGULAR_VELOCITY, PIDFGains(0.5), PIDFGains(0), clock=clock)


def test_forward_percent_output(drivetrain):
    drivetrain.submit_chassis_motion(0.5, 0, 0, True)

    assert drive_setpoints(drivetrain) == pytest.approx([0.5] * 4)
    assert azimuth_setpoints(drivetrain) == pytest.approx([0] * 4, abs=1e-9)
    for module in drivetrain.modules.values():
        assert module.drive_actuator.mode is ControlMode.PERCENT_OUTPUT
        assert module.azimuth_actuator.mode is ControlMode.POSITION


def test_forward_velocity_mode(drivetrain):
    drivetrain.submit_chassis_motion(0.5, 0, 0, False)

    assert drive_setpoints(drivetrain) == pytest.approx([2.0] * 4)
    for module in drivetrain.modules.values():
        assert module.drive_actuator.mode is ControlMode.VELOCITY


def test_motion_profile_steering(drivetrain):
    drivetrain.use_motion_profile = True
    drivetrain.submit_chassis_motion(0.5, 0, 0, True)
    for module in drivetrain.modules.values():
        assert module.azimuth_actuator.mode is ControlMode.MOTION_PROFILE


def test_steering_takes_shortest_path(drivetrain):
    set_angles(drivetrain, [350, -350, 710, 0])
    drivetrain.submit_chassis_motion(0.5, 0, 0, True)
    assert azimuth_setpoints(drivetrain) == pytest.approx([360, -360, 720, 0], abs=1e-9)


def test_zero_motion_holds_angles(drivetrain):
    set_angles(drivetrain, [45, 400, -20, 91])
    drivetrain.submit_chassis_motion(0, 0, 0, True)

    assert azimuth_setpoints(drivetrain) == pytest.approx([45, 400, -20, 91])
    assert drive_setpoints(drivetrain) == [0, 0, 0, 0]


def test_field_sensitive_rotates_request(drivetrain, gyro):
    drivetrain.set_field_sensitivity(True)
    gyro.raw_heading = 90

    # Facing left on the field, so driving down the field means driving to the robot's right
    drivetrain.submit_chassis_motion(0.5, 0, 0, True)

    assert azimuth_setpoints(drivetrain) == pytest.approx([-90] * 4)
    assert drive_setpoints(drivetrain) == pytest.approx([0.5] * 4)


def test_robot_relative_ignores_heading(drivetrain, gyro):
    gyro.raw_heading = 90
    drivetrain.submit_chassis_motion(0.5, 0, 0, True)
    assert azimuth_setpoints(drivetrain) == pytest.approx([0] * 4, abs=1e-9)


def test_toggle_field_sensitivity(drivetrain):
    assert not drivetrain.is_field_sensitive
    drivetrain.toggle_field_sensitivity()
    assert drivetrain.is_field_sensitive


def test_heading_reads_gyro_without_periodic(drivetrain, gyro):
    drivetrain.periodic()
    gyro.raw_heading = -45
    assert drivetrain.heading.degrees() == pytest.approx(-45)


def test_gyro_fault_reuses_last_heading(drivetrain, gyro):
    gyro.raw_heading = 30
    assert drivetrain.heading.degrees() == pytest.approx(30)

    gyro.connected = False
    gyro.raw_heading = 60
    assert drivetrain.heading.degrees() == pytest.approx(30)


def test_per_module_vectors(drivetrain):
    vectors = [ModuleVector(0.2, 90), ModuleVector(0.4, 0), ModuleVector(0.6, 180), ModuleVector(1.5, 270)]
    drivetrain.submit_per_module_vectors(vectors, True)

    assert azimuth_setpoints(drivetrain) == pytest.approx([0, -90, 90, 180])
    # Out of range output is clamped
    assert drive_setpoints(drivetrain) == pytest.approx([0.2, 0.4, 0.6, 1.0])


def test_per_module_vectors_velocity_mode(drivetrain):
    drivetrain.submit_per_module_vectors([ModuleVector(0.25, 90)] * 4, False)
    assert drive_setpoints(drivetrain) == pytest.approx([1.0] * 4)


def test_per_module_vectors_requires_four(drivetrain):
    with pytest.raises(ValueError):
        drivetrain.submit_per_module_vectors([ModuleVector(1, 90)] * 3, True)


def test_reduced_travel_reverses_drive(drivetrain):
    drivetrain.angle_strategy = AngleStrategy.REDUCED_TRAVEL
    drivetrain.submit_chassis_motion(-0.5, 0, 0, True)

    assert azimuth_setpoints(drivetrain) == pytest.approx([0] * 4, abs=1e-9)
    assert drive_setpoints(drivetrain) == pytest.approx([-0.5] * 4)


def test_nearest_strategy_turns_around(drivetrain):
    drivetrain.submit_chassis_motion(-0.5, 0, 0, True)

    assert azimuth_setpoints(drivetrain) == pytest.approx([180] * 4)
    assert drive_setpoints(drivetrain) == pytest.approx([0.5] * 4)


def test_stop_all_drive_holds_angles(drivetrain):
    drivetrain.submit_chassis_motion(0.5, 0.2, 0.3, True)
    set_angles(drivetrain, [37, 400, -20, 0])

    drivetrain.stop_all_drive()

    assert drive_setpoints(drivetrain) == [0, 0, 0, 0]
    assert azimuth_setpoints(drivetrain) == [37, 400, -20, 0]
    assert [state.angle_degrees for state in drivetrain.module_states] == [37, 400, -20, 0]
    for module in drivetrain.modules.values():
        assert module.drive_actuator.mode is ControlMode.PERCENT_OUTPUT


def test_periodic_updates_pose(drivetrain, clock):
    drivetrain.submit_chassis_motion(0.5, 0, 0, False)

    drivetrain.periodic()
    clock.advance(1.5)
    drivetrain.periodic()

    assert drivetrain.pose.x == pytest.approx(3)
    assert drivetrain.pose.y == pytest.approx(0, abs=1e-9)


def test_average_drive_distance(drivetrain):
    for module, distance in zip(drivetrain.modules.values(), [1, 2, 3, 6]):
        module.drive_actuator.set_position(distance)
    assert drivetrain.average_drive_distance == pytest.approx(3)


def test_apply_to_all_drive(drivetrain):
    drivetrain.apply_to_all_drive(lambda actuator: actuator.configure_gains(PIDFGains(1.0)))
    drivetrain.apply_to_all_angle(lambda actuator: actuator.configure_gains(PIDFGains(2.0)))

    for module in drivetrain.modules.values():
        assert module.drive_actuator.gains == PIDFGains(1.0)
        assert module.azimuth_actuator.gains == PIDFGains(2.0)


def test_independent_instances(clock):
    def build():
        placements = [Translation2d(1, 1), Translation2d(1, -1), Translation2d(-1, 1), Translation2d(-1, -1)]
        modules = {position: make_module(placements[position]) for position in ModulePosition}
        return DrivetrainController(
            modules, SimulatedGyro(), MAX_SPEED, MAX_ANGULAR_VELOCITY, PIDFGains(0.5), PIDFGains(0), clock=clock
        )

    first, second = build(), build()
    first.set_field_sensitivity(False)
    first.submit_chassis_motion(0.5, 0, 0, True)

    assert second.is_field_sensitive
    assert drive_setpoints(second) == [0, 0, 0, 0]
