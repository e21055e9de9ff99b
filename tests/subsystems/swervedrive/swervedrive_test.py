# ------------------------------------------------------------------------ #
#      o-o      o                o                                         #
#     /         |                |                                         #
#    O     o  o O-o  o-o o-o     |  oo o--o o-o o-o                        #
#     \    |  | |  | |-' |   \   o | | |  |  /   /                         #
#      o-o o--O o-o  o-o o    o-o  o-o-o--O o-o o-o                        #
#             |                           |                                #
#          o--o                        o--o                                #
#                        o--o      o         o                             #
#                        |   |     |         |  o                          #
#                        O-Oo  o-o O-o  o-o -o-    o-o o-o                 #
#                        |  \  | | |  | | |  |  | |     \                  #
#                        o   o o-o o-o  o-o  o  |  o-o o-o                 #
#                                                                          #
#    Jemison High School - Huntsville Alabama                              #
# ------------------------------------------------------------------------ #

import math
import os
from typing import List, Tuple
from unittest.mock import MagicMock, patch

import pytest
from wpimath.geometry import Pose2d, Rotation2d
from wpimath.kinematics import ChassisSpeeds, SwerveModuleState

from subsystems.swervedrive.constants import SwerveConstants
from subsystems.swervedrive.swervedrive import SwerveDrive
from subsystems.swervedrive.swerveparser import SwerveParser

DEPLOY_DIRECTORY = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "..", "..",
                                                "robot", "deploy", "swerve"))
MAX_SPEED = 4.0


def mock_motor(name: str) -> MagicMock:
    motor = MagicMock(name=name)
    motor.getEncoder.return_value.getPosition.return_value = 0.0
    motor.getEncoder.return_value.getVelocity.return_value = 0.0
    return motor


class MockHardware:
    """
    The mocked motors, encoders and IMU behind a drivetrain, in module order
    """
    def __init__(self):
        self.rotation_motors: List[MagicMock] = [mock_motor(f"rotation-{n}") for n in range(4)]
        self.drive_motors: List[MagicMock] = [mock_motor(f"drive-{n}") for n in range(4)]
        self.encoders: List[MagicMock] = [MagicMock(name=f"cancoder-{n}") for n in range(4)]

        for encoder in self.encoders:
            encoder.get_absolute_position.return_value.value = 0.0

        self.imu = MagicMock(name="imu")
        self.imu.heading = Rotation2d()
        self.imu.turn_rate = 0.0

    @property
    def motors(self) -> List[MagicMock]:
        # Each module creates its rotation motor first
        return [motor for pair in zip(self.rotation_motors, self.drive_motors) for motor in pair]

    def point_wheels(self, drive: SwerveDrive, angle: float) -> None:
        """
        Set each CANcoder so its wheel points at 'angle' degrees (0 is the front of the robot)
        """
        for module, encoder in zip(drive.modules, self.encoders):
            encoder.get_absolute_position.return_value.value = \
                ((angle + 180.0 + module.angle_offset) / 360.0) % 1.0

    def reset_motors(self) -> None:
        for motor in self.rotation_motors + self.drive_motors:
            motor.reset_mock()


@pytest.fixture
def hardware() -> MockHardware:
    return MockHardware()


@pytest.fixture
def drive(hardware: MockHardware) -> SwerveDrive:
    config = SwerveParser(DEPLOY_DIRECTORY).config

    with patch("subsystems.swervedrive.swervemodule.SparkMax", side_effect=hardware.motors), \
            patch("subsystems.swervedrive.swervemodule.CANcoder", side_effect=hardware.encoders), \
            patch("subsystems.swervedrive.swervedrive.Pigeon2", return_value=hardware.imu), \
            patch("subsystems.swervedrive.swervedrive.Notifier"):
        drive = SwerveDrive(config, MAX_SPEED, Pose2d())

    hardware.point_wheels(drive, 0.0)
    hardware.reset_motors()
    return drive


def last_output(motor: MagicMock) -> float:
    return motor.set.call_args[0][0]


def test_drive_power_waits_for_alignment(drive: SwerveDrive, hardware: MockHardware):
    """
    Every wheel is pointing forward, so a request to go left only turns the wheels
    """
    states = [SwerveModuleState(2.0, Rotation2d.fromDegrees(90))] * 4

    assert drive.set_module_states(states) == [False] * 4

    for rotation_motor, drive_motor in zip(hardware.rotation_motors, hardware.drive_motors):
        drive_motor.set.assert_called_with(0.0)
        assert last_output(rotation_motor) != pytest.approx(0.0)

    # Once the wheels have turned the drive motors get power
    hardware.point_wheels(drive, 90.0)
    assert drive.set_module_states(states) == [True] * 4

    for drive_motor in hardware.drive_motors:
        assert last_output(drive_motor) == pytest.approx(2.0 / MAX_SPEED)


def test_module_states_are_desaturated(drive: SwerveDrive, hardware: MockHardware):
    states = [SwerveModuleState(2 * MAX_SPEED, Rotation2d()),
              SwerveModuleState(MAX_SPEED, Rotation2d()),
              SwerveModuleState(2 * MAX_SPEED, Rotation2d()),
              SwerveModuleState(MAX_SPEED, Rotation2d())]

    drive.set_module_states(states)

    speeds = [state.speed for state in drive.get_desired_states()]
    assert speeds == pytest.approx([MAX_SPEED, MAX_SPEED / 2, MAX_SPEED, MAX_SPEED / 2])

    # Ratios between the modules are kept
    outputs = [last_output(motor) for motor in hardware.drive_motors]
    assert outputs == pytest.approx([1.0, 0.5, 1.0, 0.5])


def test_lock_pose_forms_an_x(drive: SwerveDrive, hardware: MockHardware):
    drive.lock_pose()

    for module, state in zip(drive.modules, drive.get_desired_states()):
        # Each wheel lies along the line to the center of the robot, either end forward
        delta = state.angle - module.config.location.angle()
        assert math.sin(delta.radians()) == pytest.approx(0.0, abs=1e-9)
        assert state.speed == 0.0

    for drive_motor in hardware.drive_motors:
        drive_motor.set.assert_called_with(0.0)


def test_lock_pose_turns_at_most_a_quarter_turn(drive: SwerveDrive, hardware: MockHardware):
    """
    With the wheels pointing forward the back modules would have to turn 135 degrees to
    point at their location. The other end of the wheel is only 45 degrees away.
    """
    drive.lock_pose()

    for rotation_motor in hardware.rotation_motors:
        # A half turn of error is full output
        assert abs(last_output(rotation_motor)) <= 0.5

    for state in drive.get_desired_states():
        assert abs(state.angle.degrees()) <= 90.0


def test_update_odometry_only_updates_pose(drive: SwerveDrive, hardware: MockHardware):
    """
    The odometry notifier thread must not log or write to the motor controllers
    """
    drive.set_module_encoder_auto_synchronize(True, SwerveConstants.ENCODER_SYNC_DEADBAND)

    for motor in hardware.rotation_motors:
        motor.getEncoder.return_value.reset_mock()

    with patch("subsystems.swervedrive.swervedrive.SwerveDriveTelemetry") as telemetry, \
            patch("subsystems.swervedrive.swervedrive.Logger") as drive_logger, \
            patch("subsystems.swervedrive.swervemodule.Logger") as module_logger:
        drive.update_odometry()

        telemetry.update.assert_not_called()
        drive_logger.recordOutput.assert_not_called()
        drive_logger.processInputs.assert_not_called()
        module_logger.processInputs.assert_not_called()

        for motor in hardware.rotation_motors:
            motor.getEncoder.return_value.setPosition.assert_not_called()

        # Logging and encoder synchronization happen from the main robot loop
        drive.periodic()

        telemetry.update.assert_called_once()
        assert module_logger.processInputs.call_count == 4

        # Relative encoders read 0 while every wheel is at 180 in the encoder frame
        for motor in hardware.rotation_motors:
            motor.getEncoder.return_value.setPosition.assert_called_once_with(pytest.approx(180.0))


def test_path_following_uses_autonomous_optimizations(drive: SwerveDrive):
    speeds = ChassisSpeeds(1.0, 0.0, 0.0)

    with patch.object(drive, "drive_robot_relative") as drive_robot_relative, \
            patch.object(drive, "set_module_states") as set_module_states:
        drive.drive_with_feedforwards(speeds, forces=[0.0] * 4)

        drive_robot_relative.assert_called_once_with(speeds, autonomous=True)
        set_module_states.assert_not_called()


def test_path_following_with_explicit_states(drive: SwerveDrive):
    states = [SwerveModuleState(1.0, Rotation2d())] * 4

    with patch.object(drive, "drive_robot_relative") as drive_robot_relative, \
            patch.object(drive, "set_module_states") as set_module_states:
        drive.drive_with_feedforwards(ChassisSpeeds(1.0, 0.0, 0.0), states)

        set_module_states.assert_called_once_with(states)
        drive_robot_relative.assert_not_called()


@pytest.mark.parametrize("turn_rate, skewed", [(0.0, False),
                                               (SwerveConstants.MIN_ANGULAR_VELOCITY / 2, False),
                                               (0.5, True)])
def test_angular_velocity_compensation(drive: SwerveDrive, hardware: MockHardware,
                                       turn_rate: float, skewed: bool):
    """
    The IMU turn rate is in radians/second and skews translation only while rotating
    """
    drive.set_angular_velocity_compensation(False, True, SwerveConstants.ANGULAR_VELOCITY_COEFFICIENT)
    hardware.imu.turn_rate = turn_rate

    speeds = drive._movement_optimizations(ChassisSpeeds(1.0, 0.0, 0.0), autonomous=True)

    skew = turn_rate * SwerveConstants.ANGULAR_VELOCITY_COEFFICIENT if skewed else 0.0
    assert math.hypot(speeds.vx, speeds.vy) == pytest.approx(1.0)
    assert abs(speeds.vy) == pytest.approx(math.sin(skew), abs=1e-9)

    # Teleop compensation is off
    speeds = drive._movement_optimizations(ChassisSpeeds(1.0, 0.0, 0.0), autonomous=False)
    assert speeds.vy == pytest.approx(0.0, abs=1e-9)
