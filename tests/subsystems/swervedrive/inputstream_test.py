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

from unittest.mock import MagicMock, patch

import pytest

from subsystems.swervedrive.inputstream import DriveInputStream

MAX_SPEED = 4.0
MAX_ANGULAR_VELOCITY = 2.0


@pytest.fixture
def drive() -> MagicMock:
    drive = MagicMock()
    drive.get_maximum_chassis_velocity.return_value = MAX_SPEED
    drive.get_maximum_chassis_angular_velocity.return_value = MAX_ANGULAR_VELOCITY
    return drive


@pytest.fixture
def driver_station():
    with patch("subsystems.swervedrive.inputstream.DriverStation") as station:
        station.getAlliance.return_value = station.Alliance.kBlue
        yield station


def stream_of(drive, x: float, y: float, rotation: float = 0.0) -> DriveInputStream:
    return DriveInputStream.of(drive, lambda: x, lambda: y) \
        .with_controller_rotation_axis(lambda: rotation) \
        .deadband(0.1) \
        .scale_translation(0.8) \
        .alliance_relative_control(True)


def test_translation_is_scaled(drive, driver_station):
    speeds = stream_of(drive, 1.0, -0.5)()

    assert speeds.vx == pytest.approx(1.0 * 0.8 * MAX_SPEED)
    assert speeds.vy == pytest.approx(-(0.5 - 0.1) / 0.9 * 0.8 * MAX_SPEED)


def test_deadband(drive, driver_station):
    speeds = stream_of(drive, 0.05, -0.05, 0.05)()

    assert speeds.vx == 0.0
    assert speeds.vy == 0.0
    assert speeds.omega == 0.0


def test_rotation(drive, driver_station):
    speeds = stream_of(drive, 0.0, 0.0, 0.5)()

    assert speeds.omega == pytest.approx((0.5 - 0.1) / 0.9 * MAX_ANGULAR_VELOCITY)


def test_no_rotation_axis(drive, driver_station):
    speeds = DriveInputStream.of(drive, lambda: 0.5, lambda: 0.0)()

    assert speeds.omega == 0.0
    assert speeds.vx == pytest.approx(0.5 * MAX_SPEED)


def test_red_alliance_is_flipped(drive, driver_station):
    """
    The field's +x points away from the blue wall, so a red driver pushing forward drives toward -x
    """
    driver_station.getAlliance.return_value = driver_station.Alliance.kRed

    speeds = stream_of(drive, 1.0, 0.0)()

    assert speeds.vx == pytest.approx(-0.8 * MAX_SPEED)
    assert speeds.vy == pytest.approx(0.0, abs=1e-9)

    # Rotation is not affected
    assert stream_of(drive, 0.0, 0.0, 0.5)().omega > 0.0


def test_alliance_relative_disabled(drive, driver_station):
    driver_station.getAlliance.return_value = driver_station.Alliance.kRed

    speeds = stream_of(drive, 1.0, 0.0).alliance_relative_control(False)()

    assert speeds.vx == pytest.approx(0.8 * MAX_SPEED)


def test_copy_is_independent(drive, driver_station):
    stream = stream_of(drive, 1.0, 0.0)
    slow = stream.copy().scale_translation(0.25)

    assert stream().vx == pytest.approx(0.8 * MAX_SPEED)
    assert slow().vx == pytest.approx(0.25 * MAX_SPEED)
