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

import json
import math
import os
import shutil

import pytest
from wpimath.units import inchesToMeters

import constants
from subsystems.swervedrive.swerveparser import SwerveParser

DEPLOY_DIRECTORY = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "..", "..",
                                                "robot", "deploy", "swerve"))


@pytest.fixture
def config_directory(tmp_path) -> str:
    """
    Writable copy of the deployed drivetrain configuration
    """
    directory = os.path.join(tmp_path, "swerve")
    shutil.copytree(DEPLOY_DIRECTORY, directory)
    return directory


def update_json(path: str, **values) -> None:
    with open(path, 'r') as f:
        data = json.loads(f.read())

    data.update(values)

    with open(path, 'w') as f:
        f.write(json.dumps(data))


def test_module_offsets():
    """
    While a swerve drive can drive in any direction, the notion of front/back/left/right
    still exists, and we give offsets to these based off of the center of the robot.  So
    check that they are correct polarity +/-
    """
    modules = {module.name: module for module in SwerveParser(DEPLOY_DIRECTORY).config.modules}

    assert list(modules.keys()) == ["frontleft", "frontright", "backleft", "backright"]

    x_limit = constants.ROBOT_X_WIDTH_DEFAULT / 2
    y_limit = constants.ROBOT_Y_WIDTH_DEFAULT / 2

    front_left = modules["frontleft"].location
    assert 0.0 < front_left.X() < x_limit
    assert 0.0 < front_left.Y() < y_limit

    front_right = modules["frontright"].location
    assert 0.0 < front_right.X() < x_limit
    assert -y_limit < front_right.Y() < 0.0

    back_left = modules["backleft"].location
    assert -x_limit < back_left.X() < 0.0
    assert 0.0 < back_left.Y() < y_limit

    back_right = modules["backright"].location
    assert -x_limit < back_right.X() < 0.0
    assert -y_limit < back_right.Y() < 0.0


def test_no_duplicate_can_bus_ids():
    """
    Run through the drivetrain and robot devices and make sure they are unique
    """
    drive_ids = [can_id for _bus, can_id in SwerveParser(DEPLOY_DIRECTORY).config.can_ids]
    other_ids = [device.value for device in constants.DeviceID]

    all_ids = drive_ids + other_ids
    assert len(all_ids) == len(set(all_ids))


def test_physical_properties():
    physical = SwerveParser(DEPLOY_DIRECTORY).physical

    assert physical.drive_conversion_factor == pytest.approx(math.pi * inchesToMeters(4) / 6.75)
    assert physical.angle_conversion_factor == pytest.approx(360.0 / 21.4285714286)
    assert physical.drive_current_limit == 40
    assert physical.angle_current_limit == 20


def test_controller_properties():
    controller = SwerveParser(DEPLOY_DIRECTORY).controller

    assert controller.angle_joystick_radius_deadband == pytest.approx(0.5)
    assert controller.heading_p == pytest.approx(0.4)
    assert controller.heading_d == pytest.approx(0.01)


def test_missing_directory(tmp_path):
    with pytest.raises(FileNotFoundError):
        SwerveParser(os.path.join(tmp_path, "nothing-here"))


def test_missing_module_file(config_directory):
    os.remove(os.path.join(config_directory, "modules", "backright.json"))

    with pytest.raises(FileNotFoundError):
        SwerveParser(config_directory)


def test_invalid_json(config_directory):
    with open(os.path.join(config_directory, "controllerproperties.json"), 'w') as f:
        f.write("{ not json")

    with pytest.raises(ValueError):
        SwerveParser(config_directory)


def test_duplicate_ids_rejected(config_directory):
    # Give the back right drive motor the same id as the front left drive motor
    update_json(os.path.join(config_directory, "modules", "backright.json"),
                drive={"type": "sparkmax", "id": 2, "canbus": None})

    with pytest.raises(ValueError, match="Duplicate CAN ids"):
        SwerveParser(config_directory)


def test_unsupported_motor_rejected(config_directory):
    update_json(os.path.join(config_directory, "modules", "frontleft.json"),
                angle={"type": "talonfx", "id": 3})

    with pytest.raises(ValueError, match="unsupported device type"):
        SwerveParser(config_directory)


def test_module_count(config_directory):
    update_json(os.path.join(config_directory, "swervedrive.json"),
                modules=["frontleft.json", "frontright.json", "backleft.json"])

    with pytest.raises(ValueError, match="expected 4 modules"):
        SwerveParser(config_directory)
