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
from rev import SparkBase

import constants
from subsystems.elevator import Elevator, ElevatorConstants


@pytest.fixture
def motor() -> MagicMock:
    motor = MagicMock()
    motor.getEncoder.return_value.getPosition.return_value = 0.0
    return motor


@pytest.fixture
def elevator(motor: MagicMock) -> Elevator:
    container = MagicMock()
    container.robot.counter = 1

    with patch("subsystems.elevator.SparkMax", return_value=motor):
        return Elevator(container, constants.DeviceID.ELEVATOR_DEVICE_ID)


def test_starts_at_the_bottom(elevator: Elevator, motor: MagicMock):
    assert elevator.level == 0
    assert elevator.goal == pytest.approx(constants.ELEVATOR_LEVELS[0])
    assert elevator.at_goal

    motor.getEncoder.return_value.setPosition.assert_called_once_with(0.0)


def test_go_up_level(elevator: Elevator, motor: MagicMock):
    elevator.go_up_level()

    assert elevator.level == 1
    motor.getClosedLoopController.return_value.setReference.assert_called_with(
        pytest.approx(constants.ELEVATOR_LEVELS[1]), SparkBase.ControlType.kPosition)


def test_levels_are_limited(elevator: Elevator):
    elevator.go_down_level()
    assert elevator.level == 0

    for _ in range(len(constants.ELEVATOR_LEVELS) + 2):
        elevator.go_up_level()

    assert elevator.level == len(constants.ELEVATOR_LEVELS) - 1

    elevator.go_down_level()
    assert elevator.level == len(constants.ELEVATOR_LEVELS) - 2


def test_at_goal(elevator: Elevator, motor: MagicMock):
    elevator.go_up_level()
    encoder = motor.getEncoder.return_value

    encoder.getPosition.return_value = 0.0
    assert not elevator.at_goal

    encoder.getPosition.return_value = constants.ELEVATOR_LEVELS[1] + ElevatorConstants.TOLERANCE / 2
    assert elevator.at_goal


def test_stop(elevator: Elevator, motor: MagicMock):
    elevator.stop()

    motor.stopMotor.assert_called_once()
