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

from robotcontainer import RobotContainer


@pytest.fixture
def container() -> RobotContainer:
    """
    Just enough of the container to track the alliance
    """
    container = RobotContainer.__new__(RobotContainer)
    container.robot = MagicMock(name="robot")
    container.robot.match_started = False
    container._is_red_alliance = None
    container._alliance_change_callbacks = []
    return container


def set_alliance(driver_station: MagicMock, is_red: bool) -> None:
    driver_station.getAlliance.return_value = driver_station.Alliance.kRed if is_red \
        else driver_station.Alliance.kBlue


def test_first_check_always_notifies(container: RobotContainer):
    callback = MagicMock()
    container.register_alliance_change_callback(callback)

    with patch("robotcontainer.DriverStation") as driver_station:
        set_alliance(driver_station, False)
        container.check_alliance()

    callback.assert_called_once_with(False)
    assert not container.is_red_alliance


def test_notifies_only_on_change(container: RobotContainer):
    callback = MagicMock()
    container.register_alliance_change_callback(callback)

    with patch("robotcontainer.DriverStation") as driver_station:
        set_alliance(driver_station, True)
        container.check_alliance()
        container.check_alliance()

        set_alliance(driver_station, False)
        container.check_alliance()

    assert [c[0][0] for c in callback.call_args_list] == [True, False]


def test_alliance_fixed_once_match_starts(container: RobotContainer):
    callback = MagicMock()
    container.register_alliance_change_callback(callback)
    container.robot.match_started = True

    with patch("robotcontainer.DriverStation") as driver_station:
        set_alliance(driver_station, True)
        container.check_alliance()

    callback.assert_not_called()
    assert not container.is_red_alliance
