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

from subsystems.lighting import BLUE, NO_ALLIANCE, RED, Lighting


@pytest.fixture
def led() -> MagicMock:
    return MagicMock(name="led")


@pytest.fixture
def lights(led: MagicMock) -> Lighting:
    with patch("subsystems.lighting.AddressableLED") as addressable_led:
        addressable_led.return_value = led
        addressable_led.LEDData.side_effect = lambda: MagicMock(name="led_data")

        return Lighting(0, 10)


def test_starts_with_no_alliance(lights: Lighting, led: MagicMock):
    assert lights.color == NO_ALLIANCE

    led.setLength.assert_called_once_with(10)
    led.start.assert_called_once()


@pytest.mark.parametrize("is_red, color", [(True, RED), (False, BLUE)])
def test_alliance_change(lights: Lighting, led: MagicMock, is_red: bool, color):
    lights.on_alliance_change(is_red)

    assert lights.color == color

    buffer = led.setData.call_args[0][0]
    assert len(buffer) == 10
    for data in buffer:
        data.setRGB.assert_called_with(*color)
