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

from typing import Optional, Tuple

from commands2 import Subsystem
from wpilib import AddressableLED

Color = Tuple[int, int, int]

RED: Color = (255, 0, 0)
BLUE: Color = (0, 0, 255)
NO_ALLIANCE: Color = (255, 160, 0)


class Lighting(Subsystem):
    """
    Addressable LED strip showing the alliance we are playing for
    """
    def __init__(self, pwm_channel: int, length: int) -> None:
        super().__init__()
        self.setName("Lighting")

        self._led = AddressableLED(pwm_channel)
        self._led.setLength(length)

        self._buffer = [AddressableLED.LEDData() for _ in range(length)]
        self._color: Optional[Color] = None

        self.set_color(NO_ALLIANCE)
        self._led.start()

    @property
    def color(self) -> Optional[Color]:
        return self._color

    def set_color(self, color: Color) -> None:
        red, green, blue = color

        for led in self._buffer:
            led.setRGB(red, green, blue)

        self._led.setData(self._buffer)
        self._color = color

    @staticmethod
    def alliance_color(is_red: Optional[bool]) -> Color:
        if is_red is None:
            return NO_ALLIANCE

        return RED if is_red else BLUE

    def on_alliance_change(self, is_red: bool) -> None:
        """
        Registered with the container, called whenever the alliance changes before the match
        """
        self.set_color(self.alliance_color(is_red))
