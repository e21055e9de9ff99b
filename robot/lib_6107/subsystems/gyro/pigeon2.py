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

import logging
import math

from phoenix6 import StatusSignal
from phoenix6.configs import Pigeon2Configuration
from phoenix6.hardware import pigeon2
from wpimath.units import degrees, degrees_per_second

from lib_6107.subsystems.gyro.gyro import Gyro, GyroIO

logger = logging.getLogger(__name__)


class Pigeon2(Gyro):
    """
    Pigeon2 gyro implementation
    """
    gyro_type = "Pigeon2"

    def __init__(self, device_id: int, inverted: bool, canbus: str = "") -> None:
        super().__init__(inverted)

        self._gyro = pigeon2.Pigeon2(device_id, canbus)

        # Note: Default pigeon2 config has compass disabled. We want it that way as well.
        config: Pigeon2Configuration = Pigeon2Configuration()
        config.pigeon2_features.enable_compass = False

        for _ in range(5):
            if self._gyro.configurator.apply(config, timeout_seconds=0.2).is_ok():
                break
        else:
            logger.warning(f"{self.gyro_type} {device_id}: configuration not applied")

        self._yaw: StatusSignal = self._gyro.get_yaw()
        self._yaw_velocity: StatusSignal = self._gyro.get_angular_velocity_z_world()

    @property
    def device(self) -> pigeon2.Pigeon2:
        return self._gyro

    @property
    def yaw(self) -> degrees:
        yaw = self._gyro.get_yaw().value

        return -yaw if self._inverted else yaw

    @yaw.setter
    def yaw(self, value: degrees) -> None:
        self._gyro.set_yaw(-value if self._inverted else value)

    @property
    def pitch(self) -> degrees:
        return self._gyro.get_pitch().value

    @property
    def roll(self) -> degrees:
        return self._gyro.get_roll().value

    @property
    def turn_rate_degrees_per_second(self) -> degrees_per_second:
        rate = self._gyro.get_angular_velocity_z_world().value

        return -rate if self._inverted else rate

    ########################################################################################
    # pykit / AdvantageScope support

    def updateInputs(self, inputs: GyroIO.GyroIOInputs) -> None:
        StatusSignal.refresh_all(self._yaw, self._yaw_velocity)

        inputs.connected = StatusSignal.is_all_good(self._yaw, self._yaw_velocity)
        yaw = self._yaw.value_as_double
        rate = self._yaw_velocity.value_as_double

        inputs.yaw = math.radians(-yaw if self._inverted else yaw)
        inputs.yaw_rate = math.radians(-rate if self._inverted else rate)
        inputs.pitch = self.pitch
        inputs.roll = self.roll

    ########################################################################################
    # Simulation support

    @property
    def sim_yaw(self) -> degrees:
        return self.yaw

    @sim_yaw.setter
    def sim_yaw(self, value: degrees) -> None:
        self._gyro.sim_state.set_raw_yaw(-value if self._inverted else value)
