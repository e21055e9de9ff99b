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

from wpilib import SmartDashboard
from wpimath.geometry import Rotation2d
from wpimath.units import degrees, degrees_per_second, radians, radians_per_second

from lib_6107.subsystems.pykit.gyro_io import GyroIO


class Gyro(GyroIO):
    """
    Gyro is the base class for the drivetrain IMU. Yaw is counter-clockwise positive
    once the 'inverted' flag has been applied.
    """
    gyro_type = "unknown"

    def __init__(self, inverted: bool) -> None:
        super().__init__()
        self._inverted = inverted

    @property
    def inverted(self) -> bool:
        return self._inverted

    def zero_yaw(self) -> None:
        self.yaw = 0.0

    @property
    def yaw(self) -> degrees:
        raise NotImplementedError("Implement in derived class")

    @yaw.setter
    def yaw(self, value: degrees) -> None:
        raise NotImplementedError("Implement in derived class")

    @property
    def pitch(self) -> degrees:
        return 0.0

    @property
    def roll(self) -> degrees:
        return 0.0

    @property
    def heading(self) -> Rotation2d:
        return Rotation2d.fromDegrees(self.yaw)

    @property
    def turn_rate(self) -> radians_per_second:
        return math.radians(self.turn_rate_degrees_per_second)

    @property
    def turn_rate_degrees_per_second(self) -> degrees_per_second:
        raise NotImplementedError("Implement in derived class")

    def set_yaw(self, yaw_rad: radians) -> None:
        self.yaw = math.degrees(yaw_rad)

    def updateInputs(self, inputs: GyroIO.GyroIOInputs) -> None:
        inputs.connected = True
        inputs.yaw = math.radians(self.yaw)
        inputs.yaw_rate = self.turn_rate
        inputs.pitch = self.pitch
        inputs.roll = self.roll

    ######################
    # SmartDashboard support

    def dashboard_initialize(self) -> None:
        SmartDashboard.putString('Gyro/type', self.gyro_type)

    def dashboard_periodic(self) -> None:
        SmartDashboard.putNumber('Gyro/yaw', self.yaw)
        SmartDashboard.putNumber('Gyro/pitch', self.pitch)
        SmartDashboard.putNumber('Gyro/roll', self.roll)

    ######################
    # Simulation support

    @property
    def sim_yaw(self) -> degrees:
        return self.yaw

    @sim_yaw.setter
    def sim_yaw(self, value: degrees) -> None:
        raise NotImplementedError("Implement in derived class")
