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

from dataclasses import dataclass

from pykit.autolog import autolog
from wpimath.units import amperes, degrees, meters, meters_per_second

"""
SwerveModuleIO provides swerve module I/O to provide log information
for AdvantageScope replay and simulation.
"""


class SwerveModuleIO:
    @autolog
    @dataclass
    class SwerveModuleIOInputs:
        encoder_connected: bool = False

        drive_position: meters = 0.0
        drive_velocity: meters_per_second = 0.0
        drive_applied: float = 0.0  # duty-cycle
        drive_current: amperes = 0.0

        angle_absolute: degrees = 0.0  # offset corrected, 0..360
        angle_relative: degrees = 0.0  # angle motor's built-in encoder
        angle_applied: float = 0.0  # duty-cycle
        angle_current: amperes = 0.0
        angle_error: degrees = 0.0  # last servo delta

    def __init__(self, name: str) -> None:
        self.name = name

    def updateInputs(self, inputs: SwerveModuleIOInputs) -> None:
        """Update the swerve module I/O inputs.

        Args:
            inputs (SwerveModuleIOInputs): The swerve module I/O inputs to update.
        """
        pass

    def set_rotation_speed(self, speed: float) -> None:
        """Command the angle motor.

        Args:
            speed (float): duty-cycle, -1..1
        """

    def set_drive_speed(self, speed: float) -> None:
        """Command the drive motor.

        Args:
            speed (float): duty-cycle, -1..1
        """
