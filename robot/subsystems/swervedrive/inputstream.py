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

import copy
from typing import Callable, Optional

from wpilib import DriverStation
from wpimath import applyDeadband
from wpimath.geometry import Rotation2d, Translation2d
from wpimath.kinematics import ChassisSpeeds

from subsystems.swervedrive.swervedrive import SwerveDrive

Axis = Callable[[], float]


class DriveInputStream:
    """
    Turns driver controller axes into field relative chassis speeds.

    Built fluently:

        stream = DriveInputStream.of(drive, lambda: -controller.getLeftY(), lambda: -controller.getLeftX()) \\
            .with_controller_rotation_axis(controller.getRightX) \\
            .deadband(0.1) \\
            .scale_translation(0.8) \\
            .alliance_relative_control(True)

    and then called each loop to get the speeds to drive at.
    """
    def __init__(self, drive: SwerveDrive, x_axis: Axis, y_axis: Axis):
        self._drive = drive
        self._x_axis = x_axis
        self._y_axis = y_axis
        self._rotation_axis: Optional[Axis] = None
        self._deadband = 0.0
        self._translation_scale = 1.0
        self._alliance_relative = False

    @classmethod
    def of(cls, drive: SwerveDrive, x_axis: Axis, y_axis: Axis) -> 'DriveInputStream':
        return cls(drive, x_axis, y_axis)

    def copy(self) -> 'DriveInputStream':
        return copy.copy(self)

    def with_controller_rotation_axis(self, rotation_axis: Axis) -> 'DriveInputStream':
        self._rotation_axis = rotation_axis
        return self

    def deadband(self, deadband: float) -> 'DriveInputStream':
        self._deadband = deadband
        return self

    def scale_translation(self, scale: float) -> 'DriveInputStream':
        self._translation_scale = scale
        return self

    def alliance_relative_control(self, enabled: bool) -> 'DriveInputStream':
        self._alliance_relative = enabled
        return self

    def _translation(self) -> Translation2d:
        x = applyDeadband(self._x_axis(), self._deadband) * self._translation_scale
        y = applyDeadband(self._y_axis(), self._deadband) * self._translation_scale
        max_velocity = self._drive.get_maximum_chassis_velocity()

        return Translation2d(x * max_velocity, y * max_velocity)

    def _rotation(self) -> float:
        if self._rotation_axis is None:
            return 0.0

        omega = applyDeadband(self._rotation_axis(), self._deadband)

        return omega * self._drive.get_maximum_chassis_angular_velocity()

    @staticmethod
    def _is_red_alliance() -> bool:
        return DriverStation.getAlliance() == DriverStation.Alliance.kRed

    def __call__(self) -> ChassisSpeeds:
        translation = self._translation()

        # Field axes are fixed to the blue alliance wall
        if self._alliance_relative and self._is_red_alliance():
            translation = translation.rotateBy(Rotation2d.fromDegrees(180))

        return ChassisSpeeds(translation.X(), translation.Y(), self._rotation())
