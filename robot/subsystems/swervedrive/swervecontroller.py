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

from wpimath.controller import PIDController
from wpimath.kinematics import ChassisSpeeds
from wpimath.units import meters_per_second, radians, radians_per_second

from subsystems.swervedrive.swerveparser import ControllerProperties


class SwerveController:
    """
    Converts joystick inputs into chassis speeds. Rotation is either driven directly or,
    when a heading is requested, by a PID loop on the robot heading.
    """
    def __init__(self, properties: ControllerProperties, max_speed: meters_per_second,
                 max_angular_velocity: radians_per_second):
        self.config = properties
        self.max_speed = max_speed
        self.max_angular_velocity = max_angular_velocity

        self.theta_controller = PIDController(properties.heading_p, properties.heading_i, properties.heading_d)
        self.theta_controller.enableContinuousInput(-math.pi, math.pi)

        self._last_angle_scalar: radians = 0.0

    def within_hypot_deadband(self, x: float, y: float) -> bool:
        return math.hypot(x, y) < self.config.angle_joystick_radius_deadband

    def get_joystick_angle(self, heading_x: float, heading_y: float) -> radians:
        """
        Angle of the heading joystick. Holds the last angle while the stick is inside the
        radius deadband.
        """
        if not self.within_hypot_deadband(heading_x, heading_y):
            self._last_angle_scalar = math.atan2(heading_x, heading_y)

        return self._last_angle_scalar

    def heading_calculate(self, current_heading: radians, target_heading: radians) -> radians_per_second:
        omega = self.theta_controller.calculate(current_heading, target_heading) * self.max_angular_velocity

        return max(-self.max_angular_velocity, min(self.max_angular_velocity, omega))

    def get_raw_target_speeds(self, x_speed: meters_per_second, y_speed: meters_per_second,
                              omega: radians_per_second) -> ChassisSpeeds:
        return ChassisSpeeds(x_speed, y_speed, omega)

    def get_target_speeds(self, x_input: float, y_input: float, angle: radians,
                          current_heading: radians, max_speed: meters_per_second) -> ChassisSpeeds:
        """
        Field relative chassis speeds that translate with the (already shaped) inputs and
        turn toward 'angle'.
        """
        return self.get_raw_target_speeds(x_input * max_speed,
                                          y_input * max_speed,
                                          self.heading_calculate(current_heading, angle))

    def get_target_speeds_from_joystick(self, x_input: float, y_input: float, heading_x: float, heading_y: float,
                                        current_heading: radians, max_speed: meters_per_second) -> ChassisSpeeds:
        return self.get_target_speeds(x_input, y_input, self.get_joystick_angle(heading_x, heading_y),
                                      current_heading, max_speed)

    def reset(self, heading: radians) -> None:
        self._last_angle_scalar = heading
        self.theta_controller.reset()
