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
#
# Swerve drive tuning constants. The hardware description (CAN IDs, offsets, gearing, module
# locations) is in deploy/swerve so that it can be changed without touching code.

import math

from wpimath.units import degrees, degrees_per_second, hertz, radians_per_second, seconds


class SwerveConstants:
    # Wheel angle servo. The rotation motor is commanded with a duty-cycle proportional to the
    # angle error (a half turn of error is full output) and clamped to this value.
    MAX_WHEEL_ROTATE_SPEED = 0.6

    # A module is considered aligned (and allowed to apply drive power) once the normalized
    # angle error is at or below this value. 0.03 of a half turn is 5.4 degrees.
    ALIGNED_THRESHOLD = 0.03

    # Directory (relative to the deploy directory) holding the drivetrain JSON files
    CONFIG_DIRECTORY = "swerve"

    ODOMETRY_FREQUENCY: hertz = 50.0
    ODOMETRY_PERIOD: seconds = 1.0 / ODOMETRY_FREQUENCY

    # Angular velocity skew compensation
    ANGULAR_VELOCITY_COEFFICIENT = 0.1

    # Relative angle encoders are re-synchronized to the absolute encoder when they
    # disagree by more than this while the module is at rest
    ENCODER_SYNC_DEADBAND: degrees = 1.0

    # Synchronization only happens while the wheel angle is turning slower than this
    ENCODER_SYNC_MAX_VELOCITY: degrees_per_second = 1.0

    # Below this wheel speed (m/s) a module holds its current angle
    MIN_MODULE_SPEED = 0.01

    # Below this turn rate (rad/s) the robot is treated as not rotating
    MIN_ANGULAR_VELOCITY: radians_per_second = 0.01


class AutoConstants:
    # PathPlanner holonomic controller
    TRANSLATION_P = 5.0
    TRANSLATION_I = 0.0
    TRANSLATION_D = 0.0

    ROTATION_P = 5.0
    ROTATION_I = 0.0
    ROTATION_D = 0.0

    # Pathfinding limits not derived from the drivetrain
    MAX_ACCELERATION = 4.0                      # meters/second^2
    MAX_ANGULAR_ACCELERATION = math.radians(720)  # radians/second^2
