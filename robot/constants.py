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
# Robot wide constants. Drivetrain tuning values live in subsystems/swervedrive/constants.py
# and the drivetrain hardware description lives in deploy/swerve/*.json

import os
from enum import Enum, IntEnum, unique

from wpilib import RobotBase
from wpimath.geometry import Pose2d, Rotation2d, Rotation3d, Transform3d, Translation2d, Translation3d
from wpimath.units import degreesToRadians, feetToMeters, inchesToMeters, meters, meters_per_second, \
    seconds


class RobotModes(Enum):
    """Enum for robot modes."""
    REAL = 1
    SIMULATION = 2
    REPLAY = 3


SIM_MODE = (
    RobotModes.REPLAY if "LOG_PATH" in os.environ and os.environ["LOG_PATH"] != ""
    else RobotModes.SIMULATION
)
ROBOT_MODE = RobotModes.REAL if RobotBase.isReal() else SIM_MODE

# The period is available from robot.getPeriod() and the following provides
# a default value in case it returns 0 or None
DEFAULT_ROBOT_PERIOD: seconds = 1.0 / 50

###############################################################################
# Driver Station
DRIVER_CONTROLLER_PORT = 0

# Joystick deadband applied to all driver axes
DRIVER_DEADBAND = 0.1

# Fraction of full speed the left stick commands
DRIVER_TRANSLATION_SCALE = 0.8

#################################################################
# Drive subsystem related constants
#
# Maximum speed of the robot used when building the drivetrain. The heading controller
# for the two-stick 'target speeds' calculation uses a slower limit.
MAX_SPEED: meters_per_second = feetToMeters(14.5)
MAX_SPEED2: meters_per_second = feetToMeters(10.0)

# Where odometry is placed on start up and on 'reset odometry'. This is
# the center of the playing field with the robot facing the red alliance wall.
FIELD_CENTER: Pose2d = Pose2d(Translation2d(8.774, 4.026), Rotation2d.fromDegrees(0))

# Hold time on motor brakes when disabled
WHEEL_LOCK_TIME: seconds = 10

# Vision odometry
VISION_ODOMETRY_ENABLED = True

ROBOT_X_WIDTH_DEFAULT: meters = inchesToMeters(30 + 2 * 3.25)  # Frame + bumpers
ROBOT_Y_WIDTH_DEFAULT: meters = inchesToMeters(30 + 2 * 3.25)


#################################################################
# Other subsystem and device constants for this year's project

@unique
class DeviceID(IntEnum):
    # Drivetrain motor controllers, CANcoders and the IMU are described in deploy/swerve

    # Power distribution
    POWER_DISTRIBUTION_ID = 1

    # Elevator
    ELEVATOR_DEVICE_ID = 15


@unique
class PWMChannel(IntEnum):
    LIGHT_STRIP = 0


#################################################################
# Elevator

ELEVATOR_LEVELS: tuple[meters, ...] = (0.0,
                                       inchesToMeters(18.0),
                                       inchesToMeters(31.875),
                                       inchesToMeters(47.625),
                                       inchesToMeters(72.0))

#################################################################
# Lighting

LIGHT_STRIP_LENGTH = 60

#################################################################################
# Vision
#
# PhotonVision cameras, by name as configured in the PhotonVision UI. The transform is
# robot-to-camera.
CAMERA_INFO = (
    {
        "Name": "center",
        "Transform": Transform3d(Translation3d(inchesToMeters(-4.628), inchesToMeters(-10.687),
                                               inchesToMeters(16.129)),
                                 Rotation3d(0, degreesToRadians(-30), 0)),
    },
    {
        "Name": "left",
        "Transform": Transform3d(Translation3d(inchesToMeters(12.056), inchesToMeters(10.981),
                                               inchesToMeters(8.44)),
                                 Rotation3d(0, degreesToRadians(-30), degreesToRadians(30))),
    },
    {
        "Name": "right",
        "Transform": Transform3d(Translation3d(inchesToMeters(12.056), -inchesToMeters(10.981),
                                               inchesToMeters(8.44)),
                                 Rotation3d(0, degreesToRadians(-30), degreesToRadians(-30))),
    },
)

# Pose observation filtering
MAX_VISION_AMBIGUITY = 0.3
MAX_VISION_Z_ERROR: meters = 0.75

# Standard deviations (x meters, y meters, theta radians)
SINGLE_TAG_STD_DEVS = (4.0, 4.0, 8.0)
MULTI_TAG_STD_DEVS = (0.5, 0.5, 1.0)

# Beyond this average tag distance a single tag estimate is not trusted at all
MAX_SINGLE_TAG_DISTANCE: meters = 4.0
