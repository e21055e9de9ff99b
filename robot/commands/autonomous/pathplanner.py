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
import os
from typing import Optional

from commands2 import cmd
from pathplannerlib.auto import AutoBuilder, NamedCommands, RobotConfig
from pathplannerlib.controller import PIDConstants, PPHolonomicDriveController
from pathplannerlib.logging import PathPlannerLogging
from pykit.logger import Logger
from wpilib import DriverStation, SendableChooser, getDeployDirectory

from subsystems.swervedrive.constants import AutoConstants

logger = logging.getLogger(__name__)


def settings_file() -> str:
    return os.path.join(getDeployDirectory(), 'pathplanner', 'settings.json')


def is_red_alliance() -> bool:
    # Paths are drawn for the blue alliance and mirrored when we are red
    return (DriverStation.getAlliance() or DriverStation.Alliance.kBlue) == DriverStation.Alliance.kRed


def configure_auto_builder(drive: 'Swerve') -> bool:
    """
    Connect the drivetrain to PathPlanner's AutoBuilder.

    :returns: False if the PathPlanner GUI settings could not be loaded. Autonomous paths
              and on-the-fly pathfinding are unavailable in that case.
    """
    file_path = settings_file()

    if not (os.path.isfile(file_path) and os.access(file_path, os.R_OK)):
        logger.error(f"PathPlanner settings {file_path} not found or is not readable")
        return False

    try:
        config = RobotConfig.fromGUISettings()

    except Exception as e:
        logger.error(f"Unable to load PathPlanner settings {file_path}: {e}")
        return False

    AutoBuilder.configure(drive.get_pose,               # Supplier of current robot pose
                          drive.reset_odometry,         # Consumer for seeding pose against auto
                          drive.get_robot_velocity,     # Supplier of current robot relative speeds
                          # Consumer of robot relative ChassisSpeeds and module feedforwards
                          drive.drive_path_planned,
                          PPHolonomicDriveController(
                              # PID constants for translation
                              PIDConstants(AutoConstants.TRANSLATION_P,
                                           AutoConstants.TRANSLATION_I,
                                           AutoConstants.TRANSLATION_D),
                              # PID constants for rotation
                              PIDConstants(AutoConstants.ROTATION_P,
                                           AutoConstants.ROTATION_I,
                                           AutoConstants.ROTATION_D)
                          ),
                          config,
                          is_red_alliance,
                          drive)    # Subsystem for requirements

    # PathPlanner and AdvantageScope integration
    PathPlannerLogging.setLogCurrentPoseCallback(lambda pose: Logger.recordOutput("PathPlanner/CurrentPose", pose))
    PathPlannerLogging.setLogTargetPoseCallback(lambda pose: Logger.recordOutput("PathPlanner/TargetPose", pose))
    PathPlannerLogging.setLogActivePathCallback(lambda poses: Logger.recordOutput("PathPlanner/CurrentPath", poses))

    return True


def register_named_commands(container: 'RobotContainer') -> None:
    """
    Commands that can be placed in PathPlanner autos by name. Must be registered before
    any autos are loaded.
    """
    drive = container.robot_drive
    elevator = container.elevator

    NamedCommands.registerCommand("LockWheels", cmd.runOnce(drive.lock_wheels, drive))
    NamedCommands.registerCommand("ElevatorUp", cmd.runOnce(elevator.go_up_level, elevator))
    NamedCommands.registerCommand("ElevatorDown", cmd.runOnce(elevator.go_down_level, elevator))


def build_auto_chooser(default_command: Optional[str] = "") -> Optional[SendableChooser]:
    """
    Chooser with every auto in deploy/pathplanner/autos, or None if AutoBuilder was not configured
    """
    if not AutoBuilder.isConfigured():
        logger.error("AutoBuilder not configured, no autonomous chooser available")
        return None

    return AutoBuilder.buildAutoChooser(default_command)
