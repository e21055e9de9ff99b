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
from typing import Callable, List, Optional

from commands2 import cmd, Command, Subsystem
from commands2.button import CommandXboxController
from wpilib import DriverStation, RobotBase, SendableChooser, SmartDashboard
from wpilib.interfaces import GenericHID

import constants
from commands.autonomous import pathplanner
from constants import DeviceID, PWMChannel
from subsystems.elevator import Elevator
from subsystems.lighting import Lighting
from subsystems.swervedrive.drivesubsystem import Swerve
from subsystems.swervedrive.inputstream import DriveInputStream
from subsystems.vision.vision import Cameras

logger = logging.getLogger(__name__)


class RobotContainer:
    """
    This class is where the bulk of the robot should be declared. Since Command-based is a
    "declarative" paradigm, very little robot logic should actually be handled in the :class:`.Robot`
    periodic methods (other than the scheduler calls). Instead, the structure of the robot (including
    subsystems, commands, and button mappings) should be declared here.
    """
    def __init__(self, robot: 'MyRobot') -> None:
        logger.debug("*** called container __init__")
        self.robot = robot
        self.simulation = RobotBase.isSimulation()

        # Alliance support. Unknown until the first check so listeners always hear the first result
        self._is_red_alliance: Optional[bool] = None
        self._alliance_change_callbacks: List[Callable[[bool], None]] = []

        # Unplugged controllers are expected while testing
        DriverStation.silenceJoystickConnectionWarning(True)

        # The driver's controller
        self.driver_controller = CommandXboxController(constants.DRIVER_CONTROLLER_PORT)
        self.driver_controller.getHID().setRumble(GenericHID.RumbleType.kBothRumble, 0.0)

        ##########################################
        # Subsystem Initialization
        #
        # The robot core code will already call the periodic() function
        # as needed, but having our own list (iterated in order) allows us to move much of
        # the other subsystem 'tasks' into a generic loop.
        self.subsystems: List[Subsystem] = []

        ##########################################
        #  Drivetrain
        #
        self.robot_drive = Swerve.get_instance()
        self.subsystems.append(self.robot_drive)

        ##########################################
        #   ELEVATOR
        #
        self.elevator = Elevator(self, DeviceID.ELEVATOR_DEVICE_ID)
        self.subsystems.append(self.elevator)

        ##########################################
        #   LIGHTING
        #
        self.lights = Lighting(PWMChannel.LIGHT_STRIP, constants.LIGHT_STRIP_LENGTH)
        self.subsystems.append(self.lights)
        self.register_alliance_change_callback(self.lights.on_alliance_change)

        ##########################################
        #   Driver input
        #
        # Left stick translates (+x away from the driver, +y to the driver's left) and the
        # right stick X axis rotates.
        self.drive_input_stream = DriveInputStream.of(self.robot_drive.get_swerve_drive(),
                                                      lambda: self.driver_controller.getLeftY() * -1,
                                                      lambda: self.driver_controller.getLeftX() * -1) \
            .with_controller_rotation_axis(self.driver_controller.getRightX) \
            .deadband(constants.DRIVER_DEADBAND) \
            .scale_translation(constants.DRIVER_TRANSLATION_SCALE) \
            .alliance_relative_control(True)

        ##########################################
        #   PathPlanner.  Do this last since named commands need the previously
        #                 initialized subsystems.
        pathplanner.register_named_commands(self)
        self._auto_chooser: Optional[SendableChooser] = pathplanner.build_auto_chooser("")

        if self._auto_chooser is not None:
            SmartDashboard.putData("Auto Chooser", self._auto_chooser)

        ########################################################
        # Configure the button bindings
        self.configure_button_bindings(self.driver_controller)

        ########################################################
        # Initialize the Smart dashboard for each subsystem
        for subsystem in self.subsystems:
            if hasattr(subsystem, "dashboard_initialize") and callable(getattr(subsystem,
                                                                               "dashboard_initialize")):
                subsystem.dashboard_initialize()

    @property
    def is_red_alliance(self) -> bool:
        """
        Are we in the red alliance?

        The coordinate system is based on the Blue Alliance being to the left (lower x-axis).
        """
        return bool(self._is_red_alliance)

    def check_alliance(self) -> None:
        """
        Support alliance changes up until we start the competition. Default is the blue
        alliance and this function is called during 'disable_periodic' and at the init functions
        for both the Autonomous and Teleop stages.
        """
        if not self.robot.match_started:
            # Note that if 'None' is returned for the alliance, we assume Blue
            is_red = DriverStation.getAlliance() == DriverStation.Alliance.kRed

            if self._is_red_alliance != is_red:
                self._is_red_alliance = is_red

                for callback in self._alliance_change_callbacks:
                    callback(is_red)

    def register_alliance_change_callback(self, callback: Callable[[bool], None]) -> None:
        self._alliance_change_callbacks.append(callback)

    def configure_button_bindings(self, controller: CommandXboxController) -> None:
        """
        LS == Left Stick    - Robot direction on field. Fwd, Back, Left, Right (from operators perspective)
        RS == Right Stick   - Robot rotation  <- Counter Clockwise  -> Clockwise

        LB == Left Bumper   - Elevator down one level
        RB == Right Bumper  - Elevator up one level

        LT == Left Trigger  - Rotate (in-place) toward the best AprilTag. Stop when trigger released.

        X == X Button (Left)   - Lock wheels in an X while held
        Y == Y Button (Top)    - Reset odometry to the center of the field, facing away from the driver
        """
        self.robot_drive.setDefaultCommand(self.robot_drive.drive_field_oriented(self.drive_input_stream))

        controller.x().whileTrue(cmd.runOnce(self.robot_drive.lock_wheels, self.robot_drive).repeatedly())
        controller.y().onTrue(cmd.runOnce(self.robot_drive.reset_odometry, self.robot_drive))

        controller.leftBumper().toggleOnTrue(cmd.runOnce(self.elevator.go_down_level, self.elevator))
        controller.rightBumper().toggleOnTrue(cmd.runOnce(self.elevator.go_up_level, self.elevator))

        controller.leftTrigger(threshold=0.25).whileTrue(self.robot_drive.aim_at_target(Cameras.CENTER))

    def get_autonomous_command(self) -> Command:
        """
        The command to run in autonomous, selected from the PathPlanner auto chooser
        """
        selected = self._auto_chooser.getSelected() if self._auto_chooser is not None else None

        return selected or cmd.print_("No autonomous command configured")
