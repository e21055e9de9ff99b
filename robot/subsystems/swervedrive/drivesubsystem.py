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
import os
from typing import Callable, Optional

from commands2 import Command, CommandScheduler, Subsystem
from pathplannerlib.auto import AutoBuilder
from pathplannerlib.commands import PathfindingCommand
from pathplannerlib.path import PathConstraints
from pykit.logger import Logger
from wpilib import Field2d, RobotBase, SmartDashboard, getDeployDirectory
from wpimath.geometry import Pose2d, Rotation2d, Translation2d
from wpimath.kinematics import ChassisSpeeds
from wpimath.units import radians_per_second

import constants
from commands.autonomous.pathplanner import configure_auto_builder
from subsystems.swervedrive.constants import AutoConstants, SwerveConstants
from subsystems.swervedrive.swervedrive import SwerveDrive
from subsystems.swervedrive.swervemath import cube_translation
from subsystems.swervedrive.swerveparser import SwerveParser
from subsystems.swervedrive.telemetry import SwerveDriveTelemetry, TelemetryVerbosity
from subsystems.vision.vision import Cameras, Vision
from util.logtracer import LogTracer

logger = logging.getLogger(__name__)


class Swerve(Subsystem):
    """
    Drive subsystem. Wraps the swerve drivetrain built from deploy/swerve, keeps
    odometry fused with vision and connects the drivetrain to PathPlanner.
    """
    _instance: Optional['Swerve'] = None

    @classmethod
    def get_instance(cls) -> 'Swerve':
        if cls._instance is None:
            cls._instance = cls()

        return cls._instance

    def __init__(self, directory: Optional[str] = None) -> None:
        super().__init__()
        self.setName("Swerve")

        SwerveDriveTelemetry.verbosity = TelemetryVerbosity.HIGH
        SwerveDriveTelemetry.is_simulation = RobotBase.isSimulation()

        directory = directory or os.path.join(getDeployDirectory(), SwerveConstants.CONFIG_DIRECTORY)
        try:
            self._swerve_drive: SwerveDrive = SwerveParser(directory).create_swerve_drive(constants.MAX_SPEED,
                                                                                         constants.FIELD_CENTER)
        except (FileNotFoundError, ValueError) as e:
            raise RuntimeError("Failed to create swerve drive") from e

        self._swerve_drive.set_heading_correction(False)
        self._swerve_drive.set_angular_velocity_compensation(True, True, SwerveConstants.ANGULAR_VELOCITY_COEFFICIENT)
        self._swerve_drive.set_cosine_compensator(not SwerveDriveTelemetry.is_simulation)
        self._swerve_drive.set_module_encoder_auto_synchronize(True, SwerveConstants.ENCODER_SYNC_DEADBAND)
        self._swerve_drive.push_offsets_to_encoders()

        self.field = Field2d()
        self._counter = 0
        self._physics_controller: Optional['PhysicsInterface'] = None
        self._vision: Optional[Vision] = None
        self._vision_enabled = constants.VISION_ODOMETRY_ENABLED

        if self._vision_enabled:
            self.setup_photon_vision()
            # Odometry is updated from periodic() so vision measurements line up with it
            self._swerve_drive.stop_odometry_thread()

        self.setup_path_planner()

    def setup_path_planner(self) -> bool:
        """
        Configure PathPlanner's AutoBuilder for this drivetrain and warm up the pathfinder

        :returns: True if AutoBuilder was configured
        """
        configured = configure_auto_builder(self)

        CommandScheduler.getInstance().schedule(PathfindingCommand.warmupCommand())
        return configured

    def setup_photon_vision(self) -> None:
        logger.info("Setting up PhotonVision")
        self._vision = Vision(self._swerve_drive.get_pose, self.field)

    @property
    def vision(self) -> Optional[Vision]:
        return self._vision

    def aim_at_target(self, camera: Cameras) -> Command:
        """
        Turn toward the best target the camera currently sees
        """
        def aim() -> None:
            if self._vision is None:
                return

            result = self._vision.get_best_result(camera)
            if result is None:
                return

            # Target yaw is positive to the right, heading is counter-clockwise positive
            yaw = Rotation2d.fromDegrees(result.getBestTarget().getYaw())
            self.drive_chassis_speeds(self.get_target_speeds_to_angle(0, 0, self.get_heading() - yaw))

        return self.run(aim).withName(f"AimAtTarget-{camera.value}")

    def periodic(self) -> None:
        LogTracer.resetOuter("SwervePeriodic")

        if self._vision_enabled:
            self._swerve_drive.update_odometry()
            LogTracer.record("Odometry")

            if self._vision is not None:
                self._vision.update_pose_estimation(self._swerve_drive)
                LogTracer.record("Vision")

        self._swerve_drive.periodic()
        LogTracer.record("ModulesPeriodic")

        pose = self.get_pose()
        self.field.setRobotPose(pose)
        Logger.recordOutput("Swerve/Pose", pose)

        self._counter += 1
        if self._counter % 50 == 0:
            self.dashboard_periodic()

        LogTracer.recordTotal()

    ######################
    # Commands

    def drive_field_oriented(self, velocity: Callable[[], ChassisSpeeds]) -> Command:
        return self.run(lambda: self._swerve_drive.drive_field_oriented(velocity())).withName("DriveFieldOriented")

    def drive_to_pose(self, pose: Pose2d) -> Command:
        """
        Pathfind to a pose on the field and arrive there stopped
        """
        path_constraints = PathConstraints(self._swerve_drive.get_maximum_chassis_velocity(),
                                           AutoConstants.MAX_ACCELERATION,
                                           self._swerve_drive.get_maximum_chassis_angular_velocity(),
                                           AutoConstants.MAX_ANGULAR_ACCELERATION)

        return AutoBuilder.pathfindToPose(pose, path_constraints, 0.0)

    ######################
    # Drivetrain access

    def lock_wheels(self) -> None:
        self._swerve_drive.lock_pose()

    def reset_odometry(self, pose: Optional[Pose2d] = None) -> None:
        """
        Reset odometry to a pose. With no pose, the current heading becomes 'forward' and
        the robot is placed at the center of the field.
        """
        if pose is None:
            self._swerve_drive.zero_gyro()
            pose = constants.FIELD_CENTER

        self._swerve_drive.reset_odometry(pose)

    def get_pose(self) -> Pose2d:
        return self._swerve_drive.get_pose()

    def get_robot_velocity(self) -> ChassisSpeeds:
        return self._swerve_drive.get_robot_velocity()

    def get_swerve_drive(self) -> SwerveDrive:
        return self._swerve_drive

    def get_heading(self) -> Rotation2d:
        return self.get_pose().rotation()

    def get_target_speeds(self, x_input: float, y_input: float, heading_x: float, heading_y: float) -> ChassisSpeeds:
        """
        Field relative speeds from two joysticks: left stick translation (cubed) and right
        stick pointing the direction the robot should face.
        """
        scaled = cube_translation(Translation2d(x_input, y_input))

        return self._swerve_drive.swerve_controller.get_target_speeds_from_joystick(scaled.X(), scaled.Y(),
                                                                                   heading_x, heading_y,
                                                                                   self.get_heading().radians(),
                                                                                   constants.MAX_SPEED2)

    def get_target_speeds_to_angle(self, x_input: float, y_input: float, angle: Rotation2d) -> ChassisSpeeds:
        scaled = cube_translation(Translation2d(x_input, y_input))

        return self._swerve_drive.swerve_controller.get_target_speeds(scaled.X(), scaled.Y(),
                                                                      angle.radians(),
                                                                      self.get_heading().radians(),
                                                                      constants.MAX_SPEED2)

    def drive(self, translation: Translation2d, rotation: radians_per_second, field_relative: bool) -> None:
        self._swerve_drive.drive(translation, rotation, field_relative)

    def drive_chassis_speeds(self, velocity: ChassisSpeeds) -> None:
        self._swerve_drive.drive_robot_relative(velocity)

    def drive_path_planned(self, speeds: ChassisSpeeds, feedforwards: 'DriveFeedforwards') -> None:
        """
        PathPlanner output. Robot relative speeds plus per-module force feedforwards. The
        speeds get the autonomous angular velocity compensation before reaching the modules.
        """
        self._swerve_drive.drive_with_feedforwards(speeds, forces=feedforwards.linearForcesNewtons)

    def stop(self) -> None:
        self._swerve_drive.stop()

    def set_motor_brake(self, brake: bool) -> None:
        self._swerve_drive.set_motor_idle_mode(brake)

    ######################
    # SmartDashboard support

    def dashboard_initialize(self) -> None:
        SmartDashboard.putData("Field", self.field)
        self._swerve_drive.imu.dashboard_initialize()

    def dashboard_periodic(self) -> None:
        pose = self.get_pose()

        SmartDashboard.putNumber("Swerve/x", pose.X())
        SmartDashboard.putNumber("Swerve/y", pose.Y())
        SmartDashboard.putNumber("Swerve/heading", pose.rotation().degrees())
        SmartDashboard.putNumber("Swerve/maxAngularVelocity",
                                 math.degrees(self._swerve_drive.get_maximum_chassis_angular_velocity()))

        self._swerve_drive.imu.dashboard_periodic()

    ######################
    # Simulation support

    def sim_init(self, physics_controller: 'PhysicsInterface') -> None:
        self._physics_controller = physics_controller
        self._swerve_drive.sim_init()

    def simulationPeriodic(self, **kwargs) -> Optional[float]:
        """
        Called by the CommandScheduler with no arguments and by the physics engine's
        'update_sim' with 'now' and 'tm_diff'. Only the physics engine form is supported.

        :returns: Total current drawn by the drive modules, in amps
        """
        if not kwargs:
            return None

        tm_diff = kwargs["tm_diff"]
        speeds = self._swerve_drive.simulation_update(tm_diff)

        if self._physics_controller is not None:
            self._physics_controller.drive(speeds, tm_diff)

        return sum(module.drive_motor.getOutputCurrent() + module.rotation_motor.getOutputCurrent()
                   for module in self._swerve_drive.modules)
