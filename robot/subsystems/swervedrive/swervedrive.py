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
import threading
from typing import List, Optional, Sequence, Tuple

from pykit.logger import Logger
from wpilib import Notifier
from wpimath.estimator import SwerveDrive4PoseEstimator
from wpimath.geometry import Pose2d, Rotation2d, Translation2d
from wpimath.kinematics import ChassisSpeeds, SwerveDrive4Kinematics, SwerveModulePosition, SwerveModuleState
from wpimath.units import degrees, meters_per_second, radians_per_second, seconds

from lib_6107.subsystems.gyro.pigeon2 import Pigeon2
from lib_6107.subsystems.pykit.gyro_io import GyroIO
from subsystems.swervedrive.constants import SwerveConstants
from subsystems.swervedrive.swervecontroller import SwerveController
from subsystems.swervedrive.swervemodule import SwerveModule
from subsystems.swervedrive.swerveparser import SwerveDriveConfig
from subsystems.swervedrive.telemetry import SwerveDriveTelemetry

logger = logging.getLogger(__name__)


class SwerveDrive:
    """
    Four module swerve drivetrain.

    Owns the modules, the IMU, the kinematics and the pose estimator. Odometry may be
    updated from a background notifier (the default) or manually from the subsystem's
    periodic call once 'stop_odometry_thread' has been called.
    """
    def __init__(self, config: SwerveDriveConfig, max_speed: meters_per_second, initial_pose: Pose2d):
        self._config = config
        self._max_speed = max_speed

        self.modules: List[SwerveModule] = [SwerveModule(number, module, config.physical)
                                            for number, module in enumerate(config.modules)]

        self.imu = Pigeon2(config.imu.id, config.imu_inverted, config.imu.canbus)
        self._gyro_inputs = GyroIO.GyroIOInputs()

        self.kinematics = SwerveDrive4Kinematics(*[module.location for module in config.modules])

        radius = max(module.location.norm() for module in config.modules)
        self._max_angular_velocity: radians_per_second = max_speed / radius

        self.swerve_controller = SwerveController(config.controller, max_speed, self._max_angular_velocity)

        self._odometry_lock = threading.RLock()
        self._pose_estimator = SwerveDrive4PoseEstimator(self.kinematics,
                                                         self.imu.heading,
                                                         self.get_module_positions(),
                                                         initial_pose)
        # Movement options
        self._heading_correction = False
        self._last_heading: Rotation2d = initial_pose.rotation()
        self._angular_velocity_correction = False
        self._angular_velocity_teleop = False
        self._angular_velocity_auto = False
        self._angular_velocity_coefficient = 0.0
        self._cosine_compensator = True
        self._auto_synchronize = False
        self._sync_deadband: degrees = SwerveConstants.ENCODER_SYNC_DEADBAND

        self._desired_states: Tuple[SwerveModuleState, ...] = tuple(SwerveModuleState() for _ in self.modules)

        self._odometry_thread: Optional[Notifier] = None
        self.start_odometry_thread(SwerveConstants.ODOMETRY_PERIOD)

    @property
    def config(self) -> SwerveDriveConfig:
        return self._config

    @property
    def max_speed(self) -> meters_per_second:
        return self._max_speed

    def get_maximum_chassis_velocity(self) -> meters_per_second:
        return self._max_speed

    def get_maximum_chassis_angular_velocity(self) -> radians_per_second:
        return self._max_angular_velocity

    ##########################################################################
    # Options

    def set_heading_correction(self, enabled: bool) -> None:
        """
        Hold the last commanded heading while translating without a rotation command
        """
        self._heading_correction = enabled
        self._last_heading = self.get_odometry_heading()

    def set_angular_velocity_compensation(self, use_in_teleop: bool, use_in_auto: bool, coefficient: float) -> None:
        """
        Skew the translation direction against the robot's rotation to counter the drift
        seen when translating and rotating at the same time
        """
        self._angular_velocity_teleop = use_in_teleop
        self._angular_velocity_auto = use_in_auto
        self._angular_velocity_coefficient = coefficient
        self._angular_velocity_correction = use_in_teleop or use_in_auto

    def set_cosine_compensator(self, enabled: bool) -> None:
        self._cosine_compensator = enabled

    @property
    def cosine_compensator(self) -> bool:
        return self._cosine_compensator

    def set_module_encoder_auto_synchronize(self, enabled: bool, deadband: degrees) -> None:
        self._auto_synchronize = enabled
        self._sync_deadband = deadband

    def push_offsets_to_encoders(self) -> bool:
        """
        Push each module's absolute encoder offset into its CANcoder

        :returns: True if every module accepted its offset
        """
        results = [module.push_offset_to_encoder() for module in self.modules]
        return all(results)

    ##########################################################################
    # Driving

    def drive(self, translation: Translation2d, rotation: radians_per_second, field_relative: bool) -> None:
        """
        Drive the robot. Translation is in meters/second, +x is forward, +y is to the left.
        """
        if field_relative:
            speeds = ChassisSpeeds.fromFieldRelativeSpeeds(translation.X(), translation.Y(), rotation,
                                                           self.get_odometry_heading())
        else:
            speeds = ChassisSpeeds(translation.X(), translation.Y(), rotation)

        self.drive_robot_relative(speeds)

    def drive_field_oriented(self, speeds: ChassisSpeeds) -> None:
        self.drive_robot_relative(ChassisSpeeds.fromFieldRelativeSpeeds(speeds, self.get_odometry_heading()))

    def drive_robot_relative(self, speeds: ChassisSpeeds, autonomous: bool = False) -> None:
        speeds = self._movement_optimizations(speeds, autonomous)
        speeds = ChassisSpeeds.discretize(speeds, SwerveConstants.ODOMETRY_PERIOD)

        states = self.kinematics.toSwerveModuleStates(speeds)
        self.set_module_states(states)

    def drive_with_feedforwards(self, speeds: ChassisSpeeds, states: Optional[Sequence[SwerveModuleState]] = None,
                                forces: Optional[Sequence[float]] = None) -> None:
        """
        Path following output. The modules run open-loop on duty-cycle so the force
        feedforwards are not applied.

        Without explicit module states the speeds go through the autonomous movement
        optimizations. Explicit states are sent to the modules as given.
        """
        if states is None:
            self.drive_robot_relative(speeds, autonomous=True)
            return

        self.set_module_states(states)

    def set_chassis_speeds(self, speeds: ChassisSpeeds) -> None:
        """
        Robot relative speeds straight to the modules with no movement optimizations
        """
        self.set_module_states(self.kinematics.toSwerveModuleStates(speeds))

    def set_module_states(self, states: Sequence[SwerveModuleState]) -> List[bool]:
        """
        Set each module's desired state. A module only applies drive power once its
        wheel is aligned with the requested angle.

        :returns: Aligned flag for each module
        """
        states = SwerveDrive4Kinematics.desaturateWheelSpeeds(tuple(states), self._max_speed)

        aligned = [module.set_desired_state(state, self._max_speed, self._cosine_compensator)
                   for module, state in zip(self.modules, states)]

        self._desired_states = tuple(module.get_desired_state() for module in self.modules)
        return aligned

    def _movement_optimizations(self, speeds: ChassisSpeeds, autonomous: bool) -> ChassisSpeeds:
        use_compensation = self._angular_velocity_auto if autonomous else self._angular_velocity_teleop

        if self._angular_velocity_correction and use_compensation:
            angular_velocity = self.imu.turn_rate

            if abs(angular_velocity) > SwerveConstants.MIN_ANGULAR_VELOCITY:
                heading = self.get_odometry_heading()
                field_speeds = ChassisSpeeds.fromRobotRelativeSpeeds(speeds, heading)
                skew = Rotation2d(angular_velocity * self._angular_velocity_coefficient)
                speeds = ChassisSpeeds.fromFieldRelativeSpeeds(field_speeds, heading + skew)

        if self._heading_correction:
            moving = math.hypot(speeds.vx, speeds.vy) > SwerveConstants.MIN_MODULE_SPEED

            if abs(speeds.omega) < SwerveConstants.MIN_ANGULAR_VELOCITY and moving:
                speeds = ChassisSpeeds(speeds.vx, speeds.vy,
                                       self.swerve_controller.heading_calculate(
                                           self.get_odometry_heading().radians(),
                                           self._last_heading.radians()))
            else:
                self._last_heading = self.get_odometry_heading()

        return speeds

    def lock_pose(self) -> None:
        """
        Point every wheel toward the center of the robot so it resists being pushed
        """
        states = []

        for module in self.modules:
            # Either end of the wheel works, so never turn more than a quarter turn
            state = SwerveModuleState(0.0, module.config.location.angle())
            state.optimize(module.get_angle())

            module.set_angle(state.angle.degrees(), drive_mode=False)
            module.set_drive_speed(0.0)
            states.append(state)

        self._desired_states = tuple(states)

    def set_motor_idle_mode(self, brake: bool) -> None:
        for module in self.modules:
            module.set_brake(brake)

    def stop(self) -> None:
        for module in self.modules:
            module.stop()

    ##########################################################################
    # Odometry

    def get_module_positions(self) -> Tuple[SwerveModulePosition, ...]:
        return tuple(module.get_position() for module in self.modules)

    def get_states(self) -> Tuple[SwerveModuleState, ...]:
        return tuple(module.get_state() for module in self.modules)

    def get_desired_states(self) -> Tuple[SwerveModuleState, ...]:
        return self._desired_states

    def update_odometry(self) -> None:
        """
        Runs on the odometry notifier thread. Only the pose estimator is touched here,
        logging and encoder writes stay on the main robot thread in 'periodic'.
        """
        with self._odometry_lock:
            self._pose_estimator.update(self.imu.heading, self.get_module_positions())

    def start_odometry_thread(self, period: seconds) -> None:
        if self._odometry_thread is None:
            self._odometry_thread = Notifier(self.update_odometry)
            self._odometry_thread.setName("SwerveOdometry")

        self._odometry_thread.startPeriodic(period)

    def stop_odometry_thread(self) -> None:
        if self._odometry_thread is not None:
            self._odometry_thread.stop()

    def add_vision_measurement(self, pose: Pose2d, timestamp: seconds,
                               std_devs: Optional[Tuple[float, float, float]] = None) -> None:
        with self._odometry_lock:
            if std_devs is None:
                self._pose_estimator.addVisionMeasurement(pose, timestamp)
            else:
                self._pose_estimator.addVisionMeasurement(pose, timestamp, std_devs)

    def reset_odometry(self, pose: Pose2d) -> None:
        with self._odometry_lock:
            self._pose_estimator.resetPosition(self.imu.heading, self.get_module_positions(), pose)

        self._last_heading = pose.rotation()
        self.swerve_controller.reset(pose.rotation().radians())

    def zero_gyro(self) -> None:
        """
        Set the current robot heading as 'forward'
        """
        self.imu.zero_yaw()
        self.reset_odometry(Pose2d(self.get_pose().translation(), Rotation2d()))

    def get_pose(self) -> Pose2d:
        with self._odometry_lock:
            return self._pose_estimator.getEstimatedPosition()

    def get_odometry_heading(self) -> Rotation2d:
        return self.get_pose().rotation()

    def get_yaw(self) -> Rotation2d:
        return self.imu.heading

    def get_robot_velocity(self) -> ChassisSpeeds:
        return self.kinematics.toChassisSpeeds(self.get_states())

    def get_field_velocity(self) -> ChassisSpeeds:
        return ChassisSpeeds.fromRobotRelativeSpeeds(self.get_robot_velocity(), self.get_odometry_heading())

    def periodic(self) -> None:
        self.imu.updateInputs(self._gyro_inputs)
        Logger.processInputs("Drive/Gyro", self._gyro_inputs)

        for module in self.modules:
            module.periodic()

        if self._auto_synchronize:
            for module in self.modules:
                module.synchronize_encoders(self._sync_deadband)

        SwerveDriveTelemetry.update(self.get_pose(), self.get_robot_velocity(),
                                    self.get_states(), self._desired_states)

    ######################
    # Simulation support

    def sim_init(self) -> None:
        for module in self.modules:
            module.sim_init()

    def simulation_update(self, tm_diff: seconds) -> ChassisSpeeds:
        """
        Advance the simulated modules and IMU

        :returns: Robot relative chassis speeds the modules produced
        """
        for module in self.modules:
            module.simulation_update(tm_diff)

        speeds = self.get_robot_velocity()
        self.imu.sim_yaw = self.imu.yaw + math.degrees(speeds.omega * tm_diff)

        return speeds
