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
from typing import Optional

from phoenix6.configs import CANcoderConfiguration
from phoenix6.hardware import CANcoder
from phoenix6.signals import SensorDirectionValue
from pykit.logger import Logger
from rev import PersistMode, ResetMode, SparkBase, SparkBaseConfig, SparkMax, SparkMaxConfig, SparkMaxSim
from wpimath.geometry import Rotation2d
from wpimath.kinematics import SwerveModulePosition, SwerveModuleState
from wpimath.system.plant import DCMotor
from wpimath.units import degrees, meters_per_second, seconds

from lib_6107.subsystems.pykit.swervedrive_io import SwerveModuleIO
from subsystems.swervedrive.constants import SwerveConstants
from subsystems.swervedrive.swervemath import HALF_REVOLUTION, encoder_degrees, is_aligned, rotation_command, \
    shortest_angle_delta, wrap_degrees
from subsystems.swervedrive.swerveparser import ModuleConfig, PhysicalProperties

logger = logging.getLogger(__name__)

CONFIG_RETRIES = 5


def configure_cancoder(encoder: CANcoder, inverted: bool, magnet_offset: float = 0.0) -> bool:
    """
    Configure an absolute encoder to report [0, 1) rotations.

    :param encoder:       The CANcoder
    :param inverted:      True if clockwise (looking at the magnet) is positive
    :param magnet_offset: Offset, in rotations, added to the raw magnet reading by the device

    :returns: True if the configuration was accepted
    """
    config = CANcoderConfiguration()
    config.magnet_sensor.sensor_direction = SensorDirectionValue.CLOCKWISE_POSITIVE if inverted \
        else SensorDirectionValue.COUNTER_CLOCKWISE_POSITIVE
    config.magnet_sensor.absolute_sensor_discontinuity_point = 1.0
    config.magnet_sensor.magnet_offset = magnet_offset

    for _ in range(CONFIG_RETRIES):
        if encoder.configurator.apply(config, timeout_seconds=0.25).is_ok():
            return True

    logger.warning(f"CANcoder {encoder.device_id}: configuration not applied")
    return False


class SwerveModule(SwerveModuleIO):
    """
    A swerve module driven by two SPARK MAX / NEO pairs with a CANcoder above the wheel.

    The wheel angle is servoed directly off of the absolute encoder: each call to 'set_angle'
    computes the shortest signed angle error and commands the rotation motor with a
    proportional duty-cycle. The wheel angle frame used by the drivetrain ([-180, 180),
    0 = forward) sits a half turn from the encoder frame ([0, 360)).
    """
    def __init__(self, module_number: int, config: ModuleConfig, physical: PhysicalProperties):
        super().__init__(config.name)

        self.module_number = module_number
        self._config = config
        self._physical = physical
        self._raw_offset: degrees = config.absolute_encoder_offset
        self._angle_offset: degrees = config.absolute_encoder_offset

        # CANcoder config
        self._absolute_encoder = CANcoder(config.encoder.id, config.encoder.canbus)
        configure_cancoder(self._absolute_encoder, config.absolute_encoder_inverted)

        # Rotation motor config
        self._rotation_motor = SparkMax(config.angle.id, SparkBase.MotorType.kBrushless)
        self._rotation_motor.configure(self._rotation_config(config, physical),
                                       ResetMode.kResetSafeParameters,
                                       PersistMode.kPersistParameters)
        self._rotation_encoder = self._rotation_motor.getEncoder()

        # Drive motor config
        self._drive_motor = SparkMax(config.drive.id, SparkBase.MotorType.kBrushless)
        self._drive_motor.configure(self._drive_config(config, physical),
                                    ResetMode.kResetSafeParameters,
                                    PersistMode.kPersistParameters)
        self._drive_encoder = self._drive_motor.getEncoder()

        self._inputs = SwerveModuleIO.SwerveModuleIOInputs()
        self._last_angle_delta: degrees = 0.0
        self._desired_state = SwerveModuleState()

        self._drive_sim: Optional[SparkMaxSim] = None
        self._rotation_sim: Optional[SparkMaxSim] = None
        self._sim_angle: degrees = HALF_REVOLUTION

        self._drive_encoder.setPosition(0.0)
        self._rotation_encoder.setPosition(self.get_cancoder_degrees())

    @staticmethod
    def _rotation_config(config: ModuleConfig, physical: PhysicalProperties) -> SparkBaseConfig:
        motor_config = SparkMaxConfig()
        motor_config.inverted(config.angle_inverted)
        motor_config.setIdleMode(SparkBaseConfig.IdleMode.kBrake)
        motor_config.smartCurrentLimit(int(physical.angle_current_limit))
        motor_config.voltageCompensation(physical.optimal_voltage)
        motor_config.encoder.positionConversionFactor(physical.angle_conversion_factor)
        motor_config.encoder.velocityConversionFactor(physical.angle_conversion_factor / 60.0)
        return motor_config

    @staticmethod
    def _drive_config(config: ModuleConfig, physical: PhysicalProperties) -> SparkBaseConfig:
        motor_config = SparkMaxConfig()
        motor_config.inverted(config.drive_inverted)
        motor_config.setIdleMode(SparkBaseConfig.IdleMode.kBrake)
        motor_config.smartCurrentLimit(int(physical.drive_current_limit))
        motor_config.voltageCompensation(physical.optimal_voltage)
        motor_config.openLoopRampRate(physical.ramp_rate)
        motor_config.encoder.positionConversionFactor(physical.drive_conversion_factor)
        motor_config.encoder.velocityConversionFactor(physical.drive_conversion_factor / 60.0)
        return motor_config

    @property
    def config(self) -> ModuleConfig:
        return self._config

    @property
    def angle_offset(self) -> degrees:
        return self._angle_offset

    @property
    def absolute_encoder(self) -> CANcoder:
        return self._absolute_encoder

    @property
    def rotation_motor(self) -> SparkMax:
        return self._rotation_motor

    @property
    def drive_motor(self) -> SparkMax:
        return self._drive_motor

    @property
    def last_angle_delta(self) -> degrees:
        return self._last_angle_delta

    def set_angle(self, target_angle: degrees, drive_mode: bool) -> bool:
        """
        Directly command the wheel rotation toward an angle. This does not queue an update,
        the rotation motor output changes immediately.

        :param target_angle: Wheel angle in degrees [-180, 180), 0 is toward the front of the robot
        :param drive_mode:   If True, report whether the wheel is close enough to the target
                             for drive power to be applied

        :returns: True only in drive mode and only if the wheel is aligned
        """
        speed, delta = rotation_command(target_angle, self.get_cancoder_degrees(),
                                        SwerveConstants.MAX_WHEEL_ROTATE_SPEED)
        self._last_angle_delta = delta
        self.set_rotation_speed(speed)

        if drive_mode:
            return is_aligned(speed, SwerveConstants.ALIGNED_THRESHOLD)

        return False

    def set_rotation_speed(self, speed: float) -> None:
        self._rotation_motor.set(speed)

    def set_drive_speed(self, speed: float) -> None:
        self._drive_motor.set(speed)

    def stop(self) -> None:
        self._rotation_motor.stopMotor()
        self._drive_motor.stopMotor()

    def set_brake(self, brake: bool) -> None:
        idle_mode = SparkBaseConfig.IdleMode.kBrake if brake else SparkBaseConfig.IdleMode.kCoast

        for motor in (self._rotation_motor, self._drive_motor):
            motor.configure(SparkMaxConfig().setIdleMode(idle_mode),
                            ResetMode.kNoResetSafeParameters,
                            PersistMode.kNoPersistParameters)

    def get_cancoder_degrees(self) -> degrees:
        """
        Absolute rotation of the wheel with the module offset removed, in [0, 360)
        """
        rotations = self._absolute_encoder.get_absolute_position().value
        return encoder_degrees(rotations, self._angle_offset)

    def get_relative_degrees(self) -> degrees:
        return wrap_degrees(self._rotation_encoder.getPosition())

    def get_angle(self) -> Rotation2d:
        """
        Wheel angle in the drivetrain frame (0 is toward the front of the robot)
        """
        return Rotation2d.fromDegrees(self.get_cancoder_degrees() - HALF_REVOLUTION)

    def get_state(self) -> SwerveModuleState:
        return SwerveModuleState(self._drive_encoder.getVelocity(), self.get_angle())

    def get_position(self) -> SwerveModulePosition:
        return SwerveModulePosition(self._drive_encoder.getPosition(), self.get_angle())

    def get_desired_state(self) -> SwerveModuleState:
        return self._desired_state

    def set_desired_state(self, state: SwerveModuleState, max_speed: meters_per_second,
                          cosine_compensate: Optional[bool] = False) -> bool:
        """
        Steer toward the state's angle and drive only once the wheel is aligned.

        :returns: True if the module was aligned and drive power was applied
        """
        current = self.get_angle()
        state = SwerveModuleState(state.speed, state.angle)
        state.optimize(current)

        if abs(state.speed) < SwerveConstants.MIN_MODULE_SPEED:
            # Not moving the robot, so do not spin the wheel around either
            self.set_rotation_speed(0.0)
            self.set_drive_speed(0.0)
            self._desired_state = SwerveModuleState(0.0, current)
            return True

        aligned = self.set_angle(state.angle.degrees(), drive_mode=True)

        if cosine_compensate:
            state.cosineScale(current)

        output = max(-1.0, min(1.0, state.speed / max_speed)) if aligned and max_speed > 0 else 0.0
        self.set_drive_speed(output)

        self._desired_state = state
        return aligned

    def synchronize_encoders(self, deadband: degrees) -> bool:
        """
        Re-seed the rotation motor's relative encoder from the absolute encoder if they
        have drifted apart by more than the deadband while the wheel is not turning.

        :returns: True if the relative encoder was updated
        """
        if abs(self._rotation_encoder.getVelocity()) > SwerveConstants.ENCODER_SYNC_MAX_VELOCITY:
            return False

        absolute = self.get_cancoder_degrees()
        if abs(shortest_angle_delta(absolute, self.get_relative_degrees())) <= deadband:
            return False

        self._rotation_encoder.setPosition(absolute)
        return True

    def push_offset_to_encoder(self) -> bool:
        """
        Move the module's angle offset into the CANcoder so the device reports the corrected
        angle directly. Falls back to the software offset if the device rejects it.
        """
        if self._angle_offset == 0.0:
            return True

        magnet_offset = -self._angle_offset / 360.0

        if configure_cancoder(self._absolute_encoder, self._config.absolute_encoder_inverted, magnet_offset):
            self._angle_offset = 0.0
            return True

        logger.warning(f"Module {self.name}: could not push offset to encoder, keeping software offset")
        return False

    def updateInputs(self, inputs: SwerveModuleIO.SwerveModuleIOInputs) -> None:
        inputs.encoder_connected = self._absolute_encoder.is_connected()

        inputs.drive_position = self._drive_encoder.getPosition()
        inputs.drive_velocity = self._drive_encoder.getVelocity()
        inputs.drive_applied = self._drive_motor.getAppliedOutput()
        inputs.drive_current = self._drive_motor.getOutputCurrent()

        inputs.angle_absolute = self.get_cancoder_degrees()
        inputs.angle_relative = self.get_relative_degrees()
        inputs.angle_applied = self._rotation_motor.getAppliedOutput()
        inputs.angle_current = self._rotation_motor.getOutputCurrent()
        inputs.angle_error = self._last_angle_delta

    def periodic(self) -> None:
        self.updateInputs(self._inputs)
        Logger.processInputs(f"Drive/Module-{self.name}", self._inputs)

    ######################
    # Simulation support

    def sim_init(self) -> None:
        self._drive_sim = SparkMaxSim(self._drive_motor, DCMotor.NEO(1))
        self._rotation_sim = SparkMaxSim(self._rotation_motor, DCMotor.NEO(1))
        self._sim_angle = self.get_cancoder_degrees()

    def simulation_update(self, tm_diff: seconds) -> None:
        """
        Advance the simulated motors from their applied duty-cycles and move the CANcoder
        to match the wheel.
        """
        free_rps = DCMotor.NEO(1).freeSpeed / (2 * math.pi)

        drive_velocity = self._drive_motor.getAppliedOutput() * free_rps * self._physical.drive_conversion_factor
        self._drive_sim.iterate(drive_velocity, 12.0, tm_diff)

        angle_velocity = self._rotation_motor.getAppliedOutput() * free_rps * self._physical.angle_conversion_factor
        self._rotation_sim.iterate(angle_velocity, 12.0, tm_diff)

        self._sim_angle = wrap_degrees(self._sim_angle + angle_velocity * tm_diff)

        # The CANcoder reports the raw magnet angle, offset removal happens after
        raw = wrap_degrees(self._sim_angle + self._raw_offset) / 360.0
        self._absolute_encoder.sim_state.set_raw_position(raw)
