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

from commands2 import Subsystem
from rev import PersistMode, ResetMode, SparkBase, SparkBaseConfig, SparkMax, SparkMaxConfig
from wpilib import SmartDashboard
from wpimath.units import inchesToMeters, meters

import constants

logger = logging.getLogger(__name__)


class ElevatorConstants:
    GEAR_RATIO = 9.0
    SPROCKET_DIAMETER: meters = inchesToMeters(1.751)
    METERS_PER_ROTATION: meters = (math.pi * SPROCKET_DIAMETER) / GEAR_RATIO

    PROPORTIONAL_GAIN = 4.0
    INTEGRAL_GAIN = 0.0
    DERIVATIVE_GAIN = 0.1

    MAX_OUTPUT = 0.8
    CURRENT_LIMIT = 40
    TOLERANCE: meters = inchesToMeters(0.5)


class Elevator(Subsystem):
    """
    Elevator with a fixed set of heights. The driver steps it up and down a level at a time
    and the SPARK MAX holds the height with its on-board position loop.
    """
    def __init__(self, container: 'RobotContainer', can_device_id: int, inverted: bool = False) -> None:
        super().__init__()
        self.setName("Elevator")

        self._container = container
        self._robot = container.robot
        self._levels = constants.ELEVATOR_LEVELS
        self._level = 0

        self._motor = SparkMax(can_device_id, SparkBase.MotorType.kBrushless)
        self._motor.configure(self._motor_config(inverted),
                              ResetMode.kResetSafeParameters,
                              PersistMode.kPersistParameters)

        self._pid_controller = self._motor.getClosedLoopController()
        self._encoder = self._motor.getEncoder()
        self._encoder.setPosition(0.0)     # Elevator must start at the bottom

    @staticmethod
    def _motor_config(inverted: bool) -> SparkBaseConfig:
        config = SparkMaxConfig()
        config.inverted(inverted)
        config.setIdleMode(SparkBaseConfig.IdleMode.kBrake)
        config.smartCurrentLimit(ElevatorConstants.CURRENT_LIMIT)
        config.encoder.positionConversionFactor(ElevatorConstants.METERS_PER_ROTATION)
        config.encoder.velocityConversionFactor(ElevatorConstants.METERS_PER_ROTATION / 60.0)
        config.closedLoop.pid(ElevatorConstants.PROPORTIONAL_GAIN,
                              ElevatorConstants.INTEGRAL_GAIN,
                              ElevatorConstants.DERIVATIVE_GAIN)
        config.closedLoop.outputRange(-ElevatorConstants.MAX_OUTPUT, ElevatorConstants.MAX_OUTPUT)
        return config

    @property
    def level(self) -> int:
        return self._level

    @property
    def levels(self) -> tuple[meters, ...]:
        return self._levels

    @property
    def goal(self) -> meters:
        return self._levels[self._level]

    @property
    def height(self) -> meters:
        return self._encoder.getPosition()

    @property
    def at_goal(self) -> bool:
        return abs(self.height - self.goal) <= ElevatorConstants.TOLERANCE

    def set_level(self, level: int) -> None:
        level = max(0, min(len(self._levels) - 1, level))

        if level != self._level:
            logger.info(f"Elevator: level {self._level} -> {level}")

        self._level = level
        self._pid_controller.setReference(self.goal, SparkBase.ControlType.kPosition)

    def go_up_level(self) -> None:
        self.set_level(self._level + 1)

    def go_down_level(self) -> None:
        self.set_level(self._level - 1)

    def stop(self) -> None:
        self._motor.stopMotor()

    def periodic(self) -> None:
        counter = self._robot.counter
        if counter % 50 == 0 or (counter % 10 == 0 and self._robot.isEnabled()):
            self.dashboard_periodic()

    def dashboard_initialize(self) -> None:
        SmartDashboard.putNumber("Elevator/levels", len(self._levels))

    def dashboard_periodic(self) -> None:
        SmartDashboard.putNumber("Elevator/level", self._level)
        SmartDashboard.putNumber("Elevator/goal", self.goal)
        SmartDashboard.putNumber("Elevator/height", self.height)
