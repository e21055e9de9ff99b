#!/usr/bin/env python3
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
import sys
from typing import Optional

import wpilib
from commands2 import CommandScheduler
from commands2.command import Command
from pathplannerlib.pathfinding import LocalADStar, Pathfinding
# pykit & AdvantageScope support
from pykit.logger import Logger
from pykit.networktables.nt4Publisher import NT4Publisher
from pykit.wpilog.wpilogreader import WPILOGReader
from pykit.wpilog.wpilogwriter import WPILOGWriter
from wpilib import Field2d, LiveWindow, Timer

import constants
from lib_6107.util.logged_timed_command_robot import LoggedTimedCommandRobot
from robotcontainer import RobotContainer
from util.logtracer import LogTracer
from version import VERSION

# Setup Logging
logger = logging.getLogger(__name__)


class MyRobot(LoggedTimedCommandRobot):
    """
    Our default robot class

    Command v2 robots are encouraged to inherit from TimedCommandRobot, which
    has an implementation of robotPeriodic which runs the scheduler for you
    """
    def __init__(self):
        super().__init__()

        Logger.recordMetadata("Robot", type(self).__name__)
        Logger.recordMetadata("Version", VERSION)

        match constants.ROBOT_MODE:
            case constants.RobotModes.REAL:
                deploy_config = wpilib.deployinfo.getDeployData()

                if deploy_config is not None:
                    Logger.recordMetadata("Deploy Host", deploy_config.get("deploy-host", ""))
                    Logger.recordMetadata("Deploy Date", deploy_config.get("deploy-date", ""))
                    Logger.recordMetadata("Git Hash", deploy_config.get("git-hash", ""))
                    Logger.recordMetadata("Git Branch", deploy_config.get("git-branch", ""))

                Logger.addDataReciever(NT4Publisher(True))
                Logger.addDataReciever(WPILOGWriter())

            case constants.RobotModes.SIMULATION:
                Logger.addDataReciever(WPILOGWriter())
                Logger.addDataReciever(NT4Publisher(True))

            case constants.RobotModes.REPLAY:
                #
                #  To run back a log file in replay mode, set the `LOG_PATH` environment variable
                #  and then run in simulation:
                #
                #    LOG_PATH=/path/to/log/file.wpilog robotpy --main robot sim
                #
                self.UseTiming = False  # Run as fast as possible

                log_path = os.path.abspath(os.environ["LOG_PATH"])

                Logger.setReplaySource(WPILOGReader(log_path))
                Logger.addDataReciever(WPILOGWriter(log_path[:-7] + "_sim.wpilog"))

        Logger.start()

        self._counter = 0  # Updated on each periodic call. Can be used to throttle smartdashboard updates

        self._container: Optional[RobotContainer] = None
        self._autonomous_command: Optional[Command] = None

        self.disabledTimer: Timer = Timer()
        self.match_started = False  # Set true on Autonomous or Teleop init

    @property
    def container(self) -> RobotContainer:
        return self._container

    @property
    def counter(self) -> int:
        return self._counter

    @property
    def field(self) -> Optional[Field2d]:
        return self._container.robot_drive.field if self._container is not None else None

    def robotInit(self) -> None:
        """
        This function is run when the robot is first started up and should be used for any
        initialization code.
        """
        logger.info("robotInit: entry")
        super().robotInit()

        LiveWindow.disableAllTelemetry()

        # Tracks active commands
        command_count: dict[str, int] = {}

        def log_command(command: Command, active: bool) -> None:
            name = command.getName()
            count = command_count.get(name, 0) + (1 if active else -1)
            command_count[name] = count
            Logger.recordOutput(f"Commands/{name}", count > 0)

        scheduler = CommandScheduler.getInstance()

        scheduler.onCommandInitialize(lambda c: log_command(c, True))
        scheduler.onCommandFinish(lambda c: log_command(c, False))
        scheduler.onCommandInterrupt(lambda c: log_command(c, False))

        self._logging_init()

        version = f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}"
        logger.info(f"Python: {version}, Software Version: {VERSION}")

        # Set up our pathfinding algorithm before the drivetrain configures PathPlanner
        Pathfinding.setPathfinder(LocalADStar())

        # Instantiate our RobotContainer.  This will perform all our button bindings, and put our
        # autonomous chooser on the dashboard.
        self._container = RobotContainer(self)

        logger.info("robotInit: exit")

    @staticmethod
    def _logging_init():
        match constants.ROBOT_MODE:
            case constants.RobotModes.SIMULATION:
                logging.getLogger().setLevel(logging.INFO)  # Python logging
                logging.getLogger("wpilib").setLevel(logging.DEBUG)
                logging.getLogger("commands2").setLevel(logging.DEBUG)

            case _:
                logging.getLogger().setLevel(logging.ERROR)
                logging.getLogger("wpilib").setLevel(logging.ERROR)
                logging.getLogger("commands2").setLevel(logging.ERROR)

    def robotPeriodic(self) -> None:
        """
        Periodic code for all modes should go here. Runs before the subsystems' periodic
        functions are called by the scheduler.
        """
        LogTracer.resetOuter("RobotPeriodic")

        super().robotPeriodic()
        LogTracer.record("Scheduler")

        LogTracer.recordTotal()
        self._counter += 1

    def _stop_subsystems(self) -> None:
        for subsystem in self.container.subsystems:
            if hasattr(subsystem, "stop") and callable(getattr(subsystem, "stop")):
                subsystem.stop()

    def disabledInit(self) -> None:
        logger.info("disabledInit: entry")
        super().disabledInit()

        self._stop_subsystems()

        self.disabledTimer.reset()
        self.disabledTimer.start()

    def disabledPeriodic(self) -> None:
        # Hold the wheels for a while after being disabled so the robot does not roll, then
        # release the brakes so it can be pushed around.
        if self.disabledTimer.hasElapsed(constants.WHEEL_LOCK_TIME):
            self.container.robot_drive.set_motor_brake(False)
            self.disabledTimer.stop()
            self.disabledTimer.reset()

        # Validate who we are working for
        if not self.match_started:
            self.container.check_alliance()

    def disabledExit(self) -> None:
        super().disabledExit()
        logger.info("*** disabledExit: entry")
        self.disabledTimer.stop()
        self.disabledTimer.reset()

    def autonomousInit(self) -> None:
        """
        Schedule the selected autonomous command
        """
        super().autonomousInit()
        logger.info("autonomousInit: entry")
        self.container.robot_drive.set_motor_brake(True)

        # Validate who we are working for. This may not be valid until autonomous or teleop init
        if not self.match_started:
            self.container.check_alliance()
            self.match_started = True

        self._autonomous_command = self.container.get_autonomous_command()

        if self._autonomous_command is not None:
            CommandScheduler.getInstance().schedule(self._autonomous_command)

    def autonomousExit(self) -> None:
        super().autonomousExit()
        logger.info("autonomousExit: entry")

    def teleopInit(self) -> None:
        """
        This makes sure that the autonomous stops running when teleop starts running. If you
        want the autonomous to continue until interrupted by another command, remove this.
        """
        super().teleopInit()
        logger.debug("*** called teleopInit")
        self.container.robot_drive.set_motor_brake(True)

        if self._autonomous_command is not None:
            self._autonomous_command.cancel()
            self._autonomous_command = None

        if not self.match_started:
            self.container.check_alliance()
            self.match_started = True

    def teleopExit(self) -> None:
        super().teleopExit()
        self._stop_subsystems()

    def testInit(self) -> None:
        super().testInit()
        logger.debug("*** called testInit")
        CommandScheduler.getInstance().cancelAll()
