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
# See the documentation for more details on how this works
#
# Documentation can be found at https://robotpy.readthedocs.io/projects/pyfrc/en/latest/physics.html
#
# The swerve modules integrate their own simulated motors and CANcoders. The drivetrain
# reports the chassis speeds those modules produce and the physics controller moves the
# robot around the simulated field with them.
import inspect
import logging

from pyfrc.physics.core import PhysicsInterface
from wpilib import RobotController
from wpilib.simulation import BatterySim, RoboRioSim

import constants
from robot import MyRobot
from util.logtracer import LogTracer

logger = logging.getLogger(__name__)


class PhysicsEngine:
    """
    Simulates a four module swerve robot

    Any objects created or manipulated in this file are for simulation purposes only.
    """
    def __init__(self, physics_controller: PhysicsInterface, robot: "MyRobot"):
        """
        Initialize the simulator.  This method is called after the container and all
        subsystems have been initialized.

        :param physics_controller: `pyfrc.physics.core.Physics` object
                                   to communicate simulation effects to
        :param robot: your robot object
        """
        logger.info("PhysicsEngine.__init__: entry")

        self._physics_controller = physics_controller
        self._robot: MyRobot = robot

        # Initialize our simulated subsystems
        for subsystem in robot.container.subsystems:
            if hasattr(subsystem, "sim_init") and callable(getattr(subsystem, "sim_init")):
                subsystem.sim_init(physics_controller)

        physics_controller.field.getRobotObject().setPose(constants.FIELD_CENTER)

        logger.info("PhysicsEngine.__init__: exit")

    def update_sim(self, now: float, tm_diff: float) -> None:
        """
        Called when the simulation parameters for the program need to be
        updated.

        :param now:     The current time as a float
        :param tm_diff: The amount of time that has passed since the last
                        time that this function was called
        """
        LogTracer.resetOuter("PhysicsEngine")

        kwargs = {
            "now": now,
            "tm_diff": tm_diff,
        }
        total_amps_used: float = 0.0

        if self._robot.isEnabled():
            for subsystem in self._robot.container.subsystems:
                if hasattr(subsystem, "simulationPeriodic") and callable(getattr(subsystem,
                                                                                 "simulationPeriodic")):
                    signature = inspect.signature(subsystem.simulationPeriodic)
                    parameters = signature.parameters

                    if inspect.Parameter.VAR_KEYWORD in [p.kind for p in parameters.values()]:
                        total_amps_used += subsystem.simulationPeriodic(**kwargs)

        RoboRioSim.setVInVoltage(BatterySim.calculate([total_amps_used]))
        LogTracer.record("Subsystems")

        LogTracer.recordTotal()
        logger.debug(f"PhysicsEngine: {total_amps_used:.1f}A, battery {RobotController.getBatteryVoltage():.2f}V")
