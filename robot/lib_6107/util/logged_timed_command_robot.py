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

from commands2 import TimedCommandRobot
from pykit.logger import Logger
from wpilib import RobotController

import constants


class LoggedTimedCommandRobot(TimedCommandRobot):
    """
    A commands v2 TimedCommandRobot with pykit (AdvantageScope) logging.

    pykit's own LoggedRobot replaces the main loop and so cannot also run the command
    scheduler. This keeps TimedCommandRobot's loop and wraps each pass of it with the
    logger's before/after user code calls.
    """
    default_period = constants.DEFAULT_ROBOT_PERIOD

    def __init__(self):
        super().__init__(period=self.default_period)

        self._user_code_start = 0
        self._periodic_before_start = 0

    def startCompetition(self) -> None:
        Logger.periodicAfterUser(RobotController.getFPGATime(), 0)
        Logger.startReciever()

        super().startCompetition()

    def robotPeriodic(self) -> None:
        # Load inputs from the log or from the sensors before any user code runs
        self._periodic_before_start = RobotController.getFPGATime()
        Logger.periodicBeforeUser()
        self._user_code_start = RobotController.getFPGATime()

        super().robotPeriodic()

    def _loopFunc(self) -> None:
        super()._loopFunc()

        # Save outputs to the log
        user_code_end = RobotController.getFPGATime()
        Logger.periodicAfterUser(user_code_end - self._user_code_start,
                                 self._user_code_start - self._periodic_before_start)
