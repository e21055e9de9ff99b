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

from pykit.logger import Logger
from wpilib import RobotController


class LogTracer:
    """
    Times blocks of periodic code and records the results through pykit.

    Start a block with 'resetOuter', mark the end of each step inside it with 'record'
    and finish with 'recordTotal'. Step times are published as

        LogTracer/<block>/<step>MS
        LogTracer/<block>/TotalMS
    """
    _inner_start: int = 0
    _outer_start: int = 0
    _prefix: str = ""

    @classmethod
    def resetOuter(cls, prefix: str) -> None:
        cls._outer_start = RobotController.getFPGATime()
        cls._inner_start = cls._outer_start
        cls._prefix = prefix

    @classmethod
    def record(cls, action: str) -> None:
        now = RobotController.getFPGATime()
        Logger.recordOutput(f"LogTracer/{cls._prefix}/{action}MS", (now - cls._inner_start) / 1000.0)
        cls._inner_start = now

    @classmethod
    def recordTotal(cls) -> None:
        total = (RobotController.getFPGATime() - cls._outer_start) / 1000.0

        Logger.recordOutput(f"LogTracer/{cls._prefix}/TotalMS", total)
