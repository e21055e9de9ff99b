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

import enum
from typing import List, Sequence

from pykit.logger import Logger
from wpimath.geometry import Pose2d
from wpimath.kinematics import ChassisSpeeds, SwerveModuleState


class TelemetryVerbosity(enum.IntEnum):
    """
    How much of the drivetrain state gets published each loop
    """
    NONE = 0    # Nothing
    LOW = 1     # Pose and chassis speeds
    HIGH = 2    # Everything, including per-module measured and desired states


class SwerveDriveTelemetry:
    """
    Process wide drivetrain telemetry settings. These are class attributes so they can
    be set before the drivetrain is created.
    """
    verbosity: TelemetryVerbosity = TelemetryVerbosity.LOW
    is_simulation: bool = False

    measured_states: List[SwerveModuleState] = []
    desired_states: List[SwerveModuleState] = []

    @classmethod
    def update(cls, pose: Pose2d, speeds: ChassisSpeeds,
               measured: Sequence[SwerveModuleState], desired: Sequence[SwerveModuleState]) -> None:
        if cls.verbosity == TelemetryVerbosity.NONE:
            return

        Logger.recordOutput("Drive/Pose", pose)
        Logger.recordOutput("Drive/RobotVelocity", speeds)

        if cls.verbosity >= TelemetryVerbosity.HIGH:
            cls.measured_states = list(measured)
            cls.desired_states = list(desired)

            Logger.recordOutput("Drive/ModuleStates/Measured", cls.measured_states)
            Logger.recordOutput("Drive/ModuleStates/Desired", cls.desired_states)
