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

from dataclasses import dataclass, field
from enum import IntEnum, unique
from typing import List

from pykit.autolog import autolog
from wpimath.geometry import Pose3d
from wpimath.units import degrees, meters, seconds


@unique
class PoseObservationType(IntEnum):
    NONE = 0
    MULTI_TAG = 1           # Solved on the coprocessor from all visible tags
    LOWEST_AMBIGUITY = 2    # Single tag with the lowest pose ambiguity


class PoseObservation:
    """
    Represents a robot pose sample used for pose estimation
    """

    def __init__(self, timestamp: seconds, pose: Pose3d, ambiguity: float,
                 tag_count: int, avg_tag_distance: meters,
                 observation_type: PoseObservationType):
        self.timestamp: seconds = timestamp
        self.pose: Pose3d = pose
        self.ambiguity: float = ambiguity
        self.avg_tag_distance: meters = avg_tag_distance
        self.tag_count: int = tag_count
        self.observation_type: PoseObservationType = observation_type


class VisionIO:
    @autolog
    @dataclass
    class VisionIOInputs:
        """
        Loggable inputs for a single camera
        """
        connected: bool = False
        has_targets: bool = False
        best_target_yaw: degrees = 0.0
        tag_ids: List[int] = field(default_factory=list)

    def updateInputs(self, inputs: VisionIOInputs) -> None:
        pass
