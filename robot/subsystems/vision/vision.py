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
from enum import Enum, unique
from typing import Callable, Dict, List, Optional, Tuple

from photonlibpy import PhotonCamera, PhotonPoseEstimator
from photonlibpy.estimatedRobotPose import EstimatedRobotPose
from photonlibpy.targeting.photonPipelineResult import PhotonPipelineResult
from pykit.logger import Logger
from robotpy_apriltag import AprilTagField, AprilTagFieldLayout
from wpilib import Field2d
from wpimath.geometry import Pose2d, Pose3d, Transform3d

import constants
from lib_6107.subsystems.pykit.vision_io import PoseObservation, PoseObservationType, VisionIO

logger = logging.getLogger(__name__)

StdDevs = Tuple[float, float, float]


@unique
class Cameras(Enum):
    """
    PhotonVision cameras on the robot. The value is the camera name set in the PhotonVision UI
    """
    CENTER = "center"
    LEFT = "left"
    RIGHT = "right"


class Camera(VisionIO):
    """
    A single PhotonVision camera and its pose estimator
    """
    def __init__(self, name: str, robot_to_camera: Transform3d, field_layout: AprilTagFieldLayout):
        super().__init__()

        self.name = name
        self.robot_to_camera = robot_to_camera
        self.camera = PhotonCamera(name)
        self.estimator = PhotonPoseEstimator(field_layout, robot_to_camera)

        self._latest_result: Optional[PhotonPipelineResult] = None
        self._inputs = VisionIO.VisionIOInputs()

    def update_unread_results(self) -> List[PhotonPipelineResult]:
        """
        Pull every result received since the last call. Must only be called once per loop
        since unread results are consumed.
        """
        results = self.camera.getAllUnreadResults()

        if results:
            self._latest_result = results[-1]

        return results

    def get_best_result(self) -> Optional[PhotonPipelineResult]:
        """
        The latest pipeline result, if it has any targets
        """
        result = self._latest_result

        return result if result is not None and result.hasTargets() else None

    def estimate(self, result: PhotonPipelineResult) -> Optional[PoseObservation]:
        if not result.hasTargets():
            return None

        estimate: Optional[EstimatedRobotPose] = self.estimator.estimateCoprocMultiTagPose(result)
        observation_type = PoseObservationType.MULTI_TAG
        ambiguity = 0.0

        if estimate is None:
            estimate = self.estimator.estimateLowestAmbiguityPose(result)
            observation_type = PoseObservationType.LOWEST_AMBIGUITY

            if estimate is None:
                return None

        targets = estimate.targetsUsed or result.getTargets()
        if observation_type == PoseObservationType.LOWEST_AMBIGUITY:
            ambiguity = min(target.getPoseAmbiguity() for target in targets)

        distance = sum(target.getBestCameraToTarget().translation().norm() for target in targets) / len(targets)

        return PoseObservation(estimate.timestampSeconds, estimate.estimatedPose, ambiguity,
                               len(targets), distance, observation_type)

    def updateInputs(self, inputs: VisionIO.VisionIOInputs) -> None:
        inputs.connected = self.camera.isConnected()

        best = self.get_best_result()
        inputs.has_targets = best is not None
        inputs.best_target_yaw = best.getBestTarget().getYaw() if best is not None else 0.0
        inputs.tag_ids = [target.getFiducialId() for target in best.getTargets()] if best is not None else []

    def periodic(self) -> None:
        self.updateInputs(self._inputs)
        Logger.processInputs(f"Vision/Camera/{self.name}", self._inputs)


class Vision:
    """
    Feeds AprilTag pose estimates from all cameras into the drivetrain's pose estimator
    """
    def __init__(self, pose_supplier: Callable[[], Pose2d], field: Optional[Field2d] = None,
                 field_layout: Optional[AprilTagFieldLayout] = None):
        self._pose_supplier = pose_supplier
        self._field = field
        self.field_layout = field_layout or AprilTagFieldLayout.loadField(AprilTagField.kDefaultField)

        self.cameras: Dict[Cameras, Camera] = {}

        for info in constants.CAMERA_INFO:
            camera_id = Cameras(info["Name"])
            self.cameras[camera_id] = Camera(info["Name"], info["Transform"], self.field_layout)

    def get_camera(self, camera: Cameras) -> Camera:
        return self.cameras[camera]

    def get_best_result(self, camera: Cameras) -> Optional[PhotonPipelineResult]:
        return self.cameras[camera].get_best_result()

    def should_reject(self, observation: PoseObservation) -> bool:
        """
        Reject a pose observation if:
            - No tags were used
            - A single tag estimate is too ambiguous
            - Its height is unrealistic
            - It is outside the field
        """
        x, y, z = observation.pose.X(), observation.pose.Y(), observation.pose.Z()

        return observation.tag_count == 0 or \
            (observation.tag_count == 1 and observation.ambiguity > constants.MAX_VISION_AMBIGUITY) or \
            abs(z) > constants.MAX_VISION_Z_ERROR or \
            x < 0.0 or \
            y < 0.0 or \
            x > self.field_layout.getFieldLength() or \
            y > self.field_layout.getFieldWidth()

    @staticmethod
    def get_std_devs(observation: PoseObservation) -> Optional[StdDevs]:
        """
        Measurement standard deviations, growing with the square of the average tag distance.

        :returns: None if a single tag estimate is too far away to trust
        """
        if observation.tag_count > 1:
            base = constants.MULTI_TAG_STD_DEVS

        elif observation.avg_tag_distance > constants.MAX_SINGLE_TAG_DISTANCE:
            return None

        else:
            base = constants.SINGLE_TAG_STD_DEVS

        scale = 1.0 + math.pow(observation.avg_tag_distance, 2.0) / 30.0

        return base[0] * scale, base[1] * scale, base[2] * scale

    def update_pose_estimation(self, swerve_drive: 'SwerveDrive') -> int:
        """
        Process all new camera results and add accepted ones to the drivetrain's pose estimator.

        :returns: Number of accepted measurements
        """
        accepted_count = 0
        accepted_poses: List[Pose2d] = []

        for camera in self.cameras.values():
            robot_poses: List[Pose3d] = []
            accepted: List[Pose3d] = []
            rejected: List[Pose3d] = []

            for result in camera.update_unread_results():
                observation = camera.estimate(result)
                if observation is None:
                    continue

                robot_poses.append(observation.pose)
                std_devs = None if self.should_reject(observation) else self.get_std_devs(observation)

                if std_devs is None:
                    rejected.append(observation.pose)
                    continue

                accepted.append(observation.pose)
                pose = observation.pose.toPose2d()
                accepted_poses.append(pose)

                swerve_drive.add_vision_measurement(pose, observation.timestamp, std_devs)
                accepted_count += 1

            camera.periodic()

            Logger.recordOutput(f"Vision/Camera/{camera.name}/RobotPoses", robot_poses)
            Logger.recordOutput(f"Vision/Camera/{camera.name}/RobotPosesAccepted", accepted)
            Logger.recordOutput(f"Vision/Camera/{camera.name}/RobotPosesRejected", rejected)

        if self._field is not None:
            self._field.getObject("VisionEstimates").setPoses(accepted_poses)

        return accepted_count
