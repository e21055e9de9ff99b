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

import json
import logging
import math
import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from wpimath.geometry import Pose2d, Translation2d
from wpimath.units import amperes, degrees, inchesToMeters, meters, meters_per_second, seconds, volts

logger = logging.getLogger(__name__)

SUPPORTED_MOTORS = ("sparkmax",)
SUPPORTED_ENCODERS = ("cancoder",)
SUPPORTED_IMUS = ("pigeon2",)

MODULE_COUNT = 4


@dataclass
class DeviceJson:
    """
    A CAN device entry from one of the drivetrain JSON files
    """
    type: str
    id: int
    canbus: str = ""

    @classmethod
    def from_json(cls, data: Dict[str, Any], supported: Tuple[str, ...], where: str) -> 'DeviceJson':
        try:
            device_type = str(data["type"]).lower()
            device_id = int(data["id"])

        except (KeyError, TypeError) as e:
            raise ValueError(f"{where}: device entry requires 'type' and 'id': {data}") from e

        if device_type not in supported:
            raise ValueError(f"{where}: unsupported device type '{device_type}', expected one of {supported}")

        if not 0 <= device_id <= 62:
            raise ValueError(f"{where}: CAN id {device_id} out of range")

        return cls(device_type, device_id, str(data.get("canbus") or ""))


@dataclass
class ModuleConfig:
    """
    One swerve module. The location is relative to the center of the robot with +x toward
    the front and +y toward the left.
    """
    name: str
    drive: DeviceJson
    angle: DeviceJson
    encoder: DeviceJson
    location: Translation2d
    absolute_encoder_offset: degrees = 0.0
    absolute_encoder_inverted: bool = False
    drive_inverted: bool = False
    angle_inverted: bool = False


@dataclass
class PhysicalProperties:
    drive_gear_ratio: float
    wheel_diameter: meters
    angle_gear_ratio: float
    drive_current_limit: amperes = 40
    angle_current_limit: amperes = 20
    ramp_rate: seconds = 0.25
    optimal_voltage: volts = 12.0

    @property
    def drive_conversion_factor(self) -> meters:
        """
        Meters of wheel travel per drive motor rotation
        """
        return (math.pi * self.wheel_diameter) / self.drive_gear_ratio

    @property
    def angle_conversion_factor(self) -> degrees:
        """
        Degrees of wheel rotation per angle motor rotation
        """
        return 360.0 / self.angle_gear_ratio


@dataclass
class ControllerProperties:
    angle_joystick_radius_deadband: float = 0.5
    heading_p: float = 0.4
    heading_i: float = 0.0
    heading_d: float = 0.01


@dataclass
class SwerveDriveConfig:
    imu: DeviceJson
    imu_inverted: bool
    modules: List[ModuleConfig]
    physical: PhysicalProperties
    controller: ControllerProperties = field(default_factory=ControllerProperties)

    @property
    def can_ids(self) -> List[Tuple[str, int]]:
        """
        All (bus, id) pairs used by the drivetrain
        """
        ids = [(self.imu.canbus, self.imu.id)]
        for module in self.modules:
            ids.extend((device.canbus, device.id) for device in (module.drive, module.angle, module.encoder))
        return ids


class SwerveParser:
    """
    Loads the drivetrain description from a directory of JSON files:

        swervedrive.json
        controllerproperties.json
        modules/physicalproperties.json
        modules/<one file per module listed in swervedrive.json>
    """
    def __init__(self, directory: str):
        self._directory = directory

        drive_json = self._load("swervedrive.json")

        self.physical = self._parse_physical(self._load(os.path.join("modules", "physicalproperties.json")))
        self.controller = self._parse_controller(self._load("controllerproperties.json"))

        module_files = drive_json.get("modules") or []
        if len(module_files) != MODULE_COUNT:
            raise ValueError(f"swervedrive.json: expected {MODULE_COUNT} modules, found {len(module_files)}")

        modules = [self._parse_module(name) for name in module_files]

        self.config = SwerveDriveConfig(DeviceJson.from_json(drive_json.get("imu", {}), SUPPORTED_IMUS, "imu"),
                                        bool(drive_json.get("invertedIMU", False)),
                                        modules,
                                        self.physical,
                                        self.controller)
        self._check_duplicates()

    @property
    def directory(self) -> str:
        return self._directory

    def _load(self, filename: str) -> Dict[str, Any]:
        path = os.path.join(self._directory, filename)

        if not os.path.isfile(path):
            raise FileNotFoundError(f"Swerve configuration file not found: {path}")

        with open(path, 'r') as f:
            try:
                return json.loads(f.read())

            except json.JSONDecodeError as e:
                raise ValueError(f"{path}: invalid JSON: {e}") from e

    def _parse_module(self, filename: str) -> ModuleConfig:
        data = self._load(os.path.join("modules", filename))
        name = os.path.splitext(filename)[0]

        location = data.get("location", {})
        inverted = data.get("inverted", {})

        try:
            # Locations are recorded in inches
            translation = Translation2d(inchesToMeters(float(location["front"])),
                                        inchesToMeters(float(location["left"])))
        except (KeyError, TypeError) as e:
            raise ValueError(f"{filename}: 'location' requires 'front' and 'left'") from e

        return ModuleConfig(name=name,
                            drive=DeviceJson.from_json(data.get("drive", {}), SUPPORTED_MOTORS, f"{name}/drive"),
                            angle=DeviceJson.from_json(data.get("angle", {}), SUPPORTED_MOTORS, f"{name}/angle"),
                            encoder=DeviceJson.from_json(data.get("encoder", {}), SUPPORTED_ENCODERS,
                                                         f"{name}/encoder"),
                            location=translation,
                            absolute_encoder_offset=float(data.get("absoluteEncoderOffset", 0.0)),
                            absolute_encoder_inverted=bool(data.get("absoluteEncoderInverted", False)),
                            drive_inverted=bool(inverted.get("drive", False)),
                            angle_inverted=bool(inverted.get("angle", False)))

    @staticmethod
    def _parse_physical(data: Dict[str, Any]) -> PhysicalProperties:
        factors = data.get("conversionFactors", {})
        current = data.get("currentLimit", {})
        ramp = data.get("rampRate", {})

        try:
            drive_ratio = float(factors["drive"]["gearRatio"])
            wheel_diameter = inchesToMeters(float(factors["drive"]["diameter"]))
            angle_ratio = float(factors["angle"]["gearRatio"])

        except (KeyError, TypeError) as e:
            raise ValueError("physicalproperties.json: incomplete 'conversionFactors'") from e

        if drive_ratio <= 0 or angle_ratio <= 0 or wheel_diameter <= 0:
            raise ValueError("physicalproperties.json: gear ratios and wheel diameter must be positive")

        return PhysicalProperties(drive_gear_ratio=drive_ratio,
                                  wheel_diameter=wheel_diameter,
                                  angle_gear_ratio=angle_ratio,
                                  drive_current_limit=int(current.get("drive", 40)),
                                  angle_current_limit=int(current.get("angle", 20)),
                                  ramp_rate=float(ramp.get("drive", 0.25)),
                                  optimal_voltage=float(data.get("optimalVoltage", 12.0)))

    @staticmethod
    def _parse_controller(data: Dict[str, Any]) -> ControllerProperties:
        heading = data.get("heading", {})

        return ControllerProperties(angle_joystick_radius_deadband=float(data.get("angleJoystickRadiusDeadband",
                                                                                  0.5)),
                                    heading_p=float(heading.get("p", 0.4)),
                                    heading_i=float(heading.get("i", 0.0)),
                                    heading_d=float(heading.get("d", 0.01)))

    def _check_duplicates(self) -> None:
        ids = self.config.can_ids
        duplicates = sorted({item for item in ids if ids.count(item) > 1})

        if duplicates:
            raise ValueError(f"Duplicate CAN ids in swerve configuration: {duplicates}")

    def create_swerve_drive(self, max_speed: meters_per_second,
                            initial_pose: Optional[Pose2d] = None) -> 'SwerveDrive':
        """
        Build the drivetrain described by this configuration
        """
        from subsystems.swervedrive.swervedrive import SwerveDrive

        logger.info(f"Creating swerve drive from {self._directory}, max speed {max_speed:.2f} m/s")

        return SwerveDrive(self.config, max_speed, initial_pose or Pose2d())
