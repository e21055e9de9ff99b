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
# Angle helpers for the wheel angle servo and joystick shaping

from typing import Tuple

from wpimath.geometry import Translation2d
from wpimath.units import degrees

DEGREES_PER_REVOLUTION = 360.0
HALF_REVOLUTION = DEGREES_PER_REVOLUTION / 2


def wrap_degrees(angle: degrees) -> degrees:
    """
    Normalize an angle into [0, 360)
    """
    return ((angle % DEGREES_PER_REVOLUTION) + DEGREES_PER_REVOLUTION) % DEGREES_PER_REVOLUTION


def shortest_angle_delta(target: degrees, current: degrees) -> degrees:
    """
    Signed shortest rotation from 'current' to 'target'. The result is
    in the range [-180, 180).
    """
    return ((target - current + 540.0) % DEGREES_PER_REVOLUTION) - HALF_REVOLUTION


def rotation_command(target: degrees, current: degrees, max_speed: float) -> Tuple[float, degrees]:
    """
    Compute the wheel rotation duty-cycle for a module.

    The target is in the [-180, 180) wheel frame and is shifted by a half turn so
    that the wrap point lines up with the absolute encoder's [0, 360) frame.

    :param target:    Desired wheel angle (degrees)
    :param current:   Absolute encoder angle, offset corrected (degrees)
    :param max_speed: Clamp for the duty-cycle command (0..1)

    :returns: (duty-cycle command clamped to +/- max_speed, angle delta in degrees)
    """
    target = wrap_degrees(target + HALF_REVOLUTION)
    current = wrap_degrees(current)

    delta = shortest_angle_delta(target, current)
    speed = delta / HALF_REVOLUTION

    return max(-max_speed, min(max_speed, speed)), delta


def is_aligned(command: float, threshold: float) -> bool:
    return abs(command) <= threshold


def encoder_degrees(rotations: float, offset: degrees) -> degrees:
    """
    Convert an absolute encoder reading (in rotations) into offset corrected degrees in [0, 360)
    """
    return wrap_degrees(rotations * DEGREES_PER_REVOLUTION - offset)


def cube_translation(translation: Translation2d) -> Translation2d:
    """
    Cube the magnitude of a joystick translation while keeping its direction. Gives
    finer control at low stick deflection.
    """
    norm = translation.norm()
    if norm == 0.0:
        return translation

    return Translation2d(norm ** 3, translation.angle())
