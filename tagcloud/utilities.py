#!/usr/bin/env python3
"""
Module utilities.py
Math utilities: 3D vectors, rotation quaternions, rotation matrices.

TagCloud coordinate system:
  x  horizontal axis, +1 to the right and -1 to the left
  y  vertical axis, +1 on top and -1 at the bottom
  z  depth, +1 towards the viewer and -1 away from it

Quaternions use the [W, X, Y, Z] convention throughout.
"""
import math
from dataclasses import dataclass
from typing import List, Sequence

import numpy as np
from scipy.spatial.transform import Rotation


# Squared-norm distance from 1.0 under which a quaternion is treated as
# already normalized.
NORMALIZE_TOLERANCE = 1e-10


# ---------------------------------------------------------------------------
# Vector operations
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Vector3:
    """Immutable 3D vector. Equality is exact per component."""
    x: float
    y: float
    z: float

    def normalized(self) -> "Vector3":
        """Unit vector. The zero vector is returned unchanged."""
        if self == ZERO:
            return self
        norm = 1.0 / math.sqrt(dot_product(self, self))
        return self.scale(norm)

    def scale(self, factor: float) -> "Vector3":
        return Vector3(self.x * factor, self.y * factor, self.z * factor)

    def length(self) -> float:
        return math.sqrt(dot_product(self, self))

    def as_list(self) -> List[float]:
        return [self.x, self.y, self.z]


ZERO = Vector3(0.0, 0.0, 0.0)


def cross_product(l: Vector3, r: Vector3) -> Vector3:
    return Vector3(
        l.y * r.z - l.z * r.y,
        l.z * r.x - l.x * r.z,
        l.x * r.y - l.y * r.x,
    )


def dot_product(l: Vector3, r: Vector3) -> float:
    return l.x * r.x + l.y * r.y + l.z * r.z


# ---------------------------------------------------------------------------
# Quaternion operations
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Quaternion:
    """
    Rotation quaternion [W, X, Y, Z].

    The raw constructor stores the components as given. Every factory
    below (of, create, from_vectors, compose) passes the result through
    normalized(), so quaternions handed out by this module are unit length.

    Equality is exact: q and -q describe the same rotation but are not equal.
    """
    w: float
    x: float
    y: float
    z: float

    @classmethod
    def of(cls, w: float, x: float, y: float, z: float) -> "Quaternion":
        """Construct, then normalize if needed."""
        return cls(w, x, y, z).normalized()

    @classmethod
    def create(cls, angle: float, axis: Vector3) -> "Quaternion":
        """
        Rotation by `angle` radians around `axis`.

        A zero axis leaves only the cosine part, so a non-zero angle around
        ZERO is not a no-op. Pass IDENTITY when no rotation is wanted.
        """
        s = math.sin(angle / 2.0)
        c = math.cos(angle / 2.0)
        return cls.of(c, axis.x * s, axis.y * s, axis.z * s)

    @classmethod
    def from_vectors(cls, from_vector: Vector3, to_vector: Vector3) -> "Quaternion":
        """
        Incremental rotation taking `from_vector` onto `to_vector`.

        The dot product is passed as the angle. That is only accurate for the
        small per-sample deltas of a drag gesture and the drag feel depends
        on it, so it must not be replaced by acos(dot).
        """
        normal = cross_product(from_vector, to_vector)
        angle = dot_product(from_vector, to_vector)
        return cls.create(angle, normal)

    def normalized(self) -> "Quaternion":
        """
        Rescale to unit length unless the squared norm is already within
        NORMALIZE_TOLERANCE of 1. The zero quaternion is returned unchanged.
        """
        squared = self.w * self.w + self.x * self.x + self.y * self.y + self.z * self.z
        if abs(squared - 1.0) <= NORMALIZE_TOLERANCE or squared == 0.0:
            return self
        norm = math.sqrt(squared)
        return Quaternion(self.w / norm, self.x / norm, self.y / norm, self.z / norm)

    def compose(self, other: "Quaternion") -> "Quaternion":
        """
        Hamilton product self * other.
        Represents: first apply other, then apply self.
        """
        w1, x1, y1, z1 = self.w, self.x, self.y, self.z
        w2, x2, y2, z2 = other.w, other.x, other.y, other.z
        return Quaternion.of(
            w1*w2 - x1*x2 - y1*y2 - z1*z2,
            w1*x2 + x1*w2 + y1*z2 - z1*y2,
            w1*y2 - x1*z2 + y1*w2 + z1*x2,
            w1*z2 + x1*y2 - y1*x2 + z1*w2,
        )

    def conjugate(self) -> "Quaternion":
        """Inverse rotation: [W, X, Y, Z] → [W, -X, -Y, -Z]"""
        return Quaternion(self.w, -self.x, -self.y, -self.z)

    def as_list(self) -> List[float]:
        return [self.w, self.x, self.y, self.z]


IDENTITY = Quaternion.create(0.0, ZERO)


def quaternion_from_euler(angles: Sequence[float], sequence: str = "xyz",
                          degrees: bool = True) -> Quaternion:
    """
    Build a rotation from Euler angles.
    scipy returns [X, Y, Z, W]; reordered to [W, X, Y, Z] here.
    """
    x, y, z, w = Rotation.from_euler(sequence, list(angles), degrees=degrees).as_quat()
    return Quaternion.of(float(w), float(x), float(y), float(z))


# ---------------------------------------------------------------------------
# Rotation matrix
# ---------------------------------------------------------------------------

def rotate_vector_by_quaternion(v: Vector3, q: Quaternion) -> Vector3:
    """
    Rotate vector v by quaternion q using the expanded rotation matrix.
    Consistent with compose(): rotating by a.compose(b) equals rotating by b,
    then by a.
    """
    w2 = q.w * q.w
    x2 = q.x * q.x
    y2 = q.y * q.y
    z2 = q.z * q.z
    zw = q.z * q.w
    xy = q.x * q.y
    xz = q.x * q.z
    yw = q.y * q.w
    yz = q.y * q.z
    xw = q.x * q.w

    # Row r holds the contribution of input component r.
    m00 = w2 + x2 - z2 - y2
    m01 = xy + zw + zw + xy
    m02 = xz - yw + xz - yw
    m10 = -zw + xy - zw + xy
    m11 = y2 - z2 + w2 - x2
    m12 = yz + yz + xw + xw
    m20 = yw + xz + xz + yw
    m21 = yz + yz - xw - xw
    m22 = z2 - y2 - x2 + w2

    return Vector3(
        m00 * v.x + m10 * v.y + m20 * v.z,
        m01 * v.x + m11 * v.y + m21 * v.z,
        m02 * v.x + m12 * v.y + m22 * v.z,
    )


def rotation_matrix(q: Quaternion) -> np.ndarray:
    """3×3 rotation matrix for q, acting on column vectors."""
    w, x, y, z = q.w, q.x, q.y, q.z
    return np.array([
        [w*w + x*x - y*y - z*z, 2*(x*y - z*w),         2*(x*z + y*w)],
        [2*(x*y + z*w),         w*w - x*x + y*y - z*z, 2*(y*z - x*w)],
        [2*(x*z - y*w),         2*(y*z + x*w),         w*w - x*x - y*y + z*z],
    ])


def rotate_points(points: np.ndarray, q: Quaternion) -> np.ndarray:
    """Rotate an (N, 3) array of points. Row-vector convention."""
    points = np.asarray(points, dtype=float).reshape(-1, 3)
    return points @ rotation_matrix(q).T
