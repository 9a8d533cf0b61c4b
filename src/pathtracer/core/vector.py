# core/vector.py
import math
import numbers


class Vector3:
    """
    A simple 3D vector class supporting arithmetic, dot and cross products,
    and normalization. Doubles as an RGB color in the renderer.
    """
    __slots__ = ("x", "y", "z")

    def __init__(self, x: float, y: float, z: float):
        self.x = x
        self.y = y
        self.z = z

    @staticmethod
    def zero() -> "Vector3":
        return Vector3(0.0, 0.0, 0.0)

    @staticmethod
    def one() -> "Vector3":
        return Vector3(1.0, 1.0, 1.0)

    @staticmethod
    def from_tuple(values) -> "Vector3":
        return Vector3(float(values[0]), float(values[1]), float(values[2]))

    def __add__(self, other: "Vector3") -> "Vector3":
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: "Vector3") -> "Vector3":
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, other):
        if isinstance(other, numbers.Real):
            return Vector3(self.x * other, self.y * other, self.z * other)
        return Vector3(self.x * other.x, self.y * other.y, self.z * other.z)

    def __rmul__(self, other: float) -> "Vector3":
        return self.__mul__(other)

    def __truediv__(self, t: float) -> "Vector3":
        return Vector3(self.x / t, self.y / t, self.z / t)

    def __neg__(self) -> "Vector3":
        return Vector3(-self.x, -self.y, -self.z)

    def __getitem__(self, axis: int) -> float:
        if axis == 0:
            return self.x
        if axis == 1:
            return self.y
        if axis == 2:
            return self.z
        raise IndexError(f"Vector3 axis out of range: {axis}")

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.z

    def __eq__(self, other) -> bool:
        if not isinstance(other, Vector3):
            return NotImplemented
        return self.x == other.x and self.y == other.y and self.z == other.z

    def __hash__(self) -> int:
        return hash((self.x, self.y, self.z))

    def dot(self, other: "Vector3") -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: "Vector3") -> "Vector3":
        return Vector3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x
        )

    def length(self) -> float:
        return math.sqrt(self.dot(self))

    def length_squared(self) -> float:
        return self.dot(self)

    def normalize(self) -> "Vector3":
        l = self.length()
        if l == 0:
            return Vector3(0, 0, 0)
        return self / l

    def min_by_component(self, other: "Vector3") -> "Vector3":
        return Vector3(min(self.x, other.x), min(self.y, other.y), min(self.z, other.z))

    def max_by_component(self, other: "Vector3") -> "Vector3":
        return Vector3(max(self.x, other.x), max(self.y, other.y), max(self.z, other.z))

    def max_component(self) -> float:
        return max(self.x, self.y, self.z)

    def min_component(self) -> float:
        return min(self.x, self.y, self.z)

    def clamped(self, low: float, high: float) -> "Vector3":
        return Vector3(
            min(max(self.x, low), high),
            min(max(self.y, low), high),
            min(max(self.z, low), high)
        )

    def exp(self) -> "Vector3":
        return Vector3(math.exp(self.x), math.exp(self.y), math.exp(self.z))

    def is_finite(self) -> bool:
        return math.isfinite(self.x) and math.isfinite(self.y) and math.isfinite(self.z)

    def finite_or_zero(self) -> "Vector3":
        """Replace every NaN or infinite channel with 0."""
        return Vector3(
            self.x if math.isfinite(self.x) else 0.0,
            self.y if math.isfinite(self.y) else 0.0,
            self.z if math.isfinite(self.z) else 0.0
        )

    def reflect(self, n: "Vector3") -> "Vector3":
        return self - n * (2 * self.dot(n))

    def refract(self, n: "Vector3", ni_over_nt: float) -> "Vector3":
        cos_theta = min(-self.dot(n), 1.0)
        r_out_perp = (self + n * cos_theta) * ni_over_nt
        r_out_parallel = n * -math.sqrt(abs(1.0 - r_out_perp.length_squared()))
        return r_out_perp + r_out_parallel

    def to_tuple(self) -> tuple:
        return (self.x, self.y, self.z)

    def __repr__(self) -> str:
        return f"Vector3({self.x}, {self.y}, {self.z})"


# RGB colors share the vector type.
Color = Vector3
