import numpy as np
from utils import vec, dot, subtract, normalize

class Hit:
    def __init__(self, t, sphere=None):
        """Create a Hit with the given data.

        Parameters:
          t : float -- the t value of the intersection along the ray
          sphere : Sphere -- the sphere that was hit
        """
        self.t = t
        self.sphere = sphere

    def __bool__(self):
        return self.sphere is not None

# Value to represent absence of an intersection
no_hit = Hit(np.inf)


class Sphere:

    def __init__(self, center, radius, material):
        """Create a sphere with the given center and radius.

        Parameters:
          center : (3,) -- a 3D point specifying the sphere's center
          radius : float -- a Python float specifying the sphere's radius
          material : Material -- the material of the surface
        """
        self.center = vec(center)
        self.radius = float(radius)
        self.material = material

    def intersect(self, ray):
        """Computes the nearer root of the ray/sphere quadratic.

        Both roots are real when the discriminant is non-negative; the smaller
        one is returned even when it lies behind the ray origin.

        Parameters:
          ray : Ray -- the ray to intersect with the sphere
        Return:
          Hit -- the hit data
        """
        d = ray.direction
        e_m_c = subtract(ray.origin, self.center)
        a = dot(d, d)
        b = dot(d, e_m_c)
        discriminant = b * b - a * (dot(e_m_c, e_m_c) - self.radius * self.radius)
        if discriminant < 0:
            return no_hit
        disc_sqrt = np.sqrt(discriminant)
        plus = (-b + disc_sqrt) / a
        minus = (-b - disc_sqrt) / a
        return Hit(min(plus, minus), self)

    def normal_at(self, point):
        """Outward unit normal at a point on the surface."""
        return normalize(subtract(point, self.center))


def nearest_hit(ray, spheres):
    """Linear scan for the smallest t over all spheres.

    Ties keep the sphere that comes first, since a later sphere replaces the
    record only on a strictly smaller t.
    """
    best = no_hit
    for sphere in spheres:
        hit = sphere.intersect(ray)
        if hit and hit.t < best.t:
            best = hit
    return best
