import logging
import math
import multiprocessing as mp
from functools import partial

import numpy as np
from materials import Material
from geometry import Sphere, nearest_hit
from utils import *

"""
Core implementation of the ray caster.
"""

logger = logging.getLogger(__name__)


class SceneError(ValueError):
    """Raised when a scene-building call would leave the scene malformed."""


def _check_finite(*values):
    for x in values:
        if not math.isfinite(x):
            raise SceneError(f"expected a finite number, got {x!r}")


class Ray:

    def __init__(self, origin, direction):
        """Create a ray with the given origin and direction.
        """
        self.origin = vec(origin)
        self.direction = vec(direction)

    def point_at(self, t):
        return add(self.origin, scale(t, self.direction))


class Camera:

    def __init__(self, eye=vec([0,0,0]), target=vec([0,0,-1]), up=vec([0,1,0])):
        """Create a camera with given viewing parameters.

        u points right, v points up and w points backward, from the target
        towards the eye.
        """
        self.eye = vec(eye)

        self.w = normalize(subtract(eye, target))
        self.u = normalize(cross(up, self.w))
        self.v = cross(self.w, self.u)

        if not (np.all(np.isfinite(self.w)) and np.all(np.isfinite(self.u))):
            raise SceneError(
                f"degenerate camera: eye={self.eye.tolist()} target={list(target)} up={list(up)}")

    def generate_ray(self, i, j, nx, ny, vfov):
        """Compute the ray through the center of pixel (i, j) on an nx by ny screen.

        vfov is the field of view in degrees; it is applied to both axes.
        """
        d = -1.0 / np.tan(np.radians(vfov) / 2.0)
        us = -1.0 + 2.0 * (i + 0.5) / nx
        vs = -1.0 + 2.0 * (j + 0.5) / ny

        direction = add(add(scale(us, self.u), scale(vs, self.v)), scale(d, self.w))

        return Ray(self.eye, normalize(direction))


class PointLight:
    def __init__(self, position, intensity):
        """Create a point light at given position and with given intensity"""
        self.position = vec(position)
        self.intensity = vec(intensity)

    def illuminate(self, point, normal, view_vec, material):
        """Compute the shading at a surface point due to this light.

        The diffuse term is not clamped, so a light behind the surface
        subtracts from the total.
        """
        light_vec = normalize(subtract(self.position, point))
        refl_vec = normalize(subtract(scale(2 * dot(light_vec, normal), normal), light_vec))

        if dot(refl_vec, light_vec) <= 0:
            specular = BLACK
        else:
            specular = color_scale(max(dot(refl_vec, view_vec), 0.0) ** material.p,
                                   material.k_s_color)
        diffuse = color_scale(dot(normal, light_vec), material.k_d)

        return color_multiply(self.intensity, color_add(specular, diffuse))


class AmbientLight:

    def __init__(self, intensity):
        """Create an ambient light of given intensity
        """
        self.intensity = vec(intensity)

    def illuminate(self, material):
        """Compute the shading at a surface point due to this light.
        """
        return color_multiply(color_scale(material.k_a, self.intensity), material.k_d)


class Scene:

    def __init__(self):
        """Create an empty scene with the default camera.
        """
        self.fov = 90.0
        self.reset()

    def reset(self):
        """Clear out all scene contents. The field of view is kept."""
        self.point_lights = []
        self.spheres = []
        self.ambient = None
        self.bg_color = GREY
        self.camera = Camera()
        logger.debug("scene reset")
        return self

    @property
    def has_ambient(self):
        return self.ambient is not None

    def add_point_light(self, r, g, b, x, y, z):
        _check_finite(r, g, b, x, y, z)
        self.point_lights.append(PointLight(vec([x, y, z]), color(r, g, b)))
        logger.debug("point light %d at (%g, %g, %g)", len(self.point_lights), x, y, z)
        return self

    def set_ambient_light(self, r, g, b):
        _check_finite(r, g, b)
        self.ambient = AmbientLight(color(r, g, b))
        return self

    def set_background(self, r, g, b):
        _check_finite(r, g, b)
        self.bg_color = color(r, g, b)
        return self

    def set_fov(self, theta):
        _check_finite(theta)
        if not 0 < theta < 180:
            raise SceneError(f"field of view must be between 0 and 180 degrees, got {theta}")
        self.fov = float(theta)
        return self

    def set_camera(self, x1, y1, z1, x2, y2, z2, x3, y3, z3):
        """Set the camera's position and orientation.

        x1,y1,z1 are the camera position
        x2,y2,z2 are the lookat position
        x3,y3,z3 are the up vector
        """
        _check_finite(x1, y1, z1, x2, y2, z2, x3, y3, z3)
        self.camera = Camera(vec([x1, y1, z1]), vec([x2, y2, z2]), vec([x3, y3, z3]))
        logger.debug("camera at %s looking at (%g, %g, %g)", self.camera.eye.tolist(), x2, y2, z2)
        return self

    def add_sphere(self, x, y, z, radius, dr, dg, db, k_ambient, k_specular, specular_pow):
        _check_finite(x, y, z, radius, dr, dg, db, k_ambient, k_specular, specular_pow)
        if radius <= 0:
            raise SceneError(f"sphere radius must be positive, got {radius}")
        if not 0 <= k_ambient <= 1:
            raise SceneError(f"k_ambient must be in [0, 1], got {k_ambient}")
        if k_specular < 0 or specular_pow < 0:
            raise SceneError(
                f"specular coefficient and exponent must be non-negative, got {k_specular}, {specular_pow}")
        material = Material(color(dr, dg, db), k_ambient, k_specular, specular_pow)
        self.spheres.append(Sphere(vec([x, y, z]), radius, material))
        logger.debug("sphere %d at (%g, %g, %g) r=%g", len(self.spheres), x, y, z, radius)
        return self

    def eye_ray(self, i, j, nx, ny):
        return self.camera.generate_ray(i, j, nx, ny, self.fov)

    def intersect(self, ray):
        """Computes the first (smallest t) intersection between a ray and the scene.
        """
        return nearest_hit(ray, self.spheres)

    def trace(self, ray):
        """Color seen along the ray: the shaded nearest hit, or the background."""
        return shade(ray, self.intersect(ray), self)


def shade(ray, hit, scene):
    """Local shading at a hit: point lights summed in order, then ambient once."""
    if not hit:
        return scene.bg_color.copy()

    sphere = hit.sphere
    point = ray.point_at(hit.t)
    normal = sphere.normal_at(point)
    view_vec = normalize(scale(-1, ray.direction))

    total = np.zeros(3)
    for light in scene.point_lights:
        total = color_add(total, light.illuminate(point, normal, view_vec, sphere.material))

    if scene.has_ambient:
        total = color_add(total, scene.ambient.illuminate(sphere.material))

    return total


def _check_screen(nx, ny):
    if nx <= 0 or ny <= 0:
        raise SceneError(f"screen size must be positive, got {nx}x{ny}")


def render_row(scene, nx, ny, j):
    """Float colors of row j as an array of shape (nx, 3)."""
    row = np.zeros((nx, 3), np.float64)
    for i in range(nx):
        row[i] = scene.trace(scene.eye_ray(i, j, nx, ny))
    return row


def render_scene(scene, nx, ny):
    """Lazily yield (x, y, (r, g, b)) for every pixel, row by row.

    The scene must not be modified while the stream is being consumed.
    """
    _check_screen(nx, ny)
    logger.info("rendering %dx%d, %d spheres, %d lights", nx, ny,
                len(scene.spheres), len(scene.point_lights))

    def pixels():
        for j in range(ny):
            logger.debug("rendering row %d/%d...", j + 1, ny)
            for i in range(nx):
                yield i, j, to_display(scene.trace(scene.eye_ray(i, j, nx, ny)))
        logger.info("finished rendering scene")

    return pixels()


def render_image(scene, nx, ny, workers=1):
    """
    render a ray cast image of shape (ny, nx, 3), indexed [y, x].

    Rows are independent, so with workers > 1 they are spread over a process pool.
    """
    _check_screen(nx, ny)
    logger.info("rendering %dx%d with %d worker(s)", nx, ny, workers)

    output_image = np.zeros((ny, nx, 3), np.float64)

    if workers > 1:
        with mp.Pool(workers) as pool:
            rows = pool.map(partial(render_row, scene, nx, ny), range(ny))
        for j, row in enumerate(rows):
            output_image[j] = row
    else:
        for j in range(ny):
            logger.debug("rendering row %d/%d...", j + 1, ny)
            output_image[j] = render_row(scene, nx, ny, j)

    logger.info("finished rendering scene")
    return output_image
