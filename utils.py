import numpy as np

def vec(list):
    """Handy shorthand to make a double-precision float array."""
    return np.array(list, dtype=np.float64)


# ---------------- Vector algebra ----------------

def scale(k, v):
    return k * vec(v)

def add(a, b):
    return vec(a) + vec(b)

def subtract(a, b):
    return vec(a) - vec(b)

def dot(a, b):
    return float(np.dot(a, b))

def magnitude(v):
    return np.sqrt(dot(v, v))

def normalize(v):
    """Return a unit vector in the direction of the vector v.

    A zero vector is scaled by an infinite factor, so the result is not finite.
    Callers must not rely on it as a direction.
    """
    mag = magnitude(v)
    k = np.inf if mag == 0 else 1.0 / mag
    with np.errstate(invalid='ignore', over='ignore'):
        return scale(k, v)

def cross(a, b):
    """Right-handed cross product of a and b."""
    ax, ay, az = a
    bx, by, bz = b
    return vec([ay * bz - az * by,
                az * bx - ax * bz,
                ax * by - ay * bx])


# ---------------- Color algebra ----------------

WHITE = vec([1.0, 1.0, 1.0])
GREY = vec([0.5, 0.5, 0.5])
BLACK = vec([0.0, 0.0, 0.0])

def color(r, g, b):
    return vec([r, g, b])

def color_add(a, b):
    return vec(a) + vec(b)

def color_multiply(a, b):
    """Componentwise product, used for tinting a color by a light."""
    return vec(a) * vec(b)

def color_scale(k, c):
    return k * vec(c)

def to_display(c):
    """Quantize a color to an (r, g, b) tuple of ints in [0, 255]."""
    c_clip = np.clip(np.nan_to_num(vec(c), nan=0.0), 0, 1)
    return tuple(int(x) for x in np.floor(c_clip * 255))

def to_display8(img):
    """Quantize a float image of shape (ny, nx, 3) the same way as to_display."""
    return np.floor(255.0 * np.clip(np.nan_to_num(img, nan=0.0), 0, 1)).astype(np.uint8)
