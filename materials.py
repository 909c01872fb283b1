import numpy as np
from utils import vec

class Material:

    def __init__(self, k_d, k_a=0., k_s=0., p=0.):
        """
        Create a new material with the given parameters.

        Parameters:
          k_d : (3,) -- Diffuse color
          k_a : float -- Ambient coefficient, in [0, 1]
          k_s : float -- Specular coefficient
          p : float -- Specular exponent (shininess)
        """
        self.k_d = vec(k_d)
        self.k_a = float(k_a)
        self.k_s = float(k_s)
        self.p = float(p)

    @property
    def k_s_color(self):
        """The specular coefficient as a grey color."""
        return np.full(3, self.k_s)
