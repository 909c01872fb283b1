import argparse
import configparser
import logging
import sys

import numpy as np
from PIL import Image

import raycast
from utils import to_display8

"""
Frame sink and command line front end.

The core only produces pixel colors; this module decides where they go.
"""

logger = logging.getLogger(__name__)

# canvas color shown where no pixel has been written yet (lightyellow)
CANVAS_COLOR = (255, 255, 224)

DEFAULTS = {
    "width": 64,
    "height": 64,
    "scale": 1,
    "workers": 1,
    "flip_y": False,
    "path": "output.png",
    "show": False,
}


class FrameBuffer:

    def __init__(self, nx, ny, scale=1, flip_y=False):
        """Create a canvas for an nx by ny screen.

        Every screen pixel is drawn as a scale x scale block. Screen row 0 looks
        down the camera's -v axis, so screen row j lands on canvas row ny-1-j and
        the image comes out upright. flip_y mirrors that vertically.
        """
        if nx <= 0 or ny <= 0 or scale <= 0:
            raise raycast.SceneError(f"bad frame size {nx}x{ny} at scale {scale}")
        self.nx = nx
        self.ny = ny
        self.scale = scale
        self.flip_y = flip_y
        self.rows_done = 0
        self.pixels = np.empty((ny * scale, nx * scale, 3), np.uint8)
        self.clear()

    def clear(self):
        self.pixels[:] = CANVAS_COLOR
        self.rows_done = 0

    def _row(self, y):
        return y if self.flip_y else self.ny - 1 - y

    def put(self, x, y, rgb):
        s = self.scale
        row = self._row(y)
        self.pixels[row * s:(row + 1) * s, x * s:(x + 1) * s] = rgb

    def consume(self, stream):
        """Draw every (x, y, rgb) triple of a pixel stream."""
        for x, y, rgb in stream:
            self.put(x, y, rgb)
            if x == self.nx - 1:
                self.rows_done += 1
                logger.debug("drew row %d/%d", self.rows_done, self.ny)
        return self

    def draw_image(self, img):
        """Draw a whole float image of shape (ny, nx, 3)."""
        img8 = to_display8(img)
        if not self.flip_y:
            img8 = img8[::-1]
        self.pixels[:] = np.repeat(np.repeat(img8, self.scale, axis=0), self.scale, axis=1)
        self.rows_done = self.ny
        return self

    @property
    def complete(self):
        return self.rows_done >= self.ny

    def PIL(self):
        return Image.fromarray(self.pixels)

    def save(self, path):
        self.PIL().save(path)
        logger.info("saved %s", path)

    def show(self, title=None):
        import matplotlib.pyplot as plt
        plt.figure()
        plt.imshow(self.pixels, interpolation="nearest")
        plt.axis("off")
        if title is not None:
            plt.title(title)
        plt.show()


def load_settings(path=None):
    """Read render settings from an INI file, falling back to DEFAULTS."""
    settings = dict(DEFAULTS)
    if path is None:
        return settings
    cfg = configparser.RawConfigParser()
    if not cfg.read(path):
        raise FileNotFoundError(f"config file not found: {path}")
    settings["width"] = cfg.getint("RENDER", "width", fallback=settings["width"])
    settings["height"] = cfg.getint("RENDER", "height", fallback=settings["height"])
    settings["scale"] = cfg.getint("RENDER", "scale", fallback=settings["scale"])
    settings["workers"] = cfg.getint("RENDER", "workers", fallback=settings["workers"])
    settings["flip_y"] = cfg.getboolean("RENDER", "flip_y", fallback=settings["flip_y"])
    settings["path"] = cfg.get("OUTPUT", "path", fallback=settings["path"])
    settings["show"] = cfg.getboolean("OUTPUT", "show", fallback=settings["show"])
    return settings


def build_parser(scenes=None):
    parser = argparse.ArgumentParser(prog="raycast",
                                     description="Ray cast a scene of spheres to an image.")
    if scenes is not None:
        parser.add_argument("scene", choices=sorted(scenes), help="example scene to render")
    parser.add_argument("-c", "--config", help="INI file with [RENDER] and [OUTPUT] settings")
    parser.add_argument("--width", type=int, help="number of pixels to ray cast across")
    parser.add_argument("--height", type=int, help="number of pixels to ray cast down")
    parser.add_argument("--scale", type=int, help="canvas pixels per screen pixel")
    parser.add_argument("-j", "--workers", type=int, help="processes used to render rows")
    parser.add_argument("--flip-y", dest="flip_y", action="store_true", default=None,
                        help="put screen row 0 at the top of the image")
    parser.add_argument("-o", "--output", dest="path", help="PNG file to write")
    parser.add_argument("--show", action="store_true", default=None,
                        help="display the image when finished")
    parser.add_argument("-v", "--verbose", action="store_true", help="log every row")
    return parser


def parse_settings(argv=None, scenes=None):
    args = build_parser(scenes).parse_args(argv)
    settings = load_settings(args.config)
    for key in DEFAULTS:
        value = getattr(args, key)
        if value is not None:
            settings[key] = value
    settings["verbose"] = args.verbose
    if scenes is not None:
        settings["scene"] = args.scene
    return settings


def render(scene, argv=None, settings=None):
    """Render a scene with settings taken from the command line."""
    if settings is None:
        settings = parse_settings(argv)
    logging.basicConfig(level=logging.DEBUG if settings["verbose"] else logging.INFO,
                        format="%(asctime)s %(name)s %(levelname)s: %(message)s")

    nx, ny = settings["width"], settings["height"]
    frame = FrameBuffer(nx, ny, settings["scale"], settings["flip_y"])
    if settings["workers"] > 1:
        frame.draw_image(raycast.render_image(scene, nx, ny, workers=settings["workers"]))
    else:
        frame.consume(raycast.render_scene(scene, nx, ny))

    frame.save(settings["path"])
    if settings["show"]:
        frame.show(settings["path"])
    return frame


def main(argv=None):
    import ExampleSceneDef

    examples = {
        "two_spheres": ExampleSceneDef.TwoSpheresExample,
        "three_spheres": ExampleSceneDef.ThreeSpheresExample,
        "ortho_friendly": ExampleSceneDef.OrthoFriendlyExample,
    }
    try:
        settings = parse_settings(argv, scenes=examples)
        render(examples[settings["scene"]]().scene, settings=settings)
    except (raycast.SceneError, OSError) as e:
        logger.error("%s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
