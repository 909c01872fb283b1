import contextlib
import io
import os
import tempfile
import unittest
import numpy as np
from PIL import Image

import cli
import ExampleSceneDef
from raycast import Scene, SceneError, render_scene, render_image

RED = (255, 0, 0)
BLUE = (0, 0, 255)


def low_sphere_scene():
    # red sphere below the view axis of the default camera, blue background
    scene = Scene().set_background(0, 0, 1).set_ambient_light(1, 1, 1)
    scene.add_sphere(0, -0.6, -3, 0.5,  1, 0, 0,  1.0, 0.0, 0)
    return scene


class TestFrameBuffer(unittest.TestCase):

    def test_blocks(self):
        frame = cli.FrameBuffer(2, 2, scale=3)
        self.assertEqual(frame.pixels.shape, (6, 6, 3))
        np.testing.assert_array_equal(frame.pixels[0, 0], cli.CANVAS_COLOR)
        # screen row 0 is the bottom of the view, so it fills the bottom canvas block
        frame.put(1, 0, (10, 20, 30))
        np.testing.assert_array_equal(frame.pixels[3:6, 3:6], np.full((3, 3, 3), [10, 20, 30]))
        np.testing.assert_array_equal(frame.pixels[0, 3], cli.CANVAS_COLOR)

    def test_flip_y(self):
        frame = cli.FrameBuffer(2, 2, scale=2, flip_y=True)
        frame.put(0, 0, (1, 2, 3))
        np.testing.assert_array_equal(frame.pixels[0:2, 0:2], np.full((2, 2, 3), [1, 2, 3]))
        np.testing.assert_array_equal(frame.pixels[2, 0], cli.CANVAS_COLOR)

    def test_consume(self):
        scene = Scene().set_background(0, 1, 0)
        frame = cli.FrameBuffer(3, 2)
        self.assertFalse(frame.complete)
        frame.consume(render_scene(scene, 3, 2))
        self.assertTrue(frame.complete)
        self.assertEqual(frame.rows_done, 2)
        np.testing.assert_array_equal(frame.pixels, np.full((2, 3, 3), [0, 255, 0]))

    def test_draw_image(self):
        img = np.zeros((2, 2, 3))
        img[0, 1] = [1.0, 0.5, 2.0]
        frame = cli.FrameBuffer(2, 2, scale=2).draw_image(img)
        np.testing.assert_array_equal(frame.pixels[2:4, 2:4], np.full((2, 2, 3), [255, 127, 255]))
        np.testing.assert_array_equal(frame.pixels[0:2, 0:2], np.zeros((2, 2, 3)))
        flipped = cli.FrameBuffer(2, 2, scale=2, flip_y=True).draw_image(img)
        np.testing.assert_array_equal(flipped.pixels[0:2, 2:4], np.full((2, 2, 3), [255, 127, 255]))

    def test_stream_and_image_agree(self):
        scene = low_sphere_scene()
        streamed = cli.FrameBuffer(5, 4).consume(render_scene(scene, 5, 4))
        drawn = cli.FrameBuffer(5, 4).draw_image(render_image(scene, 5, 4))
        np.testing.assert_array_equal(streamed.pixels, drawn.pixels)

    def test_bad_size(self):
        with self.assertRaises(SceneError):
            cli.FrameBuffer(0, 2)

    def test_save(self):
        frame = cli.FrameBuffer(2, 3, scale=2)
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "frame.png")
            frame.save(path)
            with Image.open(path) as im:
                self.assertEqual(im.size, (4, 6))
                self.assertEqual(im.getpixel((0, 0)), cli.CANVAS_COLOR)


class TestSettings(unittest.TestCase):

    def test_defaults(self):
        self.assertEqual(cli.load_settings(), cli.DEFAULTS)

    def test_file_and_flags(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "render.cfg")
            with open(path, "w") as f:
                f.write("[RENDER]\nwidth = 32\nheight = 16\nflip_y = yes\n"
                        "[OUTPUT]\npath = out.png\n")
            settings = cli.load_settings(path)
            self.assertEqual((settings["width"], settings["height"]), (32, 16))
            self.assertTrue(settings["flip_y"])
            self.assertEqual(settings["scale"], 1)
            self.assertEqual(settings["path"], "out.png")

            settings = cli.parse_settings(["-c", path, "--width", "8", "-j", "2"])
            self.assertEqual((settings["width"], settings["height"]), (8, 16))
            self.assertEqual(settings["workers"], 2)
            self.assertFalse(settings["verbose"])

    def test_missing_file(self):
        with self.assertRaises(FileNotFoundError):
            cli.load_settings("/nonexistent/render.cfg")


class TestMain(unittest.TestCase):

    def test_unknown_scene(self):
        for argv in (["nope"], []):
            with contextlib.redirect_stderr(io.StringIO()):
                with self.assertRaises(SystemExit) as cm:
                    cli.main(argv)
            self.assertEqual(cm.exception.code, 2)

    def test_missing_config(self):
        self.assertEqual(cli.main(["ortho_friendly", "-c", "/nonexistent/render.cfg"]), 1)

    def test_image_is_upright(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "low.png")
            cli.render(low_sphere_scene(), ["--width", "9", "--height", "9", "-o", path])
            with Image.open(path) as im:
                column = [im.getpixel((4, y)) for y in range(9)]
        self.assertEqual(column[:5], [BLUE] * 5)
        self.assertIn(RED, column[5:])

    def test_flip_y_flag(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "low.png")
            cli.render(low_sphere_scene(),
                       ["--width", "9", "--height", "9", "--flip-y", "-o", path])
            with Image.open(path) as im:
                column = [im.getpixel((4, y)) for y in range(9)]
        self.assertIn(RED, column[:4])
        self.assertEqual(column[4:], [BLUE] * 5)

    def test_render_example(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "ortho.png")
            self.assertEqual(cli.main(["ortho_friendly", "--width", "3", "--height", "3",
                                       "--scale", "2", "-o", path]), 0)
            with Image.open(path) as im:
                self.assertEqual(im.size, (6, 6))
                # k_ambient 1 * ambient 0.5 * color 0.5 in the middle, background at the corner
                self.assertEqual(im.getpixel((2, 2)), (63, 63, 63))
                self.assertEqual(im.getpixel((0, 0)), (127, 127, 127))


class TestExamples(unittest.TestCase):

    def test_examples_build(self):
        for example in (ExampleSceneDef.TwoSpheresExample, ExampleSceneDef.ThreeSpheresExample,
                        ExampleSceneDef.OrthoFriendlyExample):
            scene = example().scene
            self.assertGreater(len(scene.spheres), 0)

    def test_render_without_path(self):
        frame = ExampleSceneDef.OrthoFriendlyExample().render(output_shape=[3, 3])
        np.testing.assert_array_equal(frame.pixels[1, 1], [63, 63, 63])
        np.testing.assert_array_equal(frame.pixels[0, 0], [127, 127, 127])


if __name__ == '__main__':
    unittest.main()
