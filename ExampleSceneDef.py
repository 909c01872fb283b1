import raycast
from cli import FrameBuffer

class ExampleSceneDef(object):
    def __init__(self, scene):
        self.scene = scene;

    def render(self, output_path=None, output_shape=None, workers=1):
        if(output_shape is None):
            output_shape=[128,128];
        ny, nx = output_shape[0], output_shape[1];
        pix = raycast.render_image(self.scene, nx, ny, workers=workers);
        frame = FrameBuffer(nx, ny).draw_image(pix);
        if(output_path is None):
            return frame;
        else:
            frame.save(output_path);


def TwoSpheresExample():
    scene = raycast.Scene()
    scene.set_background(0.2, 0.3, 0.5)
    scene.set_fov(25)
    scene.set_camera(3, 1.7, 5,  0, 0, 0,  0, 1, 0)
    scene.add_point_light(0.9, 0.9, 0.9,  12, 10, 5)
    scene.set_ambient_light(0.3, 0.3, 0.3)
    scene.add_sphere(0, 0, 0, 0.5,  0.7, 0.7, 0.4,  0.6, 0.6, 40)
    scene.add_sphere(0, -40, 0, 39.5,  0.2, 0.2, 0.2,  0.4, 0.0, 1)
    return ExampleSceneDef(scene=scene);


def ThreeSpheresExample():
    scene = raycast.Scene()
    scene.set_background(0.2, 0.3, 0.5)
    scene.set_fov(24)
    scene.set_camera(3, 1.2, 5,  0, -0.4, 0,  0, 1, 0)
    scene.add_point_light(0.8, 0.8, 0.8,  12, 10, 5)
    scene.add_point_light(0.3, 0.3, 0.4,  -6, 4, 8)
    scene.set_ambient_light(0.2, 0.2, 0.2)
    scene.add_sphere(-0.7, 0, 0, 0.5,  0.7, 0.6, 0.3,  0.5, 0.3, 90)
    scene.add_sphere(0.7, 0, 0, 0.5,  0.3, 0.3, 0.8,  0.5, 0.8, 20)
    scene.add_sphere(0, -40, 0, 39.5,  0.35, 0.35, 0.35,  0.4, 0.0, 1)
    return ExampleSceneDef(scene=scene);


def OrthoFriendlyExample(sphere_radius = 0.25):
    # One small sphere centered at z=-0.5, lit only by ambient light
    scene = raycast.Scene()
    scene.set_ambient_light(0.5, 0.5, 0.5)
    scene.add_sphere(0, 0, -0.5, sphere_radius,  0.5, 0.5, 0.5,  1.0, 0.0, 0)
    return ExampleSceneDef(scene=scene);
