from raycast import Scene
from cli import render

scene = Scene()
scene.set_background(0.1, 0.1, 0.15)
scene.set_fov(40)
scene.set_camera(0, 1, 4,  0, 0, -1,  0, 1, 0)

scene.add_point_light(0.9, 0.9, 0.9,  4, 5, 6)
scene.add_point_light(0.2, 0.2, 0.3,  -5, 2, 2)
scene.set_ambient_light(0.3, 0.3, 0.3)

# tan, blue and a shiny grey sphere resting on a big floor sphere
scene.add_sphere(-1.1, 0, -1, 0.5,  0.7, 0.6, 0.3,  0.4, 0.2, 10)
scene.add_sphere(1.1, 0, -1, 0.5,   0.3, 0.3, 0.8,  0.4, 0.6, 30)
scene.add_sphere(0, 0, -1, 0.5,     0.35, 0.35, 0.35, 0.4, 1.0, 100)
scene.add_sphere(0, -40, -1, 39.5,  0.5, 0.5, 0.5,  0.3, 0.0, 1)

if __name__ == "__main__":
    render(scene)
