from raycast import Scene
from cli import render


scene = Scene()
scene.set_ambient_light(0.5, 0.5, 0.5)

# One small sphere centered at z=-0.5
scene.add_sphere(0, 0, -0.5, 0.25,  0.5, 0.5, 0.5,  1.0, 0.0, 0)

if __name__ == "__main__":
    render(scene)
