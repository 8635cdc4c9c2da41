"""Interactive state of the jello viewer and a headless simulation driver.

The viewer keeps the camera, the mouse and the display toggles, and
advances the simulation once per idle tick. Drawing is left to whatever
front end renders the geometry from :mod:`jellocube.geometry`. The
front end can also supply a frame grabber for screenshots.
"""

from __future__ import annotations

import argparse
import enum
import math
import os
import sys
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence, Tuple, Union

from jellocube.physics import euler, rk4
from jellocube.picture import Picture, PpmError, write_ppm
from jellocube.world import World, WorldFileError, read_world, write_world

ESCAPE = "\x1b"
MAX_SCREENSHOTS = 300
MIN_RADIUS = 0.2
ZOOM_STEP = 0.2
DRAG_SENSITIVITY = 0.01
POLE_MARGIN = 0.01
DEFAULT_WIDTH = 640
DEFAULT_HEIGHT = 480

FrameGrabber = Callable[[int, int], Picture]


class MouseButton(enum.IntEnum):
    """Mouse buttons, numbered as the windowing toolkit reports them."""

    LEFT = 0
    MIDDLE = 1
    RIGHT = 2


class ViewingMode(enum.IntEnum):
    """How the cube is drawn."""

    WIREFRAME = 0
    SHADED = 1


def screenshot_name(index: int) -> str:
    """File name of the screenshot with the given sequence number."""
    if not 0 <= index <= 9999:
        raise ValueError(f"screenshot index {index} out of range 0..9999")
    return f"pic{index:04d}.ppm"


@dataclass
class Camera:
    """A camera orbiting the origin at distance ``r``, with z pointing up."""

    theta: float = math.pi / 6
    phi: float = math.pi / 6
    r: float = 6.0

    def eye(self) -> Tuple[float, float, float]:
        """Position of the eye in world coordinates."""
        return (
            self.r * math.cos(self.phi) * math.cos(self.theta),
            self.r * math.sin(self.phi) * math.cos(self.theta),
            self.r * math.sin(self.theta),
        )


@dataclass
class ViewState:
    """Camera, input and display state of the viewer."""

    camera: Camera = field(default_factory=Camera)
    mouse_pos: Tuple[int, int] = (0, 0)
    left_button: bool = False
    middle_button: bool = False
    right_button: bool = False
    structural: bool = True
    shear: bool = False
    bend: bool = False
    paused: bool = False
    viewing_mode: ViewingMode = ViewingMode.WIREFRAME
    save_screen: bool = False
    sprite: int = 0
    running: bool = True
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    grab_frame: Optional[FrameGrabber] = None
    screenshot_dir: str = "."

    def key_press(self, key: Union[str, int]) -> None:
        """Handle a key press; ``key`` is a character or its code."""
        if isinstance(key, int):
            key = chr(key)
        if key == ESCAPE:
            self.running = False
        elif key == "e":
            self.camera.theta = math.pi / 6
            self.camera.phi = math.pi / 6
            self.viewing_mode = ViewingMode.WIREFRAME
        elif key == "v":
            self.viewing_mode = (
                ViewingMode.SHADED
                if self.viewing_mode == ViewingMode.WIREFRAME
                else ViewingMode.WIREFRAME
            )
        elif key == "h":
            self.shear = not self.shear
        elif key == "s":
            self.structural = not self.structural
        elif key == "b":
            self.bend = not self.bend
        elif key == "p":
            self.paused = not self.paused
        elif key == "z":
            self.camera.r = max(self.camera.r - ZOOM_STEP, MIN_RADIUS)
        elif key == "x":
            self.camera.r += ZOOM_STEP
        elif key == " ":
            self.save_screen = not self.save_screen

    def mouse_button(self, button: Union[MouseButton, int], pressed: bool, x: int, y: int) -> None:
        """Record a button going down or up at (x, y)."""
        if button == MouseButton.LEFT:
            self.left_button = pressed
        elif button == MouseButton.MIDDLE:
            self.middle_button = pressed
        elif button == MouseButton.RIGHT:
            self.right_button = pressed
        self.mouse_pos = (x, y)

    def mouse_drag(self, x: int, y: int) -> None:
        """Rotate the camera while the right button is held."""
        if not self.right_button:
            return
        dx = x - self.mouse_pos[0]
        dy = y - self.mouse_pos[1]
        cam = self.camera
        cam.phi += dx * DRAG_SENSITIVITY
        cam.theta += dy * DRAG_SENSITIVITY
        if cam.phi > 2 * math.pi:
            cam.phi -= 2 * math.pi
        if cam.phi < 0:
            cam.phi += 2 * math.pi
        cam.theta = min(cam.theta, math.pi / 2 - POLE_MARGIN)
        cam.theta = max(cam.theta, -math.pi / 2 + POLE_MARGIN)
        self.mouse_pos = (x, y)

    def mouse_motion(self, x: int, y: int) -> None:
        """Track the pointer while no button is held."""
        self.mouse_pos = (x, y)

    def _save_screenshot(self, name: str) -> Optional[str]:
        if self.grab_frame is None:
            return None
        path = os.path.join(self.screenshot_dir, name)
        print(f"File to save to: {path}")
        picture = self.grab_frame(self.width, self.height)
        try:
            write_ppm(path, picture)
        except PpmError:
            print("Error in Saving")
            return None
        print("File saved Successfully")
        return path

    def idle(self, world: World) -> Optional[str]:
        """One idle tick: take a pending screenshot, then step the simulation.

        Returns the path of the screenshot written, if any. After
        ``MAX_SCREENSHOTS`` screenshots the viewer stops running and the
        simulation is not stepped.
        """
        saved = None
        if self.save_screen:
            saved = self._save_screenshot(screenshot_name(self.sprite))
            self.save_screen = False
            self.sprite += 1
        if self.sprite >= MAX_SCREENSHOTS:
            self.running = False
            return saved
        if not self.paused:
            if world.integrator.startswith("E"):
                euler(world)
            elif world.integrator.startswith("R"):
                rk4(world)
        return saved


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Load a world file and advance it headlessly for a number of frames."""
    args: List[str] = list(sys.argv[1:] if argv is None else argv)
    if not args:
        print("Oops! You didn't say the jello world file!")
        print("Usage: jellocube [worldfile]")
        return 0

    parser = argparse.ArgumentParser(prog="jellocube", description=main.__doc__)
    parser.add_argument("world", help="world file to simulate")
    parser.add_argument("--frames", type=int, default=1, help="idle ticks to run")
    parser.add_argument("--output", help="write the final world to this file")
    options = parser.parse_args(args)
    if options.frames < 0:
        parser.error("--frames must be non-negative")

    try:
        world = read_world(options.world)
    except WorldFileError:
        print("can't open file")
        return 1

    state = ViewState()
    for _ in range(options.frames):
        if not state.running:
            break
        state.idle(world)

    if options.output:
        try:
            write_world(options.output, world)
        except WorldFileError:
            print("can't open file")
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())