"""Application lifecycle, the game loop and the command that runs it."""

from __future__ import annotations

import argparse
import sys
import time
from enum import Enum

from liman import log
from liman.actor_factory import ActorCreationError
from liman.actors import component_id_from_name
from liman.collisions import CollisionManager, Rectangle
from liman.input import MAX_BUTTONS, MAX_KEYS, KeyboardInput, MouseInput
from liman.logic import BaseLogic
from liman.physics import Movable, PhysicsManager
from liman.resources import ResCache, ResourceError, create_xml_resource_loader
from liman.settings import GameSettings
from liman.timer import Timer


class BaseGameLogic(BaseLogic):
    """Logic with movable and rectangle components, collisions and physics."""

    def __init__(self, res_cache=None, keyboard=None, mouse=None) -> None:
        super().__init__(res_cache, keyboard, mouse)
        self.collision_manager: CollisionManager | None = None
        self.physics_manager: PhysicsManager | None = None

    def init(self) -> None:
        super().init()
        factory = self.actor_factory.component_factory
        factory.register(component_id_from_name(Movable.name), Movable)
        factory.register(component_id_from_name(Rectangle.name), Rectangle)
        self.collision_manager = CollisionManager()
        self.physics_manager = PhysicsManager()


class AppState(Enum):
    INVALID = 0
    INITIALIZING = 1
    MAIN_MENU = 2
    LOADING = 3
    RUNNING = 4
    PAUSED = 5


class Application:
    """Owns the resource cache, settings, timer and input devices."""

    def __init__(self, paths_file) -> None:
        self.paths_file = paths_file
        self.state = AppState.INVALID
        self.res_cache: ResCache | None = None
        self.settings: GameSettings | None = None
        self.timer: Timer | None = None
        self.keyboard: KeyboardInput | None = None
        self.mouse: MouseInput | None = None
        self.logic: BaseLogic | None = None

    def init(self) -> None:
        """Bring up the subsystems; raises ResourceError if assets are missing."""
        log.init("")
        log.write_log("Info", "Initializing subsystems")
        self.init_res_cache()
        try:
            self.res_cache.load_paths(self.paths_file)
        except ResourceError:
            log.write_log("Resource Cache", "Loading paths failed")
            raise
        try:
            self.init_settings("Settings.xml")
        except ResourceError:
            log.write_log("Application", "Settings loading failed")
            raise
        self.timer = Timer()
        self.keyboard = KeyboardInput()
        self.mouse = MouseInput()

    def init_res_cache(self) -> None:
        self.res_cache = ResCache(50)
        self.res_cache.register_loader(create_xml_resource_loader())

    def init_settings(self, xml_file_name: str) -> None:
        """Load settings from the Settings asset directory."""
        self.settings = GameSettings()
        self.settings.load(self.res_cache.get_path("Settings") + xml_file_name)

    def change_state(self, state: AppState) -> None:
        self.state = state

    def do_loop(self) -> None:
        """Run one frame; the base application does nothing."""

    def deinit(self) -> None:
        """Shut down; the base application has nothing to release."""


class Game(Application):
    """Application running a level with collisions and physics at a fixed rate."""

    def __init__(self, paths_file) -> None:
        super().__init__(paths_file)
        self.sleep = time.sleep
        self.clock = time.perf_counter

    def init(self) -> None:
        self.state = AppState.INITIALIZING
        try:
            super().init()
        except ResourceError:
            log.write_log("Application", "Initialization failed")
            raise

        self.logic = BaseGameLogic(self.res_cache, self.keyboard, self.mouse)
        self.logic.init()
        for key in range(MAX_KEYS):
            self.logic.input_manager.set_key(key)
        for button in range(MAX_BUTTONS):
            self.logic.input_manager.set_button(button)

        self.logic.load_game(self.settings.level)
        self.logic.level_manager.actors_info()
        self.state = AppState.RUNNING

    def do_loop(self) -> None:
        """Process input, collisions and physics, then wait out the frame."""
        if self.logic is None:
            raise RuntimeError("Game is not initialised")
        started = self.clock()
        self.timer.start()

        logic = self.logic
        frame_ms = self.settings.display.ms_per_frame
        logic.input_manager.update()
        logic.collision_manager.update_collision(logic.level_manager)
        logic.physics_manager.update_movables(logic.level_manager, frame_ms)

        self.timer.stop()
        elapsed_ms = (self.clock() - started) * 1000
        if elapsed_ms < frame_ms:
            self.sleep((frame_ms - elapsed_ms) / 1000)

    def deinit(self) -> None:
        self.state = AppState.INVALID


def main(argv=None) -> int:
    """Run a game from a paths file until it stops running."""
    parser = argparse.ArgumentParser(prog="liman", description="Run a game level.")
    parser.add_argument("paths", nargs="?", default="Resources/Paths.xml",
                        help="XML file listing the asset directories")
    parser.add_argument("--frames", type=int, default=0,
                        help="stop after this many frames (0 runs until stopped)")
    args = parser.parse_args(argv)

    game = Game(args.paths)
    try:
        game.init()
    except (ResourceError, ActorCreationError, ValueError) as exc:
        print(f"Initialization failed: {exc}", file=sys.stderr)
        return 1

    frames = 0
    while game.state is AppState.RUNNING:
        game.do_loop()
        frames += 1
        if args.frames and frames >= args.frames:
            game.change_state(AppState.INVALID)
    game.deinit()
    return 0