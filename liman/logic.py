"""Game logic owning levels, actor creation, input and game time."""

from __future__ import annotations

from liman import log
from liman.actor_factory import ActorCreationError, ActorFactory
from liman.input import InputManager, KeyboardInput, MouseInput
from liman.levels import LevelManager
from liman.resources import ResCache, ResourceError
from liman.timer import Timer


class BaseLogic:
    """Holds the subsystems of a running game; :meth:`init` creates them."""

    def __init__(
        self,
        res_cache: ResCache | None = None,
        keyboard: KeyboardInput | None = None,
        mouse: MouseInput | None = None,
    ) -> None:
        self.res_cache = res_cache
        self.keyboard = keyboard if keyboard is not None else KeyboardInput()
        self.mouse = mouse if mouse is not None else MouseInput()
        self.level_manager: LevelManager | None = None
        self.actor_factory: ActorFactory | None = None
        self.input_manager: InputManager | None = None
        self.timer: Timer | None = None

    def init(self) -> None:
        """Create the level manager, actor factory, input manager and timer."""
        self.level_manager = LevelManager(self.res_cache)
        self.actor_factory = ActorFactory(self.level_manager, self.res_cache)
        self.input_manager = InputManager(self.keyboard, self.mouse)
        self.timer = Timer()

    def load_game(self, level_name: str) -> None:
        """Load a level file into the level manager."""
        if self.level_manager is None or self.actor_factory is None:
            raise RuntimeError("Logic is not initialised")
        try:
            self.level_manager.load_level(level_name, self.actor_factory)
        except (ResourceError, ActorCreationError):
            log.write_log("Level manager", "Loading level failed")
            raise