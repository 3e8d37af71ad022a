"""
Actor registry: the explicit list of controlled actors the frame loop updates.
"""
import logging
from typing import Dict, List

from spritewalk.entities.controller import ActorController
from spritewalk.entities.movement import Presentation

logger = logging.getLogger(__name__)


class ActorRegistry:
    """
    Owns the controllers for a scene and ticks each exactly once per frame,
    in the order they were registered.

    Usage:
        registry = ActorRegistry()
        registry.register("hero", hero_controller)
        registry.register("skeleton", skeleton_controller)
        registry.update_all()  # hero first, then skeleton
    """

    def __init__(self):
        self._actors: Dict[str, ActorController] = {}

    def register(self, name: str, controller: ActorController) -> ActorController:
        if name in self._actors:
            raise ValueError(f"Actor {name!r} is already registered")
        self._actors[name] = controller
        logger.debug("Registered actor %s", name)
        return controller

    def unregister(self, name: str) -> None:
        self._actors.pop(name, None)

    def get(self, name: str) -> ActorController:
        return self._actors[name]

    def names(self) -> List[str]:
        return list(self._actors)

    def update_all(self) -> Dict[str, Presentation]:
        """Tick every actor once. Returns each actor's presentation by name."""
        return {name: controller.update() for name, controller in self._actors.items()}

    def __contains__(self, name) -> bool:
        return name in self._actors

    def __len__(self) -> int:
        return len(self._actors)
