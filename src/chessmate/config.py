"""Game settings shared by the controller and the engine worker."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class GameSettings:
    """All user-configurable game options."""

    # Players
    white_is_ai: bool = False
    black_is_ai: bool = True

    # Layout
    random_layout: bool = False
    random_seed: int | None = None

    # Engine
    search_depth: int = 3
