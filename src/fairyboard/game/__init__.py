"""Game layer - rulesets, script hooks and game sessions.

Quick start::

    from fairyboard.core import Color, GameMove
    from fairyboard.game import GameSession, builtin_ruleset, standard_hooks

    session = GameSession(builtin_ruleset("standard"), standard_hooks())
    session.submit_move(Color.WHITE, GameMove.of(4, 6, 4, 4))
"""

from fairyboard.game.hooks import (
    CallbackHooks,
    ScriptHooks,
    promote_on_last_rank,
    standard_hooks,
)
from fairyboard.game.ruleset import (
    Ruleset,
    builtin_names,
    builtin_ruleset,
    load_ruleset,
    resolve_ruleset,
)
from fairyboard.game.session import GameEvents, GameSession, MoveRecord

__all__ = [
    # Hooks
    "CallbackHooks",
    "ScriptHooks",
    "promote_on_last_rank",
    "standard_hooks",
    # Rulesets
    "Ruleset",
    "builtin_names",
    "builtin_ruleset",
    "load_ruleset",
    "resolve_ruleset",
    # Session
    "GameEvents",
    "GameSession",
    "MoveRecord",
]
