"""
Game State Engine - Owns the current snapshot of one duel.

The engine is the orchestrator the outside world talks to:
1. Builds a fresh state on initialize() / reset()
2. Turns each operation into an Action
3. Applies it through the reducer
4. Replaces its snapshot with the result

Components never hold state of their own; the engine is the only
place a snapshot lives between operations.
"""

from __future__ import annotations
from typing import TYPE_CHECKING
import uuid

from .action import Action, ActionResult
from .reducer import Reducer
from .rules import DEFAULT_RULES, GameRules
from .state import ActorKind, AttackType, GamePhase, GameState, Hero, Player, Target

if TYPE_CHECKING:
    from ..catalog import CatalogProvider


def new_game_state(
    rules: GameRules = DEFAULT_RULES,
    game_id: str | None = None,
    random_seed: int | None = None,
    phase: GamePhase = GamePhase.SETUP,
) -> GameState:
    """Create an empty duel: no heroes, no board, day 1 at the first location."""
    return GameState(
        game_id=game_id or uuid.uuid4().hex,
        players=(
            Player(player_id=1, gold=rules.starting_gold),
            Player(player_id=2, gold=rules.starting_gold),
        ),
        phase=phase,
        location=rules.starting_location,
        random_seed=random_seed,
    )


class GameEngine:
    """
    Single-duel orchestrator.

    Usage:
        engine = GameEngine(seed=7)
        engine.initialize()
        engine.select_hero(get_hero_template("hero-knight"), 1)
        engine.select_hero(get_hero_template("hero-archmage"), 2)
        result = engine.advance_phase()
    """

    def __init__(
        self,
        catalog: CatalogProvider | None = None,
        rules: GameRules = DEFAULT_RULES,
        seed: int | None = None,
        game_id: str | None = None,
    ):
        if catalog is None:
            from ..catalog import RandomCatalog
            catalog = RandomCatalog(seed=seed)
        self.catalog = catalog
        self.rules = rules
        self.seed = seed
        self.game_id = game_id or uuid.uuid4().hex
        self.reducer = Reducer(catalog=catalog, rules=rules)
        self.state = new_game_state(rules, self.game_id, seed)

    def initialize(self) -> GameState:
        """Start a new duel and wait for both heroes."""
        self.state = new_game_state(self.rules, self.game_id, self.seed, GamePhase.CHOOSE_HERO)
        return self.state

    def reset(self) -> GameState:
        """Throw the current duel away."""
        self.state = new_game_state(self.rules, self.game_id, self.seed)
        return self.state

    def dispatch(self, action: Action) -> ActionResult:
        """Apply an action and keep the resulting snapshot."""
        result = self.reducer.apply(self.state, action)
        self.state = result.new_state
        return result

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    def select_hero(self, template: Hero, player_id: int) -> ActionResult:
        return self.dispatch(Action.select_hero(template, player_id))

    def start_turn(self, player_id: int) -> ActionResult:
        return self.dispatch(Action.start_turn(player_id))

    def buy(self, offer_index: int) -> ActionResult:
        return self.dispatch(Action.buy(offer_index))

    def advance_phase(self) -> ActionResult:
        return self.dispatch(Action.advance_phase())

    def select(self, actor_kind: ActorKind, unit_index: int | None = None) -> ActionResult:
        return self.dispatch(Action.select(actor_kind, unit_index))

    def select_attack_type(self, attack_type: AttackType) -> ActionResult:
        return self.dispatch(Action.select_attack_type(attack_type))

    def attack(self, target: Target) -> ActionResult:
        return self.dispatch(Action.attack(target))

    def cancel(self) -> ActionResult:
        return self.dispatch(Action.cancel())
