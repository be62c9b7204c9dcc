"""
Tests for the reducer and the engine (state transitions).

Tests:
- Coarse phase validation
- Action history
- Auto-skip after every operation
- Handler errors
- Full turn flows through GameEngine
"""

from ..catalog import get_hero_template
from ..engine_core.action import Action, ActionType, ErrorCode
from ..engine_core.engine import GameEngine
from ..engine_core.reducer import apply_action
from ..engine_core.state import (
    ActionPhase,
    ActorKind,
    GameOverReason,
    GamePhase,
    Target,
)
from .factories import BrokenCatalog


def _start_duel(engine, first="hero-knight", second="hero-archmage"):
    engine.select_hero(get_hero_template(first), 1)
    return engine.select_hero(get_hero_template(second), 2)


class TestPhaseValidation:
    """Tests for coarse phase gating."""

    def test_turn_actions_rejected_before_heroes(self, engine):
        """Nothing but hero selection works in chooseHero."""
        for result in (
            engine.buy(0),
            engine.advance_phase(),
            engine.select(ActorKind.HERO),
            engine.attack(Target.monster(0)),
            engine.cancel(),
            engine.start_turn(1),
        ):
            assert not result.success
            assert result.error_code == ErrorCode.WRONG_PHASE
        assert engine.state.phase == GamePhase.CHOOSE_HERO

    def test_select_hero_rejected_during_play(self, engine):
        _start_duel(engine)

        result = engine.select_hero(get_hero_template("hero-paladin"), 1)

        assert not result.success
        assert result.error_code == ErrorCode.WRONG_PHASE

    def test_everything_rejected_after_game_over(self, engine):
        _start_duel(engine)
        engine.state = engine.state.end_game(None, GameOverReason.DAY_LIMIT)

        result = engine.advance_phase()

        assert not result.success
        assert result.error_code == ErrorCode.WRONG_PHASE

    def test_setup_rejects_hero_selection(self, catalog):
        """A reset engine must be initialized first."""
        engine = GameEngine(catalog=catalog)

        result = engine.select_hero(get_hero_template("hero-knight"), 1)

        assert engine.state.phase == GamePhase.SETUP
        assert result.error_code == ErrorCode.WRONG_PHASE


class TestReducer:
    """Tests for Reducer.apply."""

    def test_successful_actions_recorded(self, reducer, choose_hero_state):
        action = Action.select_hero(get_hero_template("hero-knight"), 1)

        result = reducer.apply(choose_hero_state, action)

        assert result.success
        assert result.new_state.action_history == (action,)

    def test_rejected_actions_not_recorded(self, reducer, playing_state):
        result = reducer.apply(playing_state, Action.buy(0))

        assert not result.success
        assert result.new_state.action_history == ()

    def test_settles_after_operation(self, reducer, playing_state):
        """Cancel is a no-op, but the reducer still skips the unaffordable buy."""
        result = reducer.apply(playing_state, Action.cancel())

        assert result.new_state.action_phase == ActionPhase.HERO_ACTION

    def test_apply_action_helper(self, catalog, playing_state):
        result = apply_action(catalog, playing_state, Action.advance_phase())

        assert result.success
        assert result.new_state.action_phase == ActionPhase.HERO_ACTION

    def test_handler_errors_reported(self, rules):
        """An exception inside a handler becomes a failure, state untouched."""
        engine = GameEngine(catalog=BrokenCatalog(), rules=rules)
        engine.initialize()
        engine.select_hero(get_hero_template("hero-knight"), 1)
        before = engine.state

        result = engine.select_hero(get_hero_template("hero-archmage"), 2)

        assert not result.success
        assert result.error_code == ErrorCode.HANDLER_ERROR
        assert "monster table unavailable" in result.error
        assert engine.state is before

    def test_action_factories(self):
        assert Action.advance_phase().action_type == ActionType.ADVANCE_PHASE
        assert Action.buy(1).payload.offer_index == 1
        assert Action.attack(Target.monster(0)).payload.target == Target.monster(0)


class TestEngineFlow:
    """Full turns through GameEngine."""

    def test_initialize(self, engine):
        state = engine.state
        assert state.phase == GamePhase.CHOOSE_HERO
        assert state.game_id == "test_game"
        assert [p.gold for p in state.players] == [0, 0]
        assert all(p.hero is None for p in state.players)

    def test_start_skips_to_hero_action(self, engine):
        """Player 1 opens with no gold, so the buy phase is skipped."""
        result = _start_duel(engine)

        assert result.success
        assert engine.state.phase == GamePhase.PLAYER1_TURN
        assert engine.state.action_phase == ActionPhase.HERO_ACTION

    def test_full_turn(self, engine):
        """Kill a monster, run out of actions, pass the turn."""
        _start_duel(engine)

        assert engine.select(ActorKind.HERO).success
        result = engine.attack(Target.monster(0))

        assert result.success
        assert engine.state.get_player(1).gold == 2
        assert len(engine.state.monsters) == 1
        assert engine.state.action_phase == ActionPhase.END

        result = engine.advance_phase()

        state = engine.state
        assert result.success
        assert state.phase == GamePhase.PLAYER2_TURN
        assert state.current_player == 2
        assert state.get_player(2).gold == 5
        assert state.action_phase == ActionPhase.BUY
        assert len(state.monsters) == 2
        assert state.day == 1

    def test_second_player_buys(self, engine):
        _start_duel(engine)
        engine.advance_phase()
        engine.advance_phase()
        assert engine.state.current_player == 2

        result = engine.buy(0)

        state = engine.state
        assert result.success
        assert len(state.get_player(2).units) == 1
        assert state.get_player(2).gold == 1
        assert len(state.shop) == 2
        assert state.action_phase == ActionPhase.HERO_ACTION

    def test_history_records_turn(self, engine):
        _start_duel(engine)
        engine.select(ActorKind.HERO)
        engine.attack(Target.monster(0))
        engine.buy(0)

        kinds = [a.action_type for a in engine.state.action_history]
        assert kinds == [
            ActionType.SELECT_HERO,
            ActionType.SELECT_HERO,
            ActionType.SELECT,
            ActionType.ATTACK,
        ]

    def test_day_advances_with_player_one(self, engine):
        _start_duel(engine)

        engine.start_turn(2)
        engine.start_turn(1)

        assert engine.state.day == 2
        assert engine.state.current_player == 1

    def test_day_limit_draw(self, engine):
        """The turn start of day 19 ends the duel without a winner."""
        _start_duel(engine)
        for _ in range(17):
            engine.start_turn(2)
            engine.start_turn(1)

        assert engine.state.day == 18
        assert engine.state.location == "crypt"
        assert engine.state.phase == GamePhase.PLAYER1_TURN

        engine.start_turn(2)
        result = engine.start_turn(1)

        assert result.success
        assert engine.state.phase == GamePhase.GAME_OVER
        assert engine.state.winner is None
        assert engine.state.game_over_reason == GameOverReason.DAY_LIMIT
        assert engine.state.day == 19

    def test_reset(self, engine):
        _start_duel(engine)

        engine.reset()

        assert engine.state.phase == GamePhase.SETUP
        assert all(p.hero is None for p in engine.state.players)
        assert engine.initialize().phase == GamePhase.CHOOSE_HERO

    def test_default_catalog_is_seeded(self):
        """Two engines with the same seed deal the same opening board."""
        first = GameEngine(seed=11)
        second = GameEngine(seed=11)
        for engine in (first, second):
            engine.initialize()
            _start_duel(engine)

        assert first.state.monsters == second.state.monsters
        assert first.state.shop == second.state.shop
        assert first.state.random_seed == 11
