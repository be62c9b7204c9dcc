"""
Tests for the turn/phase state machine.

Tests:
- Action phase order
- Auto-skip predicates and the settle cascade
- Hero selection and game start
- Turn start, turn end and the day limit
"""

from ..catalog import get_hero_template
from ..engine_core.action import ErrorCode, OutcomeKind
from ..engine_core.phases import (
    PHASE_ORDER,
    advance_phase,
    begin_turn,
    end_turn,
    next_action_phase,
    select_hero,
    settle,
    should_skip_phase,
)
from ..engine_core.state import (
    ActionPhase,
    ActionsUsed,
    ActorKind,
    AttackType,
    Equipment,
    GameOverReason,
    GamePhase,
    Selection,
    Unit,
)
from .factories import make_hero, make_unit


class TestPhaseOrder:
    """Tests for the action phase sequence."""

    def test_order(self):
        assert PHASE_ORDER == (
            ActionPhase.BUY,
            ActionPhase.HERO_ACTION,
            ActionPhase.UNIT_ACTION,
            ActionPhase.END,
        )

    def test_next_action_phase(self):
        assert next_action_phase(ActionPhase.BUY) == ActionPhase.HERO_ACTION
        assert next_action_phase(ActionPhase.HERO_ACTION) == ActionPhase.UNIT_ACTION
        assert next_action_phase(ActionPhase.UNIT_ACTION) == ActionPhase.END
        assert next_action_phase(ActionPhase.END) is None


class TestSkipPredicates:
    """Tests for should_skip_phase."""

    def test_buy_skipped_without_gold(self, playing_state):
        assert should_skip_phase(playing_state, ActionPhase.BUY)

    def test_buy_kept_when_affordable(self, rich_state):
        assert not should_skip_phase(rich_state, ActionPhase.BUY)

    def test_buy_skipped_with_empty_shop(self, rich_state):
        state = rich_state._copy_with(shop=())
        assert should_skip_phase(state, ActionPhase.BUY)

    def test_hero_action_skipped_without_actions(self, playing_state):
        state = playing_state._copy_with(remaining_hero_actions=0)
        assert should_skip_phase(state, ActionPhase.HERO_ACTION)

    def test_hero_action_skipped_without_power(self, playing_state):
        """A hero with no ap and no mp cannot attack at all."""
        player = playing_state.get_player(1)
        state = playing_state.with_player(player._copy_with(hero=make_hero(ap=0, mp=0)))
        assert should_skip_phase(state, ActionPhase.HERO_ACTION)

    def test_hero_action_kept(self, playing_state):
        assert not should_skip_phase(playing_state, ActionPhase.HERO_ACTION)

    def test_unit_action_skipped_without_units(self, playing_state):
        assert should_skip_phase(playing_state, ActionPhase.UNIT_ACTION)

    def test_unit_action_skipped_when_used(self, playing_state):
        player = playing_state.get_player(1)
        state = playing_state.with_player(player._copy_with(units=(make_unit(),)))
        state = state._copy_with(actions_used=ActionsUsed(unit_action=True))
        assert should_skip_phase(state, ActionPhase.UNIT_ACTION)

    def test_unit_action_kept(self, playing_state):
        player = playing_state.get_player(1)
        state = playing_state.with_player(player._copy_with(units=(make_unit(),)))
        assert not should_skip_phase(state, ActionPhase.UNIT_ACTION)

    def test_end_never_skipped(self, playing_state):
        assert not should_skip_phase(playing_state, ActionPhase.END)


class TestSettle:
    """Tests for the auto-skip cascade."""

    def test_skips_unaffordable_buy(self, playing_state):
        """No gold: buy is skipped, the hero can still act."""
        assert settle(playing_state).action_phase == ActionPhase.HERO_ACTION

    def test_cascades_to_end(self, playing_state):
        """Nothing to do anywhere: the turn waits at end."""
        state = playing_state._copy_with(remaining_hero_actions=0)
        assert settle(state).action_phase == ActionPhase.END

    def test_stops_at_first_playable_phase(self, rich_state):
        assert settle(rich_state) == rich_state

    def test_is_idempotent(self, playing_state):
        once = settle(playing_state)
        assert settle(once) == once

    def test_never_leaves_end(self, playing_state):
        state = playing_state._copy_with(action_phase=ActionPhase.END, remaining_hero_actions=0)
        assert settle(state) == state

    def test_paused_while_targeting(self, playing_state):
        """A pending selection freezes the phase."""
        state = playing_state._copy_with(
            selection=Selection(ActorKind.HERO),
            attack_type=AttackType.PHYSICAL,
        )
        assert settle(state).action_phase == ActionPhase.BUY

    def test_ignored_outside_player_turns(self, playing_state):
        state = playing_state._copy_with(phase=GamePhase.GAME_OVER)
        assert settle(state) == state


class TestSelectHero:
    """Tests for hero selection."""

    def test_first_hero_waits_for_second(self, choose_hero_state, catalog, rules):
        template = get_hero_template("hero-knight")

        result = select_hero(choose_hero_state, template, 1, catalog, rules)

        assert result.success
        hero = result.new_state.get_player(1).hero
        assert hero.card_id == "hero-knight-p1"
        assert hero.hp == template.hp
        assert result.new_state.phase == GamePhase.CHOOSE_HERO
        assert catalog.monster_calls == []

    def test_second_hero_starts_game(self, choose_hero_state, catalog, rules):
        """Both heroes chosen: player 1 begins on day 1 in the forest."""
        first = select_hero(choose_hero_state, get_hero_template("hero-knight"), 1, catalog, rules)
        result = select_hero(first.new_state, get_hero_template("hero-berserker"), 2, catalog, rules)

        state = result.new_state
        assert state.phase == GamePhase.PLAYER1_TURN
        assert state.action_phase == ActionPhase.BUY
        assert state.current_player == 1
        assert state.day == 1
        assert state.location == "forest"
        assert state.remaining_hero_actions == 1
        assert len(state.monsters) == 2
        assert all(m.location == "forest" for m in state.monsters)
        assert isinstance(state.shop[0], Unit)
        assert isinstance(state.shop[1], Equipment)
        assert state.shop[0].cost == 4

    def test_heroes_selected_in_any_order(self, choose_hero_state, catalog, rules):
        first = select_hero(choose_hero_state, get_hero_template("hero-archmage"), 2, catalog, rules)
        result = select_hero(first.new_state, get_hero_template("hero-berserker"), 1, catalog, rules)

        assert result.new_state.phase == GamePhase.PLAYER1_TURN
        assert result.new_state.remaining_hero_actions == 2

    def test_hero_already_chosen(self, choose_hero_state, catalog, rules):
        first = select_hero(choose_hero_state, get_hero_template("hero-knight"), 1, catalog, rules)
        result = select_hero(first.new_state, get_hero_template("hero-archmage"), 1, catalog, rules)

        assert not result.success
        assert result.error_code == ErrorCode.HERO_ALREADY_CHOSEN
        assert result.new_state.get_player(1).hero.card_id == "hero-knight-p1"

    def test_invalid_player(self, choose_hero_state, catalog, rules):
        result = select_hero(choose_hero_state, get_hero_template("hero-knight"), 3, catalog, rules)

        assert not result.success
        assert result.error_code == ErrorCode.INVALID_PLAYER


class TestBeginTurn:
    """Tests for turn start."""

    def test_start_player_two(self, playing_state, rules):
        """Player switch, stipend, flags reset, hero actions refilled."""
        state = playing_state._copy_with(
            actions_used=ActionsUsed(buy=True, hero_action=True),
            remaining_hero_actions=0,
        )

        result = begin_turn(state, 2, rules)

        new_state = result.new_state
        assert new_state.current_player == 2
        assert new_state.phase == GamePhase.PLAYER2_TURN
        assert new_state.action_phase == ActionPhase.BUY
        assert new_state.get_player(2).gold == 5
        assert new_state.get_player(1).gold == 0
        assert new_state.actions_used == ActionsUsed()
        assert new_state.remaining_hero_actions == 1
        assert new_state.day == 1

    def test_stipend_replaces_gold(self, playing_state, rules):
        """Unspent gold does not carry over into the next turn."""
        player = playing_state.get_player(2)
        state = playing_state.with_player(player._copy_with(gold=9))

        result = begin_turn(state, 2, rules)

        assert result.new_state.get_player(2).gold == 5

    def test_stipend_replaces_gold_on_pass(self, playing_state, catalog, rules):
        player = playing_state.get_player(2)
        state = playing_state.with_player(player._copy_with(gold=9))._copy_with(
            action_phase=ActionPhase.END,
        )

        new_state = advance_phase(state, catalog, rules).new_state

        assert new_state.current_player == 2
        assert new_state.get_player(2).gold == 5

    def test_clears_pending_attack(self, playing_state, rules):
        state = playing_state._copy_with(
            selection=Selection(ActorKind.HERO),
            attack_type=AttackType.PHYSICAL,
        )

        new_state = begin_turn(state, 2, rules).new_state

        assert not new_state.targeting_mode
        assert new_state.attack_type is None

    def test_new_location(self, playing_state, rules):
        """Day 4 moves the duel to the ruins."""
        state = playing_state._copy_with(current_player=2, day=3)

        result = begin_turn(state, 1, rules)

        assert result.new_state.day == 4
        assert result.new_state.location == "ruins"
        assert "New location!" in [o.title for o in result.outcomes]
        assert result.outcomes[0].detail == "Day 4 in the ruins (1 of 3)."

    def test_day_limit(self, playing_state, rules):
        """Player 1 starting day 19 ends the game in a draw."""
        state = playing_state._copy_with(current_player=2, day=18, location="crypt")

        result = begin_turn(state, 1, rules)

        new_state = result.new_state
        assert new_state.phase == GamePhase.GAME_OVER
        assert new_state.winner is None
        assert new_state.game_over_reason == GameOverReason.DAY_LIMIT
        assert new_state.day == 19
        assert new_state.current_player == 2
        assert new_state.get_player(1).gold == 0
        assert result.outcome.kind == OutcomeKind.GAME_OVER

    def test_invalid_player(self, playing_state, rules):
        result = begin_turn(playing_state, 0, rules)

        assert not result.success
        assert result.error_code == ErrorCode.INVALID_PLAYER


class TestAdvancePhase:
    """Tests for advancing and ending turns."""

    def test_advance_moves_one_phase(self, playing_state, catalog, rules):
        result = advance_phase(playing_state, catalog, rules)

        assert result.success
        assert result.new_state.action_phase == ActionPhase.HERO_ACTION

    def test_advance_clears_selection(self, playing_state, catalog, rules):
        state = playing_state._copy_with(
            action_phase=ActionPhase.HERO_ACTION,
            selection=Selection(ActorKind.HERO),
            attack_type=AttackType.PHYSICAL,
        )

        new_state = advance_phase(state, catalog, rules).new_state

        assert new_state.action_phase == ActionPhase.UNIT_ACTION
        assert new_state.selection is None
        assert new_state.attack_type is None

    def test_advance_from_end_passes_turn(self, playing_state, catalog, rules):
        """Ending the turn hands over and restocks the board."""
        state = playing_state._copy_with(
            action_phase=ActionPhase.END,
            monsters=playing_state.monsters[:1],
        )

        result = advance_phase(state, catalog, rules)

        new_state = result.new_state
        assert new_state.current_player == 2
        assert new_state.phase == GamePhase.PLAYER2_TURN
        assert new_state.action_phase == ActionPhase.BUY
        assert new_state.get_player(2).gold == 5
        assert len(new_state.monsters) == 2
        assert len(new_state.shop) == 2
        assert new_state.shop[0].card_id != state.shop[0].card_id
        assert new_state.shop[1].card_id != state.shop[1].card_id

    def test_end_turn_restocks_at_new_location(self, playing_state, catalog, rules):
        """The restock uses the location of the day that just began."""
        state = playing_state._copy_with(
            current_player=2,
            phase=GamePhase.PLAYER2_TURN,
            day=3,
            monsters=(),
        )

        new_state = end_turn(state, catalog, rules).new_state

        assert new_state.location == "ruins"
        assert catalog.monster_calls == [("ruins", 2)]
        assert catalog.unit_calls == [("ruins", 1)]
        assert all(m.location == "ruins" for m in new_state.monsters)

    def test_end_turn_into_day_limit_skips_restock(self, playing_state, catalog, rules):
        state = playing_state._copy_with(current_player=2, phase=GamePhase.PLAYER2_TURN, day=18)

        new_state = end_turn(state, catalog, rules).new_state

        assert new_state.phase == GamePhase.GAME_OVER
        assert catalog.monster_calls == []
        assert catalog.unit_calls == []
