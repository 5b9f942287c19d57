"""Tests for battler.effects.engine (bundled catalog)."""

import random
from unittest.mock import MagicMock

import pytest

from battler.card import CardTemplate, create_card
from battler.effects.catalog import EffectCatalog, create_default_catalog
from battler.effects.context import EffectStatus, InvocationContext
from battler.effects.engine import EffectEngine, create_engine
from battler.effects.schema import StatBonus
from battler.enums import CardKind, LogLevel, PlayerScope, Side, TriggerTiming, UIMode
from battler.state import GameState


def _card(card_id, name, race="", kind=CardKind.BATTLEFIELD, atk=2, hp=5, rarity="common"):
    return create_card(CardTemplate(card_id, name, kind, rarity, race, "", atk, hp))


@pytest.fixture(scope="module")
def catalog():
    return create_default_catalog()


@pytest.fixture
def engine(catalog):
    return EffectEngine(catalog, rng=random.Random(42), trace=False)


def _custom_engine(entries):
    return EffectEngine(EffectCatalog.from_dict(entries), rng=random.Random(0), trace=False)


def _board():
    state = GameState.new()
    state[Side.RED].battlefield[0] = _card(500, "骑士", "军队", atk=3)
    state[Side.BLUE].battlefield[1] = _card(501, "骷髅兵", "骷髅", atk=1)
    state[Side.BLUE].battlefield[2] = _card(502, "弓手", "平民", atk=2)
    return state


# ==================== 流水线 ====================

class TestUnconfiguredCard:
    def test_returns_input(self, engine):
        state = _board()
        card = _card(999, "无效果")
        result = engine.resolve(999, InvocationContext(Side.RED, card), state)
        assert result.state is state
        assert result.status == EffectStatus.NO_EFFECT
        assert result.entries == []


class TestTargetedSupport:
    def test_applies_to_copy(self, engine):
        state = _board()
        target = state[Side.BLUE].battlefield[1]
        sword = _card(71, "誓言之剑", kind=CardKind.SUPPORT)
        result = engine.resolve(71, InvocationContext(Side.RED, sword, target), state)

        assert result.status == EffectStatus.APPLIED
        assert result.state is not state
        assert result.state[Side.BLUE].battlefield[1].atk == 4
        assert target.atk == 1
        assert result.messages == ["骷髅兵 攻击力+3 (基础2+条件加成1) (当前: 4)"]

    def test_trigger_returns_state(self, engine):
        state = _board()
        target = state[Side.RED].battlefield[0]
        new_state = engine.trigger(84, InvocationContext(Side.BLUE, _card(84, "恐惧之哨"), target), state)
        assert new_state[Side.RED].battlefield[0].atk == 0
        assert state[Side.RED].battlefield[0].atk == 3

    def test_missing_target_aborts(self, engine):
        state = _board()
        sink = MagicMock()
        ctx = InvocationContext(Side.RED, _card(71, "誓言之剑"), on_log=sink)
        result = engine.resolve(71, ctx, state)
        assert result.state is state
        assert result.status == EffectStatus.ABORTED
        assert result.aborted
        sink.assert_called_once_with("错误：誓言之剑 需要选择目标！")
        assert [e.level for e in result.entries] == [LogLevel.ERROR]

    def test_lost_target_aborts(self, engine):
        state = _board()
        ghost = _card(500, "幽灵")
        result = engine.resolve(89, InvocationContext(Side.RED, _card(89, "神旨"), ghost), state)
        assert result.state is state
        assert result.status == EffectStatus.ABORTED
        assert result.messages == ["错误：目标卡牌丢失"]

    def test_kill_selected(self, engine):
        state = _board()
        target = state[Side.BLUE].battlefield[2]
        new_state = engine.trigger(89, InvocationContext(Side.RED, _card(89, "神旨"), target), state)
        assert new_state[Side.BLUE].battlefield[2] is None
        assert [c.name for c in new_state.discard_pile] == ["弓手"]
        assert state[Side.BLUE].battlefield[2] is target


class TestBundledMiracles:
    def test_doomsday_clears_and_skips(self, engine):
        state = _board()
        new_state = engine.trigger(9, InvocationContext(Side.RED, _card(9, "末日", kind=CardKind.MIRACLE)), state)
        assert new_state.field_cards() == []
        assert len(new_state.discard_pile) == 3
        assert new_state.skip_to_next_turn is True
        assert state.skip_to_next_turn is False

    @pytest.mark.parametrize("health, victory", [(7, Side.RED), (8, None)])
    def test_execute(self, engine, health, victory):
        state = _board()
        state[Side.BLUE].health = health
        new_state = engine.trigger(8, InvocationContext(Side.RED, _card(8, "处决")), state)
        assert new_state.immediate_victory == victory
        assert new_state[Side.BLUE].health == (0 if victory else health)

    def test_god_removes_freeze_and_heals(self, engine):
        state = _board()
        state[Side.RED].battlefield[0].frozen = 2
        state[Side.RED].health = 20
        new_state = engine.trigger(1, InvocationContext(Side.RED, _card(1, "上帝")), state)
        knight = new_state[Side.RED].battlefield[0]
        assert knight.frozen == 0
        assert (knight.hp, knight.max_hp) == (8, 8)
        assert new_state[Side.RED].health == 23

    def test_hand_redraw(self, engine):
        state = _board()
        state[Side.RED].hand = [_card(1, "上帝", kind=CardKind.MIRACLE), _card(71, "誓言之剑")]
        state.deck = [_card(600 + i, f"堆{i}") for i in range(4)]
        state.miracle_deck = [_card(2, "极寒", kind=CardKind.MIRACLE)]
        new_state = engine.trigger(102, InvocationContext(Side.RED, _card(102, "重整旗鼓")), state)
        assert len(new_state[Side.RED].hand) == 2
        assert sum(c.is_miracle for c in new_state[Side.RED].hand) == 1


class TestUnknownAtom:
    def test_werewolf_logs_and_applies(self, engine):
        state = _board()
        result = engine.resolve(16, InvocationContext(Side.RED, _card(16, "狼人")), state)
        assert result.status == EffectStatus.APPLIED
        assert result.messages == ["错误：未实现的效果 checkSurvivalAndAct"]
        assert result.state.to_dict() == state.to_dict()

    def test_chain_continues(self):
        engine = _custom_engine({
            "900": {
                "name": "半成品",
                "type": "miracle",
                "effects": [
                    {"atom": "teleport", "distance": 3},
                    {"atom": "playerHeal", "amount": 2},
                ],
            }
        })
        state = _board()
        result = engine.resolve(900, InvocationContext(Side.RED, _card(900, "半成品")), state)
        assert result.state[Side.RED].health == 32
        assert [e.level for e in result.entries] == [LogLevel.ERROR, LogLevel.INFO]
        assert "teleport" in result.entries[0].message


class TestUIMode:
    @pytest.mark.parametrize("card_id, name, expected", [
        (28, "空间法师", "空间法师 进入重新部署模式"),
        (109, "替名", "替名 进入替名交换模式"),
    ])
    def test_returns_original(self, engine, card_id, name, expected):
        state = _board()
        result = engine.resolve(card_id, InvocationContext(Side.RED, _card(card_id, name)), state)
        assert result.state is state
        assert result.status == EffectStatus.UI_MODE
        assert result.messages == [expected]


class TestActingCard:
    def test_turn_start_growth_on_copy(self, engine):
        state = _board()
        elf = _card(41, "高等精灵", "森林", atk=2, hp=3)
        state[Side.RED].battlefield[3] = elf
        new_state = engine.trigger(41, InvocationContext(Side.RED, elf), state)
        grown = new_state[Side.RED].battlefield[3]
        assert (grown.atk, grown.hp, grown.max_hp) == (4, 4, 4)
        assert (elf.atk, elf.hp) == (2, 3)

    def test_self_target_off_board(self, engine):
        state = _board()
        elf = _card(41, "高等精灵")
        result = engine.resolve(41, InvocationContext(Side.RED, elf), state)
        assert result.status == EffectStatus.APPLIED
        assert all(e.level == LogLevel.ERROR for e in result.entries)
        assert result.state.to_dict() == state.to_dict()

    def test_first_attack_not_written_through(self, engine):
        state = _board()
        giant = _card(106, "冰霜巨人")
        state[Side.RED].battlefield[1] = giant
        victim = state[Side.BLUE].battlefield[1]
        new_state = engine.trigger(106, InvocationContext(Side.RED, giant, victim), state)
        assert new_state[Side.RED].battlefield[1].first_action_used is True
        assert new_state[Side.BLUE].battlefield[1].frozen == 1
        assert giant.first_action_used is False
        assert victim.frozen == 0

    def test_played_card_clone_when_off_board(self, engine):
        state = _board()
        giant = _card(106, "冰霜巨人")
        engine.trigger(106, InvocationContext(Side.RED, giant), state)
        assert giant.first_action_used is False


class TestSettle:
    def test_health_and_coins_floor(self):
        engine = _custom_engine({
            "900": {"name": "天罚", "type": "miracle",
                    "effects": [{"atom": "playerDamage", "amount": 50}]},
        })
        state = _board()
        new_state = engine.trigger(900, InvocationContext(Side.RED, _card(900, "天罚")), state)
        assert new_state[Side.BLUE].health == 0

    def test_heal_after_lethal_in_same_chain(self):
        engine = _custom_engine({
            "900": {"name": "回光返照", "type": "miracle", "effects": [
                {"atom": "playerDamage", "amount": 40, "filter": {"player": "self"}},
                {"atom": "playerHeal", "amount": 13},
            ]},
        })
        state = _board()
        new_state = engine.trigger(900, InvocationContext(Side.RED, _card(900, "回光返照")), state)
        assert new_state[Side.RED].health == 3

    def test_cascade_defeated_cards_stay(self, engine):
        state = _board()
        new_state = engine.trigger(4, InvocationContext(Side.RED, _card(4, "上帝之指")), state)
        assert [c.hp for c in new_state[Side.BLUE].field_cards()] == [-5, -4]


class TestTrace:
    def test_trace_entries_hidden_from_messages(self, catalog):
        engine = EffectEngine(catalog, rng=random.Random(0), trace=True)
        state = _board()
        result = engine.resolve(13, InvocationContext(Side.RED, _card(13, "赐予生命")), state)
        assert any(e.level == LogLevel.DEBUG for e in result.entries)
        assert result.messages == ["红方玩家 生命+13 (当前: 43)"]

    def test_trace_default_from_env(self, catalog, monkeypatch):
        monkeypatch.setenv("BATTLER_DEBUG", "1")
        assert EffectEngine(catalog).trace is True


# ==================== 查询 ====================

class TestQueries:
    def test_needs_target(self, engine):
        assert engine.needs_target(71) is True
        assert engine.needs_target(13) is False
        assert engine.needs_target(999) is False

    def test_get_target_filter(self, engine):
        assert engine.get_target_filter(84).player == PlayerScope.OPPONENT
        assert engine.get_target_filter(13) is None

    def test_configured_cards(self, engine):
        ids = engine.get_configured_cards()
        for card_id in (1, 2, 4, 8, 9, 13, 16, 28, 29, 30, 41, 71, 72, 73, 74, 84, 85, 86, 89, 92, 97):
            assert card_id in ids
        assert ids == sorted(ids)

    def test_description(self, engine):
        assert engine.get_description(13) == "我方玩家hp+13"
        assert engine.get_description(999) == ""

    def test_trigger_timing(self, engine):
        assert engine.get_trigger(41) == TriggerTiming.ON_TURN_START
        assert engine.get_trigger(999) is None
        assert engine.get_cards_for_trigger(TriggerTiming.PASSIVE) == [28, 29, 30]
        assert 16 in engine.get_cards_for_trigger(TriggerTiming.ON_AFTER_BATTLE)

    def test_ui_mode(self, engine):
        assert engine.get_ui_mode(28) == UIMode.REPOSITION
        assert engine.get_ui_mode(109) == UIMode.LANE_SWAP
        assert engine.get_ui_mode(71) is None


class TestIsValidTarget:
    def test_untargeted_card_accepts_anything(self, engine):
        assert engine.is_valid_target(13, _card(1, "随便"), _board()) is True

    def test_opponent_scope(self, engine):
        state = _board()
        own, enemy = state[Side.RED].battlefield[0], state[Side.BLUE].battlefield[1]
        assert engine.is_valid_target(84, enemy, state, Side.RED) is True
        assert engine.is_valid_target(84, own, state, Side.RED) is False
        assert engine.is_valid_target(84, own, state, Side.BLUE) is True

    def test_unknown_acting_player_accepts_either_side(self, engine):
        state = _board()
        assert engine.is_valid_target(84, state[Side.RED].battlefield[0], state) is True

    def test_off_board_target(self, engine):
        state = _board()
        assert engine.is_valid_target(71, _card(1, "手牌"), state, Side.RED) is False


class TestPassiveBonus:
    def test_elf_aura_threshold(self, engine):
        state = _board()
        state[Side.RED].battlefield[1] = _card(29, "精灵", "森林")
        assert engine.get_passive_bonus(29, state) == StatBonus()
        state[Side.BLUE].battlefield[0] = _card(600, "宝箱", "奇珍")
        assert engine.get_passive_bonus(29, state) == StatBonus(atk=2)

    def test_no_aura(self, engine):
        assert engine.get_passive_bonus(71, _board()) == StatBonus()


class TestCreateEngine:
    def test_uses_locale_from_config(self, monkeypatch):
        monkeypatch.setenv("BATTLER_LOCALE", "en_US")
        engine = create_engine(rng=random.Random(0))
        state = _board()
        result = engine.resolve(71, InvocationContext(Side.RED, _card(71, "誓言之剑")), state)
        assert result.messages == ["Error: 誓言之剑 requires a target!"]
