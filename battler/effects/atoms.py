"""效果原子库

每个原子是一个工厂：接收固定参数，返回执行器 ``(ctx, state) -> state``。
执行器直接修改引擎传入的副本并返回它（复制边界由引擎负责）。

约定:
  - 每次状态变化至少写一条日志
  - 目标列表为空时跳过，不报错
  - 不在原子内部把玩家生命钳到 0（由引擎在效果链结束后统一处理）
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, Optional

from ..constants import (
    HELL_LORD_BUFF,
    HELL_LORD_DEBUFF,
    HELL_LORD_DEMON_BUFF,
    RACE_DEMON,
    RACE_MONSTER,
    RARITY_LEGENDARY,
)
from ..enums import Side
from ..exceptions import UnknownAtomError
from ..i18n import side_name
from ..state import shuffle_in_place
from .targeting import matches_condition, resolve_targets

if TYPE_CHECKING:
    from ..card import CardInstance
    from ..state import GameState
    from .context import EffectContext
    from .schema import (
        AtomCall,
        ClearFieldFilter,
        CoinCondition,
        Condition,
        FieldRaceCondition,
        KillCondition,
        PlayerFilter,
        TargetFilter,
    )

logger = logging.getLogger(__name__)

Executor = Callable[["EffectContext", "GameState"], "GameState"]
AtomFactory = Callable[..., Executor]


class AtomLibrary:
    """效果原子库

    按原子名映射到工厂函数，引擎按配置中的 atom 字段路由。
    """

    def __init__(self):
        self._atoms: dict[str, AtomFactory] = {}

    def register(self, name: str, factory: AtomFactory) -> None:
        """注册原子"""
        self._atoms[name] = factory

    def unregister(self, name: str) -> None:
        self._atoms.pop(name, None)

    def get(self, name: str) -> Optional[AtomFactory]:
        """获取原子工厂"""
        return self._atoms.get(name)

    def has(self, name: str) -> bool:
        return name in self._atoms

    def names(self) -> list[str]:
        return sorted(self._atoms)

    def build(self, call: AtomCall) -> Executor:
        """用配置参数实例化原子

        Raises:
            UnknownAtomError: 原子库中没有该原子
        """
        factory = self._atoms.get(call.atom)
        if factory is None:
            raise UnknownAtomError(call.atom)
        return factory(**call.params())


_BUILTIN: dict[str, AtomFactory] = {}


def atom(name: str) -> Callable[[AtomFactory], AtomFactory]:
    """注册内置原子"""

    def decorator(factory: AtomFactory) -> AtomFactory:
        _BUILTIN[name] = factory
        return factory

    return decorator


def create_default_library() -> AtomLibrary:
    """创建包含全部内置原子的原子库"""
    library = AtomLibrary()
    for name, factory in _BUILTIN.items():
        library.register(name, factory)
    return library


# ==================== 辅助 ====================


def _signed(amount: int) -> str:
    return f"+{amount}" if amount > 0 else str(amount)


def _raise_hp(card: CardInstance, amount: int) -> None:
    """修改生命值；生命上限只会被抬高，不会被降低"""
    card.hp += amount
    card.max_hp = max(card.max_hp, card.hp)


def _draw(pile: list[CardInstance], count: int) -> list[CardInstance]:
    """从牌堆队首抽取至多 count 张"""
    drawn = pile[:count]
    del pile[:count]
    return drawn


def _remove_from_battlefield(state: GameState, instance_id: str) -> CardInstance | None:
    for side in (Side.RED, Side.BLUE):
        lanes = state[side].battlefield
        for idx, card in enumerate(lanes):
            if card is not None and card.instance_id == instance_id:
                lanes[idx] = None
                return card
    return None


# ==================== 卡牌数值 ====================


@atom("modifyAtk")
def modify_atk(amount: int, filter: TargetFilter, condition: Condition | None = None) -> Executor:
    """修改攻击力"""

    def execute(ctx: EffectContext, state: GameState) -> GameState:
        targets = resolve_targets(state, filter, ctx)
        for card in targets:
            if not matches_condition(card, condition):
                ctx.trace("modifyAtk skip %s (condition)", card.name)
                continue
            card.atk += amount
            ctx.log("effect.atk_changed", name=card.name, delta=_signed(amount), atk=card.atk)
        return state

    return execute


@atom("modifyHp")
def modify_hp(amount: int, filter: TargetFilter, condition: Condition | None = None) -> Executor:
    """修改生命值（生命上限随之抬高）"""

    def execute(ctx: EffectContext, state: GameState) -> GameState:
        for card in resolve_targets(state, filter, ctx):
            if not matches_condition(card, condition):
                continue
            _raise_hp(card, amount)
            ctx.log(
                "effect.hp_changed",
                name=card.name, delta=_signed(amount), hp=card.hp, max_hp=card.max_hp,
            )
        return state

    return execute


@atom("conditionalModifyAtk")
def conditional_modify_atk(
    base_amount: int,
    bonus_amount: int,
    condition: Condition,
    filter: TargetFilter,
) -> Executor:
    """攻击力 +base，满足条件时额外 +bonus"""

    def execute(ctx: EffectContext, state: GameState) -> GameState:
        for card in resolve_targets(state, filter, ctx):
            bonus = bonus_amount if matches_condition(card, condition) else 0
            total = base_amount + bonus
            if total == 0:
                continue
            card.atk += total
            if bonus:
                ctx.log(
                    "effect.atk_changed_bonus",
                    name=card.name, delta=_signed(total), base=base_amount,
                    bonus=bonus, atk=card.atk,
                )
            else:
                ctx.log("effect.atk_changed", name=card.name, delta=_signed(total), atk=card.atk)
        return state

    return execute


@atom("conditionalModifyHp")
def conditional_modify_hp(
    base_amount: int,
    bonus_amount: int,
    condition: Condition,
    filter: TargetFilter,
) -> Executor:
    """生命值 +base，满足条件时额外 +bonus"""

    def execute(ctx: EffectContext, state: GameState) -> GameState:
        for card in resolve_targets(state, filter, ctx):
            bonus = bonus_amount if matches_condition(card, condition) else 0
            total = base_amount + bonus
            if total == 0:
                continue
            _raise_hp(card, total)
            if bonus:
                ctx.log(
                    "effect.hp_changed_bonus",
                    name=card.name, delta=_signed(total), base=base_amount,
                    bonus=bonus, hp=card.hp, max_hp=card.max_hp,
                )
            else:
                ctx.log(
                    "effect.hp_changed",
                    name=card.name, delta=_signed(total), hp=card.hp, max_hp=card.max_hp,
                )
        return state

    return execute


@atom("hellLordBonus")
def hell_lord_bonus() -> Executor:
    """地狱领主：强化我方怪物，削弱敌方非传说怪物"""

    def execute(ctx: EffectContext, state: GameState) -> GameState:
        own = state[ctx.player].field_cards()
        has_demon = any(c.has_race((RACE_DEMON,)) for c in own)
        buff = HELL_LORD_DEMON_BUFF if has_demon else HELL_LORD_BUFF

        for card in own:
            if not card.has_race((RACE_MONSTER,)):
                continue
            card.atk += buff
            card.hp += buff
            card.max_hp += buff
            ctx.log("effect.hell_lord_buff", name=card.name, amount=buff, atk=card.atk, hp=card.hp)

        for card in state[ctx.opponent].field_cards():
            if not card.has_race((RACE_MONSTER,)) or card.rarity == RARITY_LEGENDARY:
                continue
            card.atk = max(0, card.atk - HELL_LORD_DEBUFF)
            card.hp -= HELL_LORD_DEBUFF
            card.max_hp -= HELL_LORD_DEBUFF
            ctx.log(
                "effect.hell_lord_debuff",
                name=card.name, amount=HELL_LORD_DEBUFF, atk=card.atk, hp=card.hp,
            )
        return state

    return execute


# ==================== 玩家 ====================


@atom("playerHeal")
def player_heal(amount: int, filter: PlayerFilter) -> Executor:
    """玩家治疗"""

    def execute(ctx: EffectContext, state: GameState) -> GameState:
        side = ctx.side_of(filter.player)
        state[side].health += amount
        ctx.log(
            "effect.player_heal",
            side=side_name(side), delta=_signed(amount), health=state[side].health,
        )
        return state

    return execute


@atom("playerDamage")
def player_damage(amount: int, filter: PlayerFilter) -> Executor:
    """玩家伤害"""

    def execute(ctx: EffectContext, state: GameState) -> GameState:
        side = ctx.side_of(filter.player)
        state[side].health -= amount
        ctx.log(
            "effect.player_damage",
            side=side_name(side), amount=amount, health=state[side].health,
        )
        return state

    return execute


@atom("gainCoins")
def gain_coins(amount: int, condition: CoinCondition | None = None) -> Executor:
    """行动方获得金币；场上存在满足条件的卡牌时改为 condition.bonus"""

    def execute(ctx: EffectContext, state: GameState) -> GameState:
        actual = amount
        if condition is not None and any(
            matches_condition(c, condition) for c in state.field_cards()
        ):
            actual = condition.bonus
        state[ctx.player].coins += actual
        ctx.log(
            "effect.coins_gained",
            side=side_name(ctx.player), amount=actual, coins=state[ctx.player].coins,
        )
        return state

    return execute


@atom("conditionalKillPlayer")
def conditional_kill_player(condition: KillCondition) -> Executor:
    """处决：敌方玩家生命不高于阈值时直接击杀"""

    def execute(ctx: EffectContext, state: GameState) -> GameState:
        threshold = condition.player_hp_threshold
        health = state[ctx.opponent].health
        if health <= threshold:
            state[ctx.opponent].health = 0
            state.immediate_victory = ctx.player
            ctx.log("effect.execute_success", threshold=threshold)
        else:
            ctx.log("effect.execute_fail", health=health, threshold=threshold)
        return state

    return execute


# ==================== 移除 / 状态 ====================


@atom("killCard")
def kill_card(filter: TargetFilter) -> Executor:
    """杀死卡牌：从战场移入弃牌堆"""

    def execute(ctx: EffectContext, state: GameState) -> GameState:
        for card in resolve_targets(state, filter, ctx):
            removed = _remove_from_battlefield(state, card.instance_id)
            if removed is None:
                ctx.trace("killCard: %s not on battlefield", card.name)
                continue
            state.discard_pile.append(removed)
            ctx.log("effect.card_killed", name=removed.name)
        return state

    return execute


@atom("clearField")
def clear_field(filter: ClearFieldFilter | None = None) -> Executor:
    """清空战场（可保留指定种族）"""

    def execute(ctx: EffectContext, state: GameState) -> GameState:
        scope = filter.player if filter is not None else "both"
        spared = filter.except_race if filter is not None else None
        for side in ctx.sides_for(scope):
            lanes = state[side].battlefield
            for idx, card in enumerate(lanes):
                if card is None:
                    continue
                if spared and card.has_race(spared):
                    continue
                state.discard_pile.append(card)
                lanes[idx] = None
                ctx.log("effect.card_cleared", name=card.name)
        return state

    return execute


@atom("freeze")
def freeze(turns: int, filter: TargetFilter) -> Executor:
    """冻结（覆盖剩余回合数，不叠加）"""

    def execute(ctx: EffectContext, state: GameState) -> GameState:
        for card in resolve_targets(state, filter, ctx):
            card.frozen = turns
            ctx.log("effect.card_frozen", name=card.name, turns=turns)
        return state

    return execute


@atom("removeDebuffs")
def remove_debuffs(filter: TargetFilter) -> Executor:
    """移除负面效果（目前只有冻结）"""

    def execute(ctx: EffectContext, state: GameState) -> GameState:
        for card in resolve_targets(state, filter, ctx):
            if card.is_frozen:
                card.frozen = 0
                ctx.log("effect.card_unfrozen", name=card.name)
        return state

    return execute


@atom("addImmunity")
def add_immunity(filter: TargetFilter) -> Executor:
    """免疫标记（由伤害/削弱结算方读取）"""

    def execute(ctx: EffectContext, state: GameState) -> GameState:
        for card in resolve_targets(state, filter, ctx):
            card.immune = True
            ctx.log("effect.card_immune", name=card.name)
        return state

    return execute


@atom("freezeOnFirstAttack")
def freeze_on_first_attack(turns: int) -> Executor:
    """首次攻击时冻结目标，之后不再生效"""

    def execute(ctx: EffectContext, state: GameState) -> GameState:
        card = ctx.card
        if card.first_action_used:
            ctx.trace("freezeOnFirstAttack: %s already used", card.name)
            return state
        card.first_action_used = True
        if ctx.target is not None:
            ctx.target.frozen = turns
            ctx.log(
                "effect.first_attack_freeze",
                name=card.name, target=ctx.target.name, turns=turns,
            )
        else:
            ctx.log("effect.first_attack", name=card.name)
        return state

    return execute


@atom("cascadeDamage")
def cascade_damage(base_damage: int) -> Executor:
    """按敌方生命从高到低依次造成 base, base-1, ... 点伤害（至少 1 点）"""

    def execute(ctx: EffectContext, state: GameState) -> GameState:
        cards = state[ctx.opponent].field_cards()
        # sorted 是稳定排序，同血量保持路线顺序
        ranked = sorted(cards, key=lambda c: -c.hp)
        for rank, card in enumerate(ranked):
            damage = max(1, base_damage - rank)
            card.hp -= damage
            ctx.log("effect.cascade_hit", name=card.name, damage=damage, hp=card.hp)
            if card.hp <= 0:
                ctx.log("effect.card_defeated", name=card.name)
        return state

    return execute


# ==================== 牌堆 / 手牌 ====================


@atom("drawFromDiscard")
def draw_from_discard(amount: int) -> Executor:
    """从弃牌堆末尾（最近弃置）取回至多 amount 张"""

    def execute(ctx: EffectContext, state: GameState) -> GameState:
        if not state.discard_pile:
            ctx.log("effect.discard_empty")
            return state
        hand = state[ctx.player].hand
        for _ in range(amount):
            if not state.discard_pile:
                break
            card = state.discard_pile.pop()
            hand.append(card)
            ctx.log("effect.draw_from_discard", side=side_name(ctx.player), name=card.name)
        return state

    return execute


@atom("discardAndRedraw")
def discard_and_redraw() -> Executor:
    """手牌全部洗回牌堆（奇迹牌回奇迹牌堆），再按原数量分别重抽"""

    def execute(ctx: EffectContext, state: GameState) -> GameState:
        player = state[ctx.player]
        if not player.hand:
            ctx.trace("discardAndRedraw: empty hand")
            return state

        miracles = [c for c in player.hand if c.is_miracle]
        normals = [c for c in player.hand if not c.is_miracle]
        player.hand.clear()

        if normals:
            state.deck.extend(normals)
            shuffle_in_place(state.deck, ctx.rng)
        if miracles:
            state.miracle_deck.extend(miracles)
            shuffle_in_place(state.miracle_deck, ctx.rng)
        ctx.log(
            "effect.hand_shuffled_back",
            side=side_name(ctx.player), count=len(normals) + len(miracles),
        )

        drawn_normal = _draw(state.deck, len(normals))
        drawn_miracle = _draw(state.miracle_deck, len(miracles))
        player.hand.extend(drawn_normal)
        player.hand.extend(drawn_miracle)
        ctx.log(
            "effect.redraw",
            side=side_name(ctx.player), normal=len(drawn_normal), miracle=len(drawn_miracle),
        )
        return state

    return execute


@atom("drawCards")
def draw_cards(
    base_amount: int,
    bonus_amount: int = 0,
    condition: FieldRaceCondition | None = None,
) -> Executor:
    """从公共牌堆抽牌；指定阵营场上有相应种族时额外抽 bonus 张"""

    def execute(ctx: EffectContext, state: GameState) -> GameState:
        bonus = 0
        if condition is not None:
            sides = ctx.sides_for(condition.player)
            if any(c.has_race(condition.races) for c in state.field_cards(sides)):
                bonus = bonus_amount
        wanted = base_amount + bonus

        drawn = _draw(state.deck, wanted)
        state[ctx.player].hand.extend(drawn)
        if bonus:
            ctx.log(
                "effect.cards_drawn_bonus",
                side=side_name(ctx.player), count=len(drawn), base=base_amount, bonus=bonus,
            )
        else:
            ctx.log("effect.cards_drawn", side=side_name(ctx.player), count=len(drawn))
        if len(drawn) < wanted:
            ctx.log("effect.deck_short", wanted=wanted, count=len(drawn))
        return state

    return execute


@atom("swapRandomHands")
def swap_random_hands(amount: int) -> Executor:
    """双方各随机拿出至多 amount 张手牌互换（不含正在打出的牌）"""

    def execute(ctx: EffectContext, state: GameState) -> GameState:
        own_hand = state[ctx.player].hand
        opp_hand = state[ctx.opponent].hand
        eligible = [c for c in own_hand if c.instance_id != ctx.card.instance_id]

        given = ctx.rng.sample(eligible, min(amount, len(eligible)))
        taken = ctx.rng.sample(opp_hand, min(amount, len(opp_hand)))
        if not given and not taken:
            ctx.log("effect.hands_swap_empty")
            return state

        given_ids = {c.instance_id for c in given}
        taken_ids = {c.instance_id for c in taken}
        own_hand[:] = [c for c in own_hand if c.instance_id not in given_ids]
        opp_hand[:] = [c for c in opp_hand if c.instance_id not in taken_ids]
        own_hand.extend(taken)
        opp_hand.extend(given)
        ctx.log("effect.hands_swapped", self_count=len(given), opponent_count=len(taken))
        return state

    return execute


# ==================== 战场 / 信号 ====================


@atom("swapBattlefields")
def swap_battlefields() -> Executor:
    """交换双方战场（建筑槽不动）"""

    def execute(ctx: EffectContext, state: GameState) -> GameState:
        own, opp = state[ctx.player], state[ctx.opponent]
        own.battlefield, opp.battlefield = opp.battlefield, own.battlefield
        ctx.log("effect.battlefields_swapped")
        return state

    return execute


@atom("skipTurn")
def skip_turn() -> Executor:
    """请求游戏循环立刻进入下一回合"""

    def execute(ctx: EffectContext, state: GameState) -> GameState:
        state.skip_to_next_turn = True
        ctx.log("effect.skip_turn")
        return state

    return execute


@atom("uiModeMessage")
def ui_mode_message(message: str) -> Executor:
    """只写日志，提示 UI 层进入特殊交互模式"""

    def execute(ctx: EffectContext, state: GameState) -> GameState:
        ctx.log("effect.ui_mode", message=message)
        return state

    return execute
