"""目标解析与条件判定

resolve_targets: 过滤器 → 当前状态中被选中的卡牌（有序）
matches_condition: 单张卡牌是否满足条件

两者都是纯函数，不修改输入。
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..enums import TargetMode, Zone

if TYPE_CHECKING:
    from ..card import CardInstance
    from ..state import GameState
    from .context import EffectContext
    from .schema import Condition, TargetFilter

logger = logging.getLogger(__name__)


def matches_condition(card: CardInstance, condition: Condition | None) -> bool:
    """检查卡牌是否满足条件

    没有条件时总是满足；种族、稀有度、类型之间是“与”的关系。
    """
    if condition is None:
        return True

    if condition.race and not card.has_race(condition.race):
        return False

    if condition.rarity and card.rarity not in condition.rarity:
        return False

    if condition.type is not None and card.kind != condition.type:
        return False

    return True


def resolve_targets(
    state: GameState,
    filter: TargetFilter,
    ctx: EffectContext,
) -> list[CardInstance]:
    """根据过滤器查找目标卡牌

    Args:
        state: 游戏状态（引擎复制后的副本）
        filter: 目标过滤器
        ctx: 执行上下文（行动方、打出的牌、选中的目标）

    Returns:
        目标卡牌列表；战场按路线顺序，both 时红方在前
    """
    # 特殊目标：卡牌自身
    if filter.target == TargetMode.SELF:
        found = state.find_card(ctx.card.instance_id)
        if found is None:
            ctx.error("engine.self_not_found", name=ctx.card.name)
            return []
        return [found]

    # 特殊目标：玩家选中的卡牌
    if filter.target == TargetMode.SELECTED:
        return [ctx.target] if ctx.target is not None else []

    zone = Zone.HAND if filter.location == "hand" else Zone.BATTLEFIELD
    targets: list[CardInstance] = []
    for side in ctx.sides_for(filter.player):
        targets.extend(c for c in state[side].zone(zone) if c is not None)
    ctx.trace("resolve %s/%s: %d candidates", filter.player, zone.value, len(targets))

    if filter.race:
        targets = [c for c in targets if c.has_race(filter.race)]

    if filter.rarity:
        targets = [c for c in targets if c.rarity in filter.rarity]

    if filter.type is not None:
        targets = [c for c in targets if c.kind == filter.type]

    ctx.trace("resolve result: %s", [c.name for c in targets])
    return targets
