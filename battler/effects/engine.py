"""效果引擎（核心调度器）

对外的唯一入口。一次 trigger 的流程：

1. 查配置表；没有配置的卡牌（纯战场牌）原样返回输入状态
2. 深拷贝状态，在副本中按 instance_id 重新定位打出的牌和选中的目标
3. 目标丢失 / 需要目标却没有 → 返回未修改的原状态
4. 需要 UI 交互模式的卡牌 → 不执行原子，返回原状态
5. 依次执行效果链；未知原子记录错误并继续执行后续原子
6. 把玩家生命与金币钳到 0 以上，返回新状态

引擎从不向调用方抛出异常，失败只体现在“返回原状态 + 错误日志”。
"""

from __future__ import annotations

import logging
import random
from typing import TYPE_CHECKING

from ..config import get_config
from ..enums import PlayerScope, Side, TriggerTiming, UIMode, Zone
from ..exceptions import TargetNotFoundError, UnknownAtomError
from ..i18n import get_locale, set_locale
from ..i18n import t as _t
from .atoms import AtomLibrary, create_default_library
from .catalog import EffectCatalog, create_default_catalog
from .context import EffectContext, EffectResult, EffectStatus, InvocationContext
from .schema import StatBonus, TargetFilter

if TYPE_CHECKING:
    from ..card import CardInstance
    from ..state import GameState

logger = logging.getLogger(__name__)

_BIND_ZONES = (Zone.BATTLEFIELD, Zone.HAND, Zone.BUILDINGS)


class EffectEngine:
    """效果引擎

    Args:
        catalog: 卡牌效果配置表
        library: 效果原子库（默认包含全部内置原子）
        rng: 洗牌/随机选择使用的随机源，测试时可注入固定种子
        trace: 是否把调试跟踪写入日志流（默认读取 BATTLER_DEBUG）
    """

    def __init__(
        self,
        catalog: EffectCatalog,
        library: AtomLibrary | None = None,
        rng: random.Random | None = None,
        trace: bool | None = None,
    ):
        self.catalog = catalog
        self.library = library or create_default_library()
        self.rng = rng or random.Random()
        self.trace = get_config().debug_mode if trace is None else trace

    # ==================== 公开 API ====================

    def trigger(
        self,
        card_id: int,
        context: InvocationContext,
        state: GameState,
    ) -> GameState:
        """触发卡牌效果，返回新的游戏状态"""
        return self.resolve(card_id, context, state).state

    def resolve(
        self,
        card_id: int,
        context: InvocationContext,
        state: GameState,
    ) -> EffectResult:
        """触发卡牌效果，返回新状态、结果类型和结构化日志"""
        config = self.catalog.get(card_id)
        if config is None:
            logger.debug("No effect configured for card %s", card_id)
            return EffectResult(state, EffectStatus.NO_EFFECT)

        working = state.clone()
        ctx = EffectContext(
            context.acting_player,
            self._bind_card(working, context.card),
            on_log=context.on_log,
            rng=self.rng,
            trace=self.trace,
        )

        # 副本中重新定位目标：原引用属于拷贝前的状态，不能被修改
        if context.target is not None:
            try:
                ctx.target = self._bind_target(working, context.target)
            except TargetNotFoundError as e:
                logger.debug("Target %s lost before resolution", e.instance_id)
                ctx.error("engine.target_lost")
                return EffectResult(state, EffectStatus.ABORTED, ctx.entries)

        if config.needs_target and ctx.target is None:
            ctx.error("engine.target_required", card=config.name)
            return EffectResult(state, EffectStatus.ABORTED, ctx.entries)

        if config.requires_ui_mode is not None:
            ctx.log(
                "engine.ui_mode",
                card=config.name, mode=_t(f"mode.{config.requires_ui_mode.value}"),
            )
            return EffectResult(state, EffectStatus.UI_MODE, ctx.entries)

        for step, call in enumerate(config.effects):
            try:
                executor = self.library.build(call)
            except UnknownAtomError as e:
                ctx.error("engine.unknown_atom", atom=e.atom)
                continue
            except TypeError as e:
                logger.error("Bad parameters for atom %s on card %s: %s", call.atom, card_id, e)
                ctx.error("engine.unknown_atom", atom=call.atom)
                continue
            ctx.trace("card %s step %d: %s", card_id, step, call.atom)
            working = executor(ctx, working)

        self._settle(working)
        return EffectResult(working, EffectStatus.APPLIED, ctx.entries)

    # ==================== 配置查询 ====================

    def needs_target(self, card_id: int) -> bool:
        """是否需要玩家选择目标"""
        config = self.catalog.get(card_id)
        return config.needs_target if config else False

    def get_target_filter(self, card_id: int) -> TargetFilter | None:
        """目标过滤器（供 UI 高亮可选目标）"""
        config = self.catalog.get(card_id)
        return config.target_filter if config else None

    def is_valid_target(
        self,
        card_id: int,
        target: CardInstance,
        state: GameState,
        acting_player: Side | None = None,
    ) -> bool:
        """目标是否合法

        目标必须位于过滤器指定的区域，且属于过滤器的玩家范围。
        不知道行动方时，self/opponent 范围按双方处理。
        """
        config = self.catalog.get(card_id)
        if config is None or not config.needs_target:
            return True
        filter = config.target_filter
        if filter is None:
            return True

        zone = Zone.HAND if filter.location == "hand" else Zone.BATTLEFIELD
        address = state.locate(target.instance_id, (zone,))
        if address is None:
            return False

        if acting_player is not None and filter.player in (PlayerScope.SELF, PlayerScope.OPPONENT):
            acting = Side(acting_player)
            wanted = acting if filter.player == PlayerScope.SELF else acting.opponent
            if address.side != wanted:
                return False

        card = state.card_at(address)
        if filter.race and not card.has_race(filter.race):
            return False
        if filter.rarity and card.rarity not in filter.rarity:
            return False
        if filter.type is not None and card.kind != filter.type:
            return False
        return True

    def get_configured_cards(self) -> list[int]:
        """所有已配置效果的卡牌编号"""
        return self.catalog.card_ids()

    def get_description(self, card_id: int) -> str:
        config = self.catalog.get(card_id)
        return config.description if config else ""

    def get_trigger(self, card_id: int) -> TriggerTiming | None:
        config = self.catalog.get(card_id)
        return config.trigger if config else None

    def get_cards_for_trigger(self, timing: TriggerTiming) -> list[int]:
        return self.catalog.by_trigger(timing)

    def get_ui_mode(self, card_id: int) -> UIMode | None:
        config = self.catalog.get(card_id)
        return config.requires_ui_mode if config else None

    def get_passive_bonus(self, card_id: int, state: GameState) -> StatBonus:
        """被动光环加成（如精灵：场上森林/奇珍 >= 2 时 atk+2）"""
        config = self.catalog.get(card_id)
        if config is None or config.aura is None:
            return StatBonus()
        aura = config.aura
        count = sum(1 for c in state.field_cards() if c.has_race(aura.races))
        return aura.bonus if count >= aura.threshold else StatBonus()

    # ==================== 内部 ====================

    @staticmethod
    def _bind_target(working: GameState, target: CardInstance) -> CardInstance:
        """选中的目标在副本战场上的引用

        Raises:
            TargetNotFoundError: 目标已不在任何一方的战场上
        """
        found = working.find_card(target.instance_id)
        if found is None:
            raise TargetNotFoundError(target.instance_id)
        return found

    @staticmethod
    def _bind_card(working: GameState, card: CardInstance) -> CardInstance:
        """打出的牌在副本中的引用；不在场上时使用私有拷贝"""
        found = working.find_card(card.instance_id, _BIND_ZONES)
        return found if found is not None else card.clone()

    @staticmethod
    def _settle(working: GameState) -> None:
        """效果链结束后把玩家生命和金币钳到 0"""
        for player in working.players.values():
            player.health = max(0, player.health)
            player.coins = max(0, player.coins)


def create_engine(
    catalog: EffectCatalog | None = None,
    rng: random.Random | None = None,
) -> EffectEngine:
    """用默认配置表和配置中心的语言设置创建引擎"""
    config = get_config()
    if config.locale != get_locale():
        set_locale(config.locale)
    return EffectEngine(catalog or create_default_catalog(), rng=rng)
