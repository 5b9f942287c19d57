"""效果执行上下文

InvocationContext 是调用方传入的数据（谁打出了哪张牌、选中了谁），
EffectContext 是引擎在一次 trigger 中构建的执行上下文，
携带对手阵营、重新定位后的卡牌引用、随机源和日志流。
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Callable

from ..enums import LogLevel, Side
from ..i18n import t as _t

if TYPE_CHECKING:
    from ..card import CardInstance
    from ..state import GameState

logger = logging.getLogger(__name__)

LogSink = Callable[[str], None]


@dataclass
class InvocationContext:
    """调用方提供的上下文

    Attributes:
        acting_player: 行动方
        card: 打出的卡牌
        target: 选中的目标（可选）
        on_log: 日志回调（可选）
    """

    acting_player: Side
    card: CardInstance
    target: CardInstance | None = None
    on_log: LogSink | None = None


@dataclass(frozen=True)
class LogEntry:
    """一条带级别的效果日志"""

    level: LogLevel
    key: str
    message: str


class EffectStatus(Enum):
    """一次 trigger 的结果"""

    NO_EFFECT = "no_effect"  # 卡牌没有配置效果
    APPLIED = "applied"  # 效果链已执行
    ABORTED = "aborted"  # 目标缺失/丢失，返回原状态
    UI_MODE = "ui_mode"  # 交给 UI 层处理，返回原状态


@dataclass
class EffectResult:
    state: GameState
    status: EffectStatus
    entries: list[LogEntry] = field(default_factory=list)

    @property
    def messages(self) -> list[str]:
        """面向玩家的日志（不含调试跟踪）"""
        return [e.message for e in self.entries if e.level != LogLevel.DEBUG]

    @property
    def errors(self) -> list[LogEntry]:
        return [e for e in self.entries if e.level == LogLevel.ERROR]

    @property
    def aborted(self) -> bool:
        return self.status == EffectStatus.ABORTED


class EffectContext:
    """效果执行上下文

    在一次 trigger 中携带临时状态，原子通过它写日志。
    """

    def __init__(
        self,
        player: Side,
        card: CardInstance,
        target: CardInstance | None = None,
        on_log: LogSink | None = None,
        rng: random.Random | None = None,
        trace: bool = False,
    ):
        self.player = Side(player)
        self.opponent = self.player.opponent
        self.card = card
        self.target = target
        self.rng = rng or random.Random()
        self.trace_enabled = trace
        self.entries: list[LogEntry] = []
        self._on_log = on_log

    # ==================== 日志 ====================

    def log(self, key: str, level: LogLevel = LogLevel.INFO, **kwargs: object) -> str:
        """记录一条本地化日志并转发给调用方"""
        message = _t(key, **kwargs)
        self._emit(LogEntry(level, key, message))
        return message

    def error(self, key: str, **kwargs: object) -> str:
        return self.log(key, LogLevel.ERROR, **kwargs)

    def trace(self, fmt: str, *args: object) -> None:
        """调试跟踪：总是写入 logging；开启 trace 时也进入日志流"""
        if not self.trace_enabled:
            logger.debug(fmt, *args)
            return
        self._emit(LogEntry(LogLevel.DEBUG, "trace", fmt % args if args else fmt))

    def _emit(self, entry: LogEntry) -> None:
        if entry.level == LogLevel.DEBUG:
            logger.debug("[%s] %s", self.card.name, entry.message)
            if not self.trace_enabled:
                return
        elif entry.level == LogLevel.ERROR:
            logger.warning("[%s] %s", self.card.name, entry.message)
        else:
            logger.info("[%s] %s", self.card.name, entry.message)
        self.entries.append(entry)
        if self._on_log is not None:
            self._on_log(entry.message)

    # ==================== 辅助 ====================

    def side_of(self, scope: str) -> Side:
        """self/opponent → 阵营"""
        return self.player if scope == "self" else self.opponent

    def sides_for(self, scope: str | None) -> list[Side]:
        """player 范围 → 阵营列表（both 时红方在前）"""
        if scope == "self":
            return [self.player]
        if scope == "opponent":
            return [self.opponent]
        if scope == "both":
            return [Side.RED, Side.BLUE]
        return []
