"""对局状态模块

PlayerState / GameState 以及显式的结构化深拷贝。
引擎每次调用都在 clone() 出来的私有副本上工作，
目标卡牌通过 SlotAddress（阵营 + 区域 + 下标）在副本中重新定位。
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Any, Iterable, Iterator

from .card import CardInstance
from .config import get_config
from .constants import DEFAULT_START_HEALTH, LANE_COUNT
from .enums import Side, Zone
from .exceptions import InvalidStateError


@dataclass(frozen=True)
class SlotAddress:
    """卡牌位置句柄

    index 对战场/建筑是路线下标，对手牌是手牌下标。
    """

    side: Side
    zone: Zone
    index: int


@dataclass
class PlayerState:
    """单个玩家的状态"""

    health: int = DEFAULT_START_HEALTH
    coins: int = 0
    battlefield: list[CardInstance | None] = field(
        default_factory=lambda: [None] * LANE_COUNT
    )
    buildings: list[CardInstance | None] = field(
        default_factory=lambda: [None] * LANE_COUNT
    )
    hand: list[CardInstance] = field(default_factory=list)

    def zone(self, zone: Zone) -> list:
        """按区域取卡牌列表"""
        if zone == Zone.BATTLEFIELD:
            return self.battlefield
        if zone == Zone.BUILDINGS:
            return self.buildings
        return self.hand

    def field_cards(self) -> list[CardInstance]:
        """战场上的非空卡牌（保持路线顺序）"""
        return [c for c in self.battlefield if c is not None]

    def clone(self) -> PlayerState:
        return PlayerState(
            health=self.health,
            coins=self.coins,
            battlefield=[c.clone() if c else None for c in self.battlefield],
            buildings=[c.clone() if c else None for c in self.buildings],
            hand=[c.clone() for c in self.hand],
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "health": self.health,
            "coins": self.coins,
            "battlefield": [c.to_dict() if c else None for c in self.battlefield],
            "buildings": [c.to_dict() if c else None for c in self.buildings],
            "hand": [c.to_dict() for c in self.hand],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PlayerState:
        def _lanes(key: str) -> list[CardInstance | None]:
            raw = data.get(key) or [None] * LANE_COUNT
            return [CardInstance.from_dict(c) if c else None for c in raw]

        return cls(
            health=data.get("health", DEFAULT_START_HEALTH),
            coins=data.get("coins", 0),
            battlefield=_lanes("battlefield"),
            buildings=_lanes("buildings"),
            hand=[CardInstance.from_dict(c) for c in data.get("hand", [])],
        )


@dataclass
class GameState:
    """完整的对局快照

    Attributes:
        players: 阵营 → 玩家状态
        deck: 公共牌堆（队首为下一张）
        miracle_deck: 奇迹牌堆
        discard_pile: 弃牌堆（最近弃置的在末尾）
        turn: 回合数
        phase: 阶段标记（由外部游戏循环维护）
        selected_card: 当前选中的卡牌
        skip_to_next_turn: 信号：请求游戏循环立刻进入下一回合
        immediate_victory: 信号：立即获胜的阵营
    """

    players: dict[Side, PlayerState] = field(
        default_factory=lambda: {Side.RED: PlayerState(), Side.BLUE: PlayerState()}
    )
    deck: list[CardInstance] = field(default_factory=list)
    miracle_deck: list[CardInstance] = field(default_factory=list)
    discard_pile: list[CardInstance] = field(default_factory=list)
    turn: int = 1
    phase: str = "idle"
    selected_card: CardInstance | None = None
    skip_to_next_turn: bool = False
    immediate_victory: Side | None = None

    @classmethod
    def new(
        cls,
        lane_count: int | None = None,
        start_health: int | None = None,
    ) -> GameState:
        """创建空棋盘

        路数和初始生命未指定时取 get_config()（BATTLER_LANES / BATTLER_START_HEALTH）。
        """
        config = get_config()
        if lane_count is None:
            lane_count = config.lane_count
        if start_health is None:
            start_health = config.start_health

        def _player() -> PlayerState:
            return PlayerState(
                health=start_health,
                battlefield=[None] * lane_count,
                buildings=[None] * lane_count,
            )

        return cls(players={Side.RED: _player(), Side.BLUE: _player()})

    def __getitem__(self, side: Side | str) -> PlayerState:
        return self.players[Side(side)]

    # ==================== 拷贝 ====================

    def clone(self) -> GameState:
        """结构化深拷贝，副本与原状态不共享任何可变对象"""
        return GameState(
            players={side: p.clone() for side, p in self.players.items()},
            deck=[c.clone() for c in self.deck],
            miracle_deck=[c.clone() for c in self.miracle_deck],
            discard_pile=[c.clone() for c in self.discard_pile],
            turn=self.turn,
            phase=self.phase,
            selected_card=self.selected_card.clone() if self.selected_card else None,
            skip_to_next_turn=self.skip_to_next_turn,
            immediate_victory=self.immediate_victory,
        )

    # ==================== 定位 ====================

    def locate(
        self,
        instance_id: str,
        zones: Iterable[Zone] = (Zone.BATTLEFIELD,),
    ) -> SlotAddress | None:
        """按 instance_id 查找卡牌位置（先红方后蓝方）"""
        for zone in zones:
            for side in (Side.RED, Side.BLUE):
                for idx, card in enumerate(self.players[side].zone(zone)):
                    if card is not None and card.instance_id == instance_id:
                        return SlotAddress(side, zone, idx)
        return None

    def card_at(self, address: SlotAddress) -> CardInstance | None:
        cards = self.players[address.side].zone(address.zone)
        if 0 <= address.index < len(cards):
            return cards[address.index]
        return None

    def find_card(
        self,
        instance_id: str,
        zones: Iterable[Zone] = (Zone.BATTLEFIELD,),
    ) -> CardInstance | None:
        address = self.locate(instance_id, zones)
        return self.card_at(address) if address else None

    def field_cards(self, sides: Iterable[Side] = (Side.RED, Side.BLUE)) -> list[CardInstance]:
        """指定阵营战场上的所有卡牌（红方在前）"""
        cards: list[CardInstance] = []
        for side in sides:
            cards.extend(self.players[side].field_cards())
        return cards

    def iter_cards(self) -> Iterator[CardInstance]:
        """遍历所有区域中的所有卡牌"""
        for p in self.players.values():
            yield from (c for c in p.battlefield if c is not None)
            yield from (c for c in p.buildings if c is not None)
            yield from p.hand
        yield from self.deck
        yield from self.miracle_deck
        yield from self.discard_pile

    def instance_ids(self) -> list[str]:
        return [c.instance_id for c in self.iter_cards()]

    # ==================== 序列化 ====================

    def to_dict(self) -> dict[str, Any]:
        return {
            "players": {side.value: p.to_dict() for side, p in self.players.items()},
            "deck": [c.to_dict() for c in self.deck],
            "miracle_deck": [c.to_dict() for c in self.miracle_deck],
            "discard_pile": [c.to_dict() for c in self.discard_pile],
            "turn": self.turn,
            "phase": self.phase,
            "selected_card": self.selected_card.to_dict() if self.selected_card else None,
            "skip_to_next_turn": self.skip_to_next_turn,
            "immediate_victory": self.immediate_victory.value if self.immediate_victory else None,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> GameState:
        try:
            players = {Side(k): PlayerState.from_dict(v) for k, v in data["players"].items()}
        except (KeyError, ValueError) as e:
            raise InvalidStateError(str(e), field="players") from e
        if set(players) != {Side.RED, Side.BLUE}:
            raise InvalidStateError(field="players")

        selected = data.get("selected_card")
        victory = data.get("immediate_victory")
        return cls(
            players=players,
            deck=[CardInstance.from_dict(c) for c in data.get("deck", [])],
            miracle_deck=[CardInstance.from_dict(c) for c in data.get("miracle_deck", [])],
            discard_pile=[CardInstance.from_dict(c) for c in data.get("discard_pile", [])],
            turn=data.get("turn", 1),
            phase=data.get("phase", "idle"),
            selected_card=CardInstance.from_dict(selected) if selected else None,
            skip_to_next_turn=data.get("skip_to_next_turn", False),
            immediate_victory=Side(victory) if victory else None,
        )


def shuffle_in_place(cards: list, rng: random.Random) -> None:
    """Fisher–Yates 洗牌"""
    for i in range(len(cards) - 1, 0, -1):
        j = rng.randint(0, i)
        cards[i], cards[j] = cards[j], cards[i]
