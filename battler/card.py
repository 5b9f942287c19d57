"""卡牌模块
定义卡牌模板（静态数据）与卡牌实例（对局中的一张具体的牌）
"""

from __future__ import annotations

import dataclasses
import uuid
from dataclasses import dataclass
from typing import Any, Iterable

from .enums import CardKind
from .exceptions import InvalidStateError


def new_instance_id() -> str:
    """生成全局唯一的实例 ID（不会复用）"""
    return uuid.uuid4().hex


@dataclass(frozen=True, slots=True)
class CardTemplate:
    """卡牌模板

    由外部数据源（卡牌表）提供，多张同名副本共享同一个模板。
    """

    card_id: int
    name: str
    kind: CardKind
    rarity: str = ""
    primary_race: str = ""
    secondary_race: str = ""
    atk: int = 0
    hp: int = 0
    cost: float = 0
    effect: str = ""


@dataclass(slots=True)
class CardInstance:
    """卡牌实例

    Attributes:
        card_id: 卡牌编号（效果配置表的键，副本之间相同）
        instance_id: 实例唯一标识，创建时分配
        name: 卡牌名称
        kind: 卡牌类型（战场牌/支援牌/奇迹牌）
        rarity: 稀有度
        primary_race: 第一种族
        secondary_race: 第二种族
        atk: 攻击力
        hp: 当前生命值
        max_hp: 生命上限
        cost: 费用
        effect: 效果描述文本
        frozen: 剩余冻结回合数（0 表示未冻结）
        immune: 是否处于免疫状态
        ability_used: 本阶段是否已使用能力
        first_action_used: 首次行动能力是否已使用
    """

    card_id: int
    instance_id: str
    name: str
    kind: CardKind
    rarity: str = ""
    primary_race: str = ""
    secondary_race: str = ""
    atk: int = 0
    hp: int = 0
    max_hp: int = 0
    cost: float = 0
    effect: str = ""
    frozen: int = 0
    immune: bool = False
    ability_used: bool = False
    first_action_used: bool = False

    def __post_init__(self):
        # 转换字符串类型为枚举类型
        if not isinstance(self.kind, CardKind):
            self.kind = CardKind(self.kind)

    @property
    def races(self) -> tuple[str, ...]:
        """非空的种族标签"""
        return tuple(r for r in (self.primary_race, self.secondary_race) if r)

    def has_race(self, races: Iterable[str]) -> bool:
        """任一种族槽位属于给定集合"""
        wanted = set(races)
        return self.primary_race in wanted or self.secondary_race in wanted

    @property
    def is_frozen(self) -> bool:
        return self.frozen > 0

    @property
    def is_miracle(self) -> bool:
        return self.kind == CardKind.MIRACLE

    def clone(self) -> CardInstance:
        """复制实例（保留 instance_id）"""
        return dataclasses.replace(self)

    def __repr__(self) -> str:
        return f"CardInstance({self.card_id}, {self.name}, {self.atk}/{self.hp})"

    def to_dict(self) -> dict[str, Any]:
        """转换为字典"""
        return {
            "card_id": self.card_id,
            "instance_id": self.instance_id,
            "name": self.name,
            "kind": self.kind.value,
            "rarity": self.rarity,
            "primary_race": self.primary_race,
            "secondary_race": self.secondary_race,
            "atk": self.atk,
            "hp": self.hp,
            "max_hp": self.max_hp,
            "cost": self.cost,
            "effect": self.effect,
            "frozen": self.frozen,
            "immune": self.immune,
            "ability_used": self.ability_used,
            "first_action_used": self.first_action_used,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CardInstance:
        """从字典创建卡牌实例"""
        try:
            hp = data.get("hp", 0)
            return cls(
                card_id=data["card_id"],
                instance_id=data["instance_id"],
                name=data["name"],
                kind=CardKind(data["kind"]),
                rarity=data.get("rarity", ""),
                primary_race=data.get("primary_race", ""),
                secondary_race=data.get("secondary_race", ""),
                atk=data.get("atk", 0),
                hp=hp,
                max_hp=data.get("max_hp", hp),
                cost=data.get("cost", 0),
                effect=data.get("effect", ""),
                frozen=data.get("frozen", 0),
                immune=data.get("immune", False),
                ability_used=data.get("ability_used", False),
                first_action_used=data.get("first_action_used", False),
            )
        except KeyError as e:
            raise InvalidStateError(field=str(e.args[0])) from e
        except ValueError as e:
            raise InvalidStateError(str(e), field="kind") from e


def create_card(template: CardTemplate) -> CardInstance:
    """由模板创建卡牌实例（生命上限 = 初始生命，分配新的 instance_id）"""
    return CardInstance(
        card_id=template.card_id,
        instance_id=new_instance_id(),
        name=template.name,
        kind=template.kind,
        rarity=template.rarity,
        primary_race=template.primary_race,
        secondary_race=template.secondary_race,
        atk=template.atk,
        hp=template.hp,
        max_hp=template.hp,
        cost=template.cost,
        effect=template.effect,
    )
