"""卡牌效果配置 Pydantic 校验模型

配置表（data/card_effects.json）中每张卡牌对应一个 CardEffectConfig，
其中 effects 是原子调用的有序列表。每种原子一个模型，只携带它需要的参数，
通过 ``atom`` 字段做判别联合（discriminated union）。

设计原则:
  - JSON 沿用驼峰命名（baseAmount / exceptRace ...），Python 侧为蛇形命名
  - model_config = ConfigDict(extra="forbid") 拒绝拼错的参数
  - 不认识的原子名解析为 UnknownAtom，由引擎在执行时报告并跳过
  - 所有模型不可变，查询接口可以直接返回共享实例
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Optional, Union

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Discriminator,
    Field,
    Tag,
)
from pydantic.alias_generators import to_camel

from ..enums import CardKind, PlayerScope, TargetMode, TriggerTiming, UIMode


def _as_tuple(value: Any) -> Any:
    """允许单个字符串写法：{"race": "军队"}"""
    if isinstance(value, str):
        return (value,)
    return value


NameList = Annotated[tuple[str, ...], BeforeValidator(_as_tuple)]


class _Model(BaseModel):
    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


# ====================================================================== #
#  过滤器 / 条件                                                            #
# ====================================================================== #


class TargetFilter(_Model):
    """目标过滤器

    target 为 self/selected 时忽略其余字段；否则按
    player → location → race → rarity → type 的顺序逐步收窄。
    """

    target: Optional[TargetMode] = None
    player: Optional[PlayerScope] = None
    location: Literal["battlefield", "hand"] = "battlefield"
    race: Optional[NameList] = None
    rarity: Optional[NameList] = None
    type: Optional[CardKind] = None


class Condition(_Model):
    """逐卡判定的条件（种族 AND 稀有度 AND 类型）"""

    race: Optional[NameList] = None
    rarity: Optional[NameList] = None
    type: Optional[CardKind] = None


class CoinCondition(Condition):
    """征税：场上存在匹配卡牌时改为获得 bonus 金币"""

    bonus: int = Field(ge=0)


class FieldRaceCondition(_Model):
    """指定阵营战场上存在某些种族"""

    type: Literal["hasRaceOnField"] = "hasRaceOnField"
    races: NameList
    player: PlayerScope = PlayerScope.SELF


class PlayerFilter(_Model):
    """玩家治疗/伤害的对象（相对于行动方）"""

    player: Literal["self", "opponent"] = "opponent"


class ClearFieldFilter(_Model):
    player: PlayerScope = PlayerScope.BOTH
    except_race: Optional[NameList] = None


class KillCondition(_Model):
    player_hp_threshold: int


class StatBonus(_Model):
    atk: int = 0
    hp: int = 0


class CountRaceAura(_Model):
    """被动光环：战场上指定种族的卡牌数量达到阈值时获得加成"""

    type: Literal["countRace"] = "countRace"
    races: NameList
    threshold: int = Field(ge=1)
    bonus: StatBonus


# ====================================================================== #
#  原子调用                                                                 #
# ====================================================================== #


class AtomCall(_Model):
    """原子调用基类"""

    atom: str

    def params(self) -> dict[str, Any]:
        """原子工厂的关键字参数（不含 atom 名）"""
        return {name: getattr(self, name) for name in type(self).model_fields if name != "atom"}


class ModifyAtk(AtomCall):
    atom: Literal["modifyAtk"] = "modifyAtk"
    amount: int
    filter: TargetFilter
    condition: Optional[Condition] = None


class ModifyHp(AtomCall):
    atom: Literal["modifyHp"] = "modifyHp"
    amount: int
    filter: TargetFilter
    condition: Optional[Condition] = None


class ConditionalModifyAtk(AtomCall):
    atom: Literal["conditionalModifyAtk"] = "conditionalModifyAtk"
    base_amount: int
    bonus_amount: int
    condition: Condition
    filter: TargetFilter


class ConditionalModifyHp(AtomCall):
    atom: Literal["conditionalModifyHp"] = "conditionalModifyHp"
    base_amount: int
    bonus_amount: int
    condition: Condition
    filter: TargetFilter


class PlayerHeal(AtomCall):
    atom: Literal["playerHeal"] = "playerHeal"
    amount: int
    filter: PlayerFilter = PlayerFilter(player="self")


class PlayerDamage(AtomCall):
    atom: Literal["playerDamage"] = "playerDamage"
    amount: int
    filter: PlayerFilter = PlayerFilter()


class KillCard(AtomCall):
    atom: Literal["killCard"] = "killCard"
    filter: TargetFilter


class ClearField(AtomCall):
    atom: Literal["clearField"] = "clearField"
    filter: Optional[ClearFieldFilter] = None


class Freeze(AtomCall):
    atom: Literal["freeze"] = "freeze"
    turns: int = Field(ge=0)
    filter: TargetFilter


class RemoveDebuffs(AtomCall):
    atom: Literal["removeDebuffs"] = "removeDebuffs"
    filter: TargetFilter


class GainCoins(AtomCall):
    atom: Literal["gainCoins"] = "gainCoins"
    amount: int = Field(ge=0)
    condition: Optional[CoinCondition] = None


class ConditionalKillPlayer(AtomCall):
    atom: Literal["conditionalKillPlayer"] = "conditionalKillPlayer"
    condition: KillCondition


class CascadeDamage(AtomCall):
    atom: Literal["cascadeDamage"] = "cascadeDamage"
    base_damage: int = Field(ge=0)


class DrawFromDiscard(AtomCall):
    atom: Literal["drawFromDiscard"] = "drawFromDiscard"
    amount: int = Field(ge=0)


class DiscardAndRedraw(AtomCall):
    atom: Literal["discardAndRedraw"] = "discardAndRedraw"


class DrawCards(AtomCall):
    atom: Literal["drawCards"] = "drawCards"
    base_amount: int = Field(ge=0)
    bonus_amount: int = Field(default=0, ge=0)
    condition: Optional[FieldRaceCondition] = None


class HellLordBonus(AtomCall):
    atom: Literal["hellLordBonus"] = "hellLordBonus"


class SwapBattlefields(AtomCall):
    atom: Literal["swapBattlefields"] = "swapBattlefields"


class FreezeOnFirstAttack(AtomCall):
    atom: Literal["freezeOnFirstAttack"] = "freezeOnFirstAttack"
    turns: int = Field(ge=0)


class AddImmunity(AtomCall):
    atom: Literal["addImmunity"] = "addImmunity"
    filter: TargetFilter


class SwapRandomHands(AtomCall):
    atom: Literal["swapRandomHands"] = "swapRandomHands"
    amount: int = Field(ge=0)


class SkipTurn(AtomCall):
    atom: Literal["skipTurn"] = "skipTurn"


class UiModeMessage(AtomCall):
    atom: Literal["uiModeMessage"] = "uiModeMessage"
    message: str


class UnknownAtom(AtomCall):
    """配置中出现但 schema 不认识的原子（保留原始参数）"""

    model_config = ConfigDict(extra="allow", frozen=True)

    def params(self) -> dict[str, Any]:
        return dict(self.model_extra or {})


ATOM_MODELS: dict[str, type[AtomCall]] = {
    model.model_fields["atom"].default: model
    for model in (
        ModifyAtk, ModifyHp, ConditionalModifyAtk, ConditionalModifyHp,
        PlayerHeal, PlayerDamage, KillCard, ClearField, Freeze, RemoveDebuffs,
        GainCoins, ConditionalKillPlayer, CascadeDamage, DrawFromDiscard,
        DiscardAndRedraw, DrawCards, HellLordBonus, SwapBattlefields,
        FreezeOnFirstAttack, AddImmunity, SwapRandomHands, SkipTurn,
        UiModeMessage,
    )
}


def _atom_tag(value: Any) -> str:
    if isinstance(value, dict):
        name = value.get("atom")
    else:
        name = getattr(value, "atom", None)
    return name if name in ATOM_MODELS else "unknown"


AtomInvocation = Annotated[
    Union[
        Annotated[ModifyAtk, Tag("modifyAtk")],
        Annotated[ModifyHp, Tag("modifyHp")],
        Annotated[ConditionalModifyAtk, Tag("conditionalModifyAtk")],
        Annotated[ConditionalModifyHp, Tag("conditionalModifyHp")],
        Annotated[PlayerHeal, Tag("playerHeal")],
        Annotated[PlayerDamage, Tag("playerDamage")],
        Annotated[KillCard, Tag("killCard")],
        Annotated[ClearField, Tag("clearField")],
        Annotated[Freeze, Tag("freeze")],
        Annotated[RemoveDebuffs, Tag("removeDebuffs")],
        Annotated[GainCoins, Tag("gainCoins")],
        Annotated[ConditionalKillPlayer, Tag("conditionalKillPlayer")],
        Annotated[CascadeDamage, Tag("cascadeDamage")],
        Annotated[DrawFromDiscard, Tag("drawFromDiscard")],
        Annotated[DiscardAndRedraw, Tag("discardAndRedraw")],
        Annotated[DrawCards, Tag("drawCards")],
        Annotated[HellLordBonus, Tag("hellLordBonus")],
        Annotated[SwapBattlefields, Tag("swapBattlefields")],
        Annotated[FreezeOnFirstAttack, Tag("freezeOnFirstAttack")],
        Annotated[AddImmunity, Tag("addImmunity")],
        Annotated[SwapRandomHands, Tag("swapRandomHands")],
        Annotated[SkipTurn, Tag("skipTurn")],
        Annotated[UiModeMessage, Tag("uiModeMessage")],
        Annotated[UnknownAtom, Tag("unknown")],
    ],
    Discriminator(_atom_tag),
]


# ====================================================================== #
#  卡牌配置                                                                 #
# ====================================================================== #


class CardEffectConfig(_Model):
    """单张卡牌的效果配置"""

    name: str = Field(min_length=1)
    kind: CardKind = Field(alias="type")
    trigger: TriggerTiming = TriggerTiming.ON_PLAY
    needs_target: bool = False
    target_filter: Optional[TargetFilter] = None
    passive: bool = False
    requires_ui_mode: Optional[UIMode] = Field(default=None, alias="requiresUIMode")
    description: str = ""
    aura: Optional[CountRaceAura] = None
    effects: tuple[AtomInvocation, ...] = ()

    @property
    def atom_names(self) -> list[str]:
        return [e.atom for e in self.effects]
