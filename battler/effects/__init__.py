"""卡牌效果系统

数据驱动：效果配置表（JSON + Pydantic 校验）描述每张卡牌的原子链，
EffectEngine 在状态副本上依次执行原子并返回新状态。
"""

from .atoms import AtomLibrary, create_default_library
from .catalog import EffectCatalog, create_default_catalog
from .context import (
    EffectContext, EffectResult, EffectStatus, InvocationContext, LogEntry,
)
from .engine import EffectEngine, create_engine
from .schema import CardEffectConfig, Condition, StatBonus, TargetFilter
from .targeting import matches_condition, resolve_targets

__all__ = [
    # 引擎
    'EffectEngine', 'create_engine',
    # 上下文与结果
    'InvocationContext', 'EffectContext', 'EffectResult', 'EffectStatus', 'LogEntry',
    # 配置表
    'EffectCatalog', 'create_default_catalog',
    'CardEffectConfig', 'TargetFilter', 'Condition', 'StatBonus',
    # 原子与目标
    'AtomLibrary', 'create_default_library',
    'resolve_targets', 'matches_condition',
]
