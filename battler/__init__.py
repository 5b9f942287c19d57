# -*- coding: utf-8 -*-
"""
四路对战卡牌游戏规则引擎
包含卡牌实例、游戏状态、目标解析、效果原子库和效果引擎

游戏循环（回合、战斗、UI）不在本包范围内，由调用方驱动。
"""

from .card import CardInstance, CardTemplate, create_card
from .config import EngineConfig, get_config
from .effects import EffectEngine, InvocationContext, create_engine
from .enums import CardKind, PlayerScope, Side, TargetMode, TriggerTiming, Zone
from .exceptions import (
    CatalogError, GameError, InvalidStateError, TargetNotFoundError, UnknownAtomError,
)
from .state import GameState, PlayerState, SlotAddress

__version__ = "1.0.0"

__all__ = [
    # 卡牌与状态
    'CardTemplate', 'CardInstance', 'create_card',
    'GameState', 'PlayerState', 'SlotAddress',
    # 枚举
    'Side', 'CardKind', 'Zone', 'PlayerScope', 'TargetMode', 'TriggerTiming',
    # 效果引擎
    'EffectEngine', 'InvocationContext', 'create_engine',
    # 配置
    'EngineConfig', 'get_config',
    # 异常
    'GameError', 'CatalogError', 'UnknownAtomError',
    'TargetNotFoundError', 'InvalidStateError',
]
