"""引擎配置中心 (SSOT - 单一事实来源)

所有可配置的参数在此定义，支持从环境变量覆盖。
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from .constants import DEFAULT_START_HEALTH, LANE_COUNT

DEFAULT_CATALOG_PATH = Path(__file__).parent / "data" / "card_effects.json"


def _get_env_int(key: str, default: int) -> int:
    """从环境变量获取整数配置"""
    value = os.environ.get(key)
    if value is not None:
        try:
            return int(value)
        except ValueError:
            pass
    return default


def _get_env_bool(key: str, default: bool) -> bool:
    """从环境变量获取布尔配置"""
    value = os.environ.get(key, "").lower()
    if value in ("true", "1", "yes", "on"):
        return True
    elif value in ("false", "0", "no", "off"):
        return False
    return default


@dataclass(frozen=True)
class EngineConfig:
    """引擎配置类 (不可变)

    所有配置项支持通过环境变量覆盖：
    - BATTLER_LANES: 每方战场路数
    - BATTLER_START_HEALTH: 玩家初始生命
    - BATTLER_LOCALE: 效果日志语言
    - BATTLER_CATALOG: 卡牌效果配置文件路径
    - BATTLER_LOG_LEVEL / BATTLER_LOG_FILE / BATTLER_DEBUG: 日志与调试
    """

    # ==================== 棋盘 ====================
    lane_count: int = field(
        default_factory=lambda: _get_env_int("BATTLER_LANES", LANE_COUNT)
    )
    start_health: int = field(
        default_factory=lambda: _get_env_int("BATTLER_START_HEALTH", DEFAULT_START_HEALTH)
    )

    # ==================== 效果配置 ====================
    catalog_path: str = field(
        default_factory=lambda: os.environ.get("BATTLER_CATALOG", str(DEFAULT_CATALOG_PATH))
    )
    locale: str = field(
        default_factory=lambda: os.environ.get("BATTLER_LOCALE", "zh_CN")
    )

    # ==================== 日志与调试 ====================
    log_level: str = field(
        default_factory=lambda: os.environ.get("BATTLER_LOG_LEVEL", "INFO")
    )
    log_file: str = field(
        default_factory=lambda: os.environ.get("BATTLER_LOG_FILE", "logs/battler.log")
    )
    debug_mode: bool = field(
        default_factory=lambda: _get_env_bool("BATTLER_DEBUG", False)
    )

    @classmethod
    def from_env(cls) -> EngineConfig:
        """从环境变量创建配置实例"""
        return cls()


# 全局配置单例
_config: EngineConfig | None = None


def get_config() -> EngineConfig:
    """获取全局配置实例（懒加载）"""
    global _config
    if _config is None:
        _config = EngineConfig.from_env()
    return _config


def reset_config() -> None:
    """重置配置（用于测试）"""
    global _config
    _config = None
