"""对战枚举：阵营 / 卡牌类型 / 区域 / 触发时机

从模型模块中独立出来，effects 子包和 state 模块都可以直接导入，
避免 state → effects → state 的循环依赖。
"""

from enum import Enum


class Side(str, Enum):
    """阵营（红方 / 蓝方）"""

    RED = "red"
    BLUE = "blue"

    @property
    def opponent(self) -> "Side":
        """对手阵营"""
        return Side.BLUE if self is Side.RED else Side.RED


class CardKind(str, Enum):
    """卡牌类型"""

    BATTLEFIELD = "battlefield"  # 战场牌
    SUPPORT = "support"  # 支援牌
    MIRACLE = "miracle"  # 奇迹牌


class Zone(str, Enum):
    """卡牌所在区域"""

    BATTLEFIELD = "battlefield"  # 战场（4 路）
    BUILDINGS = "buildings"  # 建筑槽（与战场平行）
    HAND = "hand"  # 手牌


class PlayerScope(str, Enum):
    """过滤器的玩家范围（相对于行动方）"""

    SELF = "self"
    OPPONENT = "opponent"
    BOTH = "both"


class TargetMode(str, Enum):
    """过滤器的特殊目标模式"""

    SELF = "self"  # 打出的这张牌本身
    SELECTED = "selected"  # 玩家选中的目标


class TriggerTiming(str, Enum):
    """效果触发时机（由外部游戏循环决定何时调用）"""

    ON_PLAY = "onPlay"
    ON_TURN_START = "onTurnStart"
    ON_AFTER_BATTLE = "onAfterBattle"
    PASSIVE = "passive"


class UIMode(str, Enum):
    """需要 UI 层接管的特殊交互模式"""

    REPOSITION = "reposition"  # 空间法师：重新部署位置
    LANE_SWAP = "laneSwap"  # 替名：跨战场交换


class LogLevel(str, Enum):
    """效果日志级别"""

    DEBUG = "debug"
    INFO = "info"
    ERROR = "error"
