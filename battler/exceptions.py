"""效果引擎异常模块

引擎对外从不抛出异常（trigger 的失败以“原状态 + 日志”表达），
这里的异常用于配置加载、模型反序列化以及引擎内部的错误转换。
"""

from __future__ import annotations

from .i18n import t as _t


class GameError(Exception):
    """异常基类

    所有引擎相关的异常都应该继承此类，提供统一的异常处理接口。
    """

    def __init__(self, message: str | None = None, details: dict | None = None):
        """初始化异常

        Args:
            message: 错误消息（默认为本地化的通用错误）
            details: 额外的错误详情（可选）
        """
        if message is None:
            message = _t("exc.game_error")
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


# ==================== 配置相关异常 ====================


class CatalogError(GameError):
    """卡牌效果配置异常

    配置文件不存在、JSON 不合法或某个条目校验失败时抛出。
    """

    def __init__(
        self,
        message: str | None = None,
        card_id: int | None = None,
        path: str | None = None,
    ):
        if message is None:
            message = _t("exc.catalog_error")
        details = {}
        if card_id is not None:
            details["card_id"] = card_id
        if path:
            details["path"] = path
        super().__init__(message, details)
        self.card_id = card_id
        self.path = path


class UnknownAtomError(GameError):
    """未知效果原子

    配置引用了原子库中不存在的原子时由 AtomLibrary 抛出，
    引擎捕获后记录日志并继续执行后续原子。
    """

    def __init__(self, atom: str, message: str | None = None):
        if message is None:
            message = _t("exc.unknown_atom")
        super().__init__(message, {"atom": atom})
        self.atom = atom


# ==================== 目标相关异常 ====================


class TargetNotFoundError(GameError):
    """目标不存在

    目标卡牌在复制后的状态中找不到时抛出。
    """

    def __init__(self, instance_id: str | None = None, message: str | None = None):
        if message is None:
            message = _t("exc.target_not_found")
        details = {}
        if instance_id:
            details["instance_id"] = instance_id
        super().__init__(message, details)
        self.instance_id = instance_id


# ==================== 状态相关异常 ====================


class InvalidStateError(GameError):
    """游戏状态数据不合法

    from_dict 收到缺失字段或类型错误的数据时抛出。
    """

    def __init__(self, message: str | None = None, field: str | None = None):
        if message is None:
            message = _t("exc.invalid_state")
        details = {}
        if field:
            details["field"] = field
        super().__init__(message, details)
        self.field = field
