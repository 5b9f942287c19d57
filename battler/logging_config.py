"""battler 包的日志配置

引擎作为库被嵌入时不应接管宿主程序的根 logger，
这里只给 ``battler`` 这一棵 logger 挂 handler，记录照常向上传播。
级别与文件路径取自 EngineConfig（BATTLER_LOG_LEVEL / BATTLER_LOG_FILE），
BATTLER_DEBUG 打开时级别降到 DEBUG，引擎的逐步跟踪也会写入文件。

命令行工具在启动时调用 setup_logging()；重复调用不会重复挂 handler。
"""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from .config import get_config

PACKAGE_LOGGER = "battler"

_FILE_HANDLER_NAME = "battler_file"
_CONSOLE_HANDLER_NAME = "battler_console"
_FORMAT = "%(asctime)s %(levelname)-8s %(name)s:%(lineno)d | %(message)s"


def _parse_level(level: str | int) -> int:
    """级别名 → 数值；无法识别时按 INFO 处理"""
    if isinstance(level, int):
        return level
    value = logging.getLevelName((level or "").strip().upper())
    return value if isinstance(value, int) else logging.INFO


def setup_logging(
    *,
    enable_file: bool = True,
    enable_console: bool = False,
    console_level: str | int = "WARNING",
    max_bytes: int = 1024 * 1024,
    backup_count: int = 3,
) -> logging.Logger:
    """给 battler logger 挂载文件 / 控制台 handler

    Args:
        enable_file: 写入 EngineConfig.log_file（UTF-8，按大小轮转）
        enable_console: 输出到 stderr
        console_level: 控制台 handler 的级别
        max_bytes: 单个日志文件的最大字节数
        backup_count: 保留的轮转文件数

    Returns:
        battler 包的 logger
    """
    config = get_config()
    level = logging.DEBUG if config.debug_mode else _parse_level(config.log_level)

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)
    fmt = logging.Formatter(_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    existing = {h.name: h for h in logger.handlers}

    if enable_file:
        handler = existing.get(_FILE_HANDLER_NAME)
        if handler is None:
            log_path = Path(config.log_file)
            log_path.parent.mkdir(parents=True, exist_ok=True)
            handler = RotatingFileHandler(
                log_path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8",
            )
            handler.name = _FILE_HANDLER_NAME
            logger.addHandler(handler)
        handler.setFormatter(fmt)
        handler.setLevel(level)

    if enable_console:
        handler = existing.get(_CONSOLE_HANDLER_NAME)
        if handler is None:
            handler = logging.StreamHandler()
            handler.name = _CONSOLE_HANDLER_NAME
            logger.addHandler(handler)
        handler.setFormatter(fmt)
        handler.setLevel(_parse_level(console_level))

    logger.debug(
        "Logging ready | level=%s file=%s console=%s",
        logging.getLevelName(level), config.log_file if enable_file else None, enable_console,
    )
    return logger
