"""轻量级 i18n 框架，零外部依赖。

效果日志、异常信息和命令行输出都通过 ``t()`` 取文案::

    from battler.i18n import t, set_locale

    set_locale("en_US")
    print(t("effect.card_killed", name="狼人"))  # → "狼人 was killed"
"""

from __future__ import annotations

import logging

from . import en_US, zh_CN

logger = logging.getLogger(__name__)

_DEFAULT_LOCALE = "zh_CN"

# locale → 翻译表；zh_CN 在前，也是缺失键时的回退表
_TABLES: dict[str, dict[str, str]] = {
    "zh_CN": zh_CN.STRINGS,
    "en_US": en_US.STRINGS,
}

_locale: str = _DEFAULT_LOCALE


def set_locale(locale: str) -> None:
    """设置当前语言。

    Raises:
        ValueError: 没有该语言的翻译表
    """
    global _locale
    if locale not in _TABLES:
        raise ValueError(f"Unsupported locale: {locale}")
    _locale = locale


def get_locale() -> str:
    """获取当前语言。"""
    return _locale


def get_available_locales() -> list[str]:
    """返回所有可用的 locale 列表。"""
    return list(_TABLES)


def t(key: str, **kwargs: object) -> str:
    """翻译函数。

    查找当前 locale 对应的字符串，用 ``kwargs`` 做 format 替换。
    若 key 缺失则回退到 zh_CN，仍缺失则返回 ``[key]``。
    """
    template = _TABLES[_locale].get(key) or _TABLES[_DEFAULT_LOCALE].get(key)
    if template is None:
        logger.warning("Missing translation %s (locale %s)", key, _locale)
        return f"[{key}]"
    if not kwargs:
        return template
    try:
        return template.format_map(kwargs)
    except KeyError as e:
        logger.warning("Translation %s lacks parameter %s", key, e)
        return template


def side_name(side: object) -> str:
    """阵营显示名（红方 / 蓝方）。"""
    return t(f"side.{getattr(side, 'value', side)}")
