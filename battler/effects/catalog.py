"""卡牌效果配置表

卡牌编号 → CardEffectConfig 的映射。默认从 data/card_effects.json 加载，
加载时用 Pydantic 逐条校验，配置错误在启动时暴露而不是在打牌时。
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterator, Mapping

from pydantic import ValidationError

from ..config import get_config
from ..enums import TriggerTiming
from ..exceptions import CatalogError
from .schema import CardEffectConfig

logger = logging.getLogger(__name__)


class EffectCatalog:
    """卡牌效果配置表

    引擎实例持有自己的配置表，不同对局/测试可以使用不同的配置。
    """

    def __init__(self, entries: Mapping[int, CardEffectConfig] | None = None):
        self._entries: dict[int, CardEffectConfig] = dict(entries or {})

    def register(self, card_id: int, config: CardEffectConfig) -> None:
        """注册（或覆盖）一张卡牌的配置"""
        self._entries[card_id] = config

    def get(self, card_id: int) -> CardEffectConfig | None:
        return self._entries.get(card_id)

    def has(self, card_id: int) -> bool:
        return card_id in self._entries

    def card_ids(self) -> list[int]:
        """所有已配置的卡牌编号（升序）"""
        return sorted(self._entries)

    def by_trigger(self, timing: TriggerTiming) -> list[int]:
        return [cid for cid in self.card_ids() if self._entries[cid].trigger == timing]

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, card_id: object) -> bool:
        return card_id in self._entries

    def __iter__(self) -> Iterator[int]:
        return iter(self.card_ids())

    # ==================== 加载 ====================

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> EffectCatalog:
        """从原始字典构建；以 ``_`` 开头的键视为注释

        Raises:
            CatalogError: 键不是正整数或条目校验失败
        """
        catalog = cls()
        for key, value in raw.items():
            if str(key).startswith("_"):
                continue
            try:
                card_id = int(key)
            except ValueError as e:
                raise CatalogError(f"invalid card id: {key!r}") from e
            if card_id <= 0:
                raise CatalogError(f"invalid card id: {key!r}", card_id=card_id)
            try:
                catalog.register(card_id, CardEffectConfig.model_validate(value))
            except ValidationError as e:
                raise CatalogError(str(e), card_id=card_id) from e
        return catalog

    @classmethod
    def from_file(cls, path: str | Path) -> EffectCatalog:
        """从 JSON 文件加载

        Raises:
            CatalogError: 文件不存在、JSON 不合法或条目校验失败
        """
        config_path = Path(path)
        if not config_path.exists():
            raise CatalogError(f"catalog not found: {config_path}", path=str(config_path))

        try:
            with open(config_path, encoding="utf-8") as f:
                raw = json.load(f)
        except json.JSONDecodeError as e:
            raise CatalogError(str(e), path=str(config_path)) from e

        if not isinstance(raw, dict):
            raise CatalogError("catalog root must be an object", path=str(config_path))

        catalog = cls.from_dict(raw)
        logger.info("Loaded %d card effect configs from %s", len(catalog), config_path)
        return catalog


def create_default_catalog() -> EffectCatalog:
    """加载配置中心指定的效果配置表（默认为包内 data/card_effects.json）"""
    return EffectCatalog.from_file(get_config().catalog_path)
