"""Tests for battler.exceptions."""

import pytest

from battler.exceptions import (
    CatalogError,
    GameError,
    InvalidStateError,
    TargetNotFoundError,
    UnknownAtomError,
)
from battler.i18n import set_locale


class TestGameError:
    def test_message_only(self):
        e = GameError("出错了")
        assert str(e) == "出错了"
        assert e.details == {}

    def test_with_details(self):
        e = GameError("出错了", {"card_id": 7})
        assert str(e) == "出错了 | Details: {'card_id': 7}"


class TestSubclasses:
    @pytest.mark.parametrize("exc", [
        CatalogError(), UnknownAtomError("teleport"), TargetNotFoundError(), InvalidStateError(),
    ])
    def test_hierarchy(self, exc):
        assert isinstance(exc, GameError)

    def test_catalog_error_details(self):
        e = CatalogError("坏配置", card_id=71, path="cards.json")
        assert e.card_id == 71
        assert e.details == {"card_id": 71, "path": "cards.json"}

    def test_catalog_error_default_message(self):
        assert CatalogError().message == "卡牌效果配置错误"

    def test_unknown_atom(self):
        e = UnknownAtomError("teleport")
        assert e.atom == "teleport"
        assert e.details == {"atom": "teleport"}

    def test_target_not_found(self):
        e = TargetNotFoundError("abc")
        assert e.instance_id == "abc"
        assert e.message == "目标不存在"

    def test_invalid_state_field(self):
        assert InvalidStateError(field="players").details == {"field": "players"}

    def test_localised_default(self):
        set_locale("en_US")
        assert InvalidStateError().message != "游戏状态数据不合法"


class TestDefaultMessage:
    def test_game_error_default(self):
        assert GameError().message == "游戏错误"
