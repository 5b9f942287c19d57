"""Tests for the battler.i18n module."""

import pytest

from battler.enums import Side
from battler.i18n import get_available_locales, get_locale, set_locale, side_name, t


class TestSetLocale:
    def test_default_locale(self):
        assert get_locale() == "zh_CN"

    def test_switch_to_en(self):
        set_locale("en_US")
        assert get_locale() == "en_US"

    def test_invalid_locale(self):
        with pytest.raises(ValueError, match="Unsupported locale"):
            set_locale("ja_JP")

    def test_available_locales(self):
        assert get_available_locales() == ["zh_CN", "en_US"]


class TestTranslation:
    def test_format_zh(self):
        assert t("effect.card_frozen", name="骑士", turns=2) == "骑士 被冻结2回合"

    def test_format_en(self):
        set_locale("en_US")
        assert "骑士" in t("effect.card_frozen", name="骑士", turns=2)

    def test_missing_key(self):
        assert t("no.such.key") == "[no.such.key]"

    def test_missing_param_returns_template(self):
        assert t("effect.card_killed") == "{name} 被杀死"

    def test_side_name(self):
        assert side_name(Side.RED) == "红方"
        assert side_name("blue") == "蓝方"
        set_locale("en_US")
        assert side_name(Side.BLUE) == "Blue"


class TestTableParity:
    def test_same_keys(self):
        from battler.i18n.en_US import STRINGS as EN
        from battler.i18n.zh_CN import STRINGS as ZH

        assert set(EN) == set(ZH)


class TestFallback:
    def test_missing_en_key_uses_zh(self, monkeypatch):
        from battler.i18n import en_US

        monkeypatch.delitem(en_US.STRINGS, "side.red")
        set_locale("en_US")
        assert t("side.red") == "红方"
        assert t("side.blue") == "Blue"

    def test_bad_locale_keeps_current(self):
        set_locale("en_US")
        with pytest.raises(ValueError):
            set_locale("fr_FR")
        assert get_locale() == "en_US"
