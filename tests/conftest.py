"""测试公共配置：每个用例都从中文文案和默认配置开始。"""

import pytest

from battler.config import reset_config
from battler.i18n import set_locale


@pytest.fixture(autouse=True)
def _default_locale_and_config():
    set_locale("zh_CN")
    reset_config()
    yield
    set_locale("zh_CN")
    reset_config()
