# -*- coding: utf-8 -*-
"""
卡牌效果配置表命令行工具

使用方法:
    battler cards              列出所有已配置的卡牌
    battler show 71            查看一张卡牌的效果链
    battler validate [path]    校验配置文件（默认为当前配置）
"""

from __future__ import annotations

import argparse
import json
import logging
import sys

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .config import get_config
from .effects.catalog import EffectCatalog
from .exceptions import CatalogError
from .i18n import set_locale
from .i18n import t as _t
from .logging_config import setup_logging

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="battler", description="卡牌效果配置表工具")
    parser.add_argument("--catalog", help="效果配置文件路径（默认读取 BATTLER_CATALOG）")
    parser.add_argument("--locale", help="输出语言，如 zh_CN / en_US")

    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("cards", help="列出所有已配置的卡牌")
    show = sub.add_parser("show", help="查看一张卡牌的效果链")
    show.add_argument("card_id", type=int)
    validate = sub.add_parser("validate", help="校验配置文件")
    validate.add_argument("path", nargs="?")
    return parser


def _cmd_cards(console: Console, catalog: EffectCatalog) -> int:
    table = Table(title=_t("cli.title"), border_style="green")
    table.add_column(_t("cli.col_id"), justify="right", style="cyan", no_wrap=True)
    table.add_column(_t("cli.col_name"), style="magenta")
    table.add_column(_t("cli.col_kind"))
    table.add_column(_t("cli.col_trigger"))
    table.add_column(_t("cli.col_target"), justify="center")
    table.add_column(_t("cli.col_atoms"))

    for card_id in catalog.card_ids():
        config = catalog.get(card_id)
        table.add_row(
            str(card_id),
            config.name,
            config.kind.value,
            config.trigger.value,
            "✓" if config.needs_target else "",
            ", ".join(config.atom_names),
        )
    console.print(table)
    return 0


def _cmd_show(console: Console, catalog: EffectCatalog, card_id: int) -> int:
    config = catalog.get(card_id)
    if config is None:
        console.print(f"[red]{_t('cli.not_found', card_id=card_id)}[/red]")
        return 1
    console.print(f"[bold]{card_id}[/bold] {config.name}  ({config.kind.value}, {config.trigger.value})")
    if config.description:
        console.print(escape(config.description))
    console.print_json(json.dumps(
        config.model_dump(mode="json", by_alias=True, exclude_none=True),
        ensure_ascii=False,
    ))
    return 0


def _cmd_validate(console: Console, path: str) -> int:
    try:
        catalog = EffectCatalog.from_file(path)
    except CatalogError as e:
        console.print(f"[red]{escape(_t('cli.invalid', error=e))}[/red]")
        return 1
    console.print(f"[green]{_t('cli.valid', count=len(catalog))}[/green]")
    return 0


def main(argv: list[str] | None = None) -> int:
    """程序入口，返回进程退出码"""
    setup_logging(enable_file=False, enable_console=True)
    args = _build_parser().parse_args(argv)
    config = get_config()
    set_locale(args.locale or config.locale)
    console = Console()
    path = args.catalog or config.catalog_path

    if args.command == "validate":
        return _cmd_validate(console, args.path or path)

    try:
        catalog = EffectCatalog.from_file(path)
    except CatalogError as e:
        logger.error("Failed to load catalog %s: %s", path, e)
        console.print(f"[red]{escape(_t('cli.invalid', error=e))}[/red]")
        return 1

    if args.command == "cards":
        return _cmd_cards(console, catalog)
    return _cmd_show(console, catalog, args.card_id)


if __name__ == "__main__":
    sys.exit(main())
