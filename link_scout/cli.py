# === FILE: link_scout/cli.py ===
#!/usr/bin/env python3
"""
Точка входа для запуска краулера LinkScout через командную строку.

Опции:
  --url URL           Стартовый URL (обязателен, если не задан в конфиге)
  --depth INT         Максимальная глубина обхода (default: 3, 0 — без ограничения)
  --workers INT       Размер пула воркеров (default: 0 — подобрать по глубине)
  --config PATH       YAML/JSON-конфиг; флаги переопределяют его значения
  --fetch-timeout SEC Таймаут одного запроса (секунд)
  --crawl-timeout SEC Таймаут всего обхода (секунд)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (stdout, если не указан)
  --log-format FORMAT Формат логирования

Дополнительно:
  --version, -v       Показать версию LinkScout

Пример:
  link_scout --url https://example.com --depth 2 --workers 20
"""
import asyncio
import sys
from pathlib import Path

import click
from pydantic import ValidationError

from link_scout import __version__
from link_scout.config import build_config, load_config_data
from link_scout.engine import start_crawl
from link_scout.errors import SeedURLError
from link_scout.logger import init_logging, stop_listener

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


@click.command(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='LinkScout, version %(version)s')
@click.option('--url', '-u', 'url', default=None, help='ОБЯЗАТЕЛЬНО: URL, с которого начинается обход.')
@click.option(
    '--depth', '-d', 'depth',
    type=click.IntRange(min=0), default=None,
    help='Максимальная глубина обхода [3]. 0 — без ограничения.'
)
@click.option(
    '--workers', '-w', 'workers',
    type=click.IntRange(min=0), default=None,
    help='Размер пула воркеров. 0 — разумное значение по глубине.'
)
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Путь к файлу конфигурации YAML/JSON.'
)
@click.option('--fetch-timeout', 'fetch_timeout', type=float, default=None, help='Таймаут одного запроса (секунд)')
@click.option('--crawl-timeout', 'crawl_timeout', type=float, default=None, help='Таймаут всего обхода (секунд)')
@click.option(
    '--log-level', 'log_level',
    default='INFO', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Уровень логирования'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Путь к файлу логов (stdout, если не указан)'
)
@click.option(
    '--log-format', 'log_format',
    default='%(asctime)s %(message)s',
    show_default=True,
    help='Строка формата для логов'
)
@click.pass_context
def cli(ctx, url, depth, workers, config_path, fetch_timeout, crawl_timeout, log_level, log_file, log_format):
    """Обойти ссылки https, начиная с --url."""
    try:
        data = load_config_data(config_path) if config_path else {}
    except Exception as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')

    if not (url or data.get('url')):
        click.echo(ctx.get_usage(), err=True)
        ctx.exit(1)

    try:
        cfg = build_config(
            data,
            url=url,
            max_depth=depth,
            workers=workers,
            fetch_timeout=fetch_timeout,
            crawl_timeout=crawl_timeout,
        )
    except ValidationError as e:
        print_error(f'Ошибка конфигурации: {e}')

    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format,
        queued=True,
    )
    try:
        stats = asyncio.run(start_crawl(cfg, handle_signals=True))
    except SeedURLError as e:
        print_error(str(e))
    finally:
        stop_listener()

    if stats.interrupted:
        click.secho('Обход прерван до завершения', fg='yellow', err=True)


if __name__ == "__main__":
    cli()
