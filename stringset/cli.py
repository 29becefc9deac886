from __future__ import annotations

from pathlib import Path

import typer
from structlog.typing import FilteringBoundLogger

from stringset.config import CliSettings, StringSetConfig, get_settings
from stringset.logger import configure_logging, get_logger
from stringset.string_set import MapStringSet


app = typer.Typer(help="Small tools built on the string set")


def _read_words(path: Path, settings: CliSettings) -> list[str]:
    words: list[str] = []
    try:
        with open(path, encoding=settings.encoding) as fh:
            for line in fh:
                word = line.rstrip("\r\n")
                if settings.strip:
                    word = word.strip()
                if settings.skip_blank and not word:
                    continue
                words.append(word)
    except UnicodeDecodeError as exc:
        raise typer.BadParameter(
            f"{path} is not valid {settings.encoding} text ({exc.reason})"
        ) from exc
    return words


def _cli_logger(cfg: StringSetConfig) -> FilteringBoundLogger:
    return get_logger(f"{cfg.logging.logger_name}.cli")


def _load_set(paths: list[Path], cfg: StringSetConfig) -> MapStringSet:
    settings = cfg.cli
    log = _cli_logger(cfg)
    words = MapStringSet(logger=log)
    for path in paths:
        lines = _read_words(path, settings)
        all_new = words.put(*lines)
        log.info("file loaded", path=str(path), lines=len(lines), all_new=all_new)
    return words


@app.callback()
def main(
    ctx: typer.Context,
    config: Path | None = typer.Option(None, help="YAML config file"),
) -> None:
    cfg = StringSetConfig.from_yaml(config) if config is not None else get_settings()
    configure_logging(cfg)
    ctx.obj = cfg


@app.command()
def uniq(
    ctx: typer.Context,
    files: list[Path] = typer.Argument(..., exists=True, dir_okay=False),
    sort: bool = typer.Option(False, "--sorted", help="Print members in sorted order"),
) -> None:
    """Print the distinct lines of FILES."""
    cfg: StringSetConfig = ctx.obj
    words = _load_set(files, cfg)
    members = words.strings()
    if sort:
        members.sort()
    for member in members:
        typer.echo(member)
    typer.echo(f"{len(words)} unique", err=True)


@app.command()
def put(ctx: typer.Context, words: list[str] | None = typer.Argument(None)) -> None:
    """Put WORDS into a fresh set in a single call."""
    s = MapStringSet(logger=_cli_logger(ctx.obj))
    all_new = s.put(*(words or []))
    typer.echo(f"all_new={str(all_new).lower()} size={len(s)}")


@app.command()
def diff(
    ctx: typer.Context,
    left: Path = typer.Argument(..., exists=True, dir_okay=False),
    right: Path = typer.Argument(..., exists=True, dir_okay=False),
) -> None:
    """Print lines of LEFT that do not occur in RIGHT."""
    cfg: StringSetConfig = ctx.obj
    remaining = _load_set([left], cfg)
    remaining.remove(*_read_words(right, cfg.cli))
    for member in sorted(remaining):
        typer.echo(member)


def run() -> None:
    app()


if __name__ == "__main__":
    run()
