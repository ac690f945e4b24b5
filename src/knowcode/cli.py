"""CLI entry point for KnowCode."""

import json
import logging
from pathlib import Path
from typing import Optional

import click

from knowcode.config.settings import LOG_LEVELS, Settings
from knowcode.errors import KnowCodeError


def _settings(ctx: click.Context):
    return ctx.obj["settings"]


@click.group()
@click.option("--config", "config_path", type=click.Path(dir_okay=False, path_type=Path),
              help="Path to config.yaml (default: ~/.knowcode/config.yaml)")
@click.option("--log-level", default=None, type=click.Choice(LOG_LEVELS, case_sensitive=False),
              help="Logging level (overrides the config file)")
@click.pass_context
def main(ctx: click.Context, config_path: Optional[Path], log_level: Optional[str]) -> None:
    """KnowCode: grade Morse copy tests."""
    ctx.ensure_object(dict)
    try:
        settings = Settings.load(config_path)
    except KnowCodeError as e:
        raise click.ClickException(str(e)) from e

    logging.basicConfig(
        level=(log_level or settings.log_level).upper(),
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.obj["settings"] = settings
    ctx.obj["config_path"] = config_path or Settings.config_path()


@main.command("grade-copy")
@click.argument("user_file", type=click.File("r"))
@click.argument("reference_file", type=click.File("r"))
@click.option("--prosign", "prosigns", multiple=True, metavar="PROSIGN=ALT",
              help="Prosign mapping; replaces the configured table when given")
@click.pass_context
def grade_copy(ctx: click.Context, user_file, reference_file, prosigns: tuple[str, ...]) -> None:
    """Count consecutive correct characters in a copy."""
    from knowcode.config.settings import ProsignConfig
    from knowcode.engine.grader import Grader
    from knowcode.engine.prosigns import ProsignMapping

    settings = _settings(ctx)
    if prosigns:
        try:
            table = [ProsignMapping.parse(p) for p in prosigns]
        except ValueError as e:
            raise click.BadParameter(str(e), param_hint="--prosign") from e
        settings = settings.model_copy(update={"prosigns": [
            ProsignConfig(prosign=m.prosign, alternate=m.alternate) for m in table
        ]})

    grader = Grader(settings=settings)
    try:
        result = grader.grade_copy(user_file.read(), reference_file.read())
    except KnowCodeError as e:
        raise click.ClickException(str(e)) from e

    verdict = "PASS" if result.passed else "FAIL"
    click.echo(f"{result.consecutive_correct} consecutive correct ({verdict}, "
               f"need {settings.grading.copy_pass_chars})")


@main.command()
@click.argument("test_key", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("submission", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_context
def grade(ctx: click.Context, test_key: Path, submission: Path) -> None:
    """Grade a full submission against a test key and print JSON."""
    from knowcode.engine.grader import Grader
    from knowcode.engine.loader import load_submission, load_test_key

    grader = Grader(settings=_settings(ctx))
    try:
        result = grader.grade_submission(load_submission(submission), load_test_key(test_key))
    except KnowCodeError as e:
        raise click.ClickException(str(e)) from e

    click.echo(json.dumps(result.to_dict(), indent=2))


@main.command()
@click.argument("text")
def normalize(text: str) -> None:
    """Print TEXT in its normalized comparison form."""
    from knowcode.engine.normalizer import normalize_text

    click.echo(normalize_text(text))


@main.command()
@click.pass_context
def prosigns(ctx: click.Context) -> None:
    """List configured prosigns and their alternates."""
    for mapping in _settings(ctx).prosign_table():
        click.echo(f"  {mapping.prosign}  {mapping.alternate}")


@main.command("init-config")
@click.option("--force", is_flag=True, help="Overwrite an existing config file")
@click.pass_context
def init_config(ctx: click.Context, force: bool) -> None:
    """Write the current settings to the config file."""
    path: Path = ctx.obj["config_path"]
    if path.exists() and not force:
        raise click.ClickException(f"{path} already exists (use --force to overwrite)")
    _settings(ctx).save(path)
    click.echo(f"Wrote {path}")
