"""Helpers shared by CLI commands."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import typer
from pydantic import ValidationError

from kanzi.application.config import AppConfig, resolve_config
from kanzi.application.factory import StudyContext, load_study_context
from kanzi.domain.errors import KanziError
from kanzi.domain.models import KanjiItem

logger = logging.getLogger(__name__)


def _log_level(verbose: int) -> int:
    if verbose >= 2:
        return logging.DEBUG
    if verbose == 1:
        return logging.INFO
    return logging.WARNING


def _fail(message: str) -> typer.Exit:
    typer.secho(message, fg="red", err=True)
    return typer.Exit(1)


def _resolve_with_overrides(ctx: typer.Context | None = None, **overrides: Any) -> AppConfig:
    """Resolve config with CLI overrides and apply the verbosity to logging."""
    if ctx is not None and ctx.obj and ctx.obj.get("verbose_bonus"):
        overrides.setdefault("verbose", ctx.obj["verbose_bonus"])
    try:
        config = resolve_config(overrides)
    except ValidationError as e:
        raise _fail(f"Invalid configuration: {e}") from e

    logging.getLogger().setLevel(_log_level(config.verbose))
    return config


@contextmanager
def study_context(config: AppConfig, save: bool = False) -> Iterator[StudyContext]:
    """
    Load the study context for a command, optionally saving it on success.

    Domain errors become a red message and exit code 1.
    """
    try:
        context = load_study_context(config)
        yield context
        if save:
            context.save()
    except KanziError as e:
        raise _fail(str(e)) from e


def pool_for(context: StudyContext, grade: int | None, sample: bool = False) -> list[KanjiItem]:
    """Catalog items for a grade; the whole catalog (or a sample of it) for None."""
    if grade is not None:
        return context.catalog.by_grade(grade)
    items = context.catalog.all()
    return items[: context.config.progress_sample_size] if sample else items


def grade_label(grade: int | None) -> str:
    return f"grade {grade}" if grade is not None else "all grades"
