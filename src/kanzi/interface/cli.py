"""kanzi CLI: root commands and subgroup registration."""

import json
import logging
import random
import sys
from pathlib import Path
from typing import Annotated

import typer

from kanzi.application.queue_builder import QuestionMode
from kanzi.interface._common import (
    _fail,
    _resolve_with_overrides,
    grade_label,
    pool_for,
    study_context,
)

# ---------------------------------------------------------------------------
# Root app
# ---------------------------------------------------------------------------

app = typer.Typer(
    help="kanzi: Leitner-box kanji drills for elementary school students.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.WARNING,
    format="%(levelname)s:%(name)s:%(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Register subgroups
# ---------------------------------------------------------------------------

mistakes_app = typer.Typer(help="Manage the focused review (mistake) pool.", no_args_is_help=True)
app.add_typer(mistakes_app, name="mistakes")

config_app = typer.Typer(help="Manage kanzi configuration.", no_args_is_help=True)
app.add_typer(config_app, name="config")

GradeOption = Annotated[
    int | None, typer.Option("--grade", "-g", min=1, max=6, help="School grade (1-6).")
]
AllGradesOption = Annotated[
    bool, typer.Option("--all-grades", help="Use every grade instead of the profile grade.")
]
JsonOption = Annotated[bool, typer.Option("--json", help="Output as JSON.")]


# ---------------------------------------------------------------------------
# Global callback
# ---------------------------------------------------------------------------


@app.callback()
def main_callback(
    ctx: typer.Context,
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose", "-v", count=True, help="Increase verbosity. Repeat for more detail."
        ),
    ] = 0,
):
    """Global settings for kanzi."""
    ctx.ensure_object(dict)
    ctx.obj["verbose_bonus"] = verbose


def _grade(config, all_grades: bool) -> int | None:
    return None if all_grades else config.selected_grade


# ---------------------------------------------------------------------------
# Root commands
# ---------------------------------------------------------------------------


@app.command()
def drill(
    ctx: typer.Context,
    grade: GradeOption = None,
    all_grades: AllGradesOption = False,
    mode: Annotated[
        QuestionMode, typer.Option("--mode", "-m", help="Question type.")
    ] = QuestionMode.READING,
    focused: Annotated[
        bool, typer.Option("--focused", help="Drill the mistake pool instead of a grade.")
    ] = False,
    due: Annotated[bool, typer.Option("--due", help="Only drill cards that are due.")] = False,
    photo: Annotated[
        Path | None,
        typer.Option("--photo", help="Drill the kanji marked in an OCR text file of a worksheet."),
    ] = None,
    size: Annotated[int | None, typer.Option(min=1, help="Maximum number of questions.")] = None,
    seed: Annotated[int | None, typer.Option(help="Random seed for question order.")] = None,
):
    """[bold green]Drill[/bold green] kanji and update their review boxes."""
    from kanzi.application.extraction import auto_selected, extract_kanji_from_text
    from kanzi.application.queue_builder import (
        build_drill_queue,
        build_due_queue,
        build_focused_queue,
        build_photo_queue,
        candidate_pool,
    )
    from kanzi.application.session import DrillSession

    config = _resolve_with_overrides(ctx, selected_grade=grade, queue_size=size, seed=seed)
    rng = random.Random(config.seed)
    target_grade = _grade(config, all_grades)

    with study_context(config, save=True) as context:
        if photo is not None:
            text = _read_text(photo)
            extracted = extract_kanji_from_text(text, context.catalog)
            queue = build_photo_queue(auto_selected(extracted), context.catalog)
        elif focused:
            queue = build_focused_queue(context.aggregator, config.queue_size, rng)
        elif due:
            queue = build_due_queue(
                context.scheduler, context.catalog, target_grade, config.queue_size
            )
        else:
            queue = build_drill_queue(context.catalog, target_grade, config.queue_size, rng)

        if not queue:
            typer.secho("No kanji to drill.", fg="yellow")
            return

        choice_pool = candidate_pool(context.catalog, target_grade) or queue
        session = DrillSession(
            context.scheduler,
            context.tracker,
            context.aggregator,
            queue,
            mode=mode,
            choice_pool=choice_pool,
            rng=rng,
            choice_count=config.choice_count,
        )

        while not session.is_complete:
            item = session.current
            typer.echo(f"\n[{session.index + 1}/{len(session.queue)}]")
            if mode == QuestionMode.WRITING:
                typer.echo(f"Write the kanji for: {item.meaning} ({session.expected_answer})")
                typer.prompt("Press Enter when done", default="", show_default=False)
                typer.secho(f"  {item.character}", bold=True)
                outcome = session.grade_self(typer.confirm("Did you write it correctly?"))
            else:
                typer.secho(f"  {item.character}", bold=True)
                choices = session.choices()
                for i, choice in enumerate(choices, start=1):
                    typer.echo(f"  {i}. {choice}")
                picked = typer.prompt("Answer", type=int)
                while not 1 <= picked <= len(choices):
                    picked = typer.prompt(f"Pick 1-{len(choices)}", type=int)
                outcome = session.answer(choices[picked - 1])

            if outcome.is_correct:
                typer.secho(f"Correct! (box {outcome.card.box_level})", fg="green")
            else:
                typer.secho(f"Not quite: {outcome.expected}", fg="red")
            session.advance()

        summary = session.summary()
        typer.echo(
            f"\nScore: {summary.score.correct}/{summary.score.total}"
            f"  Result: {summary.tier.value}  Best streak: {summary.max_streak}"
        )


@app.command("due")
def due_cmd(
    ctx: typer.Context,
    grade: GradeOption = None,
    all_grades: AllGradesOption = False,
    json_output: JsonOption = False,
):
    """List kanji that are due for review."""
    config = _resolve_with_overrides(ctx, selected_grade=grade)
    target_grade = _grade(config, all_grades)

    with study_context(config) as context:
        pool = pool_for(context, target_grade)
        known = [context.scheduler.state.get(item.character) for item in pool]
        due = context.scheduler.get_due_cards(card for card in known if card is not None)
        new = [item.character for item, card in zip(pool, known) if card is None]

    if json_output:
        typer.echo(
            json.dumps(
                {
                    "due": [
                        {
                            "character": card.character,
                            "box_level": card.box_level,
                            "next_review_at": card.next_review_at.isoformat(),
                        }
                        for card in due
                    ],
                    "new": new,
                },
                ensure_ascii=False,
                indent=2,
            )
        )
        return

    typer.echo(f"Due ({grade_label(target_grade)}): {len(due)}  New: {len(new)}")
    for card in due:
        typer.echo(f"  {card.character}  box {card.box_level}")
    if new:
        typer.echo(f"  new: {''.join(new)}")


@app.command()
def progress(
    ctx: typer.Context,
    grade: GradeOption = None,
    all_grades: AllGradesOption = False,
    json_output: JsonOption = False,
):
    """Show box levels and mastery for a grade."""
    from kanzi.application.progress import build_progress_report

    config = _resolve_with_overrides(ctx, selected_grade=grade)
    target_grade = _grade(config, all_grades)

    with study_context(config) as context:
        pool = pool_for(context, target_grade, sample=True)
        report = build_progress_report(pool, context.scheduler, context.tracker)

    if json_output:
        typer.echo(json.dumps(report.to_dict(), indent=2))
        return

    typer.echo(f"Progress ({grade_label(target_grade)}): {report.total} kanji")
    for level, count in enumerate(report.box_counts):
        typer.echo(f"  box {level}: {count}")
    typer.secho(
        f"Mastered: {report.mastered} ({report.mastery_percentage}%)",
        fg="green" if report.mastery_percentage else None,
    )
    typer.echo(f"Best streak: {report.max_streak}")


@app.command()
def extract(
    ctx: typer.Context,
    path: Annotated[Path, typer.Argument(help="Text file with OCR output of a worksheet.")],
    grade: GradeOption = None,
    save: Annotated[
        bool, typer.Option("--save", help="Add marked kanji to the mistake pool.")
    ] = False,
    json_output: JsonOption = False,
):
    """Extract kanji from recognized worksheet text."""
    from kanzi.application.extraction import auto_selected, extract_kanji_from_text

    config = _resolve_with_overrides(ctx)
    text = _read_text(path)

    with study_context(config, save=save) as context:
        extracted = extract_kanji_from_text(text, context.catalog)
        selected = auto_selected(extracted)
        if save and selected:
            context.aggregator.add_external_mistakes(selected, grade)

    if json_output:
        typer.echo(
            json.dumps(
                [
                    {
                        "character": e.character,
                        "known": e.item is not None,
                        "grade": e.item.grade if e.item else None,
                        "study_target": e.is_study_target,
                    }
                    for e in extracted
                ],
                ensure_ascii=False,
                indent=2,
            )
        )
        return

    if not extracted:
        typer.secho("No kanji found.", fg="yellow")
        return
    for e in extracted:
        marker = "*" if e.is_study_target else " "
        info = f"grade {e.item.grade}" if e.item else "not a school kanji"
        typer.echo(f" {marker} {e.character}  ({info})")
    if save:
        typer.secho(f"Added {len(selected)} kanji to the mistake pool.", fg="green")


@app.command()
def lookup(
    ctx: typer.Context,
    character: Annotated[str, typer.Argument(help="A single kanji.")],
    story: Annotated[bool, typer.Option("--story", help="Also print a memory story.")] = False,
    seed: Annotated[int | None, typer.Option(help="Random seed for the story template.")] = None,
):
    """Show catalog details for a kanji."""
    config = _resolve_with_overrides(ctx, seed=seed)

    with study_context(config) as context:
        item = context.catalog.lookup(character.strip())
        card = context.scheduler.state.get(character.strip())

    if item is None:
        raise _fail(f"{character} is not in the catalog.")

    typer.secho(item.character, bold=True)
    typer.echo(f"  meaning: {item.meaning}")
    typer.echo(f"  on:      {'、'.join(item.on_readings) or '-'}")
    typer.echo(f"  kun:     {'、'.join(item.kun_readings) or '-'}")
    typer.echo(f"  radical: {item.radical}  strokes: {item.stroke_count}  grade: {item.grade}")
    if card is not None:
        typer.echo(
            f"  box {card.box_level}, {card.correct_count} correct / "
            f"{card.incorrect_count} incorrect"
        )
    if story:
        from kanzi.application.story import generate_story

        typer.echo(f"\n{generate_story(item, random.Random(config.seed))}")


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except OSError as e:
        raise _fail(f"Cannot read {path}: {e}") from e


# ---------------------------------------------------------------------------
# Mistakes subgroup
# ---------------------------------------------------------------------------


@mistakes_app.command("add")
def mistakes_add(
    ctx: typer.Context,
    text: Annotated[str, typer.Argument(help="Text containing the kanji you got wrong.")],
    grade: GradeOption = None,
):
    """Record kanji missed on a school test."""
    from kanzi.application.extraction import parse_kanji_input

    config = _resolve_with_overrides(ctx)
    characters = parse_kanji_input(text)
    if not characters:
        typer.secho("No kanji found in the input.", fg="yellow")
        raise typer.Exit(1)

    with study_context(config, save=True) as context:
        entries = context.aggregator.add_external_mistakes(characters, grade)

    for entry in entries:
        typer.echo(f"  {entry.character}  ({grade_label(entry.target_grade)})")
    typer.secho(f"Saved {len(entries)} kanji.", fg="green")


@mistakes_app.command("list")
def mistakes_list(ctx: typer.Context, json_output: JsonOption = False):
    """Show the focused review pool."""
    config = _resolve_with_overrides(ctx)

    with study_context(config) as context:
        external = context.aggregator.external_mistakes
        drilled = context.aggregator.drill_mistakes
        focused = context.aggregator.build_focused_candidate_list()

    if json_output:
        typer.echo(
            json.dumps(
                {
                    "external": [
                        {"character": e.character, "target_grade": e.target_grade}
                        for e in external
                    ],
                    "drill": drilled,
                    "focused": [item.character for item in focused],
                },
                ensure_ascii=False,
                indent=2,
            )
        )
        return

    typer.echo(f"School mistakes: {len(external)}")
    for entry in external:
        typer.echo(f"  {entry.character}  ({grade_label(entry.target_grade)})")
    typer.echo(f"Drill mistakes: {len(drilled)}")
    if drilled:
        typer.echo(f"  {''.join(drilled)}")


@mistakes_app.command("clear")
def mistakes_clear(
    ctx: typer.Context,
    drill_channel: Annotated[
        bool, typer.Option("--drill", help="Clear drill mistakes instead of school mistakes.")
    ] = False,
):
    """Clear one channel of the mistake pool."""
    config = _resolve_with_overrides(ctx)

    with study_context(config, save=True) as context:
        if drill_channel:
            context.aggregator.clear_drill_mistakes()
        else:
            context.aggregator.clear_external_mistakes()

    typer.secho(f"Cleared {'drill' if drill_channel else 'school'} mistakes.", fg="green")


# ---------------------------------------------------------------------------
# Config subgroup
# ---------------------------------------------------------------------------


@config_app.command("show")
def config_show(ctx: typer.Context):
    """Display final resolved configuration."""
    config = _resolve_with_overrides(ctx)
    d = {k: str(v) if isinstance(v, Path) else v for k, v in config.model_dump().items()}
    typer.echo(json.dumps(d, indent=2))


if __name__ == "__main__":
    app()
