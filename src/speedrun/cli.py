"""CLI entry point for Spanish Speedrun."""

import json
import random
from typing import Optional

import click

from speedrun.config.settings import Settings


def _context(seed: Optional[int] = None):
    from speedrun.curriculum.repository import load_curriculum

    settings = Settings.load()
    rng = random.Random(seed) if seed is not None else settings.rng()
    return settings, load_curriculum(settings.curriculum_dir), rng


def _progress(settings: Settings):
    from speedrun.state.progress import ProgressStore

    return ProgressStore(
        db_path=settings.progress_db, threshold=settings.session.completion_threshold
    )


def _prompt_for(item) -> Optional[str]:
    """Render an item and return the prompt text, or None for study cards."""
    from speedrun.engine import exercises as ex

    if isinstance(item, ex.RuleIntro):
        rule = item.rule
        click.echo(f"\nRule: {rule.english_suffix} -> {rule.spanish_suffix}")
        click.echo(f"  {rule.description}")
        for sample in rule.examples[:3]:
            click.echo(f"  {sample.english} -> {sample.spanish}")
        return None
    if isinstance(item, ex.FalseCognateWarning):
        fc = item.false_cognate
        click.echo(f"\nWatch out: '{fc.spanish}' looks like '{fc.looks_like}' but means '{fc.actual_meaning}'")
        return None
    if isinstance(item, ex.VerbDisplay):
        verb = item.verb
        c = verb.conjugations
        click.echo(f"\n{verb.infinitive} ({verb.english}): yo {c.yo} / tú {c.tu} / él {c.el}")
        return None
    if isinstance(item, ex.TypeAnswer):
        return f"Spanish for '{item.english}'"
    if isinstance(item, ex.MultipleChoice):
        click.echo(f"\n'{item.english}' in Spanish:")
        for i, option in enumerate(item.options, start=1):
            click.echo(f"  {i}. {option}")
        return "Choice"
    if isinstance(item, ex.VocabChoice):
        click.echo(f"\n'{item.word.spanish}' means:")
        for i, option in enumerate(item.options, start=1):
            click.echo(f"  {i}. {option}")
        return "Choice"
    if isinstance(item, ex.FrameFill):
        click.echo(f"\n{item.frame.template}  ({item.frame.english})")
        words = sorted([item.correct_word, *item.distractors], key=lambda w: w.spanish)
        click.echo("  " + " / ".join(w.spanish for w in words))
        return "Fill the blank"
    if isinstance(item, ex.VerbQuiz):
        return f"{item.person.value} ({item.verb.infinitive})"
    raise TypeError(f"Unknown exercise item: {item!r}")


def _response(item, raw: str):
    from speedrun.engine.exercises import MultipleChoice, VocabChoice

    # Numbered options are shown 1-based
    if isinstance(item, (MultipleChoice, VocabChoice)) and raw.strip().isdigit():
        return int(raw.strip()) - 1
    return raw


@click.group()
def main() -> None:
    """Spanish Speedrun: ten days of compressed Spanish practice."""


@main.command()
def days() -> None:
    """List the days of the program with completion."""
    settings, curriculum, _ = _context()
    progress = _progress(settings)
    for plan in curriculum.all_days():
        pct = progress.day_completion_percent(plan.day)
        click.echo(f"  Day {plan.day}: {plan.title} ({pct}%)")


@main.command()
@click.argument("kind", type=click.Choice(["cognates", "frames", "quiz", "verbs"]))
@click.option("--day", type=int, required=True, help="Program day (1-10)")
@click.option("--seed", type=int, default=None, help="Seed for a reproducible queue")
def queue(kind: str, day: int, seed: Optional[int]) -> None:
    """Print an exercise queue as JSON lines."""
    from speedrun.engine.exercises import exercise_to_dict
    from speedrun.engine.queues import build_queue

    settings, curriculum, rng = _context(seed)
    unlocked = _progress(settings).can_take_quiz(day)
    items = build_queue(kind, curriculum, day, rng, quiz_unlocked=unlocked)
    if kind == "quiz" and not unlocked:
        click.echo("Quiz is locked: finish today's practice first.", err=True)
    for item in items:
        click.echo(json.dumps(exercise_to_dict(item), ensure_ascii=False))


@main.command()
@click.argument("kind", type=click.Choice(["cognates", "frames", "quiz", "verbs"]))
@click.option("--day", type=int, required=True, help="Program day (1-10)")
@click.option("--seed", type=int, default=None, help="Seed for a reproducible queue")
def practice(kind: str, day: int, seed: Optional[int]) -> None:
    """Work through an exercise queue interactively. Enter ? to reveal an answer."""
    from speedrun.engine.exercises import FrameFill, correct_answer
    from speedrun.engine.queues import build_queue
    from speedrun.engine.session import ExerciseSession, compute_score
    from speedrun.state.progress import ExerciseType

    settings, curriculum, rng = _context(seed)
    progress = _progress(settings)
    items = build_queue(kind, curriculum, day, rng, quiz_unlocked=progress.can_take_quiz(day))
    if not items:
        click.echo("Nothing to practice here yet.")
        return

    session = ExerciseSession(items)
    while not session.is_complete:
        item = session.current
        prompt = _prompt_for(item)
        if prompt is None:
            click.prompt("(enter to continue)", default="", show_default=False)
            session.next()
            continue
        raw = click.prompt(prompt, default="", show_default=False)
        expected = correct_answer(item)
        if raw.strip() == "?":
            session.show_answer()
            click.secho(f"  Answer: {expected}", fg="yellow")
            session.record_answer(False)
        elif session.answer(_response(item, raw)):
            click.secho("  Correct!", fg="green")
        else:
            click.secho(f"  Not quite: {expected}", fg="red")
        if isinstance(item, FrameFill):
            click.echo(f"  {item.frame.fill(item.correct_word.spanish)}")

    score = compute_score(session.result)
    progress.record_attempt(day, ExerciseType(kind), score)
    click.echo(f"\nScore: {score}% ({session.result.correct}/{session.result.total})")


@main.command()
@click.option("--day", type=int, default=None, help="Introduce this day's words first")
def review(day: Optional[int]) -> None:
    """Run a flashcard session: new words first, then due reviews."""
    from speedrun.engine.session import build_vocab_session, compute_score
    from speedrun.engine.srs import QUALITY_KNEW_IT, QUALITY_STILL_LEARNING, SrsDeck
    from speedrun.state.cards import CardStore
    from speedrun.state.progress import ExerciseType

    settings, curriculum, _ = _context()
    store = CardStore(db_path=settings.cards_db)
    deck = SrsDeck(store.load())
    new_words = curriculum.words_for_day(day) if day is not None else []
    session = build_vocab_session(
        deck, new_words,
        max_new=settings.session.max_new,
        max_review=settings.session.max_review,
    )
    store.save(deck.cards)

    if session.total == 0:
        click.echo("No cards due. Come back later!")
        return

    click.echo(f"{session.result.new_cards} new, {session.result.review_cards} to review")
    while not session.is_complete:
        card = session.current
        click.prompt(f"\n{card.front}", default="", show_default=False)
        click.echo(f"  = {card.back}")
        knew = click.confirm("  Knew it?", default=True)
        session.answer(QUALITY_KNEW_IT if knew else QUALITY_STILL_LEARNING)
        store.save(deck.cards)

    score = compute_score(session.result)
    if day is not None:
        _progress(settings).record_attempt(day, ExerciseType.VOCAB, score)
    click.echo(f"\nSession done: {score}%")


@main.command()
def stats() -> None:
    """Show card and progress statistics."""
    from speedrun.engine.srs import SrsDeck
    from speedrun.state.cards import CardStore

    settings, curriculum, _ = _context()
    deck = SrsDeck(CardStore(db_path=settings.cards_db).load())
    progress = _progress(settings)

    click.echo(f"Cards: {deck.total_cards()} ({deck.learned_count()} learned)")
    click.echo(f"Reviews: {deck.total_reviews()}")
    click.echo(f"Due now: {deck.due_count()}")
    done = sum(1 for plan in curriculum.all_days() if progress.is_day_complete(plan.day))
    click.echo(f"Days complete: {done}/{len(curriculum.all_days())}")
