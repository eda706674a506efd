"""Typer CLI entrypoint and command definitions for byhand."""

import json
import logging
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError

from byhand.core.defaults import DEFAULT_DATA_DIR
from byhand.core.logging import SanitizingFilter, install_sanitizing_filter

app = typer.Typer()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Keystroke telemetry capture and integrity scoring."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    _install_log_redaction()


def _install_log_redaction() -> None:
    root = logging.getLogger()
    if not any(isinstance(f, SanitizingFilter) for h in root.handlers for f in h.filters):
        install_sanitizing_filter(root, handler_level=True)


def _require_file(path_str: str, what: str) -> Path:
    path = Path(path_str)
    if not path.exists():
        typer.echo(f"{what} not found: {path}", err=True)
        raise typer.Exit(code=1)
    return path


def _load_snapshot(path_str: str):
    from byhand.core.store import read_model_json
    from byhand.core.types import SessionSnapshot

    path = _require_file(path_str, "Snapshot file")
    try:
        return read_model_json(path, SessionSnapshot)
    except ValidationError as exc:
        typer.echo(f"Invalid snapshot {path}: {exc.error_count()} error(s)", err=True)
        raise typer.Exit(code=1)


# -- record -------------------------------------------------------------------


@app.command("record")
def record_cmd(
    script_file: str = typer.Argument(..., help="JSON list of timed input steps"),
    out: str = typer.Option(..., "--out", help="Where to write the finalized snapshot"),
    title: str = typer.Option("", help="Document title"),
    end_ms: Optional[int] = typer.Option(None, "--end-ms", help="Finalize offset (defaults to the last step)"),
) -> None:
    """Replay a recorded input script through a fresh session and finalize it."""
    from byhand.capture.script import SCRIPT_ADAPTER, run_script
    from byhand.core.store import write_model_json

    path = _require_file(script_file, "Script file")
    try:
        steps = SCRIPT_ADAPTER.validate_json(path.read_text("utf-8"))
    except ValidationError as exc:
        typer.echo(f"Invalid script {path}: {exc.error_count()} error(s)", err=True)
        raise typer.Exit(code=1)

    snapshot = run_script(steps, title=title, ended_at_ms=end_ms)
    out_path = write_model_json(snapshot, Path(out))
    typer.echo(f"Recorded {len(snapshot.events)} events, {snapshot.word_count} words")
    typer.echo(f"Integrity score: {snapshot.integrity_score}")
    typer.echo(f"Snapshot written to {out_path}")


# -- score --------------------------------------------------------------------


@app.command("score")
def score_cmd(
    snapshot_file: str = typer.Argument(..., help="Path to a session snapshot JSON"),
    as_json: bool = typer.Option(False, "--json", help="Emit machine-readable JSON"),
) -> None:
    """Recompute and explain the integrity score of a snapshot."""
    from byhand.analysis.integrity import (
        explain_integrity,
        score_band,
        score_integrity,
        words_per_minute,
    )
    from byhand.analysis.metrics import reduce_events
    from byhand.analysis.text import average_word_length
    from byhand.core.time import format_duration

    snapshot = _load_snapshot(snapshot_file)
    metrics = reduce_events(snapshot.events)
    elapsed = snapshot.writing_time_ms
    penalties = explain_integrity(metrics, snapshot.word_count, elapsed)
    score = score_integrity(metrics, snapshot.word_count, elapsed)

    if as_json:
        payload = {
            "sessionId": snapshot.id,
            "metrics": metrics.model_dump(by_alias=True),
            "integrityScore": score,
            "band": str(score_band(score)),
            "penalties": [
                {"rule": str(p.rule), "points": p.points, "detail": p.detail}
                for p in penalties
            ],
            "wordsPerMinute": round(words_per_minute(snapshot.word_count, elapsed), 1),
            "averageWordLength": average_word_length(snapshot.content),
        }
        typer.echo(json.dumps(payload, indent=2))
        return

    typer.echo(f"Session {snapshot.id}: {snapshot.word_count} words in {format_duration(elapsed)}")
    typer.echo(f"  avg interval:   {metrics.avg_keystroke_interval} ms")
    typer.echo(f"  variation:      {metrics.keystroke_variance:.2f}")
    typer.echo(f"  pauses:         {metrics.pause_count}")
    typer.echo(f"  deletion rate:  {metrics.deletion_rate:.2f}")
    typer.echo(f"  blocked pastes: {metrics.blocked_pastes}")
    typer.echo(f"  longest burst:  {metrics.longest_burst}")
    for p in penalties:
        typer.echo(f"  -{p.points:<3} {p.rule}: {p.detail}")
    typer.echo(f"Integrity score: {score}/100 ({score_band(score)})")
    if score != snapshot.integrity_score:
        typer.echo(f"Stored score differs: {snapshot.integrity_score}", err=True)


# -- replay -------------------------------------------------------------------


@app.command("replay")
def replay_cmd(
    snapshot_file: str = typer.Argument(..., help="Path to a session snapshot JSON"),
    every: int = typer.Option(1, min=1, help="Print every Nth frame"),
) -> None:
    """Print the incremental text reconstruction of a snapshot."""
    from byhand.playback.replay import Playback

    snapshot = _load_snapshot(snapshot_file)
    playback = Playback(snapshot.events, snapshot.content)
    for i, frame in enumerate(playback):
        if i % every == 0 or frame.progress == 100:
            typer.echo(f"[{frame.progress:3d}%] {frame.text!r}")


# -- certify ------------------------------------------------------------------


@app.command("certify")
def certify_cmd(
    snapshot_file: str = typer.Argument(..., help="Path to a session snapshot JSON"),
    out: str = typer.Option(..., "--out", help="Where to write the certified document"),
    title: Optional[str] = typer.Option(None, help="Override the snapshot title"),
    data_dir: str = typer.Option(DEFAULT_DATA_DIR, help="Directory holding config.json"),
    force: bool = typer.Option(False, "--force", help="Certify even below the minimum word count"),
) -> None:
    """Build a certified document from a finalized snapshot."""
    from byhand.core.config import UserConfig
    from byhand.core.store import write_model_json
    from byhand.export.document import certify

    snapshot = _load_snapshot(snapshot_file)
    cfg = UserConfig(data_dir)

    if snapshot.word_count < cfg.min_words and not force:
        typer.echo(
            f"Snapshot has {snapshot.word_count} words; at least {cfg.min_words} required",
            err=True,
        )
        raise typer.Exit(code=1)

    try:
        document = certify(snapshot, title=title, author_id=cfg.author_id)
    except ValueError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1)

    out_path = write_model_json(document, Path(out))
    typer.echo(f"Verification ID: {document.verification_id}")
    typer.echo(f"Integrity score: {document.integrity_score}")
    typer.echo(f"Document written to {out_path}")


# -- verify -------------------------------------------------------------------


@app.command("verify")
def verify_cmd(
    document_file: str = typer.Argument(..., help="Path to a certified document JSON"),
) -> None:
    """Re-derive a certified document's score and check it against the stored values."""
    from byhand.core.store import read_model_json
    from byhand.core.types import CertifiedDocument
    from byhand.export.document import verify_document

    path = _require_file(document_file, "Document file")
    try:
        document = read_model_json(path, CertifiedDocument)
    except ValidationError as exc:
        typer.echo(f"Invalid document {path}: {exc.error_count()} error(s)", err=True)
        raise typer.Exit(code=1)

    result = verify_document(document)
    typer.echo(f"{result.verification_id}: status={result.status}")
    typer.echo(f"  recomputed: {result.recomputed_score} ({result.band})")
    typer.echo(f"  metrics:    {'ok' if result.metrics_match else 'MISMATCH'}")
    typer.echo(f"  score:      {'ok' if result.score_match else 'MISMATCH'}")
    typer.echo(f"  word count: {'ok' if result.word_count_match else 'MISMATCH'}")
    typer.echo(f"  content:    {'ok' if result.content_hash_match else 'MISMATCH'}")

    if not result.is_valid:
        typer.echo("Verification FAILED", err=True)
        raise typer.Exit(code=1)
    typer.echo("Verification passed")


# -- config -------------------------------------------------------------------


@app.command("config")
def config_cmd(
    data_dir: str = typer.Option(DEFAULT_DATA_DIR, help="Directory holding config.json"),
    author_name: Optional[str] = typer.Option(None, help="Set the display name"),
    min_words: Optional[int] = typer.Option(None, help="Set the minimum word count for certification"),
) -> None:
    """Show (and optionally update) the per-install configuration."""
    from byhand.core.config import UserConfig

    cfg = UserConfig(data_dir)
    patch: dict[str, object] = {}
    if author_name is not None:
        patch["author_name"] = author_name
    if min_words is not None:
        patch["min_words"] = min_words

    try:
        data = cfg.update(patch) if patch else cfg.as_dict()
    except ValueError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1)
    typer.echo(json.dumps(data, indent=2))


if __name__ == "__main__":
    app()
