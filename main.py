"""Main entry point for SpeakEasy."""

import argparse
import asyncio
import logging
import random
import sys
from datetime import date
from typing import List, Optional

import config
from data.passages import get_passage_by_id
from database.manager import DatabaseManager
from database.migrations import initialize_database
from practice.contributions import contribution_months
from practice.errors import SpeakEasyError, TranscriptionError
from practice.filters import FilterType, filter_items
from practice.scoring import build_score_record, score_band, score_breakdown
from utils.formatters import (
    format_percentage,
    format_time,
    highlight_spans,
    render_grid,
    truncate_text,
)
from utils.text_similarity import normalize_text

logger = logging.getLogger("speakeasy")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="speakeasy", description="Read-aloud practice tracker")
    parser.add_argument("--db", default=config.DATABASE_PATH, help="SQLite database path")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("init", help="Create tables and seed preset passages")
    sub.add_parser("topics", help="List topics")

    p = sub.add_parser("import", help="Import a JSON file of passages as a new topic")
    p.add_argument("json_path")
    p.add_argument("--name", required=True)
    p.add_argument("--description", default="")

    p = sub.add_parser("delete-topic", help="Delete a topic and everything in it")
    p.add_argument("topic_id", type=int)

    p = sub.add_parser("items", help="List practice items")
    p.add_argument("--topic", type=int, default=None)
    p.add_argument("--search", default="")
    p.add_argument("--filter", choices=[f.value for f in FilterType], default=FilterType.ALL.value)

    p = sub.add_parser("score", help="Score a transcription against a passage")
    source = p.add_mutually_exclusive_group(required=True)
    source.add_argument("--reference", help="Reference text")
    source.add_argument("--passage", type=int, help="Preset passage id")
    p.add_argument("transcribed")

    p = sub.add_parser("record", help="Log a recording of an item and score it")
    p.add_argument("item_id", type=int)
    p.add_argument("audio_path")
    p.add_argument("--text", help="Use this transcription instead of running Whisper")
    p.add_argument("--duration", type=float, default=0.0)

    p = sub.add_parser("daily", help="Show today's practice item")
    p.add_argument("--seed", type=int, default=None)

    p = sub.add_parser("stats", help="Practice count and best score per item")
    p.add_argument("--topic", type=int, default=None)

    sub.add_parser("history", help="Practised items grouped by day")

    p = sub.add_parser("grid", help="Contribution heatmap")
    p.add_argument("--months", type=int, default=config.CONTRIBUTION_MONTHS)

    return parser


def print_score(reference_text: str, transcribed_text: str, record) -> None:
    breakdown = score_breakdown(reference_text, transcribed_text)
    print(f"Score: {format_percentage(record.match_score)} ({score_band(record.match_score)})")
    print(
        f"Reference: {breakdown.reference_count} chars, "
        f"recognised: {breakdown.transcribed_count}, "
        f"correct: {breakdown.correct_count}, missed: {breakdown.error_count}"
    )
    print(highlight_spans(normalize_text(transcribed_text), record.mismatched_words))


async def transcribe(audio_path: str) -> str:
    # Whisper is an optional extra; only load it when actually transcribing
    try:
        from voice.speech_to_text import WhisperSTT
    except ImportError as e:
        raise TranscriptionError("Install speakeasy[transcribe] to transcribe audio") from e

    stt = WhisperSTT(config.WHISPER_MODEL, config.WHISPER_LANGUAGE)
    return await stt.transcribe(audio_path)


async def run(args: argparse.Namespace) -> int:
    manager = DatabaseManager(args.db)

    if args.command == "init":
        await initialize_database(args.db)
        print(f"Database ready at {args.db}")

    elif args.command == "topics":
        for topic in await manager.load_topics():
            preset = " (preset)" if topic.is_preset else ""
            print(f"#{topic.id} {topic.name}{preset}: {topic.practice_count} items")

    elif args.command == "import":
        topic_id = await manager.import_topic_json(args.json_path, args.name, args.description)
        print(f"Imported into topic #{topic_id}")

    elif args.command == "delete-topic":
        await manager.delete_topic(args.topic_id)
        print(f"Deleted topic #{args.topic_id}")

    elif args.command == "items":
        items = await manager.load_practice_items(args.topic)
        latest = await manager.load_latest_recording_times()
        for item in filter_items(items, args.search, FilterType(args.filter), latest):
            mark = "✓" if item.is_read else " "
            print(f"{mark} #{item.id} {item.title}: {truncate_text(item.content, 30)}")

    elif args.command == "score":
        if args.passage is not None:
            passage = get_passage_by_id(args.passage)
            if passage is None:
                raise SpeakEasyError(f"No preset passage #{args.passage}")
            reference = passage['content']
        else:
            reference = args.reference
        print_score(reference, args.transcribed, build_score_record("", reference, args.transcribed))

    elif args.command == "record":
        item = await manager.get_practice_item(args.item_id)
        if item is None:
            raise SpeakEasyError(f"No practice item #{args.item_id}")
        text = args.text if args.text is not None else await transcribe(args.audio_path)
        recording = await manager.save_recording(item.id, args.audio_path, duration=args.duration)
        record = build_score_record(recording.id, item.content, text)
        await manager.save_score(record)
        print(f"Recorded {item.title} ({format_time(args.duration)})")
        print_score(item.content, text, record)

    elif args.command == "daily":
        rng = random.Random(args.seed)
        selection = await manager.load_today_item(date.today(), rng)
        if selection.item is None:
            print("Nothing left to practise today")
        else:
            status = "done" if selection.completed else "to do"
            print(f"Today ({status}): #{selection.item.id} {selection.item.title}")
            print(selection.item.content)

    elif args.command == "stats":
        items = {item.id: item for item in await manager.load_practice_items(args.topic)}
        stats = await manager.load_practice_stats(args.topic)
        for item_id in sorted(stats):
            entry = stats[item_id]
            print(f"#{item_id} {items[item_id].title}: {entry.practice_count} practices, best {entry.highest_score}%")

    elif args.command == "history":
        for daily in await manager.load_practice_history():
            titles = ", ".join(item.title for item in daily.items)
            print(f"{daily.day.isoformat()}: {titles}")

    elif args.command == "grid":
        weeks = await manager.load_contributions(date.today(), args.months)
        print(render_grid(weeks, contribution_months(weeks)))

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Parse arguments and run a command."""
    logging.basicConfig(
        level=getattr(logging, config.LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    args = build_parser().parse_args(argv)
    try:
        return asyncio.run(run(args))
    except SpeakEasyError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nStopped by user.")
        return 130


if __name__ == "__main__":
    sys.exit(main())
