#!/usr/bin/env python3
"""
Process conversation transcripts into persona pattern files.

Reads a timestamped transcript, writes the processed patterns as JSON
(plus one file per persona and a conversation-examples digest), and prints
processing statistics. Point PATTERNS_PATH at the main output file to have
the API preload it.

    python process_transcripts.py conversations.md --output-dir data/
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from conversate.services.conversation_data_processor import ConversationDataProcessor

logger = logging.getLogger(__name__)

PERSONAS = ("maya", "alex", "luna")
PERSONA_TITLES = {
    "maya": "Maya (Patient Teacher)",
    "alex": "Alex (Conversational Friend)",
    "luna": "Luna (Cultural Guide)",
}


def extract_example(pattern) -> dict:
    """Compact digest of a pattern for browsing."""
    return {
        "id": pattern.id,
        "scenario": pattern.scenario,
        "context": pattern.context.model_dump(),
        "sample_dialogue": [
            {"speaker": s.speaker, "content": s.content, "intent": s.intent}
            for s in pattern.dialogue_segments[:3]
        ],
        "key_vocabulary": [w.model_dump() for v in pattern.vocabulary_patterns for w in v.words[:3]],
        "grammar_focus": [g.pattern for g in pattern.grammar_structures],
        "cultural_notes": [c.aspect for c in pattern.cultural_elements],
    }


def persona_examples(processor: ConversationDataProcessor, persona: str) -> dict:
    relevant = processor.get_patterns_for_persona(persona)
    by_scenario: dict[str, list] = {}
    for pattern in relevant:
        by_scenario.setdefault(pattern.scenario, []).append(extract_example(pattern))
    return {
        "total_examples": len(relevant),
        "by_difficulty": {
            level: [extract_example(p) for p in relevant if p.difficulty == level]
            for level in ("beginner", "intermediate", "advanced")
        },
        "by_scenario": by_scenario,
    }


def print_stats(stats: dict) -> None:
    by_difficulty = stats["by_difficulty"]
    print("\nProcessing statistics:")
    print(f"- Total patterns: {stats['total_patterns']}")
    print(
        f"- By difficulty: Beginner ({by_difficulty.get('beginner', 0)}), "
        f"Intermediate ({by_difficulty.get('intermediate', 0)}), "
        f"Advanced ({by_difficulty.get('advanced', 0)})"
    )
    scenarios = ", ".join(f"{k} ({v})" for k, v in stats["by_scenario"].items())
    print(f"- By scenario: {scenarios or 'none'}")
    print(f"- Vocabulary items: {stats['vocabulary_items']}")
    print(f"- Grammar structures: {stats['grammar_structures']}")
    print(f"- Cultural elements: {stats['cultural_elements']}")
    print("\nPersona mappings:")
    for persona in PERSONAS:
        print(f"- {PERSONA_TITLES[persona]}: {stats['persona_matches'][persona]} relevant patterns")


def write_json(path: Path, data) -> None:
    path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
    print(f"Saved {path}")


def run(transcript_path: Path, output_dir: Path) -> dict:
    processor = ConversationDataProcessor()
    patterns = processor.process_transcript_file(transcript_path.read_text(encoding="utf-8"))
    print(f"Processed {len(patterns)} conversation patterns")

    stats = processor.processing_stats()
    print_stats(stats)

    output_dir.mkdir(parents=True, exist_ok=True)
    (output_dir / "processed-conversation-patterns.json").write_text(processor.dump_patterns(), encoding="utf-8")
    print(f"\nSaved {output_dir / 'processed-conversation-patterns.json'}")

    for persona in PERSONAS:
        persona_patterns = processor.get_patterns_for_persona(persona)
        (output_dir / f"{persona}-conversation-patterns.json").write_text(
            processor.dump_patterns(persona_patterns), encoding="utf-8"
        )
        print(f"Saved {persona} patterns ({len(persona_patterns)} patterns)")

    write_json(
        output_dir / "conversation-examples.json",
        {persona: persona_examples(processor, persona) for persona in PERSONAS},
    )
    return stats


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Process conversation transcripts into persona patterns")
    parser.add_argument("transcript", type=Path, help="Timestamped transcript file")
    parser.add_argument("--output-dir", type=Path, default=Path("data"), help="Where to write JSON files")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    if not args.transcript.is_file():
        print(f"Transcript not found: {args.transcript}", file=sys.stderr)
        return 1
    run(args.transcript, args.output_dir)
    return 0


if __name__ == "__main__":
    sys.exit(main())
