"""Run a real annotation call against a short sample article.

Usage (from repo root, with OPENCALAIS_API_TOKEN set in .env):
    python scripts/annotate_demo.py
"""

from __future__ import annotations

import sys
from pathlib import Path

PROJECT_DIR = Path(__file__).resolve().parents[1]
if str(PROJECT_DIR) not in sys.path:
    sys.path.insert(0, str(PROJECT_DIR))

from opencalais.annotation.errors import AnnotationError
from opencalais.services.annotation import get_default_client


def _demo_document() -> dict[str, str]:
    return {
        "title": "As Macron heads to U.S., 'strong relationship' with Trump under test",
        "abstract": (
            "PARIS (Reuters) - When France's ambassador to Washington told American officials last July "
            "that he was heading to Paris and would shortly see President Emmanuel Macron, one of them "
            "handed him a copy of the New York Times."
        ),
        "body": (
            "As he arrives in Washington on Monday for a three-day state visit, that good rapport will be "
            "tested as Macron tries to sway Trump on key issues from Syria to Iran and trade.\n"
            "Macron has spoken to Trump by phone in the last year more than with any other leader, "
            "including German Chancellor Angela Merkel.\n"
            "U.S. companies overtook German ones as the top corporate investors in the French economy "
            "last year, with U.S. investments up 26 percent."
        ),
    }


def main() -> int:
    try:
        client = get_default_client()
        client.set_input_content_type("text/xml")
        entities = client.get_entities(_demo_document())
        # Every collection is filled by the first call.
        topics = client.get_topics()
        social_tags = client.get_social_tags()
    except AnnotationError as exc:
        print(f"Error : {exc}", file=sys.stderr)
        return 1

    if topics:
        print("TOPICS")
        for name, topic in topics.items():
            print(f"{name} ({topic.score})")
    if entities:
        print("ENTITIES")
        for entity_type, by_name in entities.items():
            print(entity_type)
            for name, entity in by_name.items():
                print(f"\t{name} ({entity.relevance})")
    if social_tags:
        print("SOCIAL TAGS")
        for name, tag in social_tags.items():
            print(f"{name} ({tag.importance})")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
