#!/usr/bin/env python3
"""Run a headless mind-map session and print the settled layout.

Usage:
    python scripts/run_session.py [topic]
    python scripts/run_session.py --offline --expand ecosystem environment

Options:
    --offline   Use the static word lists instead of the LLM
    --remote    Fetch words from a running brainmap API server
    --expand    Words to expand (clicked) after the seed word, in order
    --json      Print the graph snapshot as JSON
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

# Load .env file from project root
project_root = Path(__file__).parent.parent
load_dotenv(project_root / ".env")

# Add src to path
sys.path.insert(0, str(project_root / "src"))

from brainmap.config import TOPICS, settings
from brainmap.render import RecordingSurface
from brainmap.session import MindMapSession
from brainmap.sources.word_source import build_word_source

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def settle(session: MindMapSession, surface: RecordingSurface, max_frames: int) -> int:
    """Step frames until the layout is stable. Returns frames used."""
    for i in range(max_frames):
        if session.frame(surface):
            return i + 1
    return max_frames


async def run(topic: str, expand: list[str], offline: bool, remote: bool, max_frames: int) -> MindMapSession:
    source = build_word_source(offline=offline, remote=remote)
    session = MindMapSession(source)
    surface = RecordingSurface()
    try:
        await session.start(topic)
        frames = settle(session, surface, max_frames)
        print(f"Seed layout settled in {frames} frames")

        for word in expand:
            node = session.store.find(word)
            if node is None:
                print(f"'{word}' is not on the canvas, skipping")
                continue
            result = await session.expand(node)
            frames = settle(session, surface, max_frames)
            print(f"Expanded '{word}': {result.outcome.value}, settled in {frames} frames")
    finally:
        close = getattr(source, "close", None)
        if close is not None:
            await close()
    return session


def print_graph(session: MindMapSession) -> None:
    store = session.store
    print("\n" + "=" * 60)
    print(f"Topic: {session.topic}    focal: {store.focal.text if store.focal else '-'}")
    print("=" * 60)
    for node in store.nodes:
        marker = "*" if node is store.focal else " "
        print(f"{marker} {node.text:<20} ({node.x:7.1f}, {node.y:7.1f})  r={node.radius:<3} {node.state.value}")
    print(f"\n{len(store.nodes)} nodes, {len(store.links)} links")


async def main() -> bool:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Run a headless brainmap session",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"Topics: {', '.join(TOPICS)}",
    )
    parser.add_argument("topic", nargs="?", default=TOPICS[0], help="Topic to explore")
    parser.add_argument("--expand", nargs="*", default=[], help="Words to expand after the seed")
    parser.add_argument("--offline", action="store_true", help="Use static word lists")
    parser.add_argument("--remote", action="store_true", help="Use a running brainmap API server")
    parser.add_argument("--frames", type=int, default=600, help="Max frames per settle")
    parser.add_argument("--json", action="store_true", help="Print the graph snapshot as JSON")
    args = parser.parse_args()

    if args.offline and args.remote:
        print("Error: --offline and --remote are mutually exclusive")
        return False

    try:
        session = await run(args.topic, args.expand, args.offline, args.remote, args.frames)
    except Exception as e:
        logger.exception(f"Session failed: {e}")
        return False

    if args.json:
        print(json.dumps(session.store.snapshot(), indent=2, ensure_ascii=False))
    else:
        print_graph(session)
        print(f"Canvas: {settings.canvas_width}x{settings.canvas_height}")
    return True


if __name__ == "__main__":
    success = asyncio.run(main())
    sys.exit(0 if success else 1)
