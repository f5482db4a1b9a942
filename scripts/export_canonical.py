#!/usr/bin/env python3
"""Export semantic patterns that are ready for canonical knowledge to markdown."""

import argparse
import asyncio
from pathlib import Path

from brain_memory.core.config import load_settings
from brain_memory.core.logging import configure_logfire, get_logger, setup_logging
from brain_memory.services.context import bootstrap
from brain_memory.services.export import export_records

logger = get_logger(__name__)


async def run(target: Path, dry_run: bool) -> None:
    settings = load_settings()
    setup_logging(settings.log_level)
    configure_logfire(settings.logfire_token)

    context = await bootstrap(settings)
    selected = await context.consolidation.canonical_records()
    print(f"Found {len(selected)} patterns ready for canonical export\n")

    for record, candidate in selected:
        print(f"  {record.pattern_id}  evidence={candidate.evidence_count}  confidence={candidate.confidence}")
        print(f"    {candidate.content}")

    if dry_run:
        return

    written = export_records([record for record, _ in selected], target)
    print(f"\nWrote {len(written)} files to {target}")


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("target", type=Path, nargs="?", default=Path("knowledge"))
    parser.add_argument("--dry-run", action="store_true", help="list candidates without writing files")
    args = parser.parse_args()
    asyncio.run(run(args.target, args.dry_run))


if __name__ == "__main__":
    main()
