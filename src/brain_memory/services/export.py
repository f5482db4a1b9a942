"""Markdown export of canonical candidates for manual review."""

import re
from pathlib import Path

from brain_memory.domain.models import PatternRecord

_FRONT_MATTER_FIELDS = ("confidence", "evidence_count", "source", "created_at", "last_validated")


def slugify(text: str, length: int = 60) -> str:
    slug = re.sub(r"[^a-z0-9]+", "-", text.lower()).strip("-")
    return slug[:length].rstrip("-") or "pattern"


def render_markdown(record: PatternRecord) -> str:
    """One markdown document per pattern: YAML front matter, then the content."""
    lines = ["---", f"pattern_id: {record.pattern_id}", f"category: {record.category}"]
    for field in _FRONT_MATTER_FIELDS:
        value = record.metadata.get(field)
        if value is not None:
            lines.append(f"{field}: {value}")
    tags = record.metadata.get("tags") or []
    if tags:
        lines.append(f"tags: [{', '.join(tags)}]")
    lines.append("---")
    lines.append("")
    lines.append(record.content.rstrip())

    contexts = record.metadata.get("validation_contexts") or []
    if contexts:
        lines.extend(["", "# Validated In", *(f"- {context}" for context in contexts)])
    return "\n".join(lines) + "\n"


def export_records(records: list[PatternRecord], target: Path) -> list[Path]:
    """Write each record under ``target/<category>/``. Existing files are left alone."""
    written: list[Path] = []
    for record in records:
        directory = target / (record.category or "uncategorized")
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / f"{slugify(record.content)}.md"
        if path.exists():
            continue
        path.write_text(render_markdown(record), encoding="utf-8")
        written.append(path)
    return written
