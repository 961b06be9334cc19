"""
Result Storage
==============
Writes fetched parse results to disk.

Directory Layout:
    {output_dir}/
    ├── {name}.md               # Markdown returned by the service
    └── {name}_metadata.json    # Job credits / page usage
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Union

from .models import ParseResult

logger = logging.getLogger(__name__)


def result_name(source: Union[str, Path]) -> str:
    """Filesystem-safe stem for a source document or job id."""
    name = Path(str(source)).stem
    clean_name = "".join(
        c if c.isalnum() or c in "-_" else "_"
        for c in name
    )
    return clean_name[:50] or "result"


def save_result(
    result: ParseResult,
    output_dir: Union[str, Path],
    name: str,
) -> Path:
    """
    Save markdown and metadata for a parse result.
    Returns the path of the markdown file.
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    markdown_file = output_dir / f"{name}.md"
    markdown_file.write_text(result.markdown, encoding="utf-8")
    logger.info(f"Saved markdown: {markdown_file}")

    metadata_file = output_dir / f"{name}_metadata.json"
    with open(metadata_file, "w", encoding="utf-8") as f:
        json.dump(
            result.job_metadata.model_dump(),
            f,
            indent=2,
            ensure_ascii=False,
        )
    logger.info(f"Saved metadata: {metadata_file}")

    return markdown_file
