"""
File discovery and file reading — the engine's filesystem collaborators.

The engine only depends on the call signatures here; tests and the HTTP API
substitute in-memory versions.
"""

from __future__ import annotations

import asyncio
import fnmatch
import logging
from collections.abc import Sequence
from pathlib import Path

from constraint_engine.core.errors import DiscoveryError, FileAccessError

logger = logging.getLogger("constraint_engine.discovery")


def expand_braces(pattern: str) -> list[str]:
    """Expand `{a,b}` alternatives: `**/*.{ts,js}` -> `**/*.ts`, `**/*.js`."""
    start = pattern.find("{")
    if start == -1:
        if "}" in pattern:
            raise DiscoveryError(pattern, "unbalanced '}'")
        return [pattern]

    depth = 0
    for end in range(start, len(pattern)):
        if pattern[end] == "{":
            depth += 1
        elif pattern[end] == "}":
            depth -= 1
            if depth == 0:
                break
    else:
        raise DiscoveryError(pattern, "unbalanced '{'")

    head, body, tail = pattern[:start], pattern[start + 1 : end], pattern[end + 1 :]
    expanded: list[str] = []
    for option in _split_top_level(body):
        expanded.extend(expand_braces(head + option + tail))
    return expanded


def split_patterns(text: str) -> list[str]:
    """Split a comma-separated pattern list, leaving `{a,b}` groups intact."""
    return [p.strip() for p in _split_top_level(text) if p.strip()]


def is_excluded(relative_path: str, exclude_patterns: Sequence[str]) -> bool:
    """Glob-match a root-relative posix path against exclusion globs."""
    # Leading slash lets `**/node_modules/**` match a top-level node_modules
    anchored = "/" + relative_path
    return any(
        fnmatch.fnmatchcase(relative_path, p) or fnmatch.fnmatchcase(anchored, p)
        for p in exclude_patterns
    )


def discover_files(
    patterns: Sequence[str],
    project_root: str | Path,
    exclude_patterns: Sequence[str] = (),
) -> list[str]:
    """
    Expand glob patterns under the project root into resolved file paths.

    Results keep pattern order (sorted within each pattern) and are
    de-duplicated. Raises DiscoveryError for unusable patterns or roots.
    """
    root = Path(project_root).resolve()
    if not root.is_dir():
        raise DiscoveryError(str(project_root), "project root is not a directory")

    found: dict[str, None] = {}
    for raw in patterns:
        for pattern in expand_braces(raw.strip()):
            if not pattern:
                raise DiscoveryError(raw, "empty pattern")
            try:
                matches = sorted(root.glob(pattern))
            except (ValueError, NotImplementedError) as e:
                raise DiscoveryError(pattern, str(e)) from e

            for path in matches:
                if not path.is_file():
                    continue
                relative = path.relative_to(root).as_posix()
                if is_excluded(relative, exclude_patterns):
                    continue
                found.setdefault(str(path.resolve()), None)

    logger.debug(f"Discovered {len(found)} files for patterns {list(patterns)}")
    return list(found)


async def read_source(file_path: str | Path) -> str:
    """Read a file as UTF-8 text off the event loop."""
    try:
        return await asyncio.to_thread(Path(file_path).read_text, encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise FileAccessError(str(file_path), e) from e


def _split_top_level(body: str) -> list[str]:
    parts: list[str] = []
    depth = 0
    current = ""
    for ch in body:
        if ch == "," and depth == 0:
            parts.append(current)
            current = ""
            continue
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
        current += ch
    parts.append(current)
    return parts
