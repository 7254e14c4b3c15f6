"""Filesystem Gateway - Infrastructure implementation of FileSystemProtocol."""

import glob
import logging
import re
from pathlib import Path
from typing import Sequence

logger = logging.getLogger(__name__)

DEFAULT_EXTENSIONS: tuple[str, ...] = ("js", "ts", "jsx", "tsx")
IGNORED_DIRECTORIES: frozenset[str] = frozenset({"node_modules"})

_BRACE = re.compile(r"\{([^{}]*)\}")


class FileSystemGateway:
    """File discovery and reading using glob and pathlib."""

    def __init__(self, extensions: Sequence[str] = DEFAULT_EXTENSIONS) -> None:
        self._extensions = tuple(extensions)

    def default_patterns(self, root: str = ".") -> list[str]:
        """`src/**/*.{exts}` when `src/` exists under root, else `**/*.{exts}`."""
        exts = ",".join(self._extensions)
        if Path(root, "src").is_dir():
            return [f"src/**/*.{{{exts}}}"]
        return [f"**/*.{{{exts}}}"]

    @staticmethod
    def expand_braces(pattern: str) -> list[str]:
        """Expand `{a,b}` alternatives, e.g. `*.{js,ts}` -> [`*.js`, `*.ts`]."""
        match = _BRACE.search(pattern)
        if match is None:
            return [pattern]
        head, tail = pattern[: match.start()], pattern[match.end():]
        expanded: list[str] = []
        for option in match.group(1).split(","):
            expanded.extend(FileSystemGateway.expand_braces(head + option + tail))
        return expanded

    def expand_patterns(self, patterns: Sequence[str]) -> list[str]:
        """Expand patterns into files, de-duplicated in first-seen order."""
        seen: dict[str, None] = {}
        for pattern in patterns:
            for path in self._expand_one(pattern):
                if self._is_ignored(path):
                    continue
                seen.setdefault(path, None)
        return list(seen)

    def _expand_one(self, pattern: str) -> list[str]:
        path = Path(pattern)
        if path.is_file():
            return [str(path)]
        if path.is_dir():
            exts = ",".join(self._extensions)
            return self._expand_one(str(path / f"**/*.{{{exts}}}"))
        matches: list[str] = []
        for variant in self.expand_braces(pattern):
            try:
                matches.extend(sorted(glob.glob(variant, recursive=True)))
            except (OSError, re.error) as exc:
                logger.error("Error while processing file pattern \"%s\": %s", pattern, exc)
        return [m for m in matches if Path(m).is_file()]

    @staticmethod
    def _is_ignored(path: str) -> bool:
        return any(part in IGNORED_DIRECTORIES for part in Path(path).parts)

    def read_text(self, path: str, encoding: str = "utf-8") -> str:
        """Read a file's text content."""
        return Path(path).read_text(encoding=encoding)

    def exists(self, path: str) -> bool:
        return Path(path).exists()
