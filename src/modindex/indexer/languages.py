"""Language detection by file extension or special file name."""

from pathlib import Path


# --- Extension to language mapping ---

EXT_MAP: dict[str, str] = {
    # Python
    ".py": "python", ".pyw": "python", ".pyi": "python",
    # JavaScript / TypeScript
    ".js": "javascript", ".mjs": "javascript", ".cjs": "javascript",
    ".jsx": "javascript",
    ".ts": "typescript", ".tsx": "typescript",
    # Rust
    ".rs": "rust",
    # Go
    ".go": "go",
    # JVM
    ".java": "java", ".kt": "kotlin", ".scala": "scala",
    # Ruby
    ".rb": "ruby",
    # C / C++
    ".c": "c", ".h": "c",
    ".cpp": "cpp", ".cc": "cpp", ".cxx": "cpp",
    ".hpp": "cpp",
    # C#
    ".cs": "csharp",
    # PHP / Swift
    ".php": "php", ".swift": "swift",
    # Web
    ".html": "html", ".htm": "html",
    ".css": "css", ".scss": "css", ".less": "css",
    # Config / Data
    ".yaml": "yaml", ".yml": "yaml",
    ".json": "json",
    ".xml": "xml",
    # Shell
    ".sh": "shell", ".bash": "shell",
    # DB
    ".sql": "sql",
    # Infra
    ".tf": "terraform",
}

# Special names (without extension)
SPECIAL_NAMES: dict[str, str] = {
    "dockerfile": "docker",
    "makefile": "makefile",
    "gemfile": "ruby",
    "rakefile": "ruby",
}


def detect_language(path: Path) -> str | None:
    """Detect the language of a file by special name, then by extension.

    Returns:
        Language key, or None when the file is not source of a known language
    """
    name_lower = path.name.lower()
    if name_lower in SPECIAL_NAMES:
        return SPECIAL_NAMES[name_lower]
    return EXT_MAP.get(path.suffix.lower())
