"""Static extension to language table used for the ``language`` attribute."""

from typing import Dict


PLAINTEXT = "plaintext"

LANGUAGES: Dict[str, str] = {
    ".ts": "typescript",
    ".tsx": "typescriptreact",
    ".js": "javascript",
    ".jsx": "javascriptreact",
    ".mjs": "javascript",
    ".cjs": "javascript",
    ".py": "python",
    ".java": "java",
    ".go": "go",
    ".rs": "rust",
    ".cpp": "cpp",
    ".c": "c",
    ".cs": "csharp",
    ".rb": "ruby",
    ".php": "php",
    ".swift": "swift",
    ".kt": "kotlin",
    ".dart": "dart",
    ".vue": "vue",
    ".svelte": "svelte",
    ".scala": "scala",
    ".sh": "shell",
    ".bash": "shell",
    ".lua": "lua",
    ".ex": "elixir",
}


def language_for(extension: str) -> str:
    """Return the language tag for ``extension`` (with dot), ``plaintext`` when unknown."""
    return LANGUAGES.get(extension.lower(), PLAINTEXT)
