import os
from pathlib import Path


# ============================================================================
# File Processor
# ============================================================================


class FileProcessor:
    """Path normalization and artifact persistence helpers."""

    @staticmethod
    def relative_posix(path: Path, root: Path) -> str:
        """
        Return ``path`` relative to ``root`` using forward slashes.

        Args:
            path: Absolute path under ``root``
            root: Scan root

        Returns:
            Relative path such as ``src/app/main.ts`` regardless of host separator
        """
        return path.relative_to(root).as_posix()

    @staticmethod
    def display_path(relative_path: str) -> str:
        """Printable form of a path whose undecodable bytes appear as ``\\xNN``."""
        return os.fsencode(relative_path).decode("utf-8", "backslashreplace")

    @staticmethod
    def extension_of(path: Path) -> str:
        """Lower-cased suffix including the dot, or ``""``."""
        return path.suffix.lower()

    @staticmethod
    def write_artifact(content: str, root: Path, file_name: str) -> Path:
        """
        Write the serialized artifact to ``root / file_name``.

        The file is written to a temporary sibling first and then moved into
        place, so a reader never sees a half-written document. If writing
        fails the temporary file is removed and the error is re-raised.

        Returns:
            Path to the written file
        """
        output_path = root / file_name
        temp_path = output_path.parent / (output_path.stem + "_tmp" + output_path.suffix)
        try:
            with open(temp_path, "w", encoding="utf-8", newline="") as f:
                f.write(content)
            temp_path.replace(output_path)
        except Exception:
            temp_path.unlink(missing_ok=True)
            raise
        return output_path
