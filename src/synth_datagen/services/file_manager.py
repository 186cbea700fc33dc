"""
Output directory guard for exports.

Every exported file is resolved inside one base directory, so user-supplied
file names cannot write elsewhere. Files written during an export are tracked
and removed again if the export fails part way.
"""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class ExportFileManager:
    """
    Resolves export paths under ``base_dir`` and rolls back failed writes.

    Usage:
        manager = ExportFileManager(Path("output"))
        path = manager.get_output_path(filename)
        manager.ensure_directory(path)
        manager.track_file(path)
        ...write path...
        manager.reset_tracking()   # keep, or manager.cleanup() to remove
    """

    def __init__(self, base_dir: Path):
        self.base_dir = Path(base_dir).resolve()
        self._written: dict[Path, None] = {}

    def _check_inside(self, path: Path) -> Path:
        resolved = path.resolve()
        if not resolved.is_relative_to(self.base_dir):
            message = f"Path {path} is outside allowed base directory {self.base_dir}"
            logger.error(message)
            raise ValueError(message)
        return resolved

    def get_output_path(self, filename: str) -> Path:
        """
        ``base_dir / filename``, refusing names that resolve outside it.

        Raises:
            ValueError: If the path escapes the base directory
        """
        path = self.base_dir / filename
        self._check_inside(path)
        return path

    def ensure_directory(self, path: Path) -> None:
        """Create the parent directory of the file ``path``."""
        directory = self._check_inside(path).parent
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error(f"Failed to create directory {directory}: {e}")
            raise

    def track_file(self, file_path: Path) -> None:
        self._written[self._check_inside(file_path)] = None

    def get_tracked_files(self) -> list[Path]:
        return list(self._written)

    def reset_tracking(self) -> None:
        """Keep the written files; stop tracking them."""
        self._written.clear()

    def cleanup(self) -> None:
        """Remove tracked files, newest first; failures are logged and skipped."""
        removed = 0
        for file_path in reversed(list(self._written)):
            try:
                file_path.unlink(missing_ok=True)
                removed += 1
            except OSError as e:
                logger.warning(f"Failed to remove {file_path}: {e}")
        if self._written:
            logger.info(f"Export rollback removed {removed} of {len(self._written)} file(s)")
        self._written.clear()
