"""
Frameset Persistence Module

Handles saving and loading frameset documents to/from disk.
"""

import logging
import json
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from .errors import ErrorCode, FramesetValidationError
from .models import Frameset, is_frameset

logger = logging.getLogger(__name__)

DEFAULT_APP = "global"


class FramesetPersistence:
    """
    Manages frameset persistence

    Framesets are stored in: <framesets_dir>/<app>/<name>.json
    """

    def __init__(self, framesets_dir: Optional[Path] = None):
        """
        Initialize frameset persistence

        Args:
            framesets_dir: Directory for frameset storage (default: from FramesetConfig)
        """
        if framesets_dir is None:
            from .config import FramesetConfig
            framesets_dir = FramesetConfig.from_environment().storage_dir
        self.framesets_dir = Path(framesets_dir)

    def _path(self, name: str, app: str) -> Path:
        return self.framesets_dir / app / f"{name}.json"

    def save_frameset(
        self,
        frameset: Frameset,
        name: Optional[str] = None,
        app: Optional[str] = None,
    ) -> Path:
        """
        Save frameset to disk

        Args:
            frameset: Frameset to save
            name: File name (default: the frameset's :name property)
            app: Application directory (default: the frameset's :app property)

        Returns:
            Path to saved file

        Raises:
            ValueError: If no name is given and the frameset has none
        """
        name = name or frameset.name
        if not name:
            raise ValueError("Frameset has no name; pass one explicitly")
        app = str(app or frameset.app or DEFAULT_APP)

        app_dir = self.framesets_dir / app
        app_dir.mkdir(parents=True, exist_ok=True)
        filepath = self._path(name, app)

        frameset_dict = frameset.model_dump(mode='python')

        # Window states and attribute values the host hands out are not
        # always JSON types
        with open(filepath, 'w') as f:
            json.dump(frameset_dict, f, indent=2, default=str)

        logger.info(f"Saved frameset: {filepath} ({len(frameset.states)} frame(s))")
        return filepath

    def load_frameset(self, name: str, app: str = DEFAULT_APP) -> Optional[Frameset]:
        """
        Load frameset from disk

        Args:
            name: Frameset name
            app: Application directory (default: "global")

        Returns:
            Frameset or None if not found

        Raises:
            FramesetValidationError: If the file is not a valid frameset
        """
        filepath = self._path(name, app)

        if not filepath.exists():
            logger.warning(f"Frameset not found: {filepath}")
            return None

        try:
            with open(filepath, 'r') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Failed to read frameset {filepath}: {e}")
            raise FramesetValidationError(
                f"Failed to read frameset {filepath}: {e}",
                code=ErrorCode.FRAMESET_READ_ERROR,
            )

        if is_frameset(data) is None:
            logger.error(f"Not a frameset: {filepath}")
            raise FramesetValidationError(f"Not a frameset: {filepath}")

        frameset = Frameset.model_validate(data)
        logger.info(f"Loaded frameset: {filepath}")
        return frameset

    def list_framesets(self, app: Optional[str] = None) -> List[dict]:
        """
        List available framesets

        Args:
            app: Filter by application (optional)

        Returns:
            List of frameset metadata dictionaries
        """
        framesets = []

        if app:
            app_dir = self.framesets_dir / app
            if app_dir.exists():
                framesets.extend(self._list_framesets_in_dir(app_dir, app))
        elif self.framesets_dir.exists():
            for app_dir in sorted(self.framesets_dir.iterdir()):
                if app_dir.is_dir():
                    framesets.extend(self._list_framesets_in_dir(app_dir, app_dir.name))

        return framesets

    def _list_framesets_in_dir(self, app_dir: Path, app: str) -> List[dict]:
        framesets = []

        for frameset_file in sorted(app_dir.glob("*.json")):
            try:
                with open(frameset_file, 'r') as f:
                    data = json.load(f)

                properties = data.get("properties", {})
                framesets.append({
                    "name": frameset_file.stem,
                    "app": app,
                    "description": properties.get(":desc"),
                    "total_frames": len(data.get("states", [])),
                    "valid": is_frameset(data) is not None,
                    "saved_at": datetime.fromtimestamp(frameset_file.stat().st_mtime).isoformat(),
                    "file_path": str(frameset_file),
                })

            except Exception as e:
                logger.warning(f"Failed to read frameset metadata from {frameset_file}: {e}")
                continue

        return framesets

    def delete_frameset(self, name: str, app: str = DEFAULT_APP) -> bool:
        """
        Delete frameset from disk

        Args:
            name: Frameset name
            app: Application directory

        Returns:
            True if deleted, False if not found
        """
        filepath = self._path(name, app)

        if not filepath.exists():
            logger.warning(f"Frameset not found: {filepath}")
            return False

        filepath.unlink()
        logger.info(f"Deleted frameset: {filepath}")
        return True


# Global instance
_persistence_instance: Optional[FramesetPersistence] = None


def get_frameset_persistence() -> FramesetPersistence:
    """
    Get global frameset persistence instance

    Returns:
        FramesetPersistence singleton
    """
    global _persistence_instance
    if _persistence_instance is None:
        _persistence_instance = FramesetPersistence()
    return _persistence_instance


def save_frameset(frameset: Frameset, name: Optional[str] = None, app: Optional[str] = None) -> Path:
    """Convenience function to save a frameset"""
    return get_frameset_persistence().save_frameset(frameset, name, app)


def load_frameset(name: str, app: str = DEFAULT_APP) -> Optional[Frameset]:
    """Convenience function to load a frameset"""
    return get_frameset_persistence().load_frameset(name, app)


def list_framesets(app: Optional[str] = None) -> List[dict]:
    """Convenience function to list framesets"""
    return get_frameset_persistence().list_framesets(app)


def delete_frameset(name: str, app: str = DEFAULT_APP) -> bool:
    """Convenience function to delete a frameset"""
    return get_frameset_persistence().delete_frameset(name, app)
