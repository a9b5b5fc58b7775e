"""Key-value storage backing the portfolio state."""

from pathlib import Path
from typing import Dict, Optional, Protocol
from urllib.parse import quote


CV_DATA_KEY = "cvPortfolioData"
THEME_KEY = "cvPortfolioTheme"


class KeyValueStorage(Protocol):
    """String-keyed slots holding text. No transactions across keys."""

    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


class InMemoryStorage:
    """Storage kept in a dict, lost on restart."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value

    def remove(self, key: str) -> None:
        self.data.pop(key, None)


class FileStorage:
    """Storage keeping one UTF-8 file per key inside a directory."""

    def __init__(self, directory: Path):
        """
        Initialize the file storage.

        Args:
            directory: Directory for the key files, created on first write
        """
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        return self.directory / f"{quote(key, safe='')}.json"

    def get(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set(self, key: str, value: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self._path(key)
        tmp_path = path.with_suffix(".tmp")
        tmp_path.write_text(value, encoding="utf-8")
        tmp_path.replace(path)

    def remove(self, key: str) -> None:
        self._path(key).unlink(missing_ok=True)
