"""File-based key-value storage adapter."""

from pathlib import Path


class JsonFileStore:
    """
    File-based key-value storage.

    Implements KeyValueStore protocol. Each key gets its own JSON file.
    """

    def __init__(self, directory: Path | str):
        self.directory = Path(directory).expanduser()
        self.directory.mkdir(parents=True, exist_ok=True)

    def _path_for_key(self, key: str) -> Path:
        """Get the file path for a given key."""
        return self.directory / f"{key}.json"

    def get(self, key: str) -> str | None:
        path = self._path_for_key(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set(self, key: str, value: str) -> None:
        path = self._path_for_key(key)
        tmp = path.with_suffix(".json.tmp")
        tmp.write_text(value, encoding="utf-8")
        tmp.replace(path)
