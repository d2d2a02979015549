from pathlib import Path


class NutcrackerError(Exception):
    """Base user-facing application error."""


class NutcrackerFileError(NutcrackerError):
    def __init__(self, path: Path, message: str) -> None:
        self.path = path
        self.message = message
        super().__init__(f"{message}: {path}")


class InvalidJsonFormatError(NutcrackerFileError):
    def __init__(self, path: Path, detail: str) -> None:
        self.detail = detail
        super().__init__(path=path, message=f"Invalid JSON format ({detail})")


class InvalidConfigSchemaError(NutcrackerFileError):
    def __init__(self, path: Path, detail: str) -> None:
        self.detail = detail
        super().__init__(path=path, message=f"Invalid config schema ({detail})")


class SourceNotFoundError(NutcrackerError):
    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Filter source not found: {key}")


class SourceExistsError(NutcrackerError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Filter source already exists: {name}")


class InvalidSourceError(NutcrackerError):
    """Raised when a filter source definition is rejected."""


class FilterFetchError(NutcrackerError):
    def __init__(self, url: str, detail: str) -> None:
        self.url = url
        self.detail = detail
        super().__init__(f"Failed to fetch {url} ({detail})")
