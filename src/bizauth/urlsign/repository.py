"""Client key repository loaded from '<client> <key>' lines."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from pathlib import Path
from types import MappingProxyType

from bizauth.common.errors import MalformedRepositoryLineError
from bizauth.common.logging import get_logger

logger = get_logger(__name__)


def _iter_lines(source: str | Iterable[str]) -> Iterable[str]:
    if isinstance(source, str):
        return source.splitlines()
    return (line.rstrip("\r\n") for line in source)


def load_key_repository(source: str | Iterable[str]) -> Mapping[str, str]:
    """
    Load client id to key pairs.

    Args:
        source: Repository text, or an iterable of lines such as an open file

    Returns:
        Read-only mapping of client id to URL-safe base64 key. A client id
        listed twice keeps its last key.

    Raises:
        MalformedRepositoryLineError: If a line is not exactly two fields
            separated by a single space
    """
    keys: dict[str, str] = {}
    for number, line in enumerate(_iter_lines(source), start=1):
        if not line or line.startswith("#"):
            continue
        fields = line.split(" ")
        if len(fields) != 2:
            raise MalformedRepositoryLineError(line, number)
        client, key = fields
        if client in keys:
            logger.warning("Duplicate client in key repository", client=client, line=number)
        keys[client] = key
    return MappingProxyType(keys)


def load_key_repository_file(path: str | Path) -> Mapping[str, str]:
    """Load a key repository from a UTF-8 file."""
    repo_path = Path(path)
    with repo_path.open(encoding="utf-8") as f:
        repository = load_key_repository(f)
    logger.info("Loaded key repository", path=str(repo_path), clients=len(repository))
    return repository
