"""
Credential loading from .edgerc files

An .edgerc file groups ``key = value`` bindings under ``[section]`` headers.
Each section holds one credential set: host, client_token, access_token and
client_secret.
"""

import os
import re
import threading
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from ..exceptions import ConfigReadError, SectionNotFoundError, MissingCredentialError
from ..signing.types import Credentials, CREDENTIAL_FIELDS


DEFAULT_SECTION = 'default'
EDGERC_ENV_VAR = 'EDGERC'
DEFAULT_EDGERC_PATH = '~/.edgerc'

_SECTION_PATTERN = re.compile(r'^\s*\[\s*([^\]\s]*)\s*\]\s*$')

ConfigText = Union[str, bytes]


def _section_header(line: str) -> Optional[str]:
    """Return the section name if the line is a section header."""
    match = _SECTION_PATTERN.match(line)
    if match is None:
        return None
    return match.group(1)


def _value_binding(line: str) -> Optional[Tuple[str, str]]:
    """Split a ``key = value`` line at its first ``=``."""
    key, sep, value = line.partition('=')
    if not sep:
        return None
    return key.strip(), value.strip()


def _decode(config_text: Optional[ConfigText]) -> str:
    if config_text is None:
        raise ConfigReadError("No credentials configuration text provided")

    if isinstance(config_text, bytes):
        try:
            return config_text.decode('utf-8')
        except UnicodeDecodeError as e:
            raise ConfigReadError(
                f"Credentials configuration is not valid UTF-8: {e}",
                {"original_error": str(e)}
            ) from e

    if not isinstance(config_text, str):
        raise ConfigReadError(
            f"Credentials configuration must be text, got {type(config_text)}",
            {"config_type": str(type(config_text))}
        )

    return config_text


def load_credentials(config_text: Optional[ConfigText], section: str = DEFAULT_SECTION) -> Credentials:
    """
    Parse one section of .edgerc text into credentials.

    Later bindings of the same key within the section win. Unknown keys and
    lines without ``=`` are skipped.

    Args:
        config_text: Contents of an .edgerc file
        section: Section name to load

    Returns:
        Credentials: Credentials defined by the section

    Raises:
        ConfigReadError: If the text is missing or cannot be decoded
        SectionNotFoundError: If no binding was applied for the section
        MissingCredentialError: If the section does not set ``host``
    """
    text = _decode(config_text)

    values: Dict[str, str] = {}
    current_section = None
    applied = False

    for line in text.split('\n'):
        name = _section_header(line)
        if name is not None:
            current_section = name
            continue

        if current_section != section:
            continue

        binding = _value_binding(line)
        if binding is None:
            continue

        key, value = binding
        if key not in CREDENTIAL_FIELDS:
            continue

        values[key] = value
        applied = True

    if not applied:
        raise SectionNotFoundError(section)

    if not values.get('host'):
        raise MissingCredentialError('host', section)

    return Credentials(**values)


def list_sections(config_text: Optional[ConfigText]) -> List[str]:
    """
    List section names in file order, without duplicates.

    Raises:
        ConfigReadError: If the text is missing or cannot be decoded
    """
    sections: List[str] = []
    for line in _decode(config_text).split('\n'):
        name = _section_header(line)
        if name is not None and name not in sections:
            sections.append(name)
    return sections


def read_edgerc(file_path: Union[str, Path]) -> str:
    """
    Read .edgerc text from a file.

    Raises:
        ConfigReadError: If the file cannot be read or decoded
    """
    path = Path(file_path).expanduser()
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigReadError(
            f"Failed to read credentials file {path}: {e}",
            {"path": str(path), "original_error": str(e)}
        ) from e


def load_credentials_from_file(file_path: Union[str, Path], section: str = DEFAULT_SECTION) -> Credentials:
    """Load one section of an .edgerc file."""
    return load_credentials(read_edgerc(file_path), section)


def resolve_edgerc_path(file_path: Optional[Union[str, Path]] = None) -> Path:
    """
    Resolve the .edgerc location.

    An explicit path wins, then ``$EDGERC``, then ``~/.edgerc``.
    """
    if file_path is None:
        file_path = os.environ.get(EDGERC_ENV_VAR) or DEFAULT_EDGERC_PATH
    return Path(file_path).expanduser()


class CredentialStore:
    """
    Cache of credential sets loaded from one .edgerc source

    Each section is parsed at most once; the resulting immutable credentials
    are shared by every caller.
    """

    def __init__(self, config_text: Optional[ConfigText] = None, file_path: Optional[Union[str, Path]] = None):
        if (config_text is None) == (file_path is None):
            raise ValueError("Provide exactly one of config_text or file_path")

        self._config_text = config_text
        self._file_path = Path(file_path).expanduser() if file_path is not None else None
        self._cache: Dict[str, Credentials] = {}
        self._lock = threading.Lock()

    @classmethod
    def from_text(cls, config_text: ConfigText) -> 'CredentialStore':
        """Create a store over in-memory .edgerc text"""
        return cls(config_text=config_text)

    @classmethod
    def from_file(cls, file_path: Union[str, Path]) -> 'CredentialStore':
        """Create a store over an .edgerc file, read on first use"""
        return cls(file_path=file_path)

    def get(self, section: str = DEFAULT_SECTION) -> Credentials:
        """
        Get credentials for a section, loading them on first use.

        Raises:
            ConfigReadError: If the source cannot be read
            SectionNotFoundError: If the section is not defined
            MissingCredentialError: If the section does not set ``host``
        """
        with self._lock:
            credentials = self._cache.get(section)
            if credentials is None:
                credentials = load_credentials(self._read(), section)
                self._cache[section] = credentials
            return credentials

    def sections(self) -> List[str]:
        """List sections defined by the source"""
        return list_sections(self._read())

    def _read(self) -> ConfigText:
        if self._file_path is not None:
            return read_edgerc(self._file_path)
        return self._config_text
