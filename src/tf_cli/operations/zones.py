"""Zone operations - look up environment metadata in the zone document.

The zone document maps environment names to nested attributes:

    {
      "client1": {
        "domain_name": "client1.caascad.com",
        "infra": {"region": "eu-west-3", "account_id": "123456789012"}
      }
    }
"""

import json
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import requests
from requests_file import FileAdapter

from tf_cli.lib.errors import (
    NetworkError,
    ZoneAttributeNotFoundError,
    ZoneDocumentError,
    ZoneError,
    ZoneNotFoundError,
)
from tf_cli.lib.result import Err, Ok, Result
from tf_cli.models import Zone

# (connect, read) timeouts in seconds for the zone document download
DEFAULT_TIMEOUT = (5, 30)

DOMAIN_NAME_PATH = "domain_name"
ACCOUNT_ID_PATH = "infra.account_id"
REGION_PATH = "infra.region"
ALL_ATTRIBUTES = (DOMAIN_NAME_PATH, ACCOUNT_ID_PATH, REGION_PATH)

_MISSING = object()


def lookup(record: Any, path: str) -> Any:
    """Walk a dotted path through nested mappings. Returns _MISSING if absent."""
    current = record
    for part in path.split("."):
        if not isinstance(current, dict) or part not in current:
            return _MISSING
        current = current[part]
    return current


def get_attribute(
    environment: str, record: dict[str, Any], path: str
) -> Result[Any, ZoneAttributeNotFoundError]:
    """Dotted-path accessor on a zone record."""
    value = lookup(record, path)
    if value is _MISSING or value is None:
        return Err(ZoneAttributeNotFoundError(environment, path))
    return Ok(value)


def parse_zone(
    environment: str, record: Any, required: Iterable[str] = ALL_ATTRIBUTES
) -> Result[Zone, ZoneAttributeNotFoundError]:
    """Deserialize one zone record into a Zone.

    infra.account_id and every path in required must be present; other
    attributes default to empty strings.
    """
    if not isinstance(record, dict):
        return Err(ZoneAttributeNotFoundError(environment, ACCOUNT_ID_PATH))

    for path in dict.fromkeys((ACCOUNT_ID_PATH, *required)):
        match get_attribute(environment, record, path):
            case Err() as e:
                return e
            case Ok(_):
                pass

    values: dict[str, str] = {}
    for field_name, path in (
        ("account_id", ACCOUNT_ID_PATH),
        ("domain_name", DOMAIN_NAME_PATH),
        ("region", REGION_PATH),
    ):
        value = lookup(record, path)
        values[field_name] = "" if value is _MISSING or value is None else str(value)

    return Ok(Zone(name=environment, **values))


class ZoneDirectory:
    """
    Zone document loaded at most once per process.

    The URL may be an http(s):// or file:// URL, or a local path.
    """

    def __init__(self, url: str, timeout: tuple[float, float] = DEFAULT_TIMEOUT):
        self.url = url
        self.timeout = timeout
        self._document: dict[str, Any] | None = None

    def _download(self) -> Result[str, NetworkError | ZoneDocumentError]:
        local = Path(self.url).expanduser()
        if local.is_file():
            try:
                return Ok(local.read_text(encoding="utf-8"))
            except OSError as e:
                return Err(NetworkError(self.url, str(e)))
            except UnicodeDecodeError as e:
                return Err(ZoneDocumentError(self.url, f"not UTF-8: {e}"))

        session = requests.Session()
        session.mount("file://", FileAdapter())
        try:
            response = session.get(self.url, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            return Err(NetworkError(self.url, str(e)))
        return Ok(response.text)

    def load(self) -> Result[dict[str, Any], NetworkError | ZoneDocumentError]:
        """Return the parsed zone document, downloading it on first call."""
        if self._document is not None:
            return Ok(self._document)

        match self._download():
            case Err() as e:
                return e
            case Ok(text):
                pass

        try:
            document = json.loads(text)
        except json.JSONDecodeError as e:
            return Err(ZoneDocumentError(self.url, f"invalid JSON: {e}"))
        if not isinstance(document, dict):
            return Err(ZoneDocumentError(self.url, "top-level value is not an object"))

        self._document = document
        return Ok(document)

    def get_zone(
        self, environment: str, required: Iterable[str] = ALL_ATTRIBUTES
    ) -> Result[Zone, ZoneError]:
        """Zone record for environment, or ZoneNotFoundError.

        required names the dotted attribute paths the caller needs.
        """
        match self.load():
            case Err() as e:
                return e
            case Ok(document):
                pass

        if environment not in document:
            return Err(ZoneNotFoundError(environment, self.url))
        return parse_zone(environment, document[environment], required)
