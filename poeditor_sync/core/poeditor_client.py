"""POEditor API v2 client."""

import json
import logging
import socket
import ssl
import urllib.error
import urllib.parse
import urllib.request
from typing import AbstractSet, Any, Dict, Optional

import certifi

from .errors import RemoteRejected, TransportError
from .term_store import ExportFormat, KeySet, RemoteTermStore, TermCounts

logger = logging.getLogger(__name__)

# SSL context for secure connections
SSL_CONTEXT = ssl.create_default_context(cafile=certifi.where())

DEFAULT_BASE_URL = "https://api.poeditor.com/v2/"
DEFAULT_TIMEOUT = 30.0


class POEditorClient(RemoteTermStore):
    """
    RemoteTermStore backed by the POEditor HTTP API.

    Every API call is a form-encoded POST carrying ``api_token`` and ``id``;
    the JSON answer is wrapped in ``{"response": {...}, "result": {...}}``.
    """

    USER_AGENT = "poeditor-sync"

    def __init__(
        self,
        token: str,
        project_id: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT
    ):
        """
        Initialize the client.

        Args:
            token: POEditor API token
            project_id: POEditor project id
            base_url: API root (ends with a slash)
            timeout: Socket timeout in seconds for every request
        """
        self.token = token
        self.project_id = str(project_id)
        self.base_url = base_url if base_url.endswith('/') else base_url + '/'
        self.timeout = timeout

    # RemoteTermStore

    def list_terms(self, language: str) -> KeySet:
        result = self._call('terms/list', {'language': language})
        terms = result.get('terms')
        if terms is None:
            # An empty project answers without a terms list
            return frozenset()
        if not isinstance(terms, list):
            raise RemoteRejected("terms/list: 'terms' is not a list")

        keys = set()
        for entry in terms:
            if not isinstance(entry, dict) or not isinstance(entry.get('term'), str):
                raise RemoteRejected(f"terms/list: malformed term entry {entry!r}")
            keys.add(entry['term'])
        return frozenset(keys)

    def add_terms(self, keys: AbstractSet[str]) -> TermCounts:
        return self._mutate_terms('terms/add', keys, 'added')

    def delete_terms(self, keys: AbstractSet[str]) -> TermCounts:
        return self._mutate_terms('terms/delete', keys, 'deleted')

    def request_export(self, language: str, export_format: ExportFormat) -> str:
        result = self._call('projects/export', {
            'language': language,
            'type': export_format.value,
        })
        url = result.get('url')
        if not isinstance(url, str) or not url:
            raise RemoteRejected("projects/export: response has no download url")
        return url

    def fetch_export(self, url: str) -> bytes:
        request = urllib.request.Request(url, headers={'User-Agent': self.USER_AGENT})
        logger.debug("GET %s", url)
        return self._open(request, url)

    # Internals

    def _mutate_terms(self, endpoint: str, keys: AbstractSet[str], count_field: str) -> TermCounts:
        payload = json.dumps([{'term': key} for key in sorted(keys)], ensure_ascii=False)
        result = self._call(endpoint, {'data': payload})

        terms = result.get('terms')
        if not isinstance(terms, dict):
            raise RemoteRejected(f"{endpoint}: response has no term counts")

        try:
            parsed = int(terms.get('parsed', 0))
            succeeded = int(terms[count_field])
        except (KeyError, TypeError, ValueError) as e:
            raise RemoteRejected(f"{endpoint}: invalid '{count_field}' count ({e})") from e

        return TermCounts(requested=len(keys), parsed=parsed, succeeded=succeeded)

    def _call(self, endpoint: str, fields: Dict[str, str]) -> Dict[str, Any]:
        """POST to ``endpoint`` and return the ``result`` object of a successful answer."""
        url = urllib.parse.urljoin(self.base_url, endpoint)
        form = {'api_token': self.token, 'id': self.project_id}
        form.update(fields)

        request = urllib.request.Request(
            url,
            data=urllib.parse.urlencode(form).encode('utf-8'),
            headers={
                'User-Agent': self.USER_AGENT,
                'Content-Type': 'application/x-www-form-urlencoded',
            },
            method='POST'
        )
        logger.debug("POST %s", url)

        body = self._open(request, endpoint)

        try:
            data = json.loads(body.decode('utf-8'))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise RemoteRejected(f"{endpoint}: response is not valid JSON ({e})") from e

        if not isinstance(data, dict):
            raise RemoteRejected(f"{endpoint}: unexpected response shape")

        response = data.get('response') or {}
        status = response.get('status')
        if status != 'success':
            raise RemoteRejected(
                f"{endpoint}: {response.get('message') or 'request failed'}",
                code=response.get('code')
            )

        result = data.get('result')
        if result is None:
            # Some deployments use "data" for the payload envelope
            result = data.get('data')
        return result if isinstance(result, dict) else {}

    def _open(self, request: urllib.request.Request, label: str) -> bytes:
        try:
            with urllib.request.urlopen(request, timeout=self.timeout, context=SSL_CONTEXT) as response:
                return response.read()
        except urllib.error.HTTPError as e:
            raise TransportError(f"{label}: HTTP {e.code} {e.reason}") from e
        except urllib.error.URLError as e:
            raise TransportError(f"{label}: network error ({e.reason})") from e
        except (socket.timeout, TimeoutError) as e:
            raise TransportError(f"{label}: timed out after {self.timeout}s") from e
        except OSError as e:
            raise TransportError(f"{label}: {e}") from e


def create_client(
    token: str,
    project_id: str,
    base_url: Optional[str] = None,
    timeout: Optional[float] = None
) -> POEditorClient:
    """Build a client, falling back to the default base URL and timeout."""
    return POEditorClient(
        token=token,
        project_id=project_id,
        base_url=base_url or DEFAULT_BASE_URL,
        timeout=timeout or DEFAULT_TIMEOUT,
    )
