"""
Pusher Channels client used by the MCP tool handlers.

`ChannelsClient` is the single outbound boundary of the server:
- trigger / trigger_batch / terminate_user_connections go through the
  official `pusher` SDK
- authorize_channel is the SDK's local HMAC signing (no network I/O)
- get() issues a signed REST GET with `requests` and hands back the raw
  status and body, so callers decide what a non-2xx status means

`ClientAccessor` builds one `ChannelsClient` lazily and caches it for the
lifetime of the process.
"""

import json
import logging
import threading
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Union

import pusher
import requests
from pusher.http import GET, Request
from pusher.pusher_client import PusherClient

from pusher_mcp.config import ProviderCredentials, load_credentials

DEFAULT_TIMEOUT = 5


@dataclass
class ProviderResponse:
    """Raw result of a REST GET against the Pusher HTTP API."""
    status: int
    body: str = ""

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    def json(self) -> Any:
        return json.loads(self.body) if self.body else {}


class ChannelsClient:
    """
    Client for the Pusher Channels HTTP API, bound to one set of credentials.

    Always uses TLS.  The underlying `pusher.Pusher` instance and
    `requests.Session` are owned by this object and reused for every call.
    """

    def __init__(self, credentials: ProviderCredentials, timeout: float = DEFAULT_TIMEOUT):
        """
        Initialize the client.

        Args:
            credentials: Pusher app id, key, secret and cluster.
            timeout: Seconds to wait for REST GET responses.
        """
        self.credentials = credentials
        self.timeout = timeout
        self.host = f"api-{credentials.cluster}.pusher.com"
        self.scheme = "https"
        self.logger = logging.getLogger("pusher_mcp.pusher_client")

        self._pusher = pusher.Pusher(
            app_id=credentials.app_id,
            key=credentials.key,
            secret=credentials.secret,
            cluster=credentials.cluster,
            ssl=True,
            timeout=timeout,
        )
        # Signs REST GETs; the requests go out through _session
        self._rest = PusherClient(
            app_id=credentials.app_id,
            key=credentials.key,
            secret=credentials.secret,
            cluster=credentials.cluster,
            ssl=True,
            timeout=timeout,
        )
        self._session = requests.Session()

    # ------------------------------------------------------------------
    # SDK-backed operations
    # ------------------------------------------------------------------

    def trigger(
        self,
        channels: Union[str, List[str]],
        event_name: str,
        data: str,
        socket_id: Optional[str] = None,
    ) -> Any:
        """Trigger one event on one or more channels."""
        if socket_id:
            return self._pusher.trigger(channels, event_name, data, socket_id=socket_id)
        return self._pusher.trigger(channels, event_name, data)

    def trigger_batch(self, batch: List[Dict[str, Any]]) -> Any:
        """Trigger up to 10 events in a single request."""
        return self._pusher.trigger_batch(batch)

    def terminate_user_connections(self, user_id: str) -> Any:
        """Disconnect every connection belonging to `user_id`."""
        return self._pusher.terminate_user_connections(user_id)

    def authorize_channel(
        self,
        socket_id: str,
        channel: str,
        presence_data: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """
        Sign a private or presence channel subscription.

        Purely local: returns `{"auth": ..., "channel_data"?: ...}` without
        contacting Pusher.
        """
        return self._pusher.authenticate(
            channel=channel,
            socket_id=socket_id,
            custom_data=presence_data,
        )

    # ------------------------------------------------------------------
    # Signed REST GET
    # ------------------------------------------------------------------

    def get(self, path: str, params: Optional[Mapping[str, str]] = None) -> ProviderResponse:
        """
        Send a signed GET to `/apps/<app_id><path>`.

        Non-2xx statuses are returned, not raised.  Transport failures
        (DNS, TLS, timeouts) propagate as `requests` exceptions.

        Args:
            path: API path below the app, e.g. "/channels".
            params: Extra query parameters, e.g. {"info": "user_count"}.
        """
        full_path = f"/apps/{self.credentials.app_id}{path}"
        request = self.signed_request(full_path, params)

        self.logger.debug(f"GET {full_path}")
        response = self._session.get(
            request.url, headers=request.headers, timeout=self.timeout
        )
        return ProviderResponse(status=response.status_code, body=response.text)

    def signed_request(
        self, full_path: str, params: Optional[Mapping[str, str]] = None
    ) -> Request:
        """
        Build a GET for `full_path` signed with Pusher's REST auth.

        The SDK adds auth_key, auth_timestamp, auth_version, body_md5 and
        auth_signature to the query.
        """
        return Request(self._rest, GET, full_path, dict(params or {}))


class ClientAccessor:
    """
    Lazily builds and caches one `ChannelsClient`.

    Credentials are read on the first `get_client()` call.  Construction is
    guarded by a lock, so concurrent first calls still build a single client.
    If construction fails (e.g. missing credentials) nothing is cached and the
    next call tries again.
    """

    def __init__(self, environ: Optional[Mapping[str, str]] = None):
        """
        Args:
            environ: Mapping to read credentials from.  Defaults to os.environ
                     at the time of the first call.
        """
        self._environ = environ
        self._client: Optional[ChannelsClient] = None
        self._lock = threading.Lock()
        self.logger = logging.getLogger("pusher_mcp.pusher_client")

    def get_client(self) -> ChannelsClient:
        """
        Return the cached client, creating it on first use.

        Raises:
            ConfigurationError: If any required credential is missing.
        """
        if self._client is not None:
            return self._client

        with self._lock:
            if self._client is None:
                credentials = load_credentials(self._environ)
                self._client = ChannelsClient(credentials)
                self.logger.info(
                    f"Created Pusher client for app {credentials.app_id} "
                    f"(cluster {credentials.cluster})"
                )
        return self._client
