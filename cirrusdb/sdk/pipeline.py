"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
CirrusDB client, a product of Garudex Labs

Request pipeline.

Turns a logical call (path segments, options, body) into an authorized
transport request, runs it through the throttle and interprets the reply
envelope. Every endpoint wrapper funnels through :meth:`RequestPipeline.dispatch`
or :meth:`RequestPipeline.dispatch_root`.

Envelope contract::

    {"success": true, "results": <any>}   -> Value(results)
    {"success": true}                     -> Acknowledged
    {"success": false, "message": "..."}  -> ApplicationError
"""

from __future__ import annotations

import itertools
import json
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Sequence, Union
from urllib.parse import urlencode

from cirrusdb._version import __version__
from cirrusdb.config.settings import ClientSettings
from cirrusdb.core.throttle import Throttle
from cirrusdb.exceptions import (
    ApplicationError,
    MissingTokenError,
    ProtocolError,
    SerializationError,
)
from cirrusdb.logging_config import get_logger, log_request, log_response
from cirrusdb.sdk.adapters.base import BaseAdapter, TransportRequest, TransportResponse

logger = get_logger(__name__)

PathSpec = Union[str, Sequence[Any]]

USER_AGENT = f"cirrusdb-python/{__version__}"


# ---------------------------------------------------------------------------
# Request side
# ---------------------------------------------------------------------------

@dataclass
class RequestOptions:
    """Per-call options."""
    method: str = "GET"
    requires_authorization: bool = False
    headers: Dict[str, str] = field(default_factory=dict)
    params: Optional[Mapping[str, Any]] = None
    timeout: Optional[float] = None


@dataclass
class RequestDescriptor:
    """A single in-flight call, owned by the call until it settles."""
    seq: int
    method: str
    path: str
    headers: Dict[str, str]
    body: Optional[str] = None
    requires_authorization: bool = False
    timeout: Optional[float] = None


def join_path(path: PathSpec) -> str:
    """Join a segment or a sequence of segments with ``/``.

    Raises:
        TypeError: If ``path`` is neither a string nor a sequence.
    """
    if isinstance(path, str):
        return path
    if isinstance(path, (bytes, bytearray)) or not isinstance(path, Sequence):
        raise TypeError(
            f"path must be a string or a sequence of segments, got {type(path).__name__}"
        )
    return "/".join(str(segment) for segment in path)


def encode_body(body: Any) -> str:
    """JSON-encode a request body.

    Raises:
        SerializationError: If the body is not JSON serializable.
    """
    try:
        # NaN and Infinity are not JSON.
        return json.dumps(body, allow_nan=False)
    except (TypeError, ValueError) as e:
        raise SerializationError(f"Request body is not JSON serializable: {e}") from e


# ---------------------------------------------------------------------------
# Response side
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ResponseEnvelope:
    """Decoded reply wrapper."""
    success: bool
    status_code: Optional[int] = None
    message: Optional[str] = None
    results: Any = None
    has_results: bool = False


@dataclass(frozen=True)
class Value:
    """Successful reply carrying a ``results`` payload."""
    value: Any


@dataclass(frozen=True)
class Acknowledged:
    """Successful reply without a payload."""


ACKNOWLEDGED = Acknowledged()

Outcome = Union[Value, Acknowledged]


def parse_envelope(text: str, status_code: Optional[int] = None) -> ResponseEnvelope:
    """Decode a raw reply body into a :class:`ResponseEnvelope`.

    Raises:
        ProtocolError: If the body is not JSON or not an envelope.
    """
    try:
        data = json.loads(text)
    except ValueError as e:
        raise ProtocolError(
            f"Response body is not valid JSON (status {status_code}): {e}"
        ) from e
    except RecursionError as e:
        raise ProtocolError(
            f"Response body is nested too deeply to decode (status {status_code})"
        ) from e

    if not isinstance(data, dict) or "success" not in data:
        raise ProtocolError(
            f"Response envelope is missing the 'success' field (status {status_code})"
        )
    if not isinstance(data["success"], bool):
        raise ProtocolError(
            f"Response envelope 'success' must be a boolean, got {data['success']!r}"
        )

    message = data.get("message")
    return ResponseEnvelope(
        success=data["success"],
        status_code=status_code,
        message=str(message) if message is not None else None,
        results=data.get("results"),
        has_results="results" in data,
    )


def interpret_envelope(envelope: ResponseEnvelope) -> Outcome:
    """Map an envelope onto an :data:`Outcome`.

    Raises:
        ApplicationError: If the envelope reports failure.
    """
    if not envelope.success:
        message = envelope.message or f"Request failed with status {envelope.status_code}"
        raise ApplicationError(message, status_code=envelope.status_code)
    if envelope.has_results:
        return Value(envelope.results)
    return ACKNOWLEDGED


def unwrap(outcome: Outcome) -> Any:
    """``Value`` -> its payload, ``Acknowledged`` -> ``True``."""
    if isinstance(outcome, Value):
        return outcome.value
    return True


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------

class RequestPipeline:
    """Builds, throttles, sends and interprets requests for one client.

    Args:
        settings: Client settings; read on every call, so a token stored by
            the authentication flow is picked up by later calls.
        throttle: Admission gate shared by all calls of the client.
        adapter: Transport used to perform the I/O.
    """

    def __init__(
        self,
        settings: ClientSettings,
        throttle: Throttle,
        adapter: BaseAdapter,
    ) -> None:
        self._settings = settings
        self._throttle = throttle
        self._adapter = adapter
        self._seq = itertools.count(1)

    async def dispatch(
        self,
        path: PathSpec,
        options: Optional[RequestOptions] = None,
        body: Any = None,
    ) -> Any:
        """Perform a call below the versioned API root.

        Args:
            path: A path segment, or a sequence of segments joined with ``/``.
            options: Method, authorization flag, extra headers, query params.
            body: JSON-serializable payload; ``None`` sends no body.

        Returns:
            The envelope's ``results`` payload, or ``True`` when the reply
            carries none.

        Raises:
            MissingTokenError: Authorization required but no token held.
            SerializationError: ``body`` could not be encoded.
            CapacityError: The throttle rejected the call.
            TransportError: The connection failed.
            ProtocolError: The reply was not a valid envelope.
            ApplicationError: The envelope reported ``success: false``.
        """
        return unwrap(await self.execute(join_path(path), options, body))

    async def dispatch_root(
        self,
        options: Optional[RequestOptions] = None,
        body: Any = None,
    ) -> Any:
        """Perform a call against the versioned API root itself."""
        return unwrap(await self.execute("", options, body))

    async def execute(
        self,
        local_path: str,
        options: Optional[RequestOptions] = None,
        body: Any = None,
    ) -> Outcome:
        """Run one call and return its :data:`Outcome`."""
        descriptor = self.build_descriptor(local_path, options, body)
        call_logger = logger.bind(request_seq=descriptor.seq)

        log_request(
            call_logger,
            descriptor.seq,
            descriptor.method,
            descriptor.path,
            has_body=descriptor.body is not None,
        )

        try:
            response = await self._throttle.submit(lambda: self._send(descriptor))
            outcome = interpret_envelope(
                parse_envelope(response.text, response.status_code)
            )
        except Exception as e:
            log_response(
                call_logger,
                descriptor.seq,
                getattr(e, "status_code", None),
                success=False,
                reason=str(e),
                error_type=type(e).__name__,
            )
            raise

        log_response(
            call_logger,
            descriptor.seq,
            response.status_code,
            success=True,
            duration_ms=response.elapsed_ms,
            acknowledged=isinstance(outcome, Acknowledged),
        )
        return outcome

    def build_descriptor(
        self,
        local_path: str,
        options: Optional[RequestOptions] = None,
        body: Any = None,
    ) -> RequestDescriptor:
        """Assemble a :class:`RequestDescriptor` without performing I/O.

        Raises:
            MissingTokenError: Authorization required but no token held.
            SerializationError: ``body`` could not be encoded.
        """
        options = options or RequestOptions()
        seq = next(self._seq)

        path = "/".join([self._settings.path, self._settings.version, local_path])
        if options.params:
            separator = "&" if "?" in path else "?"
            path = f"{path}{separator}{urlencode(options.params, doseq=True)}"

        headers: Dict[str, str] = {"User-Agent": USER_AGENT}
        headers.update(options.headers)

        if options.requires_authorization:
            token = self._settings.user_token
            if not token:
                logger.warning("missing_user_token", request_seq=seq, path=path)
                raise MissingTokenError("Missing user token")
            headers["Authorization"] = f"Bearer {token}"

        encoded: Optional[str] = None
        if body is not None:
            headers["Content-Type"] = "application/json"
            encoded = encode_body(body)

        return RequestDescriptor(
            seq=seq,
            method=(options.method or "GET").upper(),
            path=path,
            headers=headers,
            body=encoded,
            requires_authorization=options.requires_authorization,
            timeout=options.timeout if options.timeout is not None else self._settings.timeout,
        )

    async def _send(self, descriptor: RequestDescriptor) -> TransportResponse:
        return await self._adapter.send(
            TransportRequest(
                method=descriptor.method,
                path=descriptor.path,
                hostname=self._settings.hostname,
                port=self._settings.port,
                scheme=self._settings.resolved_scheme,
                headers=descriptor.headers,
                body=descriptor.body,
                timeout=descriptor.timeout,
            )
        )
