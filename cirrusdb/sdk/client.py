"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
CirrusDB client, a product of Garudex Labs

CirrusDB client.

Entry points::

    client = CirrusClient(hostname="db.example.com", connection_limit=5)
    client = CirrusClient.from_config("~/.cirrusdb/config.yaml")

The client owns its settings, throttle, transport adapter and request
pipeline. Settings are copied at construction; afterwards only
:meth:`CirrusClient.authenticate` changes them.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Type, TypeVar

from cirrusdb.config.settings import ClientSettings, load_config, validate_settings
from cirrusdb.core.throttle import Throttle
from cirrusdb.exceptions import ProtocolError
from cirrusdb.logging_config import get_logger, setup_logging
from cirrusdb.sdk.adapters.base import BaseAdapter
from cirrusdb.sdk.adapters.http import HttpAdapter
from cirrusdb.sdk.endpoints import get_endpoint
from cirrusdb.sdk.pipeline import PathSpec, RequestOptions, RequestPipeline
from cirrusdb.sdk.resources import (
    ApplicationOperations,
    ApplicationUserOperations,
    FieldOperations,
    FileOperations,
    FormOperations,
    NotificationOperations,
    PageOperations,
    RecordOperations,
    ReportOperations,
    ResourceOperations,
    RoleOperations,
    TableOperations,
    TokenOperations,
    UserOperations,
    VariableOperations,
    WebhookOperations,
)

logger = get_logger(__name__)

R = TypeVar("R", bound=ResourceOperations)


class CirrusClient:
    """Async client for the CirrusDB REST API.

    Args:
        settings: Base settings. Defaults to :class:`ClientSettings` defaults.
        adapter: Transport adapter. Defaults to :class:`HttpAdapter`.
        **overrides: Individual settings applied on top of ``settings``
            (``hostname``, ``port``, ``path``, ``version``, ``email``,
            ``password``, ``user_token``, ``connection_limit``,
            ``error_on_connection_limit``, ``max_queue_length``, ``timeout``,
            ``scheme``).

    Raises:
        InvalidConfigurationError: If an override is unknown or a setting
            is invalid.
    """

    def __init__(
        self,
        settings: Optional[ClientSettings] = None,
        adapter: Optional[BaseAdapter] = None,
        **overrides: Any,
    ) -> None:
        self._settings = (settings or ClientSettings()).merged(overrides)
        validate_settings(self._settings)

        self._throttle = Throttle(
            limit=self._settings.connection_limit,
            max_queue_length=self._settings.effective_max_queue_length,
            reject_on_full=self._settings.error_on_connection_limit,
        )
        self._adapter = adapter or HttpAdapter(timeout=self._settings.timeout)
        self._pipeline = RequestPipeline(self._settings, self._throttle, self._adapter)
        self._resources: Dict[type, ResourceOperations] = {}

        logger.info(
            "client_initialized",
            base_url=self._settings.base_url,
            api_root=f"{self._settings.path}/{self._settings.version}",
            connection_limit=self._settings.connection_limit,
            error_on_connection_limit=self._settings.error_on_connection_limit,
        )

    @classmethod
    def from_config(
        cls,
        config_path: Optional[str] = None,
        adapter: Optional[BaseAdapter] = None,
        configure_logging: bool = False,
        **overrides: Any,
    ) -> CirrusClient:
        """Build a client from a YAML configuration file.

        Args:
            config_path: Path to the file; defaults to ``~/.cirrusdb/config.yaml``.
            adapter: Optional transport adapter.
            configure_logging: Also apply the file's ``logging`` section.
            **overrides: Settings applied on top of the file's ``client`` section.
        """
        config = load_config(config_path)
        if configure_logging:
            setup_logging(
                level=config.logging.level,
                log_file=config.logging.file or None,
                json_format=config.logging.json_format,
            )
        return cls(settings=config.client, adapter=adapter, **overrides)

    # -- State ---------------------------------------------------------------

    @property
    def settings(self) -> ClientSettings:
        return self._settings

    @property
    def throttle(self) -> Throttle:
        return self._throttle

    @property
    def is_authenticated(self) -> bool:
        """Whether a user token is held."""
        return bool(self._settings.user_token)

    # -- Dispatch ------------------------------------------------------------

    async def dispatch(
        self,
        path: PathSpec,
        options: Optional[RequestOptions] = None,
        body: Any = None,
    ) -> Any:
        """Call ``path`` below the API root. See :meth:`RequestPipeline.dispatch`."""
        return await self._pipeline.dispatch(path, options, body)

    async def dispatch_root(
        self,
        options: Optional[RequestOptions] = None,
        body: Any = None,
    ) -> Any:
        """Call the API root itself."""
        return await self._pipeline.dispatch_root(options, body)

    async def call(
        self,
        endpoint: str,
        *ids: Any,
        body: Any = None,
        params: Optional[Mapping[str, Any]] = None,
        **named_ids: Any,
    ) -> Any:
        """Call a named endpoint from the endpoint table.

        Example::

            await client.call("tables.get", "app1", "t1")
            await client.call("records.list", app_id="app1", table_id="t1",
                              params={"limit": 10})
        """
        entry = get_endpoint(endpoint)
        local_path = entry.fill(*ids, **named_ids)
        options = RequestOptions(
            method=entry.method,
            requires_authorization=entry.requires_authorization,
            params=params,
        )
        if not local_path:
            return await self.dispatch_root(options, body)
        return await self.dispatch(local_path, options, body)

    # -- Authentication ------------------------------------------------------

    async def authenticate(self, body: Optional[Dict[str, Any]] = None) -> str:
        """Exchange email/password for a user token and keep it.

        Credentials missing from ``body`` are taken from settings; credentials
        in ``body`` that settings lack are stored in settings.

        Returns:
            The user token now held by the client.

        Raises:
            ProtocolError: If the reply does not carry a token.
            ApplicationError: If the service rejects the credentials.
        """
        body = dict(body or {})

        for key in ("email", "password"):
            if not body.get(key) and getattr(self._settings, key):
                body[key] = getattr(self._settings, key)
            elif body.get(key) and not getattr(self._settings, key):
                setattr(self._settings, key, body[key])

        token = await self.call("auth.authenticate", body=body)
        if not isinstance(token, str) or not token:
            raise ProtocolError("Authentication reply did not carry a user token")

        self._settings.user_token = token
        logger.info("authenticated", email=self._settings.email or None)
        return token

    async def verify_token(self, body: Optional[Dict[str, Any]] = None) -> Any:
        """Ask the service whether a token is valid."""
        return await self.call("auth.verify_token", body=body)

    # -- Account -------------------------------------------------------------

    async def get_id(self) -> Any:
        """Identity of the authenticated user."""
        return await self.call("account.id")

    async def get_manifest(self) -> Any:
        """Public service manifest."""
        return await self.call("account.manifest")

    async def get_usage(self) -> Any:
        """Resource usage of the authenticated account."""
        return await self.call("account.usage")

    # -- Resources -----------------------------------------------------------

    def _resource(self, cls: Type[R]) -> R:
        if cls not in self._resources:
            self._resources[cls] = cls(self)
        return self._resources[cls]  # type: ignore[return-value]

    @property
    def applications(self) -> ApplicationOperations:
        return self._resource(ApplicationOperations)

    @property
    def files(self) -> FileOperations:
        return self._resource(FileOperations)

    @property
    def pages(self) -> PageOperations:
        return self._resource(PageOperations)

    @property
    def roles(self) -> RoleOperations:
        return self._resource(RoleOperations)

    @property
    def tables(self) -> TableOperations:
        return self._resource(TableOperations)

    @property
    def fields(self) -> FieldOperations:
        return self._resource(FieldOperations)

    @property
    def forms(self) -> FormOperations:
        return self._resource(FormOperations)

    @property
    def notifications(self) -> NotificationOperations:
        return self._resource(NotificationOperations)

    @property
    def records(self) -> RecordOperations:
        return self._resource(RecordOperations)

    @property
    def reports(self) -> ReportOperations:
        return self._resource(ReportOperations)

    @property
    def webhooks(self) -> WebhookOperations:
        return self._resource(WebhookOperations)

    @property
    def app_users(self) -> ApplicationUserOperations:
        return self._resource(ApplicationUserOperations)

    @property
    def variables(self) -> VariableOperations:
        return self._resource(VariableOperations)

    @property
    def users(self) -> UserOperations:
        return self._resource(UserOperations)

    @property
    def tokens(self) -> TokenOperations:
        return self._resource(TokenOperations)

    # -- Lifecycle -----------------------------------------------------------

    async def close(self) -> None:
        """Release transport resources."""
        await self._adapter.close()
        logger.debug("client_closed")

    async def __aenter__(self) -> CirrusClient:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
