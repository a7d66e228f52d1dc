"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
CirrusDB client, a product of Garudex Labs

Resource operations.

Groups the endpoint table by resource so callers can write
``await client.tables.get(app_id, table_id)`` instead of naming endpoints.
Path ids are passed positionally, outermost first.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Mapping, Optional

if TYPE_CHECKING:
    from cirrusdb.sdk.client import CirrusClient


class ResourceOperations:
    """Base for resource-grouped endpoint wrappers."""

    resource: str = ""

    def __init__(self, client: CirrusClient) -> None:
        self._client = client

    async def _call(
        self,
        action: str,
        *ids: Any,
        body: Any = None,
        params: Optional[Mapping[str, Any]] = None,
    ) -> Any:
        return await self._client.call(
            f"{self.resource}.{action}", *ids, body=body, params=params
        )


class CollectionOperations(ResourceOperations):
    """Create/read/update/delete on a nested collection."""

    async def list(self, *parent_ids: Any) -> Any:
        """List the collection below ``parent_ids``."""
        return await self._call("list", *parent_ids)

    async def create(self, *parent_ids: Any, body: Dict[str, Any]) -> Any:
        """Create an item in the collection below ``parent_ids``."""
        return await self._call("create", *parent_ids, body=body)

    async def get(self, *ids: Any) -> Any:
        """Fetch one item; the last id is the item's own."""
        return await self._call("get", *ids)

    async def update(self, *ids: Any, body: Dict[str, Any]) -> Any:
        """Replace one item; the last id is the item's own."""
        return await self._call("update", *ids, body=body)

    async def delete(self, *ids: Any) -> Any:
        """Delete one item; the last id is the item's own."""
        return await self._call("delete", *ids)


class ApplicationOperations(CollectionOperations):
    """Applications: ``(app_id)``."""

    resource = "applications"

    async def settings(self, app_id: str) -> Any:
        return await self._call("settings", app_id)


class FileOperations(ResourceOperations):
    resource = "files"

    async def get(self, app_id: str, table_id: str, record_id: str, field_id: str) -> Any:
        """Fetch the file stored in one record field."""
        return await self._call("get", app_id, table_id, record_id, field_id)


class PageOperations(CollectionOperations):
    """Pages: ``(app_id, page_id)``."""
    resource = "pages"


class RoleOperations(CollectionOperations):
    """Roles: ``(app_id, role_id)``."""
    resource = "roles"


class TableOperations(CollectionOperations):
    """Tables: ``(app_id, table_id)``."""

    resource = "tables"

    async def settings(self, app_id: str, table_id: str) -> Any:
        return await self._call("settings", app_id, table_id)


class FieldOperations(CollectionOperations):
    """Table fields: ``(app_id, table_id, field_id)``."""
    resource = "fields"


class FormOperations(CollectionOperations):
    """Table forms: ``(app_id, table_id, form_id)``."""
    resource = "forms"


class NotificationOperations(CollectionOperations):
    """Table notifications: ``(app_id, table_id, notification_id)``."""
    resource = "notifications"


class RecordOperations(CollectionOperations):
    """Table records: ``(app_id, table_id, record_id)``."""

    resource = "records"

    async def list(
        self,
        app_id: str,
        table_id: str,
        query: Optional[Mapping[str, Any]] = None,
    ) -> Any:
        """List records, passing ``query`` through as URL query parameters."""
        return await self._call("list", app_id, table_id, params=query)


class ReportOperations(CollectionOperations):
    """Table reports: ``(app_id, table_id, report_id)``."""
    resource = "reports"


class WebhookOperations(CollectionOperations):
    """Table webhooks: ``(app_id, table_id, webhook_id)``."""
    resource = "webhooks"


class ApplicationUserOperations(CollectionOperations):
    """Application users: ``(app_id, user_id)``."""
    resource = "app_users"


class VariableOperations(CollectionOperations):
    """Application variables: ``(app_id, variable_id)``."""
    resource = "variables"


class UserOperations(CollectionOperations):
    """Account users: ``(user_id)``."""
    resource = "users"


class TokenOperations(CollectionOperations):
    """User API tokens: ``(user_id, token_id)``."""
    resource = "tokens"
