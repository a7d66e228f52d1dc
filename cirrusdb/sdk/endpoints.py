"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
CirrusDB client, a product of Garudex Labs

Endpoint table.

Every REST endpoint is a named configuration of the dispatch primitive:
a path template below ``/<path>/<version>/``, an HTTP verb and whether the
call needs a bearer token. Path parameters are written ``{name}`` and filled
in template order.
"""

from __future__ import annotations

import string
from dataclasses import dataclass
from typing import Any, Dict, Tuple
from urllib.parse import quote


@dataclass(frozen=True)
class Endpoint:
    """A single REST endpoint."""
    path: str
    method: str = "GET"
    requires_authorization: bool = True

    @property
    def parameters(self) -> Tuple[str, ...]:
        """Names of the path parameters, in template order."""
        return tuple(
            name for _, name, _, _ in string.Formatter().parse(self.path) if name
        )

    def fill(self, *args: Any, **kwargs: Any) -> str:
        """Substitute path parameters, positionally or by name.

        Each value is URL-quoted so an id can never add path segments.

        Raises:
            TypeError: If parameters are missing, duplicated or unknown.
        """
        names = self.parameters
        if len(args) > len(names):
            raise TypeError(
                f"'{self.path}' takes {len(names)} path parameter(s), got {len(args)}"
            )

        values: Dict[str, Any] = dict(zip(names, args))
        for key, value in kwargs.items():
            if key not in names:
                raise TypeError(f"'{self.path}' has no path parameter '{key}'")
            if key in values:
                raise TypeError(f"path parameter '{key}' given twice")
            values[key] = value

        missing = [name for name in names if name not in values]
        if missing:
            raise TypeError(
                f"'{self.path}' is missing path parameter(s): {', '.join(missing)}"
            )

        return self.path.format(
            **{name: quote(str(value), safe="") for name, value in values.items()}
        )


def _crud(resource: str, collection: str, item_param: str) -> Dict[str, Endpoint]:
    item = f"{collection}/{{{item_param}}}" if collection else f"{{{item_param}}}"
    return {
        f"{resource}.list": Endpoint(collection, "GET"),
        f"{resource}.create": Endpoint(collection, "POST"),
        f"{resource}.get": Endpoint(item, "GET"),
        f"{resource}.update": Endpoint(item, "PUT"),
        f"{resource}.delete": Endpoint(item, "DELETE"),
    }


_TABLE = "{app_id}/tables/{table_id}"

ENDPOINTS: Dict[str, Endpoint] = {
    "auth.authenticate": Endpoint("auth", "POST", requires_authorization=False),
    "auth.verify_token": Endpoint("auth/verify-token", "POST", requires_authorization=False),
    "account.id": Endpoint("id"),
    "account.manifest": Endpoint("manifest", requires_authorization=False),
    "account.usage": Endpoint("usage"),
    **_crud("applications", "", "app_id"),
    "applications.settings": Endpoint("{app_id}/settings"),
    "files.get": Endpoint("{app_id}/files/{table_id}/{record_id}/{field_id}"),
    **_crud("pages", "{app_id}/pages", "page_id"),
    **_crud("roles", "{app_id}/roles", "role_id"),
    **_crud("tables", "{app_id}/tables", "table_id"),
    "tables.settings": Endpoint(f"{_TABLE}/settings"),
    **_crud("fields", f"{_TABLE}/fields", "field_id"),
    **_crud("forms", f"{_TABLE}/forms", "form_id"),
    **_crud("notifications", f"{_TABLE}/notifications", "notification_id"),
    **_crud("records", f"{_TABLE}/records", "record_id"),
    **_crud("reports", f"{_TABLE}/reports", "report_id"),
    **_crud("webhooks", f"{_TABLE}/webhooks", "webhook_id"),
    **_crud("app_users", "{app_id}/users", "user_id"),
    **_crud("variables", "{app_id}/variables", "variable_id"),
    **_crud("users", "users", "user_id"),
    **_crud("tokens", "users/{user_id}/tokens", "token_id"),
}


def get_endpoint(name: str) -> Endpoint:
    """Look up an endpoint by its dotted name.

    Raises:
        KeyError: If no endpoint has that name.
    """
    try:
        return ENDPOINTS[name]
    except KeyError:
        raise KeyError(f"Unknown endpoint '{name}'") from None
