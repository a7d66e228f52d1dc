"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
CirrusDB client, a product of Garudex Labs

Unit tests for the endpoint table.
"""

import pytest

from cirrusdb.sdk.endpoints import ENDPOINTS, Endpoint, get_endpoint


class TestEndpointFill:
    """Test path template substitution."""

    def test_parameters_in_template_order(self):
        endpoint = Endpoint("{app_id}/tables/{table_id}/records/{record_id}")
        assert endpoint.parameters == ("app_id", "table_id", "record_id")

    def test_no_parameters(self):
        assert Endpoint("manifest").parameters == ()
        assert Endpoint("manifest").fill() == "manifest"

    def test_positional(self):
        endpoint = get_endpoint("tables.get")
        assert endpoint.fill("app1", "t1") == "app1/tables/t1"

    def test_named(self):
        endpoint = get_endpoint("tables.get")
        assert endpoint.fill(table_id="t1", app_id="app1") == "app1/tables/t1"

    def test_mixed(self):
        endpoint = get_endpoint("records.get")
        assert endpoint.fill("a", "t", record_id=7) == "a/tables/t/records/7"

    def test_values_are_quoted(self):
        """Test an id cannot introduce extra path segments."""
        endpoint = get_endpoint("tables.get")
        assert endpoint.fill("a/b", "t 1") == "a%2Fb/tables/t%201"

    def test_too_many(self):
        with pytest.raises(TypeError, match="takes 2 path parameter"):
            get_endpoint("tables.get").fill("a", "t", "x")

    def test_missing(self):
        with pytest.raises(TypeError, match="missing path parameter"):
            get_endpoint("tables.get").fill("a")

    def test_unknown_name(self):
        with pytest.raises(TypeError, match="no path parameter 'row_id'"):
            get_endpoint("tables.get").fill("a", "t", row_id="r")

    def test_given_twice(self):
        with pytest.raises(TypeError, match="given twice"):
            get_endpoint("tables.get").fill("a", app_id="b", table_id="t")


class TestEndpointTable:
    """Test the registered endpoints."""

    def test_unknown_endpoint(self):
        with pytest.raises(KeyError, match="Unknown endpoint"):
            get_endpoint("nope.list")

    def test_authentication_endpoints_are_public(self):
        assert get_endpoint("auth.authenticate") == Endpoint("auth", "POST", False)
        assert get_endpoint("auth.verify_token").requires_authorization is False
        assert get_endpoint("account.manifest").requires_authorization is False

    def test_everything_else_requires_token(self):
        public = {"auth.authenticate", "auth.verify_token", "account.manifest"}
        for name, endpoint in ENDPOINTS.items():
            if name not in public:
                assert endpoint.requires_authorization, name

    @pytest.mark.parametrize(
        "resource",
        [
            "applications", "pages", "roles", "tables", "fields", "forms",
            "notifications", "records", "reports", "webhooks", "app_users",
            "variables", "users", "tokens",
        ],
    )
    def test_crud_verbs(self, resource):
        verbs = {
            action: ENDPOINTS[f"{resource}.{action}"].method
            for action in ("list", "create", "get", "update", "delete")
        }
        assert verbs == {
            "list": "GET",
            "create": "POST",
            "get": "GET",
            "update": "PUT",
            "delete": "DELETE",
        }

    def test_applications_live_at_api_root(self):
        assert get_endpoint("applications.list").fill() == ""
        assert get_endpoint("applications.get").fill("a1") == "a1"

    def test_nested_paths(self):
        assert get_endpoint("webhooks.update").fill("a", "t", "w") == "a/tables/t/webhooks/w"
        assert get_endpoint("app_users.list").fill("a") == "a/users"
        assert get_endpoint("users.get").fill("u") == "users/u"
        assert get_endpoint("tokens.list").fill("u") == "users/u/tokens"
        assert get_endpoint("files.get").fill("a", "t", "r", "f") == "a/files/t/r/f"
        assert get_endpoint("tables.settings").fill("a", "t") == "a/tables/t/settings"
