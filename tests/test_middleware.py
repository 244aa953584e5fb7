"""Unit tests for request logging helpers."""

from tasklists.middleware import operation_name_from_payload, sanitize_query_params


class TestSanitizeQueryParams:
    def test_redacts_sensitive_keys(self):
        params = {"password": "pw", "X-Auth-Token": "t", "page": "2"}

        assert sanitize_query_params(params) == {
            "password": "[REDACTED]",
            "X-Auth-Token": "[REDACTED]",
            "page": "2",
        }


class TestOperationName:
    def test_explicit_operation_name(self):
        assert operation_name_from_payload("Mine", "query Other { x }") == "Mine"

    def test_named_query(self):
        assert operation_name_from_payload(None, "query Mine { myTaskLists { id } }") == "Mine"

    def test_named_mutation(self):
        assert (
            operation_name_from_payload(None, 'mutation Create { createTaskList(title: "x") { id } }')
            == "mutation:Create"
        )

    def test_anonymous_operation(self):
        assert operation_name_from_payload(None, "{ myTaskLists { id } }") == "unnamed_operation"

    def test_introspection(self):
        assert operation_name_from_payload(None, "{ __schema { types { name } } }") == "__introspection"

    def test_missing_query(self):
        assert operation_name_from_payload(None, None) is None
