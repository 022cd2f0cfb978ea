"""
Unit tests for the users router (resolve_route, parse_user_id).
"""
import pytest

from user_service.api.v1.routing import (
    Action,
    COLLECTION_METHODS,
    ITEM_METHODS,
    parse_user_id,
    resolve_route,
    split_user_path,
)
from user_service.domain.exceptions import ErrorKind, InvalidUserInputError


class TestSplitUserPath:
    """Tests for split_user_path"""

    @pytest.mark.parametrize("path", ["/api/v1/users", "/api/v1/users/", "/api/v1/users//"])
    def test_collection_paths(self, path):
        assert split_user_path(path) == ""

    def test_item_path_is_trimmed(self):
        assert split_user_path("/api/v1/users/42/") == "42"
        assert split_user_path("/api/v1/users//42") == "42"

    @pytest.mark.parametrize("path", ["/", "/api/v1", "/api/v1/usersx", "/api/v2/users/1"])
    def test_outside_prefix(self, path):
        assert split_user_path(path) is None


class TestResolveRoute:
    """Tests for the dispatch table"""

    @pytest.mark.parametrize(
        "method,path,action",
        [
            ("GET", "/api/v1/users", Action.LIST),
            ("GET", "/api/v1/users/", Action.LIST),
            ("POST", "/api/v1/users", Action.CREATE),
            ("GET", "/api/v1/users/7", Action.GET),
            ("PUT", "/api/v1/users/7", Action.UPDATE),
            ("DELETE", "/api/v1/users/7", Action.DELETE),
            ("put", "/api/v1/users/7", Action.UPDATE),
        ],
    )
    def test_dispatch(self, method, path, action):
        assert resolve_route(method, path).action == action

    def test_item_carries_raw_id(self):
        match = resolve_route("GET", "/api/v1/users/abc")
        assert match.action == Action.GET
        assert match.user_id == "abc"
        assert match.is_item

    def test_collection_has_no_id(self):
        match = resolve_route("GET", "/api/v1/users")
        assert match.user_id is None
        assert not match.is_item

    @pytest.mark.parametrize("method", ["PUT", "DELETE"])
    def test_collection_write_without_id_is_bad_request(self, method):
        match = resolve_route(method, "/api/v1/users")
        assert match.action == Action.BAD_REQUEST
        assert "required" in match.detail

    def test_post_to_item_is_not_allowed(self):
        match = resolve_route("POST", "/api/v1/users/1")
        assert match.action == Action.METHOD_NOT_ALLOWED
        assert match.allowed_methods == ITEM_METHODS

    @pytest.mark.parametrize("method", ["PATCH", "HEAD", "OPTIONS"])
    def test_other_methods_not_allowed(self, method):
        assert resolve_route(method, "/api/v1/users").allowed_methods == COLLECTION_METHODS
        assert resolve_route(method, "/api/v1/users/1").action == Action.METHOD_NOT_ALLOWED

    def test_outside_prefix_is_not_found(self):
        assert resolve_route("GET", "/api/v1/orders").action == Action.NOT_FOUND

    def test_custom_prefix(self):
        assert resolve_route("GET", "/people/3", prefix="/people").action == Action.GET


class TestParseUserId:
    """Tests for parse_user_id"""

    @pytest.mark.parametrize("raw,expected", [("1", 1), ("0042", 42), ("+5", 5), ("-3", -3)])
    def test_valid(self, raw, expected):
        assert parse_user_id(raw) == expected

    def test_int64_bounds(self):
        assert parse_user_id("9223372036854775807") == 2 ** 63 - 1
        with pytest.raises(InvalidUserInputError):
            parse_user_id("9223372036854775808")

    @pytest.mark.parametrize("raw", ["abc", "1.5", " 1", "1_000", "1/2", "0x10"])
    def test_invalid(self, raw):
        with pytest.raises(InvalidUserInputError) as excinfo:
            parse_user_id(raw)
        assert excinfo.value.kind == ErrorKind.INVALID

    @pytest.mark.parametrize("raw", [None, ""])
    def test_missing(self, raw):
        with pytest.raises(InvalidUserInputError, match="required"):
            parse_user_id(raw)
