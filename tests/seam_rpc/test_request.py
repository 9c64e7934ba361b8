"""
Tests for JSON-RPC request construction
"""
import pytest

from seam_rpc.rpc.request import CallOptions, Request, prepare_request, generate_request_id


class TestPrepareRequest:
    """Test request building"""

    @pytest.mark.parametrize("params", [42, "text", {"key": "value"}, None, 3.5, True])
    def test_scalar_params_are_wrapped(self, params):
        """Non-sequence params become a single-element list"""
        request = prepare_request("method", params)
        assert request.params == [params]

    def test_list_params_pass_through(self):
        """List params are sent unchanged"""
        params = [1, "two", {"three": 3}]
        request = prepare_request("method", params)
        assert request.params is params

    def test_tuple_params_become_list(self):
        request = prepare_request("method", (1, 2))
        assert request.params == [1, 2]

    def test_default_params_are_empty(self):
        request = prepare_request("method")
        assert request.params == []

    def test_request_fields(self):
        request = prepare_request("add", [1, 2])
        assert request.jsonrpc == "2.0"
        assert request.method == "add"
        assert request.id is not None
        assert not request.is_notification

    def test_async_call_has_no_id(self):
        """Notifications carry a null id"""
        request = prepare_request("notify", [1], CallOptions(is_async=True))
        assert request.id is None
        assert request.is_notification
        assert request.to_dict()["id"] is None

    def test_ids_are_unique(self):
        ids = {prepare_request("method", []).id for _ in range(1000)}
        assert len(ids) == 1000

    def test_caller_label_is_not_the_request_id(self):
        request = prepare_request("method", [], CallOptions(id="trace-label"))
        assert request.id != "trace-label"


class TestRequest:
    """Test the wire representation"""

    def test_to_dict(self):
        request = Request(method="echo", params=["hi"], id="abc")
        assert request.to_dict() == {
            "jsonrpc": "2.0",
            "method": "echo",
            "params": ["hi"],
            "id": "abc",
        }

    def test_generated_id_has_16_bytes_of_entropy(self):
        request_id = generate_request_id()
        assert len(request_id) == 32
        int(request_id, 16)
