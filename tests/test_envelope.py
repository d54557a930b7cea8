import json
import unittest

from lux_jsonrpc.envelope import (
    ArrayOfMapsRequest,
    MapOfArraysRequest,
    PositionalRequest,
    Request,
    Response,
    ResponseError,
    decode_response,
)
from lux_jsonrpc.errors import ErrorKind, RPCError
from lux_jsonrpc.models import GetHeightResult


class RequestEncodingTests(unittest.TestCase):
    def test_no_params_omits_params_key(self) -> None:
        body = PositionalRequest("info.getNetworkName").encode_json()

        self.assertEqual(body, b'{"jsonrpc":"2.0","id":1,"method":"info.getNetworkName"}')

    def test_empty_mapping_is_sent_explicitly(self) -> None:
        body = Request("platform.getHeight", params={}).encode_json()

        self.assertEqual(body, b'{"jsonrpc":"2.0","id":1,"method":"platform.getHeight","params":{}}')

    def test_key_order_is_fixed(self) -> None:
        body = MapOfArraysRequest("platform.getBalance", params={"addresses": ["P-xyz"]}).encode_json()

        self.assertEqual(list(json.loads(body)), ["jsonrpc", "id", "method", "params"])
        self.assertIn(b'"params":{"addresses":["P-xyz"]}', body)

    def test_each_shape_round_trips(self) -> None:
        requests = [
            Request("info.getBlockchainID", params={"alias": "X"}),
            Request("info.getNodeID"),
            PositionalRequest("eth_getAssetBalance", params=["0xabc", "latest", "asset"]),
            ArrayOfMapsRequest("avm.getUTXOs", params=[{"address": "X-a"}, {"address": "X-b"}]),
            MapOfArraysRequest("platform.getSubnets", params={"ids": []}),
        ]
        for request in requests:
            with self.subTest(request=request):
                decoded = type(request).decode_json(request.encode_json())
                self.assertEqual(decoded, request)
                self.assertNotIn("null", request.encode_json().decode())

    def test_unserializable_params_raise_rpc_error(self) -> None:
        with self.assertRaises(RPCError) as ctx:
            Request("x", params={"bad": object()}).encode_json()

        self.assertEqual(ctx.exception.kind, ErrorKind.OTHER)
        self.assertFalse(ctx.exception.retryable)


class ResponseDecodingTests(unittest.TestCase):
    def test_decode_success(self) -> None:
        response = decode_response(b'{"jsonrpc":"2.0","result":{"height":"42"},"id":1}', GetHeightResult.from_dict)

        self.assertEqual(response, Response(result=GetHeightResult(height=42)))
        self.assertIs(response.raise_for_error(), response)

    def test_decode_error_object(self) -> None:
        raw = (
            b'{"jsonrpc":"2.0","error":{"code":-32000,"message":"problem decoding transaction: '
            b'invalid input checksum","data":null},"id":1}'
        )

        response = decode_response(raw, GetHeightResult.from_dict)

        self.assertIsNone(response.result)
        self.assertEqual(
            response.error,
            ResponseError(code=-32000, message="problem decoding transaction: invalid input checksum"),
        )
        self.assertEqual(response.error.to_dict(), {"code": -32000, "message": response.error.message})
        with self.assertRaises(RPCError) as ctx:
            response.raise_for_error()
        self.assertEqual(ctx.exception.kind, ErrorKind.API)
        self.assertEqual(ctx.exception.code, -32000)

    def test_decode_error_with_null_id(self) -> None:
        raw = b'{"jsonrpc":"2.0","id":null,"error":{"code":-32700,"message":"parse error"}}'

        response = decode_response(raw, GetHeightResult.from_dict)

        self.assertIsNone(response.id)
        self.assertEqual(response.error.code, -32700)
        self.assertEqual(response.error.message, "parse error")

    def test_error_data_is_kept_as_json_text(self) -> None:
        structured = ResponseError.from_dict({"code": 1, "message": "m", "data": {"a": 1, "b": [True, None]}})
        plain = ResponseError.from_dict({"code": 1, "message": "m", "data": "already text"})

        self.assertEqual(structured.data, '{"a":1,"b":[true,null]}')
        self.assertEqual(json.loads(structured.data), {"a": 1, "b": [True, None]})
        self.assertEqual(plain.data, "already text")

    def test_decode_rejects_invalid_json(self) -> None:
        with self.assertRaises(RPCError) as ctx:
            decode_response(b"<html>bad gateway</html>", GetHeightResult.from_dict)

        self.assertIn("failed to decode JSON response", ctx.exception.message)
        self.assertFalse(ctx.exception.retryable)

    def test_decode_rejects_non_object(self) -> None:
        with self.assertRaises(RPCError):
            decode_response(b"[1, 2]", GetHeightResult.from_dict)

    def test_decode_reports_missing_field(self) -> None:
        with self.assertRaises(RPCError) as ctx:
            decode_response(b'{"jsonrpc":"2.0","result":{},"id":1}', GetHeightResult.from_dict)

        self.assertIn("missing expected field", ctx.exception.message)
        self.assertIn("height", ctx.exception.message)


if __name__ == "__main__":
    unittest.main()
