import http.server
import threading
import time
import unittest
import warnings
from unittest import mock

import requests

from lux_jsonrpc.config import ClientConfig
from lux_jsonrpc.errors import ErrorKind, RPCError, classify_transport_error
from lux_jsonrpc.http_client import HttpDispatcher


class _FakeResponse:
    def __init__(self, content=b"{}", status_code=200, error=None):
        self._content = content
        self.status_code = status_code
        self.error = error
        self.closed = False
        self.raw = None

    def iter_content(self, chunk_size=1):
        if self.error is not None:
            raise self.error
        yield self._content

    def close(self):
        self.closed = True


class HttpDispatcherTests(unittest.TestCase):
    def setUp(self) -> None:
        self.dispatcher = HttpDispatcher(ClientConfig())

    def tearDown(self) -> None:
        self.dispatcher.close()

    def test_session_policy(self) -> None:
        session = self.dispatcher.session

        self.assertEqual(session.headers["User-Agent"], "lux-jsonrpc")
        self.assertFalse(session.verify)
        self.assertEqual(self.dispatcher.config.timeout, 15.0)

    def test_post_sends_json_body(self) -> None:
        response = _FakeResponse(content=b'{"ok":true}')
        with mock.patch.object(self.dispatcher.session, "request", return_value=response) as request:
            out = self.dispatcher.dispatch("http://host/ext/info", "POST", b'{"id":1}')

        self.assertEqual(out, b'{"ok":true}')
        self.assertTrue(response.closed)
        request.assert_called_once_with(
            "POST",
            "http://host/ext/info",
            data=b'{"id":1}',
            headers={"Content-Type": "application/json"},
            timeout=15.0,
            stream=True,
        )

    def test_get_has_no_body(self) -> None:
        with mock.patch.object(self.dispatcher.session, "request", return_value=_FakeResponse()) as request:
            self.dispatcher.dispatch("http://host/ext/health", "GET")

        _, kwargs = request.call_args
        self.assertIsNone(kwargs["data"])
        self.assertIsNone(kwargs["headers"])

    def test_non_200_body_is_still_returned(self) -> None:
        body = b'{"checks":{},"healthy":false}'
        with mock.patch.object(self.dispatcher.session, "request", return_value=_FakeResponse(body, 503)):
            self.assertEqual(self.dispatcher.dispatch("http://host/ext/health", "GET"), body)

    def test_send_failure_is_api_error(self) -> None:
        with mock.patch.object(self.dispatcher.session, "request", side_effect=requests.ConnectionError("refused")):
            with self.assertRaises(RPCError) as ctx:
                self.dispatcher.dispatch("http://host/ext/info", "POST", b"{}")

        self.assertEqual(ctx.exception.kind, ErrorKind.API)
        self.assertTrue(ctx.exception.retryable)
        self.assertIn("refused", ctx.exception.message)
        self.assertIsInstance(ctx.exception.__cause__, requests.ConnectionError)

    def test_body_read_failure_is_other_error(self) -> None:
        response = _FakeResponse(error=requests.exceptions.ChunkedEncodingError("connection broken"))
        with mock.patch.object(self.dispatcher.session, "request", return_value=response):
            with self.assertRaises(RPCError) as ctx:
                self.dispatcher.dispatch("http://host/ext/info", "POST", b"{}")

        self.assertEqual(ctx.exception.kind, ErrorKind.OTHER)
        self.assertTrue(ctx.exception.retryable)
        self.assertIn("failed to read response body", ctx.exception.message)
        self.assertTrue(response.closed)

    def test_body_decode_failure_is_not_retryable(self) -> None:
        response = _FakeResponse(error=requests.exceptions.ContentDecodingError("bad gzip"))
        with mock.patch.object(self.dispatcher.session, "request", return_value=response):
            with self.assertRaises(RPCError) as ctx:
                self.dispatcher.dispatch("http://host/ext/info", "POST", b"{}")

        self.assertFalse(ctx.exception.retryable)


class _DripHandler(http.server.BaseHTTPRequestHandler):
    body = b'{"ok":true}\n'
    delay = 0.0

    def do_POST(self) -> None:
        self.rfile.read(int(self.headers.get("Content-Length", 0)))
        self.send_response(200)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(self.body)))
        self.end_headers()
        try:
            for i in range(len(self.body)):
                self.wfile.write(self.body[i : i + 1])
                self.wfile.flush()
                time.sleep(self.delay)
        except OSError:
            pass

    def log_message(self, format, *args) -> None:
        pass


class DispatchDeadlineTests(unittest.TestCase):
    def _serve(self, protocol_version: str, delay: float) -> str:
        handler = type("Handler", (_DripHandler,), {"protocol_version": protocol_version, "delay": delay})
        server = http.server.ThreadingHTTPServer(("127.0.0.1", 0), handler)
        thread = threading.Thread(target=server.serve_forever, daemon=True)
        thread.start()
        self.addCleanup(server.server_close)
        self.addCleanup(server.shutdown)
        return f"http://127.0.0.1:{server.server_address[1]}/ext/info"

    def test_slow_body_is_cut_off_at_total_timeout(self) -> None:
        for protocol_version in ("HTTP/1.0", "HTTP/1.1"):
            with self.subTest(protocol_version=protocol_version):
                url = self._serve(protocol_version, delay=0.4)
                dispatcher = HttpDispatcher(ClientConfig(timeout=1.0))
                dispatcher.session.trust_env = False
                self.addCleanup(dispatcher.close)

                started = time.monotonic()
                with self.assertRaises(RPCError) as ctx:
                    dispatcher.dispatch(url, "POST", b"{}")
                elapsed = time.monotonic() - started

                self.assertLess(elapsed, 1.5)
                self.assertTrue(ctx.exception.retryable)
                self.assertIn("exceeded total timeout", ctx.exception.message)

    def test_body_within_timeout_is_returned(self) -> None:
        url = self._serve("HTTP/1.1", delay=0.0)
        dispatcher = HttpDispatcher(ClientConfig(timeout=2.0))
        dispatcher.session.trust_env = False
        self.addCleanup(dispatcher.close)

        self.assertEqual(dispatcher.dispatch(url, "POST", b"{}"), b'{"ok":true}\n')


class InsecureWarningTests(unittest.TestCase):
    def test_building_a_dispatcher_leaves_warning_filters_alone(self) -> None:
        before = list(warnings.filters)
        dispatcher = HttpDispatcher(ClientConfig(verify_tls=False))
        dispatcher.close()

        self.assertEqual(warnings.filters, before)


class ClassifyTransportErrorTests(unittest.TestCase):
    def test_transient_failures_are_retryable(self) -> None:
        for exc in (
            requests.Timeout("timed out"),
            requests.exceptions.ConnectTimeout("connect timed out"),
            requests.exceptions.ReadTimeout("read timed out"),
            requests.ConnectionError("Name or service not known"),
        ):
            with self.subTest(exc=exc):
                error = classify_transport_error(exc)
                self.assertEqual(error.kind, ErrorKind.API)
                self.assertTrue(error.retryable)
                self.assertIs(error.cause, exc)

    def test_permanent_failures_are_not_retryable(self) -> None:
        for exc in (
            requests.exceptions.SSLError("certificate verify failed"),
            requests.exceptions.InvalidURL("bad url"),
            requests.exceptions.TooManyRedirects("loop"),
        ):
            with self.subTest(exc=exc):
                error = classify_transport_error(exc)
                self.assertEqual(error.kind, ErrorKind.API)
                self.assertFalse(error.retryable)


if __name__ == "__main__":
    unittest.main()
