"""
Tests for the HTTP transport.
"""

import pytest
import requests
from unittest.mock import Mock, patch

from hn_companion.errors import RequestTimeoutError, TransportError
from hn_companion.transport import HttpTransport


def _response(status_code=200, json_data=None, text=""):
    response = Mock()
    response.status_code = status_code
    response.ok = status_code < 400
    response.text = text
    response.json.return_value = json_data
    return response


class TestHttpTransport:

    def setup_method(self):
        self.transport = HttpTransport()

    @patch("hn_companion.transport.requests.Session.request")
    def test_request_returns_json(self, mock_request):
        mock_request.return_value = _response(json_data={"ok": True})

        result = self.transport.request("https://api.example.com/x", method="POST", body={"a": 1}, timeout=5)

        assert result == {"ok": True}
        mock_request.assert_called_once_with(
            "POST",
            "https://api.example.com/x",
            headers=None,
            json={"a": 1},
            timeout=5,
        )

    @patch("hn_companion.transport.requests.Session.request")
    def test_expected_404_returned_as_data(self, mock_request):
        mock_request.return_value = _response(status_code=404, text="not here")

        result = self.transport.request("https://api.example.com/x", is_404_expected=True)

        assert result == {"status": 404, "message": "not here"}

    @patch("hn_companion.transport.requests.Session.request")
    def test_unexpected_404_raises(self, mock_request):
        mock_request.return_value = _response(status_code=404, text="not here")

        with pytest.raises(TransportError) as excinfo:
            self.transport.request("https://api.example.com/x")

        assert excinfo.value.status_code == 404

    @patch("hn_companion.transport.requests.Session.request")
    def test_http_error_message(self, mock_request):
        mock_request.return_value = _response(status_code=429, text="slow down")

        with pytest.raises(TransportError) as excinfo:
            self.transport.request("https://api.example.com/x")

        assert "HTTP error code: 429" in str(excinfo.value)
        assert "slow down" in str(excinfo.value)

    @patch("hn_companion.transport.requests.Session.request")
    def test_timeout_raises_typed_error(self, mock_request):
        mock_request.side_effect = requests.Timeout("too slow")

        with pytest.raises(RequestTimeoutError) as excinfo:
            self.transport.request("https://api.example.com/x", timeout=180)

        assert "Request timeout after 180000ms" in str(excinfo.value)

    @patch("hn_companion.transport.requests.Session.request")
    def test_connection_error(self, mock_request):
        mock_request.side_effect = requests.ConnectionError("refused")

        with pytest.raises(TransportError) as excinfo:
            self.transport.request("http://localhost:11434/api/generate")

        assert "Failed to fetch" in str(excinfo.value)

    @patch("hn_companion.transport.requests.Session.request")
    def test_invalid_json(self, mock_request):
        response = _response()
        response.json.side_effect = ValueError("no json")
        mock_request.return_value = response

        with pytest.raises(TransportError):
            self.transport.request("https://api.example.com/x")

    @patch("hn_companion.transport.requests.Session.get")
    def test_get_text(self, mock_get):
        response = _response(text="<html></html>")
        response.raise_for_status.return_value = None
        mock_get.return_value = response

        assert self.transport.get_text("https://news.ycombinator.com/item?id=1") == "<html></html>"

    @patch("hn_companion.transport.requests.Session.get")
    def test_get_text_http_error(self, mock_get):
        response = _response(status_code=503)
        response.raise_for_status.side_effect = requests.HTTPError(response=response)
        mock_get.return_value = response

        with pytest.raises(TransportError) as excinfo:
            self.transport.get_text("https://news.ycombinator.com/item?id=1")

        assert excinfo.value.status_code == 503
