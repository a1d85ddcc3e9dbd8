import httpx
import pytest

from nature_areas.clients.http_client import UpstreamHttpClient
from nature_areas.exceptions import (
    UpstreamNotFoundError,
    UpstreamTimeoutError,
    UpstreamTransportError,
)

# Enable async test support
pytest_plugins = ('pytest_asyncio',)


def make_client(handler, timeout=5.0) -> UpstreamHttpClient:
    return UpstreamHttpClient(
        "nvr", "https://nvr.test/rest/v3", timeout=timeout, transport=httpx.MockTransport(handler)
    )


@pytest.mark.asyncio
class TestUpstreamHttpClient:

    async def test_json_body_is_decoded(self):
        client = make_client(lambda request: httpx.Response(200, json=[{"id": "2000019"}]))

        assert await client.request("/omrade/nolinks") == [{"id": "2000019"}]
        await client.close()

    async def test_text_body_is_returned_as_string(self):
        client = make_client(lambda request: httpx.Response(200, text="POLYGON ((1 2, 3 4, 1 2))"))

        assert await client.request("/omrade/1/Gällande/wkt") == "POLYGON ((1 2, 3 4, 1 2))"
        await client.close()

    async def test_path_is_joined_to_base_url_and_none_params_dropped(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json=[])

        client = make_client(handler)
        await client.request("/omrade/nolinks", params={"kommun": "0180", "lan": None, "limit": 100})
        await client.close()

        assert seen[0].url.path == "/rest/v3/omrade/nolinks"
        assert dict(seen[0].url.params) == {"kommun": "0180", "limit": "100"}

    async def test_404_raises_not_found(self):
        client = make_client(lambda request: httpx.Response(404, text="Not Found"))

        with pytest.raises(UpstreamNotFoundError) as exc_info:
            await client.request("/omrade/missing/Gällande/wkt")

        assert exc_info.value.status_code == 404
        assert exc_info.value.upstream_status == 404
        await client.close()

    async def test_server_error_raises_transport_error(self):
        client = make_client(lambda request: httpx.Response(500, text="ORA-28579"))

        with pytest.raises(UpstreamTransportError) as exc_info:
            await client.request("/omrade/extentAsWkt")

        assert exc_info.value.upstream_status == 500
        assert exc_info.value.status_code == 502
        assert "nvr" in str(exc_info.value)
        await client.close()

    async def test_timeout_raises_timeout_error(self):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        client = make_client(handler, timeout=2.5)

        with pytest.raises(UpstreamTimeoutError) as exc_info:
            await client.request("/omrade/nolinks")

        assert exc_info.value.timeout_seconds == 2.5
        assert exc_info.value.status_code == 504
        # Timeouts are transport errors too
        assert isinstance(exc_info.value, UpstreamTransportError)
        await client.close()

    async def test_connection_error_raises_transport_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        client = make_client(handler)

        with pytest.raises(UpstreamTransportError, match="connection refused"):
            await client.request("/omrade/nolinks")
        await client.close()

    async def test_malformed_json_raises_transport_error(self):
        client = make_client(lambda request: httpx.Response(
            200, content=b"{not json", headers={"content-type": "application/json"}
        ))

        with pytest.raises(UpstreamTransportError, match="invalid JSON"):
            await client.request("/omrade/nolinks")
        await client.close()

    async def test_close_is_idempotent(self):
        client = make_client(lambda request: httpx.Response(200, json=[]))
        await client.request("/omrade/nolinks")

        await client.close()
        await client.close()

        assert client._client is None
