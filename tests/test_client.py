import json
import logging

import httpx
import pytest
import respx
from httpx import Response
from ss12000_client.client import SS12000Client
from ss12000_client.errors import (
    ConfigurationError,
    DecodeError,
    HttpStatusError,
    TransportFailure,
)
from ss12000_client.outcome import Empty, Failure, Success

BASE = "https://ss12000.test/v2.0"


@pytest.mark.asyncio
async def test_get_request_success():
    async with respx.mock:
        route = respx.get(f"{BASE}/organisations").mock(
            return_value=Response(200, json={"data": [{"id": "o1"}]})
        )

        client = SS12000Client(BASE, "jwt")
        async with client:
            outcome = await client.get("/organisations")

        assert isinstance(outcome, Success)
        assert outcome.value["data"][0]["id"] == "o1"
        assert route.called
        assert str(route.calls[0].request.url) == f"{BASE}/organisations"


@pytest.mark.asyncio
async def test_bearer_and_accept_headers():
    async with respx.mock:
        route = respx.get(f"{BASE}/persons").mock(
            return_value=Response(200, json={"data": []})
        )

        async with SS12000Client(BASE, "my-token") as client:
            await client.get("/persons")

        sent = route.calls[0].request.headers
        assert sent.get("Authorization") == "Bearer my-token"
        assert sent.get("Accept") == "application/json"
        assert "Content-Type" not in sent


@pytest.mark.asyncio
async def test_missing_token_omits_header_and_warns(caplog):
    with caplog.at_level(logging.WARNING, logger="ss12000_client.client"):
        client = SS12000Client(BASE, None)

    assert any("token is missing" in r.getMessage() for r in caplog.records)
    assert client.has_auth is False

    async with respx.mock:
        route = respx.get(f"{BASE}/persons").mock(
            return_value=Response(401, text="unauthorized")
        )
        async with client:
            outcome = await client.get("/persons")

    assert "Authorization" not in route.calls[0].request.headers
    assert isinstance(outcome, Failure)
    assert outcome.status_code == 401


def test_non_https_base_url_warns_but_constructs(caplog):
    with caplog.at_level(logging.WARNING, logger="ss12000_client.client"):
        client = SS12000Client("http://insecure.test/v2.0", "jwt")

    assert client.base_url == "http://insecure.test/v2.0"
    assert any("HTTPS" in r.getMessage() for r in caplog.records)


@pytest.mark.parametrize("base_url", ["", "   ", None])
def test_blank_base_url_is_configuration_error(base_url):
    with pytest.raises(ConfigurationError):
        SS12000Client(base_url, "jwt")


def test_configuration_error_is_value_error():
    with pytest.raises(ValueError):
        SS12000Client("", "jwt")


def test_build_url_joins_base_path_and_query():
    client = SS12000Client(f"{BASE}/", "jwt")
    url = client.build_url("/persons", {"limit": 2, "expand": ["duties", "x y"]})
    assert url == f"{BASE}/persons?limit=2&expand=duties&expand=x%20y"


@pytest.mark.asyncio
async def test_query_string_reaches_the_wire_unchanged():
    async with respx.mock:
        route = respx.get(f"{BASE}/groups").mock(
            return_value=Response(200, json={"data": []})
        )
        async with SS12000Client(BASE, "jwt") as client:
            await client.get(
                "/groups",
                params={"groupType": ["Klass", "Mentor"], "expandReferenceNames": True},
            )

        request = route.calls[0].request
        assert request.url.query.decode() == (
            "groupType=Klass&groupType=Mentor&expandReferenceNames=true"
        )
        assert request.url.params.get_list("groupType") == ["Klass", "Mentor"]


@pytest.mark.asyncio
async def test_post_serializes_json_body():
    async with respx.mock:
        route = respx.post(f"{BASE}/persons/lookup").mock(
            return_value=Response(200, json={"data": []})
        )
        async with SS12000Client(BASE, "jwt") as client:
            await client.post("/persons/lookup", json_body={"ids": ["p1", "p2"]})

        request = route.calls[0].request
        assert request.headers["Content-Type"] == "application/json"
        assert json.loads(request.content) == {"ids": ["p1", "p2"]}


@pytest.mark.asyncio
async def test_204_is_empty_outcome():
    async with respx.mock:
        respx.delete(f"{BASE}/attendances/a1").mock(return_value=Response(204))

        async with SS12000Client(BASE, "jwt") as client:
            outcome = await client.delete("/attendances/a1")

    assert isinstance(outcome, Empty)
    assert outcome.unwrap() is None


@pytest.mark.asyncio
async def test_404_is_http_status_error_with_body():
    async with respx.mock:
        respx.get(f"{BASE}/persons/nope").mock(
            return_value=Response(404, json={"message": "Not found"})
        )

        async with SS12000Client(BASE, "jwt") as client:
            outcome = await client.get("/persons/nope")

    assert isinstance(outcome, Failure)
    err = outcome.error
    assert isinstance(err, HttpStatusError)
    assert err.status_code == 404
    assert "Not found" in err.body
    assert err.method == "GET"
    assert err.url == f"{BASE}/persons/nope"
    with pytest.raises(HttpStatusError):
        outcome.unwrap()


@pytest.mark.asyncio
async def test_500_is_http_status_error():
    async with respx.mock:
        respx.get(f"{BASE}/statistics").mock(
            return_value=Response(500, text="internal error")
        )

        async with SS12000Client(BASE, "jwt") as client:
            outcome = await client.get("/statistics")

    assert isinstance(outcome.error, HttpStatusError)
    assert outcome.error.body == "internal error"
    assert "500 GET" in str(outcome.error)


@pytest.mark.asyncio
async def test_malformed_json_is_decode_error():
    async with respx.mock:
        respx.get(f"{BASE}/persons").mock(
            return_value=Response(200, text="<html>Not JSON</html>")
        )

        async with SS12000Client(BASE, "jwt") as client:
            outcome = await client.get("/persons")

    assert isinstance(outcome, Failure)
    assert isinstance(outcome.error, DecodeError)
    assert outcome.error.status_code == 200
    assert "Expected JSON" in str(outcome.error)


@pytest.mark.asyncio
async def test_connect_error_is_transport_failure_without_status():
    async with respx.mock:
        respx.get(f"{BASE}/persons").mock(side_effect=httpx.ConnectError("boom"))

        async with SS12000Client(BASE, "jwt") as client:
            outcome = await client.get("/persons")

    assert isinstance(outcome, Failure)
    assert isinstance(outcome.error, TransportFailure)
    assert outcome.status_code is None
    assert isinstance(outcome.error.cause, httpx.ConnectError)


@pytest.mark.asyncio
async def test_timeout_is_transport_failure_and_not_retried():
    async with respx.mock:
        route = respx.get(f"{BASE}/persons").mock(
            side_effect=httpx.ConnectTimeout("slow")
        )

        async with SS12000Client(BASE, "jwt", timeout_seconds=0.1) as client:
            outcome = await client.get("/persons")

    assert isinstance(outcome.error, TransportFailure)
    assert route.call_count == 1


@pytest.mark.asyncio
async def test_request_unwraps_or_raises():
    async with respx.mock:
        respx.get(f"{BASE}/rooms/r1").mock(
            return_value=Response(200, json={"id": "r1"})
        )
        respx.get(f"{BASE}/rooms/r2").mock(return_value=Response(403, text="no"))

        async with SS12000Client(BASE, "jwt") as client:
            assert (await client.request("GET", "/rooms/r1"))["id"] == "r1"
            with pytest.raises(HttpStatusError) as exc:
                await client.request("GET", "/rooms/r2")

    assert exc.value.status_code == 403


@pytest.mark.asyncio
async def test_decoded_objects_tolerate_key_casing():
    async with respx.mock:
        respx.get(f"{BASE}/persons/p1").mock(
            return_value=Response(
                200, json={"id": "p1", "GivenName": "Anna", "meta": {"Created": "x"}}
            )
        )

        async with SS12000Client(BASE, "jwt") as client:
            person = (await client.get("/persons/p1")).unwrap()

    assert person["givenName"] == "Anna"
    assert "givenname" in person
    assert person["Meta"]["created"] == "x"
    assert person.get("missing") is None


@pytest.mark.asyncio
async def test_failed_request_is_logged(caplog):
    async with respx.mock:
        respx.get(f"{BASE}/log").mock(return_value=Response(503, text="down"))

        with caplog.at_level(logging.WARNING, logger="ss12000_client.client"):
            async with SS12000Client(BASE, "jwt") as client:
                await client.get("/log", resource="log")

    record = next(
        r for r in caplog.records if r.getMessage() == "ss12000.request_failed"
    )
    assert record.status == 503
    assert record.resource == "log"


@pytest.mark.asyncio
async def test_aclose_is_idempotent_and_blocks_further_calls():
    client = SS12000Client(BASE, "jwt")
    await client.aclose()
    await client.aclose()

    assert client.closed
    assert client.http.is_closed
    with pytest.raises(ConfigurationError):
        await client.get("/persons")


@pytest.mark.asyncio
async def test_injected_transport_is_not_closed():
    http = httpx.AsyncClient()
    client = SS12000Client(BASE, "jwt", http=http)
    await client.aclose()

    assert not http.is_closed
    await http.aclose()
