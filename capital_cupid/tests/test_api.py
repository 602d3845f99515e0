"""Tests for the backend collaborators."""

import json
import logging

import httpx
import pytest
import respx

from capital_cupid.api import API_TIMEOUT, ApiClient, ApiError, DraftsApi, GrantsApi
from capital_cupid.catalog import GrantNotFoundError

BASE_URL = "https://api.capitalcupid.test/api"


@pytest.fixture
def drafts_api():
    return DraftsApi(ApiClient(BASE_URL + "/"))


@pytest.mark.asyncio
async def test_match_response(catalog, tech_profile):
    response = await GrantsApi(catalog).match(tech_profile)

    assert response.total_count == 3
    assert response.grants[0].id == "mdec-digital-boost"
    assert response.grants[0].score == pytest.approx(0.9)


@pytest.mark.asyncio
async def test_get_by_id_and_shortlist(catalog):
    api = GrantsApi(catalog)

    assert (await api.get_by_id("cradle-cip")).agency == "CRADLE Fund"
    assert [g.id for g in await api.get_shortlist(["cradle-cip", "sme-corp-export"])] == [
        "sme-corp-export",
        "cradle-cip",
    ]
    with pytest.raises(GrantNotFoundError):
        await api.get_by_id("missing")


@pytest.mark.asyncio
async def test_submit(catalog):
    api = GrantsApi(catalog)

    ok = await api.submit("cradle-cip", "Dear CRADLE Fund, ...")
    assert ok.success is True
    assert ok.application_id.startswith("app-")

    blank = await api.submit("cradle-cip", "   ")
    assert blank.success is False
    assert blank.application_id is None


@pytest.mark.asyncio
@respx.mock
async def test_drafts_save_sends_content_verbatim(drafts_api, caplog):
    route = respx.post(f"{BASE_URL}/drafts").mock(
        return_value=httpx.Response(201, json={"id": "draft-123"})
    )
    content = "Dear Agency,\n\n• point one\n"

    with caplog.at_level(logging.INFO):
        draft_id = await drafts_api.save("cradle-cip", content)

    assert draft_id == "draft-123"
    assert json.loads(route.calls.last.request.content) == {"grantId": "cradle-cip", "content": content}
    assert "result=success" in caplog.text


@pytest.mark.asyncio
@respx.mock
async def test_drafts_update_empty_body(drafts_api):
    route = respx.patch(f"{BASE_URL}/drafts/draft-123").mock(return_value=httpx.Response(204))

    assert await drafts_api.update("draft-123", "new text") is None
    assert route.called


@pytest.mark.asyncio
@respx.mock
async def test_drafts_submit(drafts_api):
    respx.post(f"{BASE_URL}/submit").mock(
        return_value=httpx.Response(
            200,
            json={"success": True, "applicationId": "app-9", "message": "Application submitted successfully"},
        )
    )

    response = await drafts_api.submit("cradle-cip", "draft-123")

    assert response.success is True
    assert response.application_id == "app-9"


@pytest.mark.asyncio
@respx.mock
async def test_http_error_status_raises_without_retry(drafts_api, caplog):
    route = respx.post(f"{BASE_URL}/drafts").mock(return_value=httpx.Response(500, json={"error": "boom"}))

    with pytest.raises(ApiError) as exc_info:
        await drafts_api.save("cradle-cip", "text")

    assert str(exc_info.value) == "API Error: 500 Internal Server Error"
    assert exc_info.value.status_code == 500
    assert route.call_count == 1
    assert "result=failure" in caplog.text


@pytest.mark.asyncio
@respx.mock
async def test_transport_error_wrapped(drafts_api):
    respx.post(f"{BASE_URL}/submit").mock(side_effect=httpx.ConnectError("connection refused"))

    with pytest.raises(ApiError):
        await drafts_api.submit("cradle-cip", "draft-123")


@pytest.mark.asyncio
@respx.mock
async def test_save_without_id_in_response(drafts_api):
    respx.post(f"{BASE_URL}/drafts").mock(return_value=httpx.Response(200, json={"ok": True}))

    with pytest.raises(ApiError, match="draft id"):
        await drafts_api.save("cradle-cip", "text")


def test_timeout_configuration():
    assert API_TIMEOUT.connect == 30.0
    assert API_TIMEOUT.read == 60.0
