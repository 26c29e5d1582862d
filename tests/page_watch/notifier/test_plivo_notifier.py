"""
Unit tests for the PlivoNotifier class.

The tests follow the Arrange-Act-Assert (AAA) pattern. The API is either
mocked at session level or served by a local aiohttp test server.
"""

from typing import Any, Dict, List
from unittest.mock import MagicMock

import aiohttp
import pytest
from aiohttp import test_utils, web

from page_watch.domain import Contact
from page_watch.exceptions import DeliveryError
from page_watch.notifier.plivo_notifier import PlivoNotifier, PlivoSettings

SETTINGS = PlivoSettings(auth_id="MA123", token="secret", number="+15550199")
CONTACT = Contact(alias="oncall", phone="+15550100", email="", class_mask=1)


@pytest.mark.asyncio
async def test_send_should_skip_contacts_without_phone() -> None:
    # Arrange
    session = MagicMock(spec=aiohttp.ClientSession)
    notifier = PlivoNotifier(session, SETTINGS)

    # Act
    await notifier.send(CONTACT._replace(phone=""), "hello")

    # Assert
    session.post.assert_not_called()


@pytest.mark.asyncio
async def test_send_should_post_message_to_the_account_endpoint() -> None:
    # Arrange
    session = MagicMock(spec=aiohttp.ClientSession)
    notifier = PlivoNotifier(session, SETTINGS)

    # Act
    await notifier.send(CONTACT, "Error on 'shop'! boom")

    # Assert
    args, kwargs = session.post.call_args
    assert args == ("https://api.plivo.com/v1/Account/MA123/Message/",)
    assert kwargs["json"] == {"src": "+15550199", "dst": "+15550100", "text": "Error on 'shop'! boom"}
    assert kwargs["auth"] == aiohttp.BasicAuth("MA123", "secret")


@pytest.mark.asyncio
async def test_send_should_raise_delivery_error_when_api_rejects() -> None:
    # Arrange
    session = MagicMock(spec=aiohttp.ClientSession)
    response = MagicMock()
    response.raise_for_status.side_effect = aiohttp.ClientResponseError(
        request_info=MagicMock(), history=(), status=401, message="Unauthorized"
    )
    session.post.return_value.__aenter__.return_value = response
    notifier = PlivoNotifier(session, SETTINGS)

    # Act / Assert
    with pytest.raises(DeliveryError, match="oncall"):
        await notifier.send(CONTACT, "hello")


@pytest.mark.asyncio
async def test_send_should_deliver_through_http() -> None:
    # Arrange
    received: List[Dict[str, Any]] = []

    async def handler(request: web.Request) -> web.Response:
        received.append(
            {
                "auth_id": request.match_info["auth_id"],
                "authorization": request.headers.get("Authorization"),
                "payload": await request.json(),
            }
        )
        return web.json_response({"message": "message(s) queued"}, status=202)

    app = web.Application()
    app.router.add_post("/v1/Account/{auth_id}/Message/", handler)

    async with test_utils.TestServer(app) as server:
        api_url = str(server.make_url("/v1/Account/")) + "{auth_id}/Message/"
        async with aiohttp.ClientSession() as session:
            notifier = PlivoNotifier(session, SETTINGS, api_url=api_url)

            # Act
            await notifier.send(CONTACT, "hello")

    # Assert
    assert received == [
        {
            "auth_id": "MA123",
            "authorization": aiohttp.BasicAuth("MA123", "secret").encode(),
            "payload": {"src": "+15550199", "dst": "+15550100", "text": "hello"},
        }
    ]
