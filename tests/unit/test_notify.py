import httpx

from checkup.config import PhotoPolicyConfig, WebhookConfig
from checkup.services.notify import notify_submission
from checkup.services.validation import validate_submission

PAYLOAD = {
    "reporterName": "Ana",
    "branchName": "Warehouse",
    "dateStarted": "2024-01-01",
    "dateEnded": "2024-01-31",
    "submissionDate": "2024-02-01T08:00:00Z",
    "properties": [{"id": "door", "name": "Door", "condition": "Good"}],
}


def data():
    return validate_submission(PAYLOAD, PhotoPolicyConfig())


async def test_no_url_is_noop():
    assert await notify_submission(data(), WebhookConfig(url="")) is None


async def test_posts_payload_with_bearer_key():
    seen = {}

    def handler(request: httpx.Request):
        seen["auth"] = request.headers.get("Authorization")
        seen["body"] = request.content
        return httpx.Response(200, json={"ok": True})

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        warning = await notify_submission(data(), WebhookConfig(url="https://hooks.test/x", key="k1"), client)

    assert warning is None
    assert seen["auth"] == "Bearer k1"
    assert b'"reporterName":"Ana"' in seen["body"].replace(b" ", b"")


async def test_error_status_becomes_warning():
    transport = httpx.MockTransport(lambda request: httpx.Response(500, text="boom"))
    async with httpx.AsyncClient(transport=transport) as client:
        warning = await notify_submission(data(), WebhookConfig(url="https://hooks.test/x"), client)
    assert "500" in warning


async def test_network_error_becomes_warning():
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        warning = await notify_submission(data(), WebhookConfig(url="https://hooks.test/x"), client)
    assert warning is not None
