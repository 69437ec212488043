from __future__ import annotations

import pytest
from pydantic import ValidationError

from taskpilot.contracts.task import Timestamp
from taskpilot.contracts.wire import (
    MAX_PAGE_SIZE,
    ListTasksPage,
    ListTasksRequest,
    ResponseView,
    WireHttpRequest,
    WireTask,
)

NAME = "projects/p/locations/l/queues/q/tasks/test_id_3b9aca02v1"
BODY_B64 = "eyJwYXlsb2FkIjoidGVzdCJ9"


def rest_task_payload() -> dict[str, object]:
    return {
        "name": NAME,
        "scheduleTime": "1970-01-01T00:00:01.000000002Z",
        "createTime": "2024-01-01T00:00:00Z",
        "view": "BASIC",
        "httpRequest": {
            "url": "https://example.com/",
            "httpMethod": "POST",
            "headers": {"Content-Type": "application/json"},
            "body": BODY_B64,
            "oauthToken": {
                "serviceAccountEmail": "test@example.com",
                "scope": "https://www.googleapis.com/auth/calendar",
            },
        },
    }


def test_parses_rest_json() -> None:
    task = WireTask.model_validate(rest_task_payload())

    assert task.name == NAME
    assert task.schedule_time == Timestamp(seconds=1, nanos=2)
    assert task.http_request is not None
    assert task.http_request.http_method == "POST"
    assert task.http_request.body == b'{"payload":"test"}'
    assert task.http_request.oauth_token is not None
    assert task.http_request.oauth_token.service_account_email == "test@example.com"
    assert task.http_request.oidc_token is None
    assert task.http_request.extra_authorization_variants() == []


def test_dumps_rest_json() -> None:
    task = WireTask.model_validate(rest_task_payload())

    payload = task.model_dump(mode="json", by_alias=True, exclude_none=True)

    assert payload["scheduleTime"] == "1970-01-01T00:00:01.000000002Z"
    assert payload["httpRequest"]["body"] == BODY_B64
    assert payload["httpRequest"]["httpMethod"] == "POST"
    assert payload["httpRequest"]["oauthToken"] == {
        "serviceAccountEmail": "test@example.com",
        "scope": "https://www.googleapis.com/auth/calendar",
    }
    assert "oidcToken" not in payload["httpRequest"]
    assert "appEngineHttpRequest" not in payload


def test_python_dump_keeps_raw_bytes() -> None:
    request = WireHttpRequest(url="https://example.com", http_method="POST", body=b"\x00\x01")

    assert request.model_dump()["body"] == b"\x00\x01"


def test_invalid_base64_body_is_rejected() -> None:
    with pytest.raises(ValidationError):
        WireHttpRequest.model_validate({"url": "https://example.com", "body": "not base64!"})


def test_unknown_token_variants_are_reported() -> None:
    request = WireHttpRequest.model_validate(
        {"url": "https://example.com", "httpMethod": "GET", "fancyToken": {"kid": "x"}, "unrelated": 1}
    )

    assert request.extra_authorization_variants() == ["fancyToken"]


def test_missing_http_method_is_unspecified() -> None:
    assert WireHttpRequest(url="https://example.com").http_method == "HTTP_METHOD_UNSPECIFIED"


def test_list_request_page_size_bounds() -> None:
    assert ListTasksRequest(parent="p").page_size == MAX_PAGE_SIZE
    assert ListTasksRequest(parent="p").response_view is ResponseView.BASIC
    with pytest.raises(ValidationError):
        ListTasksRequest(parent="p", page_size=MAX_PAGE_SIZE + 1)
    with pytest.raises(ValidationError):
        ListTasksRequest(parent="p", page_size=0)


def test_list_page_defaults_and_aliases() -> None:
    assert ListTasksPage.model_validate({}) == ListTasksPage()

    page = ListTasksPage.model_validate({"tasks": [rest_task_payload()], "nextPageToken": "abc"})

    assert page.next_page_token == "abc"
    assert [task.name for task in page.tasks] == [NAME]
