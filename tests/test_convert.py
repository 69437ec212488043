from __future__ import annotations

from collections.abc import Callable

import pytest

from taskpilot.contracts.exceptions import (
    NotOwnedError,
    UnsupportedAuthorizationError,
    UnsupportedMessageTypeError,
    UnsupportedMethodError,
)
from taskpilot.contracts.task import HttpRequest, OIDCToken, Task, Timestamp
from taskpilot.contracts.wire import WireHttpRequest, WireOAuthToken, WireOidcToken, WireTask
from taskpilot.convert import task_from_wire, task_to_wire
from tests.fakes.client import PREFIX, QUEUE_PATH, get_task, post_task

NAME = f"{QUEUE_PATH}/tasks/test_id_3b9aca02v1"


class TestTaskToWire:
    def test_maps_every_field(self) -> None:
        wire = task_to_wire(post_task())

        assert wire.name == NAME
        assert wire.schedule_time == Timestamp(seconds=1, nanos=2)
        assert wire.http_request is not None
        assert wire.http_request.url == "https://example.com/"
        assert wire.http_request.http_method == "POST"
        assert wire.http_request.headers == {"Content-Type": "application/json"}
        assert wire.http_request.body == b'{"payload":"test"}'
        assert wire.http_request.oauth_token == WireOAuthToken(
            service_account_email="test@example.com",
            scope="https://www.googleapis.com/auth/calendar",
        )
        assert wire.http_request.oidc_token is None

    def test_multi_valued_headers_are_comma_joined(self) -> None:
        task = get_task(
            request=HttpRequest(url="https://example.com/", headers={"Accept": ["text/plain", "application/json"]})
        )

        wire = task_to_wire(task)

        assert wire.http_request is not None
        assert wire.http_request.headers == {"Accept": "text/plain,application/json"}

    def test_oidc_authorization(self) -> None:
        task = get_task(authorization=OIDCToken(service_account_email="sa@example.com", audience="https://aud"))

        wire = task_to_wire(task)

        assert wire.http_request is not None
        assert wire.http_request.oauth_token is None
        assert wire.http_request.oidc_token == WireOidcToken(
            service_account_email="sa@example.com", audience="https://aud"
        )

    def test_no_authorization(self) -> None:
        wire = task_to_wire(get_task())

        assert wire.http_request is not None
        assert wire.http_request.oauth_token is None
        assert wire.http_request.oidc_token is None

    def test_rejects_unsupported_method(self) -> None:
        task = get_task(request=HttpRequest(method="CONNECT", url="https://example.com/"))

        with pytest.raises(UnsupportedMethodError, match="unsupported http method: CONNECT"):
            task_to_wire(task)

    def test_task_stays_usable_after_conversion(self) -> None:
        task = post_task()

        task_to_wire(task)

        assert task_to_wire(task).http_request == task_to_wire(post_task()).http_request


class TestTaskFromWire:
    @pytest.mark.parametrize("factory", [post_task, get_task])
    def test_recovers_the_original_task(self, factory: Callable[..., Task]) -> None:
        task = factory()

        assert task_from_wire(QUEUE_PATH, PREFIX, task_to_wire(task)) == task

    def test_folded_header_values_come_back_as_one_value(self) -> None:
        wire = WireTask(
            name=NAME,
            schedule_time=Timestamp(seconds=1, nanos=2),
            http_request=WireHttpRequest(url="https://example.com/", http_method="GET", headers={"Accept": "a,b"}),
        )

        task = task_from_wire(QUEUE_PATH, PREFIX, wire)

        assert task.request.headers == {"Accept": ["a,b"]}

    def test_missing_schedule_time_is_the_epoch(self) -> None:
        wire = WireTask(name=NAME, http_request=WireHttpRequest(url="https://example.com/", http_method="GET"))

        assert task_from_wire(QUEUE_PATH, PREFIX, wire).scheduled_at == Timestamp()

    def test_rejects_foreign_name(self) -> None:
        wire = WireTask(
            name=f"{QUEUE_PATH}/tasks/other_id_1v1",
            http_request=WireHttpRequest(url="https://example.com/", http_method="GET"),
        )

        with pytest.raises(NotOwnedError):
            task_from_wire(QUEUE_PATH, PREFIX, wire)

    def test_rejects_app_engine_tasks(self) -> None:
        wire = WireTask(name=NAME, app_engine_http_request={"relativeUri": "/run"})

        with pytest.raises(UnsupportedMessageTypeError, match="appEngineHttpRequest"):
            task_from_wire(QUEUE_PATH, PREFIX, wire)

    @pytest.mark.parametrize("method", ["HTTP_METHOD_UNSPECIFIED", "TRACE", "post"])
    def test_rejects_unknown_wire_method(self, method: str) -> None:
        wire = WireTask(name=NAME, http_request=WireHttpRequest(url="https://example.com/", http_method=method))

        with pytest.raises(UnsupportedMethodError):
            task_from_wire(QUEUE_PATH, PREFIX, wire)

    def test_rejects_both_token_variants(self) -> None:
        wire = WireTask(
            name=NAME,
            http_request=WireHttpRequest(
                url="https://example.com/",
                http_method="GET",
                oauth_token=WireOAuthToken(service_account_email="a@example.com"),
                oidc_token=WireOidcToken(service_account_email="a@example.com"),
            ),
        )

        with pytest.raises(UnsupportedAuthorizationError):
            task_from_wire(QUEUE_PATH, PREFIX, wire)

    def test_rejects_unknown_token_variant(self) -> None:
        request = WireHttpRequest.model_validate(
            {"url": "https://example.com/", "httpMethod": "GET", "jwtToken": {"issuer": "x"}}
        )

        with pytest.raises(UnsupportedAuthorizationError, match="jwtToken"):
            task_from_wire(QUEUE_PATH, PREFIX, WireTask(name=NAME, http_request=request))
