"""Tests for the requests based API client, using a stubbed session."""

import json

import pytest
import requests

from exercise_tracker_client import ExerciseTrackerAPI


def make_response(status_code, payload=None, text=None):
    response = requests.Response()
    response.status_code = status_code
    response.url = "http://tracker.test"
    if payload is not None:
        response._content = json.dumps(payload).encode("utf-8")
        response.headers["Content-Type"] = "application/json"
    else:
        response._content = (text or "").encode("utf-8")
    return response


class StubSession:
    """Records requests and answers them from a queue of responses."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    def request(self, **kwargs):
        self.calls.append(kwargs)
        result = self.responses.pop(0)
        if isinstance(result, Exception):
            raise result
        return result


def make_client(*responses):
    session = StubSession(*responses)
    return ExerciseTrackerAPI(base_url="http://tracker.test/", session=session), session


def test_create_user_posts_form_data():
    api, session = make_client(make_response(200, {"id": "u1", "username": "alice"}))
    data, error = api.create_user("alice")
    assert error is None
    assert data == {"id": "u1", "username": "alice"}
    call = session.calls[0]
    assert call["method"] == "POST"
    assert call["url"] == "http://tracker.test/api/users"
    assert call["data"] == {"username": "alice"}


def test_add_exercise_omits_missing_date():
    api, session = make_client(make_response(200, {"id": "e1"}))
    api.add_exercise("u1", "run", 30)
    call = session.calls[0]
    assert call["url"] == "http://tracker.test/api/users/u1/exercises"
    assert call["data"] == {"description": "run", "duration": 30}


def test_get_log_sends_only_given_filters():
    log = {"id": "u1", "username": "alice", "count": 0, "log": []}
    api, session = make_client(make_response(200, log))
    data, error = api.get_log("u1", from_="2024-01-01", limit=2)
    assert data == log
    assert session.calls[0]["params"] == {"from": "2024-01-01", "limit": 2}


def test_list_methods_return_lists():
    api, _ = make_client(
        make_response(200, [{"id": "u1", "username": "alice"}]),
        make_response(200, [{"username": "alice", "description": "run", "duration": 30, "date": "Mon Jan 01 2024"}]),
    )
    users, error = api.list_users()
    assert error is None and len(users) == 1
    exercises, error = api.list_exercises("u1")
    assert error is None and exercises[0]["description"] == "run"


def test_server_error_message_is_extracted():
    api, _ = make_client(make_response(500, {"error": "not connected to the store"}))
    users, error = api.list_users()
    assert users == []
    assert error == {"status_code": 500, "message": "not connected to the store"}


def test_non_json_error_body():
    api, _ = make_client(make_response(502, text="Bad Gateway"))
    data, error = api.create_user("alice")
    assert data is None
    assert error == {"status_code": 502, "message": "Bad Gateway"}


def test_connection_failure():
    api, _ = make_client(requests.ConnectionError("connection refused"))
    data, error = api.get_log("u1")
    assert data is None
    assert error["status_code"] is None
    assert "connection refused" in error["message"]


@pytest.mark.parametrize("base_url", ["http://tracker.test", "http://tracker.test/"])
def test_base_url_is_normalised(base_url):
    api = ExerciseTrackerAPI(base_url=base_url, session=StubSession())
    assert api.base_url == "http://tracker.test"
