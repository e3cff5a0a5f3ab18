"""Tests for parsing raw action payloads into the closed action union."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from pulseboard.store.actions import (
    AddBlogPost,
    IncrementViews,
    Logout,
    ToggleLike,
    parse_action,
)


def test_parse_action_accepts_camel_case_payloads() -> None:
    action = parse_action({"type": "TOGGLE_LIKE", "postId": "1", "userId": "u1"})

    assert isinstance(action, ToggleLike)
    assert action.post_id == "1"
    assert action.user_id == "u1"


def test_parse_action_builds_nested_models() -> None:
    action = parse_action(
        {
            "type": "ADD_BLOG_POST",
            "post": {
                "id": "1",
                "title": "Hello",
                "content": "World",
                "author": "alice",
                "createdAt": "2024-03-15T12:00:00Z",
                "updatedAt": "2024-03-15T12:00:00Z",
                "userLikes": ["u1", "u1"],
            },
        }
    )

    assert isinstance(action, AddBlogPost)
    assert action.post.user_likes == ["u1"]
    assert action.post.likes == 1


def test_parse_action_handles_payload_free_actions() -> None:
    assert isinstance(parse_action({"type": "LOGOUT"}), Logout)
    assert isinstance(parse_action({"type": "INCREMENT_VIEWS", "postId": "9"}), IncrementViews)


@pytest.mark.parametrize(
    "payload",
    [
        {"type": "NOT_A_REAL_ACTION"},
        {"type": "TOGGLE_LIKE", "postId": "1"},
        {"type": "TOGGLE_LIKE", "postId": "1", "userId": ""},
        {"postId": "1"},
    ],
)
def test_parse_action_rejects_malformed_payloads(payload: dict[str, object]) -> None:
    with pytest.raises(ValidationError):
        parse_action(payload)


def test_actions_are_immutable() -> None:
    action = IncrementViews(post_id="1")

    with pytest.raises(ValidationError):
        action.post_id = "2"  # type: ignore[misc]
