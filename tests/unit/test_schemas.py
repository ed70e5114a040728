"""Tests for request and response schemas."""

import pytest
from pydantic import ValidationError

from chatwrapper.schemas.admin_schema import CreateUserRequest
from chatwrapper.schemas.auth_schema import ChangePasswordRequest, LoginRequest, UserResponse
from chatwrapper.schemas.chat_schema import ChatRequest, ChatResponse, TokenUsage


class TestLoginRequest:
    def test_accepts_camel_case(self) -> None:
        req = LoginRequest.model_validate({"loginName": "alice", "password": "pw"})
        assert req.login_name == "alice"

    @pytest.mark.parametrize(
        "payload",
        [
            {"password": "pw"},
            {"loginName": "alice"},
            {"loginName": "", "password": "pw"},
            {"loginName": 42, "password": "pw"},
        ],
    )
    def test_rejects_invalid(self, payload: dict) -> None:
        with pytest.raises(ValidationError):
            LoginRequest.model_validate(payload)


class TestChangePasswordRequest:
    def test_valid(self) -> None:
        req = ChangePasswordRequest.model_validate(
            {"currentPassword": "old", "newPassword": "long-enough"}
        )
        assert req.new_password == "long-enough"

    def test_new_password_too_short(self) -> None:
        with pytest.raises(ValidationError):
            ChangePasswordRequest.model_validate(
                {"currentPassword": "old", "newPassword": "short"}
            )


class TestCreateUserRequest:
    def test_strips_login_name(self) -> None:
        req = CreateUserRequest.model_validate(
            {"loginName": "  bob ", "password": "s3cret!!"}
        )
        assert req.login_name == "bob"
        assert req.display_name is None
        assert req.is_admin is False

    @pytest.mark.parametrize(
        "payload",
        [
            {"loginName": "   ", "password": "s3cret!!"},
            {"loginName": "bob", "password": "short"},
            {"loginName": "bob", "password": "s3cret!!", "isAdmin": "yes"},
            {"password": "s3cret!!"},
        ],
    )
    def test_rejects_invalid(self, payload: dict) -> None:
        with pytest.raises(ValidationError):
            CreateUserRequest.model_validate(payload)


class TestChatSchemas:
    def test_empty_message_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ChatRequest.model_validate({"message": ""})

    def test_non_string_message_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ChatRequest.model_validate({"message": ["hi"]})

    def test_response_wire_shape(self) -> None:
        resp = ChatResponse(
            reply="hi",
            usage=TokenUsage(input_tokens=1, output_tokens=2, total_tokens=3),
            estimated_cost_usd=0.5,
        )
        assert resp.model_dump(by_alias=True) == {
            "reply": "hi",
            "usage": {"inputTokens": 1, "outputTokens": 2, "totalTokens": 3},
            "estimatedCostUsd": 0.5,
        }


class TestUserResponse:
    def test_omits_password_hash(self) -> None:
        user = UserResponse(id="u1", display_name="A", login_name="a", is_admin=False)
        assert user.model_dump(by_alias=True) == {
            "id": "u1",
            "displayName": "A",
            "loginName": "a",
            "isAdmin": False,
        }
