"""Request and response bodies exchanged with the StorySpoil API."""
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class RequestBody(BaseModel):
    """Outgoing body, serialised with camelCase keys."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_json(self) -> dict:
        return self.model_dump(by_alias=True)


class CreateUserRequest(RequestBody):
    user_name: str
    first_name: str
    mid_name: str = ""
    last_name: str
    email: str
    password: str
    re_password: str


class LoginRequest(RequestBody):
    user_name: str
    password: str


class StoryPayload(RequestBody):
    title: str
    description: str
    url: Optional[str] = None


class ResponseBody(BaseModel):
    """Incoming body. Keys are matched case-insensitively, unknown keys ignored."""
    model_config = ConfigDict(extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def _lowercase_keys(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {str(key).lower(): value for key, value in data.items()}
        return data


class AuthResponse(ResponseBody):
    access_token: Optional[str] = Field(default=None, alias="accesstoken")


class ApiResponse(ResponseBody):
    """Envelope returned by story endpoints; every field is optional."""
    message: Optional[str] = Field(default=None, alias="msg")
    story_id: Optional[str] = Field(default=None, alias="storyid")
