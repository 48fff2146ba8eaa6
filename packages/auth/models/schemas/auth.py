from typing import List
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class LoginRequest(BaseModel):
    username: str = ""
    password: str = ""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class UserResponse(BaseModel):
    user_id: str
    name: str
    role: str
    permissions: List[str]

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,  # Allows population by both original name and alias
        from_attributes=True,
    )


class LoginResponse(BaseModel):
    token: str
    token_type: str = "bearer"
    user: UserResponse

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )
