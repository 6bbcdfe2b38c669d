from pydantic import BaseModel, ConfigDict, EmailStr, Field


class ClientRegistration(BaseModel):
    client_name: str = Field(..., alias="clientName", min_length=1)
    client_email: EmailStr = Field(..., alias="clientEmail")
    model_config = ConfigDict(populate_by_name=True)


class AccessToken(BaseModel):
    access_token: str = Field(..., alias="accessToken")
    model_config = ConfigDict(populate_by_name=True)
