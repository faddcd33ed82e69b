"""Salesforce link schemas."""
from pydantic import BaseModel, Field


class SalesforceCallback(BaseModel):
    """Authorization code and PKCE verifier returned to the client."""
    code: str = ""
    code_verifier: str = Field("", alias="codeVerifier")

    class Config:
        populate_by_name = True


class SalesforceStatus(BaseModel):
    is_connected: bool


class SalesforceSyncResponse(BaseModel):
    success: bool = True
    message: str
