"""Salesforce integration - mirrors a user as a Contact after OAuth (PKCE)."""
from typing import Any, Dict, Optional

import httpx
import structlog

from inventory_hub.config import settings

logger = structlog.get_logger(__name__)


class SalesforceError(Exception):
    """A Salesforce call failed; ``message`` is safe to show to the user."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


def soql_quote(value: str) -> str:
    """Quote a string literal for a SOQL query."""
    escaped = value.replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


def _error_message(exc: httpx.HTTPError) -> str:
    """Extract the most useful message from a failed Salesforce call."""
    response = getattr(exc, "response", None)
    if response is not None:
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, list) and body and isinstance(body[0], dict) and body[0].get("message"):
            return body[0]["message"]
        if isinstance(body, dict) and body.get("error_description"):
            return body["error_description"]
    return str(exc) or "Failed to process Salesforce callback."


class SalesforceClient:
    """Thin client for the OAuth token exchange and the REST data API."""

    def __init__(
        self,
        login_url: str,
        client_id: str,
        client_secret: str,
        redirect_uri: str,
        api_version: str = "v59.0",
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 15.0,
    ):
        self.login_url = login_url.rstrip("/")
        self.client_id = client_id
        self.client_secret = client_secret
        self.redirect_uri = redirect_uri
        self.api_version = api_version
        self._transport = transport
        self._timeout = timeout

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=self._transport, timeout=self._timeout)

    async def sync_contact(self, code: str, code_verifier: str, uid: str, email: str) -> bool:
        """
        Complete the OAuth flow and make sure a Contact exists for ``uid``.

        Returns True if a new Contact was created, False if one already
        existed.

        Raises:
            SalesforceError: if any Salesforce call fails.
        """
        try:
            async with self._client() as client:
                token = await self._exchange_code(client, code, code_verifier)
                api = _RestApi(client, token["instance_url"], token["access_token"], self.api_version)

                existing = await api.query(
                    f"SELECT Id FROM Contact WHERE External_ID__c = {soql_quote(uid)} LIMIT 1"
                )
                if existing.get("totalSize", 0) > 0:
                    logger.info("salesforce_contact_exists", uid=uid)
                    return False

                user_info = await api.user_info()
                account_id = await self._find_or_create_account(api, user_info, email)
                await api.create("Contact", {
                    "LastName": user_info.get("family_name") or email.split("@")[0],
                    "FirstName": user_info.get("given_name") or "User",
                    "Email": email,
                    "AccountId": account_id,
                    "External_ID__c": uid,
                })
                logger.info("salesforce_contact_created", uid=uid, account_id=account_id)
                return True
        except httpx.HTTPError as exc:
            raise SalesforceError(_error_message(exc)) from exc

    async def _exchange_code(self, client: httpx.AsyncClient, code: str, code_verifier: str) -> Dict[str, Any]:
        response = await client.post(
            f"{self.login_url}/services/oauth2/token",
            data={
                "grant_type": "authorization_code",
                "code": code,
                "client_id": self.client_id,
                "client_secret": self.client_secret,
                "redirect_uri": self.redirect_uri,
                "code_verifier": code_verifier,
            },
        )
        response.raise_for_status()
        token = response.json()
        if not token.get("access_token") or not token.get("instance_url"):
            raise SalesforceError("Salesforce did not return an access token.")
        return token

    async def _find_or_create_account(self, api: "_RestApi", user_info: Dict[str, Any], email: str) -> str:
        name = (user_info.get("name") or "").strip()
        account_name = f"{name}'s Organization" if name else f"{email}'s Organization"

        existing = await api.query(
            f"SELECT Id FROM Account WHERE Name = {soql_quote(account_name)} LIMIT 1"
        )
        if existing.get("totalSize", 0) > 0:
            return existing["records"][0]["Id"]

        created = await api.create("Account", {"Name": account_name})
        account_id = created.get("id")
        if not account_id:
            raise SalesforceError("Could not find or create a Salesforce Account.")
        return account_id


class _RestApi:
    """Calls against one org's REST API with a bearer token."""

    def __init__(self, client: httpx.AsyncClient, instance_url: str, access_token: str, api_version: str):
        self._client = client
        self._instance_url = instance_url.rstrip("/")
        self._headers = {"Authorization": f"Bearer {access_token}"}
        self._data_url = f"{self._instance_url}/services/data/{api_version}"

    async def query(self, soql: str) -> Dict[str, Any]:
        response = await self._client.get(
            f"{self._data_url}/query", params={"q": soql}, headers=self._headers
        )
        response.raise_for_status()
        return response.json()

    async def user_info(self) -> Dict[str, Any]:
        response = await self._client.get(
            f"{self._instance_url}/services/oauth2/userinfo", headers=self._headers
        )
        response.raise_for_status()
        return response.json()

    async def create(self, sobject: str, fields: Dict[str, Any]) -> Dict[str, Any]:
        response = await self._client.post(
            f"{self._data_url}/sobjects/{sobject}", json=fields, headers=self._headers
        )
        response.raise_for_status()
        return response.json()


def get_salesforce_client() -> SalesforceClient:
    return SalesforceClient(
        login_url=settings.SF_LOGIN_URL,
        client_id=settings.SF_CLIENT_ID,
        client_secret=settings.SF_CLIENT_SECRET,
        redirect_uri=settings.salesforce_redirect_uri,
        api_version=settings.SF_API_VERSION,
    )
