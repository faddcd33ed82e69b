"""Profile routes - Salesforce link status and OAuth completion."""
import structlog
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from inventory_hub.auth import get_current_user
from inventory_hub.database import get_db
from inventory_hub.models.user import User
from inventory_hub.schemas.salesforce import (
    SalesforceCallback,
    SalesforceStatus,
    SalesforceSyncResponse,
)
from inventory_hub.services.salesforce import (
    SalesforceClient,
    SalesforceError,
    get_salesforce_client,
)

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/user", tags=["Profile"])


@router.get("/salesforce-status", response_model=SalesforceStatus)
async def salesforce_status(current_user: User = Depends(get_current_user)):
    """Whether the caller has linked a Salesforce account."""
    return SalesforceStatus(is_connected=bool(current_user.is_salesforce_connected))


@router.post("/salesforce-callback", response_model=SalesforceSyncResponse)
async def salesforce_callback(
    payload: SalesforceCallback,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    client: SalesforceClient = Depends(get_salesforce_client)
):
    """Finish the Salesforce OAuth flow and mirror the caller as a Contact."""
    if not payload.code or not payload.code_verifier:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Authorization code or verifier is missing."
        )

    try:
        await client.sync_contact(
            payload.code,
            payload.code_verifier,
            current_user.uid,
            current_user.email or "",
        )
    except SalesforceError as exc:
        logger.error("salesforce_sync_failed", uid=current_user.uid, error=exc.message)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=exc.message
        )

    current_user.is_salesforce_connected = True
    db.commit()
    return SalesforceSyncResponse(message="Salesforce account connected successfully!")
