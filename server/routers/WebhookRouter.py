from fastapi import APIRouter, Depends, HTTPException, Request

from server.dependencies.auth import verify_api_key
from server.models.responses import SyncResponse
from services.index_sync.errors import SyncError
from shared.models.sync import ChangeNotification

router = APIRouter(prefix="/webhook", tags=["webhook"])


@router.post("/sync", response_model=SyncResponse)
async def webhook_sync(
    request: Request,
    body: ChangeNotification,
    _: None = Depends(verify_api_key),
) -> SyncResponse:
    """Apply a document store change notification to the search indices.

    The run is awaited so the sender learns about failures and can redeliver.

    Args:
        request (Request): FastAPI request (provides app.state.sync_service).
        body (ChangeNotification): JSON body with the created/updated/deleted ids.
        _ (None): Auth dependency result (unused).

    Returns:
        SyncResponse: Number of saved records and deleted ids.

    Raises:
        HTTPException: 502 if the synchronisation run failed.
    """
    sync_service = request.app.state.sync_service
    try:
        change_set = await sync_service.do_webhook_sync(body)
    except SyncError as exc:
        raise HTTPException(status_code=502, detail=str(exc))
    return SyncResponse(status="ok", saved=len(change_set.to_save), deleted=len(change_set.to_delete))
