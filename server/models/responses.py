from pydantic import BaseModel


class SyncResponse(BaseModel):
    status: str
    saved: int
    deleted: int
