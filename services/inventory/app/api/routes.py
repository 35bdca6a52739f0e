import uuid
from typing import Optional

from fastapi import APIRouter, Depends, File, HTTPException, Query, Request, Response, UploadFile
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from app.auth import require_admin
from app.core_settings import get_settings, Settings
from app.infrastructure.db import get_db
from app.infrastructure.photo_store import LocalPhotoStore, PhotoStore
from app.infrastructure.repository import SqlAlchemyInventoryRepository
from app.application.photos import PhotoUploadHandler
from app.application.results import Duplicate, NotFound, Uploaded
from app.application.schemas import (
    DuplicateResponse,
    InventoryCreate,
    InventoryRead,
    InventoryUpdate,
    PhotoUploadResponse,
)
from app.application.service import InventoryService

router = APIRouter(prefix="/api/inventory", tags=["inventory"])

def get_service(db: Session = Depends(get_db)) -> InventoryService:
    return InventoryService(SqlAlchemyInventoryRepository(db))

def get_photo_store(settings: Settings = Depends(get_settings)) -> PhotoStore:
    return LocalPhotoStore(settings.photo_dir)

def _duplicate_response(result: Duplicate) -> JSONResponse:
    return JSONResponse(status_code=400, content=DuplicateResponse(message=result.message).model_dump())

@router.get("", response_model=list[InventoryRead])
def list_inventory(service: InventoryService = Depends(get_service)):
    return service.list()

@router.get("/search", response_model=list[InventoryRead])
def search_inventory(
    q: Optional[str] = Query(None, max_length=200, description="Matches name, category or supplier"),
    service: InventoryService = Depends(get_service),
):
    if not q or not q.strip():
        raise HTTPException(status_code=400, detail="Query is required.")
    return service.search(q)

@router.post(
    "/upload-photo",
    response_model=PhotoUploadResponse,
    dependencies=[Depends(require_admin)],
)
async def upload_photo(
    request: Request,
    file: Optional[UploadFile] = File(None),
    store: PhotoStore = Depends(get_photo_store),
    settings: Settings = Depends(get_settings),
):
    # one byte past the limit is enough for the handler to reject it
    data = await file.read(settings.MAX_PHOTO_BYTES + 1) if file is not None else None
    base_url = settings.PUBLIC_BASE_URL or str(request.base_url)
    result = PhotoUploadHandler(store, base_url, settings.MAX_PHOTO_BYTES).upload(
        data, file.filename if file is not None else None
    )
    if not isinstance(result, Uploaded):
        raise HTTPException(status_code=400, detail=result.message)
    return PhotoUploadResponse(url=result.url)

@router.get("/{item_id}", response_model=InventoryRead, responses={404: {"description": "Not found"}})
def get_inventory_item(item_id: uuid.UUID, service: InventoryService = Depends(get_service)):
    item = service.get(item_id)
    if item is None:
        return Response(status_code=404)
    return item

@router.post(
    "",
    response_model=InventoryRead,
    status_code=201,
    responses={400: {"model": DuplicateResponse}},
    dependencies=[Depends(require_admin)],
)
def create_inventory_item(
    payload: InventoryCreate,
    response: Response,
    service: InventoryService = Depends(get_service),
):
    result = service.create(payload)
    if isinstance(result, Duplicate):
        return _duplicate_response(result)
    response.headers["Location"] = f"{router.prefix}/{result.item.id}"
    return result.item

@router.put(
    "/{item_id}",
    status_code=204,
    responses={400: {"model": DuplicateResponse}, 404: {"description": "Not found"}},
    dependencies=[Depends(require_admin)],
)
def update_inventory_item(
    item_id: uuid.UUID,
    payload: InventoryUpdate,
    service: InventoryService = Depends(get_service),
):
    result = service.update(item_id, payload)
    if isinstance(result, NotFound):
        return Response(status_code=404)
    if isinstance(result, Duplicate):
        return _duplicate_response(result)
    return Response(status_code=204)

@router.delete(
    "/{item_id}",
    status_code=204,
    responses={404: {"description": "Not found"}},
    dependencies=[Depends(require_admin)],
)
def delete_inventory_item(item_id: uuid.UUID, service: InventoryService = Depends(get_service)):
    if not service.delete(item_id):
        return Response(status_code=404)
    return Response(status_code=204)
