from fastapi import APIRouter

from gst_invoice.core.config import settings

router = APIRouter()


@router.get("/")
async def health():
    return {"status": "ok", "message": f"{settings.APP_NAME} Running"}
