from fastapi import APIRouter

router = APIRouter(prefix="/api", tags=["health"])


@router.get("/health")
def health():
	return {"status": "ok", "message": "Server is running"}
