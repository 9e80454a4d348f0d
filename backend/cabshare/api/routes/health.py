from fastapi import APIRouter

router = APIRouter(tags=["health"])


@router.get("/health")
def health() -> dict:
    # liveness only, the sheet is not contacted
    return {"status": "ok"}
