from fastapi import APIRouter

router = APIRouter(tags=["meta"])


@router.get("/")
def root():
    return {"message": "Welcome to the Simple Books API."}


@router.get("/status")
def service_status():
    return {"status": "OK"}
