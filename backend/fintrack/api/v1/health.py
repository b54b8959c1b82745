from fastapi import APIRouter
from fintrack.schemas.common import Health

router = APIRouter()


@router.get('/health', response_model=Health)
def health():
    return {'status': 'ok'}
