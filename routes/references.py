from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from core.db import get_db
from schemas.reference import ReferenceOut
from services.references import ReferenceService

router = APIRouter(prefix="/references", tags=["references"])


@router.get("/{reference_id}", response_model=ReferenceOut)
def get_reference(reference_id: int, db: Session = Depends(get_db)):
    return ReferenceService(db).get_by_id(reference_id)
