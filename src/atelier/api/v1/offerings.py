"""Offering catalog endpoint."""

from fastapi import APIRouter

from src.atelier.schemas.offering import OfferingRead
from src.atelier.services.catalog import list_offerings

router = APIRouter(prefix="/offerings", tags=["offerings"])


@router.get(
    "",
    response_model=list[OfferingRead],
    responses={
        200: {
            "description": "Offerings a client can order and their credit cost",
            "content": {
                "application/json": {
                    "example": [
                        {"name": "Diseño de marca", "credits": 10},
                        {"name": "Diseño de ilustración", "credits": 15},
                        {"name": "Edición de video", "credits": 20},
                    ]
                }
            },
        }
    },
)
async def get_offerings() -> list[OfferingRead]:
    return [OfferingRead.model_validate(o) for o in list_offerings()]
