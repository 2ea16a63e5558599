from fastapi import APIRouter

from conference_portal.services.fees import fee_table

router = APIRouter()


@router.get("/fees")
async def get_fees():
    """Registration fees by category and region"""
    return fee_table()
