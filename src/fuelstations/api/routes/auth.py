from __future__ import annotations

from fastapi import APIRouter, Depends

from ...core.tokens import TokenService
from ..deps import token_service
from ..schemas.common import TokenGrant


DEMO_SUBJECT = "1234567890"
API_NAME = "Fuel Station API"

router = APIRouter()


@router.get("/", response_model=TokenGrant)
def issue_demo_token(tokens: TokenService = Depends(token_service)) -> TokenGrant:
    return TokenGrant(name=API_NAME, jwt=tokens.issue(DEMO_SUBJECT))
