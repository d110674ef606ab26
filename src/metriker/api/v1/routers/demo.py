from __future__ import annotations

import random

from fastapi import APIRouter
from fastapi.responses import JSONResponse

router = APIRouter(tags=["demo"])


@router.api_route("/", methods=["GET", "POST"])
async def index() -> JSONResponse:
    return JSONResponse(status_code=201, content={"message": random.random()})
