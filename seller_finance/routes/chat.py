# This project was developed with assistance from AI tools.
"""Conversation route.

The server keeps no session state: the client sends back the ``context`` it
received with the previous reply.
"""

from collections.abc import Sequence

from fastapi import APIRouter, Depends

from ..schemas.conversation import TurnRequest, TurnResult
from ..schemas.property import Property
from ..services.conversation import process_turn
from .deps import get_catalog

router = APIRouter()


@router.post("/turn", response_model=TurnResult)
async def chat_turn(
    req: TurnRequest,
    catalog: Sequence[Property] = Depends(get_catalog),
) -> TurnResult:
    return process_turn(req.utterance, req.context, catalog)
