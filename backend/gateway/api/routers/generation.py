# gateway/api/routers/generation.py
import logging

from fastapi import APIRouter, Depends

from gateway.api.deps import Identity, get_identity
from gateway.config import settings
from gateway.core.errors import InsufficientFunds, ModelNotFound
from gateway.models.generation_model import GenerationModel
from gateway.models.user import User
from gateway.schemas.generation import GenerateIn, GenerateOut, GenerateTextIn, GenerateTextOut
from gateway.services import ledger
from gateway.services.upstream import TextGenerationClient, get_text_generation_client

logger = logging.getLogger("uvicorn.error")

router = APIRouter(tags=["generation"])


@router.post("/generate", response_model=GenerateOut)
async def generate(body: GenerateIn, identity: Identity = Depends(get_identity)):
    """
    Metered generation.

    Looks up the model's rate, charges ceil(tokensUsed / 100) * rate and
    debits it from the caller's balance in one conditional update.

    Raises:
        ModelNotFound (404): unknown modelName
        InsufficientFunds (400): balance below cost, or caller no longer
            exists; the balance is left unchanged
    """
    model = await GenerationModel.get_or_none(name=body.modelName)
    if not model:
        raise ModelNotFound()

    cost = ledger.compute_cost(body.tokensUsed, model.token_rate)
    if not await ledger.debit(identity.user_id, cost):
        raise InsufficientFunds()

    return GenerateOut(message=f"Generation succeeded! Cost: {cost} credits", cost=cost)


@router.post("/generate-text", response_model=GenerateTextOut)
async def generate_text(
    body: GenerateTextIn,
    identity: Identity = Depends(get_identity),
    client: TextGenerationClient = Depends(get_text_generation_client),
):
    """
    Flat-rate text generation through the upstream provider.

    Order: funds check, upstream call, debit. A failed upstream call costs
    nothing; a successful one costs TEXT_GENERATION_COST (100) regardless of
    the tokens the provider actually used.

    Raises:
        InsufficientFunds (400): balance below the flat cost (checked before
            calling out, and again atomically when debiting)
        UpstreamError (500): provider unreachable or returned an error
    """
    cost = settings.text_generation_cost
    user = await User.get_or_none(id=identity.user_id)
    if not user or user.money < cost:
        raise InsufficientFunds()

    generated = await client.generate(body.prompt, body.modelName)

    if not await ledger.debit(user.id, cost):
        # Balance was spent by a concurrent request while the provider ran
        logger.warning("[generate-text] user=%s lost funds during upstream call", user.id)
        raise InsufficientFunds()

    return GenerateTextOut(generatedText=generated)
