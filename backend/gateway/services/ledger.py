"""
Ledger Service

All balance mutations go through this module:
1. Metered cost computation (per started block of 100 tokens)
2. Atomic conditional debit (never lets a balance go negative)
3. Admin balance overwrite
"""
import logging
import math
from uuid import UUID

from tortoise.expressions import F

from gateway.core.errors import NotFound
from gateway.models.user import User

logger = logging.getLogger("uvicorn.error")

TOKENS_PER_BLOCK = 100


def compute_cost(tokens_used: int, token_rate: int) -> int:
    """
    ceil(tokens_used / 100) * token_rate

    Examples:
        compute_cost(250, 2) == 6
        compute_cost(0, 5) == 0
    """
    if tokens_used < 0:
        raise ValueError("tokens_used must be >= 0")
    return math.ceil(tokens_used / TOKENS_PER_BLOCK) * token_rate


async def debit(user_id: str | UUID, cost: int) -> bool:
    """
    Subtract cost from the user's balance in a single conditional UPDATE.

    Equivalent SQL:
        UPDATE users SET money = money - :cost WHERE id = :id AND money >= :cost

    Two concurrent debits cannot both pass the funds check, because the check
    and the write happen in the same statement.

    Returns:
        True if the balance was debited, False if the user is missing or
        has insufficient funds (balance is left unchanged).
    """
    if cost < 0:
        raise ValueError("cost must be >= 0")
    updated = await User.filter(id=user_id, money__gte=cost).update(money=F("money") - cost)
    if updated:
        logger.info("[ledger] debited %s credits from user=%s", cost, user_id)
    else:
        logger.info("[ledger] debit of %s refused for user=%s", cost, user_id)
    return bool(updated)


async def set_balance(user_id: str | UUID, money: int) -> User:
    """
    Overwrite a user's balance (admin operation).

    Raises:
        NotFound: if the target user does not exist
    """
    if money < 0:
        raise ValueError("money must be >= 0")
    user = await User.get_or_none(id=user_id)
    if not user:
        raise NotFound()
    user.money = money
    await user.save(update_fields=["money"])
    logger.info("[ledger] balance of user=%s set to %s", user_id, money)
    return user
