# gateway/core/bootstrap.py
"""
Bootstrap module for application initialization.
Handles initial setup tasks on startup: the default admin account and the
model rate table.
"""
import logging

from gateway.config import settings
from gateway.core.security import hash_password
from gateway.models.generation_model import GenerationModel
from gateway.models.user import Role, User

logger = logging.getLogger("uvicorn.error")

async def ensure_default_admin() -> None:
    """
    If no admin exists in the database, create a default admin from settings.
    Only takes effect under the following conditions:
      - Currently no user with role="admin"
      - And ADMIN_PASSWORD is set (to avoid using a default weak password)
    Environment variables:
      ADMIN_EMAIL      (default: "admin@example.com")
      ADMIN_PASSWORD   (required, otherwise won't create)
      ADMIN_FIRST_NAME / ADMIN_LAST_NAME
    """
    has_admin = await User.filter(role=Role.ADMIN).exists()
    if has_admin:
        return

    if not settings.admin_password:
        logger.warning("[bootstrap] No admin present, but ADMIN_PASSWORD not set -> skip creating default admin.")
        return

    # Email is the unique key: promote an existing account instead of failing
    existing = await User.get_or_none(email=settings.admin_email)
    if existing:
        existing.role = Role.ADMIN
        await existing.save(update_fields=["role"])
        logger.warning("[bootstrap] Promoted existing user to admin -> email=%s id=%s",
                       existing.email, existing.id)
        return

    u = await User.create(
        first_name=settings.admin_first_name,
        last_name=settings.admin_last_name,
        email=settings.admin_email,
        password_hash=hash_password(settings.admin_password),
        role=Role.ADMIN,
        money=settings.starting_balance,
    )
    logger.warning("[bootstrap] Created default admin -> email=%s id=%s", u.email, u.id)

async def ensure_default_models() -> None:
    """
    Insert the models listed in MODEL_RATES that are not in the table yet.
    Existing rows are left alone so rates edited in the DB are kept.
    """
    created = []
    for name, rate in settings.model_rates.items():
        _, was_created = await GenerationModel.get_or_create(name=name, defaults={"token_rate": rate})
        if was_created:
            created.append(name)
    if created:
        logger.info("[bootstrap] Seeded generation models: %s", ", ".join(created))
