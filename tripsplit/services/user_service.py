import logging
from sqlalchemy.ext.asyncio import AsyncSession
from tripsplit.models.user import User
from tripsplit.schemas.user import UserCreate, UserUpdate
from tripsplit.services.user_queries import get_user_by_id, get_user_by_name, get_user_by_phone
from tripsplit.core.dependencies import commit_or_conflict
from fastapi import HTTPException

logger = logging.getLogger(__name__)

async def get_user_or_404(db: AsyncSession, user_id: int) -> User:
    user = await get_user_by_id(db, user_id)
    if not user:
        raise HTTPException(404, "User not found.")
    return user

async def create_user(db: AsyncSession, data: UserCreate):
    name_used = await get_user_by_name(db, data.name)
    phone_used = await get_user_by_phone(db, data.phone_no)
    if name_used or phone_used:
        raise HTTPException(409, "Credentials already used.")

    user = User(
        name = data.name,
        phone_no = data.phone_no
    )

    db.add(user)
    await commit_or_conflict(db, "Credentials already used.")
    await db.refresh(user)

    logger.info("Created user %s (%s)", user.id, user.name)
    return user

async def edit_user(db: AsyncSession, data: UserUpdate, user_id: int):
    if not data.name and not data.phone_no:
        raise HTTPException(400, "No fields provided to update.")

    user = await get_user_or_404(db, user_id)

    if data.name:
        other = await get_user_by_name(db, data.name)
        if other and other.id != user_id:
            raise HTTPException(409, "Username already in use.")
        user.name = data.name

    if data.phone_no:
        other = await get_user_by_phone(db, data.phone_no)
        if other and other.id != user_id:
            raise HTTPException(409, "Phone number already in use.")
        user.phone_no = data.phone_no

    await commit_or_conflict(db, "Credentials already in use.")
    await db.refresh(user)

    return user

async def delete_user(db: AsyncSession, user_id: int):
    user = await get_user_or_404(db, user_id)

    # Ledger rows that mention this user stay; reports render them as unknown.
    await db.delete(user)
    await db.commit()

    logger.info("Deleted user %s", user_id)
    return {"status": "deleted"}
