from typing import Dict, Iterable
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from tripsplit.models.user import User

UNKNOWN_USER = "User Not Found ({})"

async def get_user_by_id(db: AsyncSession, user_id: int):
    res = await db.execute(select(User).where(User.id == user_id))
    return res.scalar_one_or_none()

async def get_user_by_name(db: AsyncSession, name: str):
    res = await db.execute(select(User).where(User.name == name))
    return res.scalar_one_or_none()

async def get_user_by_phone(db: AsyncSession, phone_no: str):
    res = await db.execute(select(User).where(User.phone_no == phone_no))
    return res.scalar_one_or_none()

async def get_all_users(db: AsyncSession):
    res = await db.execute(select(User).order_by(User.id))
    return res.scalars().all()

async def get_existing_user_ids(db: AsyncSession, user_ids: Iterable[int]) -> set:
    ids = set(user_ids)
    if not ids:
        return set()
    res = await db.execute(select(User.id).where(User.id.in_(ids)))
    return {row[0] for row in res.all()}

async def get_user_names(db: AsyncSession, user_ids: Iterable[int]) -> Dict[int, str]:
    """
    One lookup for every id; ids with no user get a placeholder name
    instead of failing the whole response.
    """
    ids = set(user_ids)
    names: Dict[int, str] = {}
    if ids:
        res = await db.execute(select(User.id, User.name).where(User.id.in_(ids)))
        names = {uid: name for uid, name in res.all()}

    return {uid: names.get(uid, UNKNOWN_USER.format(uid)) for uid in ids}
