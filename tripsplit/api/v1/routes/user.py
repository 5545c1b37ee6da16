from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from tripsplit.core.dependencies import get_db
from tripsplit.schemas.common import ok
from tripsplit.schemas.user import UserCreate, UserOut, UserUpdate
from tripsplit.services.user_queries import get_all_users
from tripsplit.services.user_service import create_user, delete_user, edit_user, get_user_or_404

router = APIRouter()


def _out(user) -> dict:
    return UserOut.model_validate(user).model_dump()


@router.post("/", status_code=201)
async def add_user(data: UserCreate, db: AsyncSession = Depends(get_db)):
    user = await create_user(db, data)
    return ok(_out(user), "New user successfully created!")

@router.get("/")
async def all_users(db: AsyncSession = Depends(get_db)):
    return ok([_out(u) for u in await get_all_users(db)])

@router.get("/{user_id}")
async def one_user(user_id: int, db: AsyncSession = Depends(get_db)):
    return ok(_out(await get_user_or_404(db, user_id)))

@router.put("/{user_id}")
async def update_user(user_id: int, data: UserUpdate, db: AsyncSession = Depends(get_db)):
    user = await edit_user(db, data, user_id)
    return ok(_out(user), "User updated successfully!")

@router.delete("/{user_id}")
async def remove_user(user_id: int, db: AsyncSession = Depends(get_db)):
    return ok(await delete_user(db, user_id), "User deleted successfully!")
