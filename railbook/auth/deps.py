from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy import select as sa_select
from sqlalchemy.ext.asyncio import AsyncSession

from railbook.context import AppContext, get_context
from railbook.db.session import get_session
from railbook.db.store import DataStore
from railbook.models.models import User
from railbook.session import Session


oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login", auto_error=False)


async def get_optional_session(token: Optional[str] = Depends(oauth2_scheme), context: AppContext = Depends(get_context)) -> Optional[Session]:
    return context.sessions.current_session(token)


async def get_current_session(
    session: Optional[Session] = Depends(get_optional_session),
    db: AsyncSession = Depends(get_session),
) -> Session:
    if session is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Authentication required")
    stmt = sa_select(User).where(User.id == session.user_id)
    res = await db.execute(stmt)
    user = res.scalars().first()
    if not user or not user.is_active:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User not found or inactive")
    return session


async def get_public_store(db: AsyncSession = Depends(get_session)) -> DataStore:
    return DataStore(db)


async def get_user_store(session: Session = Depends(get_current_session), db: AsyncSession = Depends(get_session)) -> DataStore:
    # bookings visible through this store are limited to the signed-in user
    return DataStore(db, owner_id=session.user_id)
