from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Response, status
from fastapi.security import OAuth2PasswordRequestForm
from pydantic import BaseModel, EmailStr, Field
from sqlalchemy import select as sa_select
from sqlalchemy.ext.asyncio import AsyncSession

from railbook.auth.deps import get_optional_session, oauth2_scheme
from railbook.context import AppContext, get_context
from railbook.db.session import get_session
from railbook.models.models import User
from railbook.services import auth as auth_service
from railbook.session import Session

router = APIRouter(tags=["auth"])


class RegisterIn(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=6)
    full_name: Optional[str] = None


class TokenOut(BaseModel):
    access_token: str
    token_type: str = "bearer"


class SessionUser(BaseModel):
    id: int
    email: str


class SessionOut(BaseModel):
    user: Optional[SessionUser] = None


@router.post("/register", status_code=201)
async def register(payload: RegisterIn, db: AsyncSession = Depends(get_session)):
    email = payload.email.lower()
    stmt = sa_select(User).where(User.email == email)
    res = await db.execute(stmt)
    if res.scalars().first():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email already registered")
    user = User(email=email, full_name=payload.full_name, hashed_password=auth_service.hash_password(payload.password))
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return {"id": user.id, "email": user.email, "full_name": user.full_name}


@router.post("/login", response_model=TokenOut)
async def login(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: AsyncSession = Depends(get_session),
    context: AppContext = Depends(get_context),
):
    identifier = form_data.username.strip().lower()
    stmt = sa_select(User).where(User.email == identifier)
    res = await db.execute(stmt)
    user = res.scalars().first()
    if not user or not user.is_active or not auth_service.verify_password(form_data.password, user.hashed_password):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")
    token = context.sessions.sign_in(user.id, user.email)
    return TokenOut(access_token=token)


@router.post("/logout", status_code=204)
async def logout(token: Optional[str] = Depends(oauth2_scheme), context: AppContext = Depends(get_context)):
    # signing out an unknown or expired token is not an error
    context.sessions.sign_out(token)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/session", response_model=SessionOut)
async def current_session(session: Optional[Session] = Depends(get_optional_session)):
    if session is None:
        return SessionOut()
    return SessionOut(user=SessionUser(id=session.user_id, email=session.email))
