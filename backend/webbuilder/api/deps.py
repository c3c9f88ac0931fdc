from datetime import datetime
from typing import Callable, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from webbuilder.db.models import User
from webbuilder.db.session import get_db
from webbuilder.db.users import UserRepository
from webbuilder.errors import AuthenticationError

bearer_scheme = HTTPBearer(auto_error=False)


def get_user_repository(db: Session = Depends(get_db)) -> UserRepository:
    return UserRepository(db)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    users: UserRepository = Depends(get_user_repository),
) -> User:
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Authentication required")

    user = users.get_by_token(credentials.credentials)
    if user is None:
        raise AuthenticationError("User not found")
    return user


def get_clock() -> Callable[[], datetime]:
    return datetime.now
