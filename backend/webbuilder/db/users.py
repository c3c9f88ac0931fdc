"""
User store used by the generator.

Only the parts of the user record the generator needs: lookup by id or
bearer token, and the daily prompt counter.
"""

import secrets
from datetime import date
from typing import Optional

from sqlalchemy import case, select, update
from sqlalchemy.orm import Session

from webbuilder.db.models import User
from webbuilder.quota.limiter import UsageCounter


class UserRepository:
    def __init__(self, db: Session):
        self.db = db

    def load(self, user_id: int) -> Optional[User]:
        return self.db.get(User, user_id)

    def get_by_token(self, token: str) -> Optional[User]:
        if not token:
            return None
        return self.db.execute(
            select(User).where(User.api_token == token)
        ).scalar_one_or_none()

    def create(self, name: str, email: str, today: Optional[date] = None) -> User:
        user = User(
            name=name.strip(),
            email=email.strip().lower(),
            api_token=secrets.token_urlsafe(32),
            prompts_used_today=0,
            prompts_reset_date=today or date.today(),
        )
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        return user

    def save(self, user: User) -> User:
        self.db.add(user)
        self.db.commit()
        return user

    # --------------------------------
    # Daily prompt counter
    # --------------------------------

    def load_counter(self, user_id: int) -> Optional[UsageCounter]:
        user = self.load(user_id)
        if user is None:
            return None
        return UsageCounter(
            count=user.prompts_used_today or 0,
            reset_date=user.prompts_reset_date,
        )

    def consume_prompt(self, user_id: int, today: date, limit: int) -> bool:
        """
        Atomically take one prompt from today's quota.

        A single conditional UPDATE: resets the counter to 1 when the stored
        day is stale, otherwise increments it, but only while it is under
        the limit. Returns False when no row matched (limit reached, possibly
        by a concurrent request, or unknown user).
        """
        if limit <= 0:
            return False

        stmt = (
            update(User)
            .where(User.id == user_id)
            .where(
                (User.prompts_reset_date != today)
                | (User.prompts_used_today < limit)
            )
            .values(
                prompts_used_today=case(
                    (User.prompts_reset_date == today, User.prompts_used_today + 1),
                    else_=1,
                ),
                prompts_reset_date=today,
            )
            .execution_options(synchronize_session=False)
        )
        result = self.db.execute(stmt)
        self.db.commit()

        consumed = result.rowcount == 1
        if consumed:
            user = self.db.get(User, user_id)
            if user is not None:
                self.db.refresh(user)
        return consumed
