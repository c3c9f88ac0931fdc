"""
Shared fixtures: in-memory database, fake completion client, API client.
"""

from datetime import date, datetime
from typing import Dict, List

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from webbuilder.db.models import Base
from webbuilder.db.users import UserRepository
from webbuilder.inference.base import LLMClient

TODAY = date(2026, 10, 19)
NOW = datetime(2026, 10, 19, 12, 30)

COMPLETION = """### HTML CODE ###
```html
<main class="portfolio"><h1>Dark Portfolio</h1></main>
```

### CSS CODE ###
```css
body { background: #0f0f0f; color: #fff; }
```

### JAVASCRIPT CODE ###
```javascript
console.log("ready");
```
"""


class FakeLLMClient(LLMClient):
    """Returns a canned completion or raises a canned error."""

    def __init__(self, content: str = COMPLETION, error: Exception = None):
        self.content = content
        self.error = error
        self.calls: List[List[Dict]] = []

    def generate(self, messages):
        self.calls.append(messages)
        if self.error is not None:
            raise self.error
        return self.content


@pytest.fixture
def db_session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    Session = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
    session = Session()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def users(db_session):
    return UserRepository(db_session)


@pytest.fixture
def user(users):
    return users.create("Ada", "Ada@Example.com", today=TODAY)


@pytest.fixture
def fake_client():
    return FakeLLMClient()


@pytest.fixture
def api_client(db_session, fake_client, monkeypatch):
    from fastapi.testclient import TestClient

    from webbuilder import config
    from webbuilder.api.deps import get_clock
    from webbuilder.db.session import get_db
    from webbuilder.inference.config import get_llm_client
    from webbuilder.main import app

    monkeypatch.setattr(config, "DAILY_PROMPT_LIMIT", 2)
    monkeypatch.setattr(config, "APP_ENV", "development")

    def _get_db():
        yield db_session

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_llm_client] = lambda: fake_client
    app.dependency_overrides[get_clock] = lambda: (lambda: NOW)

    # No `with`: startup (API key check, create_all on the real DB) is skipped
    client = TestClient(app)
    try:
        yield client
    finally:
        app.dependency_overrides.clear()
