import pytest
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, create_engine

TEST_DATABASE_URL = "sqlite:///:memory:"


# ============================================================================
# Test Database Setup with StaticPool
# ============================================================================
# 1. Use sqlite:///:memory: with StaticPool so ALL sessions share same DB
# 2. check_same_thread=False required for threaded access
# 3. All models MUST be imported before create_all() (see session_fixture)
# 4. A fresh engine per test keeps championships and fights isolated


@pytest.fixture(name="engine", scope="function")
def engine_fixture():
    engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    yield engine
    engine.dispose()


@pytest.fixture(name="session", scope="function")
def session_fixture(engine):
    """Provide a test database session with all tables created."""
    from treegen.database import drop_db, init_db

    # Create all tables on test engine (explicit, init_db imports every model)
    init_db(engine)

    with Session(engine) as session:
        yield session

    drop_db(engine)
