from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import StaticPool

from shared.config.settings import DATABASE_URL, SQL_ECHO


def build_engine(url: str = DATABASE_URL, echo: bool = SQL_ECHO):
    if url.startswith("sqlite") and ":memory:" in url:
        # One shared connection, otherwise every session sees an empty database
        return create_async_engine(
            url,
            echo=echo,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )
    return create_async_engine(url, echo=echo)


engine = build_engine()

AsyncSessionLocal = async_sessionmaker(engine, expire_on_commit=False)

Base = declarative_base()


async def get_db():
    async with AsyncSessionLocal() as session:
        yield session
