import logging

from sqlmodel import Session, SQLModel, create_engine

from wellness.core.config import get_settings


logger = logging.getLogger(__name__)

settings = get_settings()

connect_args = {}
if settings.DATABASE_URL.startswith("sqlite"):
    connect_args = {"check_same_thread": False}

engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,
    connect_args=connect_args,
)


def create_db_and_tables():
    # importa os modelos para registrar as tabelas no metadata
    from wellness.models import (  # noqa: F401
        appointment,
        client,
        client_package,
        package,
        payment,
        service,
        session_note,
        user,
    )

    SQLModel.metadata.create_all(engine)
    logger.info("Tabelas criadas/verificadas em %s", engine.url.render_as_string(hide_password=True))


def get_session():
    with Session(engine) as session:
        yield session
