# File: employee_records/db/session.py

from collections.abc import Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker


class Database:
    """
    Engine + session factory for one application instance.

    Built once by create_application(), stored on app.state and disposed
    on shutdown. Nothing here is module-global.
    """

    def __init__(self, url: str):
        self.url = url
        self.engine = create_engine(
            url,
            connect_args={"check_same_thread": False} if url.startswith("sqlite") else {},
        )
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    def session(self) -> Generator[Session, None, None]:
        db: Session = self.SessionLocal()
        try:
            yield db
        finally:
            db.close()

    def dispose(self) -> None:
        self.engine.dispose()
