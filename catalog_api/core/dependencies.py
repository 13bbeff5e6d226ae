from typing import Generator

from fastapi import Request
from sqlalchemy.orm import Session

from .config import Settings
from .db import Database


def get_database(request: Request) -> Database:
    return request.app.state.database


def get_db(request: Request) -> Generator[Session, None, None]:
    yield from get_database(request).get_session()


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings
