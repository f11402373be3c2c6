from collections.abc import Iterator

from fastapi import Request
from sqlalchemy.orm import Session

from habitgrid.ledger import Ledger


def get_ledger(request: Request) -> Ledger:
    return request.app.state.ledger


def get_db(request: Request) -> Iterator[Session]:
    with get_ledger(request).session() as db:
        yield db
