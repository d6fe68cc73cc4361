from datetime import date, datetime
from typing import Optional, Tuple

from fastapi import Query, Request

from acai_control.shared.dates import end_of_day, start_of_day
from acai_control.shared.storage import Storage


def get_storage(request: Request) -> Storage:
    """Dependency for FastAPI: o armazenamento é injetado no app, não global"""
    return request.app.state.storage


def date_range(
    start_date: Optional[date] = Query(None, alias="startDate", description="Data inicial (inclusive)"),
    end_date: Optional[date] = Query(None, alias="endDate", description="Data final (inclusive)")
) -> Tuple[Optional[datetime], Optional[datetime]]:
    """Período em dias inteiros: do início de startDate ao fim de endDate"""
    return start_of_day(start_date), end_of_day(end_date)


def get_clock(request: Request):
    """Relógio da aplicação (substituível nos testes)"""
    return request.app.state.clock
