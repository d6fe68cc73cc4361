import logging
from datetime import datetime
from typing import Any, List, Optional, Type, TypeVar

from sqlalchemy import func, select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload, selectinload, sessionmaker

from acai_control.config.database import Base, build_engine, build_session_factory
from acai_control.core.exceptions import PersistenceError
from acai_control.shared.database.models import (
    CashFlowEntry, Product, RecordStatus, Sale, SaleItem, Vendor
)
from .base import SALE_ENTRY_DESCRIPTION, Clock, Storage

logger = logging.getLogger(__name__)

T = TypeVar("T", Product, Vendor)


def _sale_query():
    return select(Sale).options(
        joinedload(Sale.vendor),
        selectinload(Sale.items).joinedload(SaleItem.product)
    )


class SqlStorage(Storage):
    """
    Armazenamento relacional via SQLAlchemy.

    Cada operação abre a própria sessão; os objetos devolvidos já vêm com as
    relações carregadas e desanexados da sessão.
    """

    def __init__(
        self,
        engine: Engine,
        session_factory: Optional[sessionmaker] = None,
        clock: Optional[Clock] = None
    ):
        super().__init__(clock)
        self.engine = engine
        self.SessionLocal = session_factory or build_session_factory(engine)

    @classmethod
    def from_url(cls, database_url: str, echo: bool = False, clock: Optional[Clock] = None) -> "SqlStorage":
        return cls(build_engine(database_url, echo=echo), clock=clock)

    # ==================== CICLO DE VIDA ====================

    def init(self):
        Base.metadata.create_all(bind=self.engine)

    def close(self):
        self.engine.dispose()

    def has_catalog(self) -> bool:
        with self.SessionLocal() as session:
            return any(
                session.scalar(select(func.count()).select_from(model)) > 0
                for model in (Product, Vendor)
            )

    def _write(self, session: Session, record):
        try:
            session.add(record)
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            logger.exception("Erro gravando %s", type(record).__name__)
            raise PersistenceError() from e
        return record

    # ==================== CATÁLOGO (genérico) ====================

    def _list_active(self, model: Type[T]) -> List[T]:
        with self.SessionLocal() as session:
            return list(session.scalars(
                select(model)
                .where(model.status == RecordStatus.active.value)
                .order_by(model.id)
            ))

    def _get(self, model: Type[T], record_id: int) -> Optional[T]:
        with self.SessionLocal() as session:
            return session.get(model, record_id)

    def _create(self, model: Type[T], fields: dict) -> T:
        with self.SessionLocal() as session:
            return self._write(session, model(status=RecordStatus.active.value, **fields))

    def _update(self, model: Type[T], record_id: int, changes: dict) -> Optional[T]:
        with self.SessionLocal() as session:
            record = session.get(model, record_id)
            if not record:
                return None
            for field, value in changes.items():
                setattr(record, field, value)
            return self._write(session, record)

    def _soft_delete(self, model: Type[T], record_id: int) -> bool:
        with self.SessionLocal() as session:
            record = session.get(model, record_id)
            if not record:
                return False
            record.deactivate()
            self._write(session, record)
            return True

    # ==================== PRODUTOS ====================

    def list_products(self) -> List[Product]:
        return self._list_active(Product)

    def get_product(self, product_id: int) -> Optional[Product]:
        return self._get(Product, product_id)

    def create_product(self, **fields: Any) -> Product:
        return self._create(Product, fields)

    def update_product(self, product_id: int, **changes: Any) -> Optional[Product]:
        return self._update(Product, product_id, changes)

    def delete_product(self, product_id: int) -> bool:
        return self._soft_delete(Product, product_id)

    # ==================== VENDEDORES ====================

    def list_vendors(self) -> List[Vendor]:
        return self._list_active(Vendor)

    def get_vendor(self, vendor_id: int) -> Optional[Vendor]:
        return self._get(Vendor, vendor_id)

    def create_vendor(self, **fields: Any) -> Vendor:
        return self._create(Vendor, fields)

    def update_vendor(self, vendor_id: int, **changes: Any) -> Optional[Vendor]:
        return self._update(Vendor, vendor_id, changes)

    def delete_vendor(self, vendor_id: int) -> bool:
        return self._soft_delete(Vendor, vendor_id)

    # ==================== VENDAS ====================

    def list_sales(
        self,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None
    ) -> List[Sale]:
        query = _sale_query().order_by(Sale.created_at.desc(), Sale.id.desc())
        if start is not None:
            query = query.where(Sale.created_at >= start)
        if end is not None:
            query = query.where(Sale.created_at <= end)

        with self.SessionLocal() as session:
            return list(session.scalars(query).unique())

    def get_sale(self, sale_id: int) -> Optional[Sale]:
        with self.SessionLocal() as session:
            return session.scalars(_sale_query().where(Sale.id == sale_id)).unique().first()

    def create_sale(self, sale: Sale, items: List[SaleItem], entry: CashFlowEntry) -> Sale:
        session = self.SessionLocal()
        try:
            with session.begin():
                sale.created_at = self._next_timestamp()
                session.add(sale)
                session.flush()

                for item in items:
                    item.sale_id = sale.id
                    session.add(item)

                entry.sale_id = sale.id
                entry.description = SALE_ENTRY_DESCRIPTION.format(sale_id=sale.id)
                entry.created_at = sale.created_at
                session.add(entry)
            # commit implícito ao sair do bloco; rollback se algo falhar
        except SQLAlchemyError as e:
            logger.exception("Erro gravando venda do vendedor %s", sale.vendor_id)
            raise PersistenceError() from e
        finally:
            session.close()

        return self.get_sale(sale.id)

    # ==================== FLUXO DE CAIXA ====================

    def list_cash_flow_entries(
        self,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None
    ) -> List[CashFlowEntry]:
        query = select(CashFlowEntry).order_by(
            CashFlowEntry.created_at.desc(), CashFlowEntry.id.desc()
        )
        if start is not None:
            query = query.where(CashFlowEntry.created_at >= start)
        if end is not None:
            query = query.where(CashFlowEntry.created_at <= end)

        with self.SessionLocal() as session:
            return list(session.scalars(query))

    def create_cash_flow_entry(self, **fields: Any) -> CashFlowEntry:
        with self.SessionLocal() as session:
            return self._write(
                session,
                CashFlowEntry(created_at=self._next_timestamp(), **fields)
            )
