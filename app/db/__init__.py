"""Database layer package for all SQL and persistence boundaries."""

from .health import SQLAlchemyDatabaseHealthService
from .interfaces import DatabaseHealthPort, MarketplaceReadPort
from .marketplace_read import SQLAlchemyMarketplaceReadService
from .session import db_create_engine

__all__ = [
	"DatabaseHealthPort",
	"MarketplaceReadPort",
	"SQLAlchemyDatabaseHealthService",
	"SQLAlchemyMarketplaceReadService",
	"db_create_engine",
]
