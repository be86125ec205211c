from sqlalchemy import Table

from torneos.db import Database


class BaseRepository:
    """Base class for repositories; holds the injected persistence handle."""

    def __init__(self, db: Database, table: Table):
        self.db = db
        self.table = table
