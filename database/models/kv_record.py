# --- START OF FILE database/models/kv_record.py ---
from sqlalchemy import String, Text
from sqlalchemy.dialects import mysql
from sqlalchemy.orm import Mapped, mapped_column

from . import Base


def _key_column(length: int) -> String:
    # MySQL's default *_ci collations would merge keys that differ only in case.
    return String(length).with_variant(mysql.VARCHAR(length, collation="utf8mb4_bin"), "mysql")


class KVRecord(Base):
    __tablename__ = "kv_records"

    namespace: Mapped[str] = mapped_column(_key_column(64), primary_key=True)
    key: Mapped[str] = mapped_column(_key_column(191), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)

    def __repr__(self) -> str:
        return f"<KVRecord(namespace='{self.namespace}', key='{self.key}')>"

# --- END OF FILE database/models/kv_record.py ---
