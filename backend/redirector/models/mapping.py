from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from redirector.core.config import settings
from redirector.core.db import Base


class Mapping(Base):
    __tablename__ = settings.mappings_table

    id: Mapped[str] = mapped_column(String(36), primary_key=True)  # uuid4
    name: Mapped[str] = mapped_column(String(128), index=True)
    target_url: Mapped[str] = mapped_column(String(2048))

    # no FK: mappings and auth tables are created independently at startup
    owner_id: Mapped[str] = mapped_column(String(36), index=True)
