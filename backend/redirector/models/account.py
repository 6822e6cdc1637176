from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from redirector.core.config import AUTH_TABLE
from redirector.core.db import Base
from redirector.core.permissions import PermissionCode


class Account(Base):
    __tablename__ = AUTH_TABLE

    id: Mapped[str] = mapped_column(String(36), primary_key=True)  # uuid4
    name: Mapped[str] = mapped_column(String(64), index=True)
    password_hash: Mapped[str] = mapped_column(String(255))

    # packed PermissionCode, 0..63
    permission: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    @property
    def permission_code(self) -> PermissionCode:
        return PermissionCode.decode(self.permission)
