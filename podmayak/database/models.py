"""
Database models for PodmayakAI
"""
import enum
import uuid
from datetime import datetime

from sqlalchemy import JSON, BigInteger, Boolean, Column, DateTime, Enum, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


def _uuid() -> str:
    return str(uuid.uuid4())


def _enum_values(enum_cls):
    return [member.value for member in enum_cls]


class UserRole(str, enum.Enum):
    USER = "user"
    ADMIN = "admin"


class SubscriptionPlan(str, enum.Enum):
    FREE = "free"
    PRO = "pro"
    ENTERPRISE = "enterprise"


class User(Base):
    """Account record with role, plan and token balance"""

    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=_uuid)
    email = Column(String(255), unique=True, nullable=False, index=True)
    hashed_password = Column(String(255), nullable=True)
    display_name = Column(String(200), nullable=True)
    photo_url = Column(Text, nullable=True)

    role = Column(
        Enum(UserRole, name="userrole", values_callable=_enum_values),
        nullable=False,
        default=UserRole.USER,
        index=True,
    )
    plan = Column(
        Enum(SubscriptionPlan, name="subscriptionplan", values_callable=_enum_values),
        nullable=False,
        default=SubscriptionPlan.FREE,
    )
    # Consumable credit: one generation or edit costs one token
    tokens = Column(Integer, nullable=False, default=5)

    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    last_login = Column(DateTime, nullable=True)

    renovations = relationship("Renovation", back_populates="user", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<User(id={self.id}, email='{self.email}', role='{self.role}', tokens={self.tokens})>"


class Renovation(Base):
    """A saved project: before/after images, the config used and the optional analysis"""

    __tablename__ = "renovations"

    id = Column(String(36), primary_key=True, default=_uuid)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    user_email = Column(String(255), nullable=True)

    # View URLs plus the blob ids needed to delete them later
    original_image = Column(Text, nullable=False)
    generated_image = Column(Text, nullable=False)
    original_image_id = Column(String(500), nullable=True)
    generated_image_id = Column(String(500), nullable=True)

    config = Column(JSON, nullable=False)
    analysis = Column(JSON, nullable=True)

    # Milliseconds since epoch, used for newest-first ordering
    timestamp = Column(BigInteger, nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    user = relationship("User", back_populates="renovations")

    __table_args__ = (Index("idx_renovation_user_timestamp", "user_id", "timestamp"),)

    def __repr__(self):
        return f"<Renovation(id={self.id}, user_id={self.user_id}, timestamp={self.timestamp})>"


class SystemSetting(Base):
    """Global key/value settings editable by admins (e.g. fallback API key)"""

    __tablename__ = "system_settings"

    key = Column(String(100), primary_key=True)
    value = Column(JSON, nullable=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    updated_by = Column(String(36), ForeignKey("users.id", ondelete="SET NULL"), nullable=True)


class Draft(Base):
    """Best-effort snapshot of the user's in-progress image and config"""

    __tablename__ = "drafts"

    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    image = Column(Text, nullable=True)
    config = Column(JSON, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


# Catalogue content shown in the renovator UI


class ContentStyle(Base):
    __tablename__ = "content_styles"

    id = Column(String(50), primary_key=True)
    label = Column(String(100), nullable=False)
    value = Column(String(50), nullable=False)
    description = Column(Text, nullable=True)
    sort_order = Column(Integer, default=0, index=True)


class ContentRoom(Base):
    __tablename__ = "content_rooms"

    id = Column(String(50), primary_key=True)
    label = Column(String(100), nullable=False)
    value = Column(String(50), nullable=False)
    sort_order = Column(Integer, default=0, index=True)


class ContentColor(Base):
    __tablename__ = "content_colors"

    id = Column(String(50), primary_key=True)
    name = Column(String(100), nullable=False)
    value = Column(String(50), nullable=False)
    bg_class = Column(String(100), nullable=True)
    sort_order = Column(Integer, default=0, index=True)


class ContentFlooring(Base):
    __tablename__ = "content_flooring"

    id = Column(String(50), primary_key=True)
    label = Column(String(100), nullable=False)
    value = Column(String(50), nullable=False)
    color_class = Column(String(100), nullable=True)
    sort_order = Column(Integer, default=0, index=True)


class ContentFurniture(Base):
    __tablename__ = "content_furniture"

    id = Column(String(100), primary_key=True)
    label = Column(String(100), nullable=False)
    icon = Column(String(50), nullable=True)
    room_types = Column(JSON, nullable=False)  # room type values, or ["all"]
    sort_order = Column(Integer, default=0, index=True)


class ContentPreset(Base):
    __tablename__ = "content_presets"

    id = Column(String(50), primary_key=True)
    name = Column(String(100), nullable=False)
    style = Column(String(50), nullable=False)
    colors = Column(JSON, nullable=False)
    flooring = Column(String(50), nullable=False)
    icon = Column(String(50), nullable=True)
    sort_order = Column(Integer, default=0, index=True)
