"""Medication and scheduled dose models."""

from sqlalchemy import JSON, Boolean, Column, Date, DateTime, ForeignKey, Index, String, Text
from sqlalchemy.orm import relationship

from .base import Base, SyncMixin, TimestampMixin, new_id


class Medication(Base, TimestampMixin, SyncMixin):
    """A prescribed medication (GLP-1, insulin, oral agents, ...)."""

    __tablename__ = "medications"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=True)

    name = Column(String, nullable=False)
    dosage = Column(String, nullable=True)
    frequency = Column(String, nullable=True)  # once_daily, twice_daily, weekly, as_needed
    medication_type = Column(String, nullable=True)  # glp1, insulin, oral, other
    instructions = Column(Text, nullable=True)
    start_date = Column(Date, nullable=True)
    end_date = Column(Date, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    # Daily "HH:MM" times (UTC) that doses are generated for
    reminder_times = Column(JSON, nullable=True)

    user = relationship("User", back_populates="medications")
    doses = relationship(
        "MedicationDose", back_populates="medication", cascade="all, delete-orphan"
    )

    __table_args__ = (Index("idx_medications_user_id", "user_id"),)


class MedicationDose(Base, TimestampMixin, SyncMixin):
    """One scheduled intake of a medication."""

    __tablename__ = "medication_doses"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=True)
    medication_id = Column(
        String(36), ForeignKey("medications.id", ondelete="CASCADE"), nullable=True
    )

    scheduled_time = Column(DateTime, nullable=False)
    taken_time = Column(DateTime, nullable=True)
    status = Column(String, nullable=False, default="scheduled")
    notes = Column(Text, nullable=True)

    user = relationship("User", back_populates="medication_doses")
    medication = relationship("Medication", back_populates="doses")

    __table_args__ = (
        Index("idx_medication_doses_user_id", "user_id"),
        Index("idx_medication_doses_scheduled_time", "scheduled_time"),
    )
