# modules/time_off/models.py
from sqlalchemy import Column, Integer, String, Date, Text, Enum
from database.base import Base, RecordMixin, enum_values
import enum


class TimeOffStatus(str, enum.Enum):
    PENDING = "Pending"
    APPROVED = "Approved"
    DENIED = "Denied"


class TimeOffRequest(RecordMixin, Base):
    __tablename__ = "time_off_requests"

    # Staff.id; requests stay when the staff record is deleted
    staff_id = Column(Integer, index=True, nullable=False)
    type = Column(String, index=True, nullable=False)
    status = Column(
        Enum(TimeOffStatus, values_callable=enum_values, native_enum=False, length=20),
        default=TimeOffStatus.PENDING,
        nullable=False,
        index=True,
    )
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    reason = Column(Text, nullable=True)

    @property
    def days(self) -> int:
        if not self.start_date or not self.end_date:
            return 0
        return (self.end_date - self.start_date).days + 1
