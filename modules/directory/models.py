# modules/directory/models.py
from sqlalchemy import Column, Integer, String, Date, Text, Float, JSON, Enum
from database.base import Base, RecordMixin, enum_values
import enum


class StaffStatus(str, enum.Enum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"
    ON_LEAVE = "On Leave"
    TERMINATED = "Terminated"


class DepartmentStatus(str, enum.Enum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"


class Role(RecordMixin, Base):
    __tablename__ = "roles"
    name = Column(String, unique=True, index=True, nullable=False)
    description = Column(Text, nullable=True)
    # hierarchy rank, only used for sorting and the max-level stat
    level = Column(Integer, default=1, nullable=False)
    permissions = Column(JSON, default=list, nullable=False)


class Department(RecordMixin, Base):
    __tablename__ = "departments"
    name = Column(String, unique=True, index=True, nullable=False)
    description = Column(Text, nullable=True)
    location = Column(String, nullable=True)
    status = Column(
        Enum(DepartmentStatus, values_callable=enum_values, native_enum=False, length=20),
        default=DepartmentStatus.ACTIVE,
        nullable=False,
    )
    budget = Column(Float, nullable=True)
    # Staff.id, not enforced
    head_of_department = Column(Integer, nullable=True)


class Staff(RecordMixin, Base):
    __tablename__ = "staff"

    employee_id = Column(String, unique=True, index=True, nullable=False)
    first_name = Column(String, index=True, nullable=False)
    last_name = Column(String, index=True, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    phone = Column(String, nullable=True)
    position = Column(String, nullable=True)
    # matched against Department.name at read time; no FK so deletes never cascade
    department = Column(String, index=True, nullable=True)
    role_id = Column(Integer, index=True, nullable=True)
    status = Column(
        Enum(StaffStatus, values_callable=enum_values, native_enum=False, length=20),
        default=StaffStatus.ACTIVE,
        nullable=False,
    )
    hire_date = Column(Date, nullable=True)

    @property
    def full_name(self) -> str:
        return f"{self.first_name or ''} {self.last_name or ''}".strip()
