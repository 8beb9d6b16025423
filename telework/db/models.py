# telework/db/models.py
from sqlalchemy import (
    Column, Integer, String, ForeignKey, DateTime, Date, CheckConstraint, Index, text
)
from sqlalchemy.orm import relationship, declarative_base

from telework.core.time import utcnow

Base = declarative_base()


class User(Base):
    __tablename__ = "users"
    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(100), unique=True, nullable=False, index=True)
    hashed_password = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False, default="User")
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    __table_args__ = ( CheckConstraint("role IN ('User', 'Manager')", name="ck_users_role"), )
    employee = relationship(
        "Employee", back_populates="user", uselist=False,
        cascade="all, delete-orphan", passive_deletes=True,
    )


class Company(Base):
    __tablename__ = "companies"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    # unique: one company per manager
    manager_id = Column(
        Integer,
        ForeignKey("employees.id", ondelete="RESTRICT", use_alter=True, name="fk_companies_manager_id"),
        nullable=False, unique=True,
    )
    manager = relationship("Employee", foreign_keys=[manager_id], back_populates="managed_company")
    employees = relationship(
        "Employee", foreign_keys="Employee.company_id", back_populates="company", passive_deletes=True,
    )


class Employee(Base):
    __tablename__ = "employees"
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True)
    company_id = Column(Integer, ForeignKey("companies.id", ondelete="SET NULL"), nullable=True, index=True)
    first_name = Column(String(50), nullable=False)
    last_name = Column(String(50), nullable=False)
    position = Column(String(100), nullable=False)

    user = relationship("User", back_populates="employee")
    company = relationship("Company", foreign_keys=[company_id], back_populates="employees")
    managed_company = relationship(
        "Company", foreign_keys="Company.manager_id", back_populates="manager", uselist=False,
    )
    telework_requests = relationship(
        "TeleworkRequest", foreign_keys="TeleworkRequest.employee_id", back_populates="employee",
        cascade="all, delete-orphan", passive_deletes=True,
    )
    processed_requests = relationship(
        "TeleworkRequest", foreign_keys="TeleworkRequest.processed_by_manager_id",
        back_populates="processed_by_manager", passive_deletes=True,
    )

    # Denormalized view fields read by the response schemas
    @property
    def email(self) -> str:
        return self.user.email

    @property
    def role(self) -> str:
        return self.user.role

    @property
    def created_at(self):
        return self.user.created_at

    @property
    def company_name(self) -> str | None:
        return self.company.name if self.company else None

    @property
    def is_assigned_to_company(self) -> bool:
        return self.company_id is not None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class TeleworkRequest(Base):
    __tablename__ = "telework_requests"
    id = Column(Integer, primary_key=True, index=True)
    employee_id = Column(Integer, ForeignKey("employees.id", ondelete="CASCADE"), nullable=False, index=True)
    request_date = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    telework_date = Column(Date, nullable=False, index=True)
    reason = Column(String(500), nullable=False)
    status = Column(String(20), nullable=False, default="Pending", index=True)
    manager_comment = Column(String(500), nullable=True)
    processed_at = Column(DateTime(timezone=True), nullable=True)
    processed_by_manager_id = Column(Integer, ForeignKey("employees.id", ondelete="SET NULL"), nullable=True)
    __table_args__ = (
        CheckConstraint("status IN ('Pending', 'Approved', 'Rejected')", name="ck_telework_requests_status"),
        # At most one live (pending/approved) request per employee and day
        Index(
            "uq_telework_requests_live_day", "employee_id", "telework_date", unique=True,
            sqlite_where=text("status != 'Rejected'"),
            postgresql_where=text("status != 'Rejected'"),
        ),
    )

    employee = relationship("Employee", foreign_keys=[employee_id], back_populates="telework_requests")
    processed_by_manager = relationship(
        "Employee", foreign_keys=[processed_by_manager_id], back_populates="processed_requests",
    )
