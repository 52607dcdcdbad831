"""ORM model for application users (auth, RBAC and approval state)."""

from sqlalchemy import Boolean, Column, DateTime, Integer, String, false, func

from app.models.base import Base

ROLE_ADMIN = "admin"
ROLE_MANAGER = "manager"
ROLE_EMPLOYEE = "employee"
ROLE_CUSTOMER = "customer"

ROLE_VALUES: frozenset[str] = frozenset({ROLE_ADMIN, ROLE_MANAGER, ROLE_EMPLOYEE, ROLE_CUSTOMER})

# Roles allowed to read and modify any task, not just their own.
PRIVILEGED_ROLES: frozenset[str] = frozenset({ROLE_ADMIN, ROLE_MANAGER})


class User(Base):
    """
    User account for JWT authentication and role-based access control.

    role: 'admin', 'manager', 'employee' or 'customer'
    approved: set by an admin; unapproved non-admin users cannot create tasks.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(32), nullable=False, default=ROLE_CUSTOMER)
    approved = Column(Boolean, nullable=False, default=False, server_default=false())
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    @property
    def can_act(self) -> bool:
        """True when the user may create resources: approved, or an admin."""
        return bool(self.approved) or self.role == ROLE_ADMIN
