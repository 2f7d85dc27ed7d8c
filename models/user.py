import enum
from sqlalchemy import Column, String
from sqlalchemy.orm import relationship
from .base import Base, TimestampMixin


class Role(str, enum.Enum):
     """Roles a user can hold. A user may hold both."""
     OWNER = "owner"
     TENANT = "tenant"


class User(TimestampMixin, Base):
     """
     User model - identity shared by owners and tenants.

     `id` is the identity provider's uid. Roles are stored comma-separated
     and are only ever extended, never revoked.
     """
     __tablename__ = "users"

     id = Column(String(128), primary_key=True)
     name = Column(String(200), nullable=False)
     email = Column(String(255), unique=True, nullable=False, index=True)
     phone = Column(String(50), nullable=True)
     roles = Column(String(50), nullable=False, default=Role.OWNER.value)
     password = Column(String(255), nullable=True)  # unset until the password-set link is used

     # Relationships
     tenancies = relationship("Tenant", back_populates="user", cascade="all, delete-orphan")
     owned_properties = relationship(
          "Property",
          secondary="property_owners",
          back_populates="owners",
     )

     def __repr__(self):
          return f"<User(id={self.id}, email='{self.email}', roles='{self.roles}')>"

     @property
     def role_list(self) -> list[Role]:
          return [Role(r) for r in (self.roles or "").split(",") if r]

     def has_role(self, role: Role) -> bool:
          return role in self.role_list

     def grant_role(self, role: Role) -> None:
          """Add a role; existing roles are kept."""
          if not self.has_role(role):
               self.roles = ",".join([r.value for r in self.role_list] + [role.value])
