# models/user.py
from sqlalchemy import Column, Integer, String, DateTime, func
from .base import Base


class User(Base):
     """
     User model - account records for customers and employees.

     The account number is the identity the verification checks compare
     against. Records are created during onboarding, which happens outside
     this service.
     """

     id = Column(Integer, primary_key=True, autoincrement=True)
     email = Column(String(255), unique=True, nullable=False, index=True)
     username = Column(String(100), nullable=True)
     password = Column(String(255), nullable=True)  # hash, managed by the identity service
     first_name = Column(String(100), nullable=True)
     last_name = Column(String(100), nullable=True)
     account_number = Column(String(34), nullable=False)
     role = Column(String(50), nullable=False, default="customer")  # customer, employee
     created_at = Column(DateTime, server_default=func.now(), nullable=False)

     def __repr__(self):
          return f"<User(id={self.id}, email='{self.email}', role='{self.role}')>"
