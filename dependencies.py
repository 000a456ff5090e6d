"""
Shared FastAPI dependencies: token auth, role gating and the verification
service built around the SWIFT directory loaded at startup.
"""
import os

from fastapi import Depends, HTTPException, Request, status
from jose import JWTError, jwt
from dotenv import load_dotenv

from services import SwiftDirectory, VerificationService

load_dotenv()
SECRET_KEY = os.getenv("JWT_SECRET")
ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")


def verify_token(request: Request) -> dict:
     """Decode the bearer token issued by the identity service."""
     auth = request.headers.get("Authorization")
     if not auth or not auth.startswith("Bearer "):
          raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing token")
     token = auth.split(" ", 1)[1]
     if not SECRET_KEY:
          raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Token verification is not configured")
     try:
          return jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
     except JWTError:
          raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Invalid token")


def require_role(*roles: str):
     """Dependency factory: the token's ``role`` claim must be one of ``roles``."""

     def checker(token: dict = Depends(verify_token)) -> dict:
          if token.get("role") not in roles:
               raise HTTPException(
                    status_code=status.HTTP_403_FORBIDDEN,
                    detail="You do not have permission to perform this action",
               )
          return token

     return checker


def get_swift_directory(request: Request) -> SwiftDirectory:
     return request.app.state.swift_directory


def get_verification_service(
     directory: SwiftDirectory = Depends(get_swift_directory),
) -> VerificationService:
     return VerificationService(directory)


def revalidate_on_persist(request: Request) -> bool:
     """Whether persisting a verification re-runs the checks server-side."""
     return bool(getattr(request.app.state, "revalidate_on_persist", False))
