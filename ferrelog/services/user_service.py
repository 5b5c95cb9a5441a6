# ferrelog/services/user_service.py
import uuid

from fastapi import HTTPException, status
from sqlmodel import Session

from ferrelog.models.user import User
from ferrelog.repositories.user_repo import UserRepository
from ferrelog.schemas.user import UserUpdate, UserRoleUpdate


class UserService:
    """
    Business logic for staff accounts.

    Responsibilities:
      - profile edits (name only)
      - admin role management
    """

    def __init__(self, repo: UserRepository):
        self.repo = repo

    def update_me(
        self,
        session: Session,
        current_user: User,
        payload: UserUpdate,
    ) -> User:
        if payload.name is not None:
            current_user.name = payload.name

        return self.repo.update(session, current_user)

    def list_users(self, session: Session, skip: int, limit: int) -> list[User]:
        """List staff with pagination (admin only)."""
        return self.repo.list_users(session, skip=skip, limit=limit)

    def get_user(self, session: Session, user_id: uuid.UUID) -> User:
        user = self.repo.get_by_id(session, user_id)
        if not user:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Usuario no encontrado",
            )
        return user

    def update_role(
        self,
        session: Session,
        user_id: uuid.UUID,
        payload: UserRoleUpdate,
    ) -> User:
        """
        Promote/demote a staff member (admin only).

        Role validation is enforced by the schema (Literal).
        """
        user = self.get_user(session, user_id)
        user.role = payload.role
        return self.repo.update(session, user)
