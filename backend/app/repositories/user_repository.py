"""
User record store.

Thin async wrapper around the users table. Services depend on this instead of
issuing queries themselves so they can be exercised against any session.
"""

from typing import List, Optional

from sqlalchemy import select, or_, and_
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import User, UserRole
from app.models.alumni_record import AlumniRecord


class UserRepository:
    """Async repository for User rows"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_by_id(self, user_id: str) -> Optional[User]:
        """Return the user or None"""
        result = await self.db.execute(select(User).where(User.id == str(user_id)))
        return result.scalar_one_or_none()

    async def find_by_email(self, email: str) -> Optional[User]:
        result = await self.db.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def find_existing_alumnus(
        self, email: str, roll_no: int, batch: int, branch: str
    ) -> Optional[User]:
        """Match on email, or on the (roll_no, batch, branch) identity"""
        result = await self.db.execute(
            select(User).where(
                or_(
                    User.email == email,
                    and_(User.roll_no == roll_no, User.batch == batch, User.branch == branch),
                )
            ).limit(1)
        )
        return result.scalar_one_or_none()

    async def find_alumni_record(
        self, name: str, roll_no: int, batch: int, branch: str
    ) -> Optional[AlumniRecord]:
        result = await self.db.execute(
            select(AlumniRecord).where(
                AlumniRecord.name == name,
                AlumniRecord.roll_no == roll_no,
                AlumniRecord.batch == batch,
                AlumniRecord.branch == branch,
            ).limit(1)
        )
        return result.scalar_one_or_none()

    async def save(self, user: User) -> User:
        """Persist pending changes on the user and refresh it"""
        self.db.add(user)
        await self.db.commit()
        await self.db.refresh(user)
        return user

    async def recommend_for(self, user: User, limit: int) -> List[User]:
        """Verified alumni from the same batch or branch, excluding the user"""
        result = await self.db.execute(
            select(User).where(
                User.id != user.id,
                User.is_verified.is_(True),
                User.role == UserRole.USER,
                or_(User.batch == user.batch, User.branch == user.branch),
            ).limit(limit)
        )
        return list(result.scalars().all())

    async def search_verified(self, exclude_id: str, search: Optional[str] = None) -> List[User]:
        """
        Verified alumni directory.

        search matches name or branch case-insensitively; a numeric search also
        matches the batch year exactly.
        """
        query = select(User).where(
            User.id != str(exclude_id),
            User.is_verified.is_(True),
            User.role == UserRole.USER,
        )

        if search:
            conditions = [
                User.name.ilike(f"%{search}%"),
                User.branch.ilike(f"%{search}%"),
            ]
            if search.strip().lstrip("-").isdigit():
                conditions.append(User.batch == int(search))
            query = query.where(or_(*conditions))

        result = await self.db.execute(query.order_by(User.name))
        return list(result.scalars().all())
