from sqlalchemy.orm import Session
from app.data.models.user import UserModel
from app.domain.errors import ResourceNotFound
from app.domain.mappers import to_user_read
from app.repos.user_repo import UserRepo
from app.domain.schemas import UserCreate, UserRead


class UserService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = UserRepo(db)

    def create_user(self, payload: UserCreate) -> UserRead:
        existing = self.repo.get_user(payload.id)
        if existing:
            return to_user_read(existing)

        user = UserModel(id=payload.id, name=payload.name, email=payload.email)
        created = self.repo.create_user(user)
        self.db.commit()
        return to_user_read(created)

    def get_user(self, user_id: int) -> UserRead:
        user = self.repo.get_user(user_id)
        if not user:
            raise ResourceNotFound(f"User {user_id} not found")
        return to_user_read(user)
