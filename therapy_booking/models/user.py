from sqlmodel import Field, SQLModel


class UserBase(SQLModel):
    email: str = Field(unique=True, index=True)
    full_name: str | None = None
    user_type: str = Field(default="individual", index=True)  # individual | therapist | partner | admin


class User(UserBase, table=True):
    __tablename__ = "users"
    id: str = Field(primary_key=True)
    is_active: bool = True
    is_verified: bool = False


class TherapistProfile(SQLModel, table=True):
    __tablename__ = "therapist_profiles"
    id: int | None = Field(default=None, primary_key=True)
    user_id: str = Field(foreign_key="users.id", unique=True, index=True)
    verification_status: str = "pending"  # pending | approved | rejected
    availability_status: str | None = None


class TherapistPublic(SQLModel):
    id: str
    email: str
    full_name: str | None = None
