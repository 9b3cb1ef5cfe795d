"""Public schema exports."""

from .auth import (
    ForgotPasswordPayload,
    LoginCredentials,
    LoginResponse,
    RefreshResponse,
    RegistrationPayload,
)
from .journal import (
    RATING_FIELDS,
    RATING_SCALE,
    Bullet,
    BulletAverages,
    BulletCreate,
    BulletUpdate,
    DiaryEntry,
    DiaryEntryCreate,
    DiaryEntryUpdate,
    FieldHistory,
)
from .motivation import (
    BulkToggleRequest,
    ImageBoard,
    ImageBoardCreate,
    ImageBoardItem,
    ImageBoardItemUpdate,
    ImageBoardUpdate,
    ImageUpload,
    ReorderRequest,
)
from .profile import (
    About,
    AboutUpdate,
    Favorite,
    FavoriteCreate,
    FavoriteUpdate,
    ProfileStatement,
    ProfileStatementCreate,
    ProfileStatementUpdate,
)

__all__ = [
    "About",
    "AboutUpdate",
    "BulkToggleRequest",
    "Bullet",
    "BulletAverages",
    "BulletCreate",
    "BulletUpdate",
    "DiaryEntry",
    "DiaryEntryCreate",
    "DiaryEntryUpdate",
    "Favorite",
    "FavoriteCreate",
    "FavoriteUpdate",
    "FieldHistory",
    "ForgotPasswordPayload",
    "ImageBoard",
    "ImageBoardCreate",
    "ImageBoardItem",
    "ImageBoardItemUpdate",
    "ImageBoardUpdate",
    "ImageUpload",
    "LoginCredentials",
    "LoginResponse",
    "ProfileStatement",
    "ProfileStatementCreate",
    "ProfileStatementUpdate",
    "RATING_FIELDS",
    "RATING_SCALE",
    "RefreshResponse",
    "RegistrationPayload",
    "ReorderRequest",
]
