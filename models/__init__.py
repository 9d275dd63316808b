from models.user import User
from models.chirp import Chirp
from models.refresh_token import RefreshToken
from models.db_storage import DBStorage

__all__ = ["User", "Chirp", "RefreshToken", "DBStorage"]
