from .user import User
from .audio import Audio
