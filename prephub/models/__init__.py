from prephub.models.enums import Role, CourseStatus, MessageStatus
from prephub.models.user import User
from prephub.models.course import Course
from prephub.models.favorite import Favorite
from prephub.models.brand import Brand
from prephub.models.message import Message

__all__ = [
    "Role",
    "CourseStatus",
    "MessageStatus",
    "User",
    "Course",
    "Favorite",
    "Brand",
    "Message",
]
