import enum


class Role(str, enum.Enum):
    user = "user"
    admin = "admin"


class CourseStatus(str, enum.Enum):
    active = "active"
    inactive = "inactive"


class MessageStatus(str, enum.Enum):
    unread = "unread"
    read = "read"
