# 관계(relationship) 문자열 참조가 풀리도록 모든 모델을 한 곳에서 임포트
from .user import User
from .profile import Profile
from .follow import Follow
from .tag import Tag, post_tags
from .post import Post, PostType
from .like import Like
from .comment import Comment
from .group import Group
from .group_user import GroupUser

__all__ = [
    "User", "Profile", "Follow", "Tag", "post_tags", "Post", "PostType",
    "Like", "Comment", "Group", "GroupUser",
]
