from pulse.models.user import User
from pulse.models.category import PostCategory, ReelCategory
from pulse.models.post import Comment, Post
from pulse.models.news import NewsTopic
from pulse.models.reel import Reel

__all__ = ["User", "PostCategory", "ReelCategory", "Comment", "Post", "NewsTopic", "Reel"]
