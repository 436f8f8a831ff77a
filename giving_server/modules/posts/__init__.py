"""Post domain exports"""

from .service import PostCreateInput, PostEditInput, PostQuery, PostService

__all__ = ["PostCreateInput", "PostEditInput", "PostQuery", "PostService"]
