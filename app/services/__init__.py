from app.services.media import MediaSigner
from app.services.post_query import plan_post_query
from app.services.posts import PostService
from app.services.slug import SlugResolver, slugify_title

__all__ = ["MediaSigner", "PostService", "SlugResolver", "plan_post_query", "slugify_title"]
