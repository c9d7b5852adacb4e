# Blog posts: public reading by slug, editing from the dashboard
import logging
import re
import unicodedata

from sqlalchemy.exc import IntegrityError

from osteovet import db
from osteovet.errors import Conflict, NotFound, ValidationError
from osteovet.models.blog_model import BlogPost
from osteovet.utils.util import isoformat, parse_bool

logger = logging.getLogger(__name__)

SLUG_REGEX = re.compile(r'^[a-z0-9]+(?:-[a-z0-9]+)*$')

OPTIONAL_FIELDS = {
    'titleFr': 'title_fr',
    'excerpt': 'excerpt',
    'excerptFr': 'excerpt_fr',
    'contentFr': 'content_fr',
    'coverImage': 'cover_image',
    'seoTitle': 'seo_title',
    'seoTitleFr': 'seo_title_fr',
    'seoDesc': 'seo_desc',
    'seoDescFr': 'seo_desc_fr',
}


def slugify(text):
    text = unicodedata.normalize('NFKD', text).encode('ascii', 'ignore').decode('ascii')
    text = re.sub(r'[^a-zA-Z0-9]+', '-', text).strip('-').lower()
    return text


def format_post(post):
    result = {
        'id': post.id,
        'slug': post.slug,
        'title': post.title,
        'content': post.content,
        'published': post.published,
        'createdAt': isoformat(post.created_at),
        'updatedAt': isoformat(post.updated_at),
        'author': {
            'firstName': post.author.first_name,
            'lastName': post.author.last_name
        } if post.author else None
    }
    for field, attr in OPTIONAL_FIELDS.items():
        result[field] = getattr(post, attr)
    return result


def _ensure_unique_slug(slug, post_id=None):
    query = BlogPost.query.filter_by(slug=slug)
    if post_id is not None:
        query = query.filter(BlogPost.id != post_id)
    if query.first():
        raise Conflict(f'A post with slug "{slug}" already exists')


def apply_post_fields(post, data, partial=False):
    if not partial or 'title' in data:
        title = data.get('title')
        if not isinstance(title, str) or not title.strip():
            raise ValidationError('title is required')
        post.title = title.strip()
    if not partial or 'content' in data:
        content = data.get('content')
        if not isinstance(content, str) or not content.strip():
            raise ValidationError('content is required')
        post.content = content
    if data.get('slug'):
        slug = data['slug'].strip().lower() if isinstance(data['slug'], str) else ''
        if not SLUG_REGEX.match(slug):
            raise ValidationError('slug may only contain lowercase letters, digits and hyphens')
        post.slug = slug
    elif not post.slug:
        post.slug = slugify(post.title)
        if not post.slug:
            raise ValidationError('A slug could not be derived from the title')
    for field, attr in OPTIONAL_FIELDS.items():
        if field in data:
            setattr(post, attr, data[field])
    if 'published' in data:
        post.published = parse_bool(data['published'], 'published')


def get_post_or_404(post_id):
    post = db.session.get(BlogPost, post_id)
    if not post:
        raise NotFound('Blog post not found')
    return post


def get_posts(published_only=True):
    query = BlogPost.query
    if published_only:
        query = query.filter_by(published=True)
    posts = query.order_by(BlogPost.created_at.desc(), BlogPost.id.desc()).all()
    return [format_post(p) for p in posts]


def get_post_by_slug(slug, user=None):
    post = BlogPost.query.filter_by(slug=slug).first()
    if not post or (not post.published and not (user and user.is_staff)):
        raise NotFound('Blog post not found')
    return format_post(post)


def get_post(post_id):
    return format_post(get_post_or_404(post_id))


def create_post(data, user):
    post = BlogPost(author_id=user.id, published=False)
    apply_post_fields(post, data)
    _ensure_unique_slug(post.slug)
    db.session.add(post)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise Conflict(f'A post with slug "{post.slug}" already exists')
    logger.info(f"Blog post {post.id} created: {post.slug}")
    return format_post(post)


def update_post(post_id, data):
    post = get_post_or_404(post_id)
    with db.session.no_autoflush:
        apply_post_fields(post, data, partial=True)
        _ensure_unique_slug(post.slug, post.id)
    slug = post.slug
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise Conflict(f'A post with slug "{slug}" already exists')
    return format_post(post)


def delete_post(post_id):
    post = get_post_or_404(post_id)
    db.session.delete(post)
    db.session.commit()
