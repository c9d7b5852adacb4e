from osteovet import db
from osteovet.utils.util import utcnow


class BlogPost(db.Model):
    __tablename__ = 'blog_post'
    id = db.Column(db.Integer, primary_key=True)
    slug = db.Column(db.String(200), unique=True, nullable=False)
    title = db.Column(db.String(200), nullable=False)
    title_fr = db.Column(db.String(200))
    excerpt = db.Column(db.Text)
    excerpt_fr = db.Column(db.Text)
    content = db.Column(db.Text, nullable=False)
    content_fr = db.Column(db.Text)
    cover_image = db.Column(db.String(255))
    seo_title = db.Column(db.String(200))
    seo_title_fr = db.Column(db.String(200))
    seo_desc = db.Column(db.String(300))
    seo_desc_fr = db.Column(db.String(300))
    published = db.Column(db.Boolean, nullable=False, default=False)
    author_id = db.Column(db.Integer, db.ForeignKey('user.id', ondelete='SET NULL'), nullable=True)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    author = db.relationship('User', foreign_keys=[author_id])

    def __repr__(self):
        return f'<BlogPost {self.slug}>'
