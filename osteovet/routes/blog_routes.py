from flask_restx import Namespace, Resource, fields
from flask_jwt_extended import jwt_required, current_user, get_current_user

from osteovet.models.user_model import STAFF_ROLES
from osteovet.services import blog_service
from osteovet.utils.util import get_payload, role_required

blog_ns = Namespace('blog', description='Blog posts')

post_model = blog_ns.model('BlogPost', {
    'slug': fields.String(description='URL key, derived from the title when omitted'),
    'title': fields.String(required=True),
    'titleFr': fields.String(),
    'excerpt': fields.String(),
    'excerptFr': fields.String(),
    'content': fields.String(required=True),
    'contentFr': fields.String(),
    'coverImage': fields.String(),
    'seoTitle': fields.String(),
    'seoTitleFr': fields.String(),
    'seoDesc': fields.String(),
    'seoDescFr': fields.String(),
    'published': fields.Boolean()
})


@blog_ns.route('')
class PostList(Resource):
    def get(self):
        """List published posts"""
        return {'data': blog_service.get_posts(published_only=True)}, 200

    @role_required(*STAFF_ROLES)
    @blog_ns.expect(post_model)
    def post(self):
        """Create a post"""
        return {'data': blog_service.create_post(get_payload(), current_user),
                'message': 'Blog post created successfully'}, 201


@blog_ns.route('/admin')
class AdminPostList(Resource):
    @role_required(*STAFF_ROLES)
    def get(self):
        """List every post, drafts included"""
        return {'data': blog_service.get_posts(published_only=False)}, 200


@blog_ns.route('/slug/<string:slug>')
class PostBySlug(Resource):
    @jwt_required(optional=True)
    def get(self, slug):
        """Get a post by slug (drafts are visible to staff only)"""
        return {'data': blog_service.get_post_by_slug(slug, get_current_user())}, 200


@blog_ns.route('/<int:post_id>')
class PostResource(Resource):
    @role_required(*STAFF_ROLES)
    def get(self, post_id):
        """Get a post by ID"""
        return {'data': blog_service.get_post(post_id)}, 200

    @role_required(*STAFF_ROLES)
    @blog_ns.expect(post_model)
    def put(self, post_id):
        """Update a post"""
        return {'data': blog_service.update_post(post_id, get_payload()),
                'message': 'Blog post updated successfully'}, 200

    @role_required(*STAFF_ROLES)
    def delete(self, post_id):
        """Delete a post"""
        blog_service.delete_post(post_id)
        return {'message': 'Blog post deleted successfully'}, 200
