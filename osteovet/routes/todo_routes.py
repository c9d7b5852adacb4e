from flask_restx import Namespace, Resource, fields
from flask_jwt_extended import current_user

from osteovet.models.user_model import STAFF_ROLES
from osteovet.services import todo_service
from osteovet.utils.util import get_payload, role_required

todo_ns = Namespace('todos', description='Staff task list')

todo_model = todo_ns.model('Todo', {
    'task': fields.String(required=True),
    'description': fields.String(),
    'priority': fields.String(enum=['HIGH', 'MEDIUM', 'LOW'], default='MEDIUM'),
    'dueDate': fields.String(description='Due date in ISO format'),
    'completed': fields.Boolean()
})


@todo_ns.route('')
class TodoList(Resource):
    @role_required(*STAFF_ROLES)
    def get(self):
        """List the current user's todos"""
        return {'data': todo_service.get_todos(current_user)}, 200

    @role_required(*STAFF_ROLES)
    @todo_ns.expect(todo_model)
    def post(self):
        """Create a todo"""
        return {'data': todo_service.create_todo(get_payload(), current_user),
                'message': 'Todo created successfully'}, 201


@todo_ns.route('/<int:todo_id>')
class TodoResource(Resource):
    @role_required(*STAFF_ROLES)
    @todo_ns.expect(todo_model)
    def put(self, todo_id):
        """Update a todo"""
        return {'data': todo_service.update_todo(todo_id, get_payload(), current_user),
                'message': 'Todo updated successfully'}, 200

    @role_required(*STAFF_ROLES)
    def delete(self, todo_id):
        """Delete a todo"""
        todo_service.delete_todo(todo_id, current_user)
        return {'message': 'Todo deleted successfully'}, 200


@todo_ns.route('/<int:todo_id>/toggle')
class ToggleTodo(Resource):
    @role_required(*STAFF_ROLES)
    def put(self, todo_id):
        """Flip a todo between done and not done"""
        return {'data': todo_service.toggle_todo(todo_id, current_user)}, 200
