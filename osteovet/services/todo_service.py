# Personal task list for practice staff
from osteovet import db
from osteovet.errors import NotFound, ValidationError
from osteovet.models.todo_model import Priority, Todo
from osteovet.utils.util import isoformat, parse_bool, parse_datetime, parse_enum


def format_todo(todo):
    return {
        'id': todo.id,
        'task': todo.task,
        'description': todo.description,
        'priority': todo.priority.value,
        'dueDate': isoformat(todo.due_date),
        'completed': todo.completed,
        'createdAt': isoformat(todo.created_at)
    }


def apply_todo_fields(todo, data, partial=False):
    if not partial or 'task' in data:
        task = data.get('task')
        if not isinstance(task, str) or not task.strip():
            raise ValidationError('Task is required')
        todo.task = task.strip()
    if not partial or 'priority' in data:
        todo.priority = parse_enum(Priority, data.get('priority') or Priority.MEDIUM, 'priority')
    if 'dueDate' in data:
        todo.due_date = parse_datetime(data['dueDate'], 'dueDate') if data['dueDate'] else None
    if 'description' in data:
        todo.description = data['description']
    if 'completed' in data:
        todo.completed = parse_bool(data['completed'], 'completed')


def get_todo_or_404(todo_id, user):
    todo = Todo.query.filter_by(id=todo_id, user_id=user.id).first()
    if not todo:
        raise NotFound('Todo not found')
    return todo


def get_todos(user):
    todos = Todo.query.filter_by(user_id=user.id).order_by(
        Todo.completed.asc(),
        Todo.due_date.is_(None),
        Todo.due_date.asc(),
        Todo.created_at.desc()
    ).all()
    return [format_todo(t) for t in todos]


def create_todo(data, user):
    todo = Todo(user_id=user.id, completed=False)
    apply_todo_fields(todo, data)
    db.session.add(todo)
    db.session.commit()
    return format_todo(todo)


def update_todo(todo_id, data, user):
    todo = get_todo_or_404(todo_id, user)
    apply_todo_fields(todo, data, partial=True)
    db.session.commit()
    return format_todo(todo)


def toggle_todo(todo_id, user):
    todo = get_todo_or_404(todo_id, user)
    todo.completed = not todo.completed
    db.session.commit()
    return format_todo(todo)


def delete_todo(todo_id, user):
    todo = get_todo_or_404(todo_id, user)
    db.session.delete(todo)
    db.session.commit()
