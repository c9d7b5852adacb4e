from osteovet.models.user_model import Role, STAFF_ROLES, User
from osteovet.models.animal_model import Animal, Gender, TreatmentNote
from osteovet.models.service_model import Service
from osteovet.models.appointment_model import Appointment, AppointmentStatus
from osteovet.models.todo_model import Priority, Todo
from osteovet.models.reminder_model import Reminder, ReminderCategory
from osteovet.models.blog_model import BlogPost
from osteovet.models.audit_model import AuditLog

__all__ = [
    'Role', 'STAFF_ROLES', 'User', 'Animal', 'Gender', 'TreatmentNote', 'Service',
    'Appointment', 'AppointmentStatus', 'Priority', 'Todo', 'Reminder', 'ReminderCategory',
    'BlogPost', 'AuditLog',
]
