# Dashboard metrics for practice staff
from osteovet.models.animal_model import Animal
from osteovet.models.appointment_model import Appointment, AppointmentStatus
from osteovet.models.reminder_model import Reminder
from osteovet.models.user_model import Role, User
from osteovet.utils.util import utcnow


def month_bounds(now):
    start = now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
    if start.month == 12:
        end = start.replace(year=start.year + 1, month=1)
    else:
        end = start.replace(month=start.month + 1)
    return start, end


def get_metrics(now=None):
    start, end = month_bounds(now or utcnow())
    return {
        'totalClients': User.query.filter_by(role=Role.CLIENT).count(),
        'pendingClients': User.query.filter_by(role=Role.CLIENT, validated=False).count(),
        'totalAppointments': Appointment.query.filter(
            Appointment.start_time >= start, Appointment.start_time < end).count(),
        'pendingAppointments': Appointment.query.filter_by(status=AppointmentStatus.SCHEDULED).count(),
        'totalAnimals': Animal.query.count(),
        'activeReminders': Reminder.query.filter(Reminder.sent.is_(False)).count()
    }
