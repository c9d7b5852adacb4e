from flask import request
from flask_restx import Namespace, Resource, fields
from flask_jwt_extended import current_user

from osteovet.models.user_model import STAFF_ROLES
from osteovet.services import reminder_service
from osteovet.utils.util import get_payload, role_required

reminder_ns = Namespace('reminders', description='Practice reminders')

reminder_model = reminder_ns.model('Reminder', {
    'message': fields.String(required=True),
    'messageFr': fields.String(),
    'type': fields.String(description='Display type, e.g. MEDICATION, CHECKUP, MANUAL', default='MANUAL'),
    'dueDate': fields.String(required=True, description='Due date in ISO format'),
    'priority': fields.String(enum=['HIGH', 'MEDIUM', 'LOW'], default='MEDIUM'),
    'appointmentId': fields.Integer(description='Related appointment, if any'),
    'completed': fields.Boolean()
})

snooze_model = reminder_ns.model('Snooze', {
    'minutes': fields.Integer(required=True, description='Minutes from now')
})

booking_reminders_model = reminder_ns.model('BookingReminders', {
    'appointmentId': fields.Integer(required=True)
})


@reminder_ns.route('')
class ReminderList(Resource):
    @role_required(*STAFF_ROLES)
    @reminder_ns.param('status', 'active (default), completed or all')
    def get(self):
        """List reminders by ascending due date"""
        reminders = reminder_service.get_reminders(request.args.get('status', 'active'))
        return {'data': reminders, 'total': len(reminders)}, 200

    @role_required(*STAFF_ROLES)
    @reminder_ns.expect(reminder_model)
    def post(self):
        """Create a reminder, with or without an appointment"""
        reminder = reminder_service.create_reminder(get_payload(), current_user)
        return {'data': reminder, 'message': 'Reminder created successfully'}, 201


@reminder_ns.route('/stats')
class ReminderStats(Resource):
    @role_required(*STAFF_ROLES)
    def get(self):
        """Active, completed and overdue counts"""
        return {'data': reminder_service.get_stats()}, 200


@reminder_ns.route('/booking')
class BookingReminders(Resource):
    @role_required(*STAFF_ROLES)
    @reminder_ns.expect(booking_reminders_model)
    def post(self):
        """Create the standard reminders for an appointment"""
        reminders = reminder_service.create_booking_reminders(get_payload().get('appointmentId'), current_user)
        return {'data': reminders, 'message': 'Booking reminders created successfully'}, 201


@reminder_ns.route('/<int:reminder_id>')
class ReminderResource(Resource):
    @role_required(*STAFF_ROLES)
    @reminder_ns.expect(reminder_model)
    def put(self, reminder_id):
        """Update a reminder"""
        reminder = reminder_service.update_reminder(reminder_id, get_payload())
        return {'data': reminder, 'message': 'Reminder updated successfully'}, 200

    @role_required(*STAFF_ROLES)
    def delete(self, reminder_id):
        """Delete a reminder"""
        reminder_service.delete_reminder(reminder_id)
        return {'message': 'Reminder deleted successfully'}, 200


@reminder_ns.route('/<int:reminder_id>/complete')
class CompleteReminder(Resource):
    @role_required(*STAFF_ROLES)
    def put(self, reminder_id):
        """Mark a reminder as done"""
        return {'data': reminder_service.complete_reminder(reminder_id),
                'message': 'Reminder marked as completed'}, 200


@reminder_ns.route('/<int:reminder_id>/snooze')
class SnoozeReminder(Resource):
    @role_required(*STAFF_ROLES)
    @reminder_ns.expect(snooze_model)
    def put(self, reminder_id):
        """Postpone a reminder by a number of minutes from now"""
        minutes = get_payload().get('minutes')
        reminder = reminder_service.snooze_reminder(reminder_id, minutes)
        return {'data': reminder, 'message': f'Reminder snoozed for {minutes} minutes'}, 200
