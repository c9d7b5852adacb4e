from flask import request
from flask_restx import Namespace, Resource, fields
from flask_jwt_extended import jwt_required, current_user

from osteovet.models.user_model import STAFF_ROLES
from osteovet.services import appointment_service
from osteovet.services.appointment_service import format_appointment
from osteovet.utils.role_utils import action_required
from osteovet.utils.util import get_payload, role_required

appointment_ns = Namespace('appointments', description='Appointment booking and status changes')

appointment_model = appointment_ns.model('Appointment', {
    'animalId': fields.Integer(required=True, description='ID of the animal'),
    'serviceId': fields.Integer(required=True, description='ID of the clinic service'),
    'startTime': fields.String(required=True, description='Start in ISO format'),
    'endTime': fields.String(description='End in ISO format (defaults to start + service duration)'),
    'notes': fields.String(description='Free-text notes')
})

booking_animal_model = appointment_ns.model('BookingAnimal', {
    'name': fields.String(required=True),
    'breed': fields.String(required=True),
    'age': fields.Integer(required=True),
    'weight': fields.Float(),
    'gender': fields.String(required=True),
    'notes': fields.String()
})

booking_model = appointment_ns.model('Booking', {
    'serviceId': fields.Integer(required=True),
    'startTime': fields.String(required=True),
    'notes': fields.String(),
    'animal': fields.Nested(booking_animal_model, required=True)
})

refuse_model = appointment_ns.model('Refusal', {
    'reason': fields.String(description='Why the appointment was declined')
})


@appointment_ns.route('')
class AppointmentList(Resource):
    @jwt_required()
    @appointment_ns.param('status', 'Filter by status')
    def get(self):
        """Get appointments (own for clients, all for staff)"""
        return {'data': appointment_service.get_all_appointments(current_user, request.args.get('status'))}, 200

    @jwt_required()
    @appointment_ns.expect(appointment_model)
    def post(self):
        """Book an appointment for an existing animal"""
        appointment = appointment_service.create_appointment(get_payload(), current_user)
        return {'data': format_appointment(appointment), 'message': 'Appointment created successfully'}, 201


@appointment_ns.route('/pending')
class PendingAppointmentList(Resource):
    @role_required(*STAFF_ROLES)
    def get(self):
        """Appointments waiting for confirmation"""
        return {'data': appointment_service.get_pending_appointments()}, 200


@appointment_ns.route('/booking')
class Booking(Resource):
    @jwt_required()
    @appointment_ns.expect(booking_model)
    def post(self):
        """Register an animal and book its appointment in one step"""
        appointment = appointment_service.book(get_payload(), current_user)
        return {'data': format_appointment(appointment), 'message': 'Booking created successfully'}, 201


@appointment_ns.route('/<int:appointment_id>')
class AppointmentResource(Resource):
    @jwt_required()
    def get(self, appointment_id):
        """Get appointment by ID"""
        return {'data': appointment_service.get_appointment(appointment_id, current_user)}, 200

    @action_required('delete_appointment')
    def delete(self, appointment_id):
        """Delete an appointment"""
        appointment_service.delete_appointment(appointment_id, current_user)
        return {'message': 'Appointment deleted successfully'}, 200


@appointment_ns.route('/<int:appointment_id>/confirm')
class ConfirmAppointment(Resource):
    @role_required(*STAFF_ROLES)
    def put(self, appointment_id):
        """Confirm a scheduled appointment"""
        appointment = appointment_service.confirm(appointment_id, current_user)
        return {'data': format_appointment(appointment), 'message': 'Appointment confirmed'}, 200


@appointment_ns.route('/<int:appointment_id>/refuse')
class RefuseAppointment(Resource):
    @role_required(*STAFF_ROLES)
    @appointment_ns.expect(refuse_model)
    def put(self, appointment_id):
        """Decline a scheduled appointment"""
        appointment = appointment_service.refuse(appointment_id, current_user, get_payload().get('reason'))
        return {'data': format_appointment(appointment), 'message': 'Appointment refused'}, 200


@appointment_ns.route('/<int:appointment_id>/cancel')
class CancelAppointment(Resource):
    @jwt_required()
    def put(self, appointment_id):
        """Cancel an appointment (clients: their own only)"""
        appointment = appointment_service.cancel(appointment_id, current_user)
        return {'data': format_appointment(appointment), 'message': 'Appointment cancelled'}, 200


@appointment_ns.route('/<int:appointment_id>/complete')
class CompleteAppointment(Resource):
    @role_required(*STAFF_ROLES)
    def put(self, appointment_id):
        """Mark a confirmed appointment as completed"""
        appointment = appointment_service.complete(appointment_id, current_user)
        return {'data': format_appointment(appointment), 'message': 'Appointment completed'}, 200
