from flask import request
from flask_restx import Namespace, Resource

from osteovet.models.user_model import Role, STAFF_ROLES
from osteovet.services import dashboard_service
from osteovet.services.audit_service import list_audit_entries
from osteovet.utils.util import role_required

dashboard_ns = Namespace('dashboard', description='Operations related to dashboard statistics')


@dashboard_ns.route('/metrics')
class DashboardMetrics(Resource):
    @role_required(*STAFF_ROLES)
    def get(self):
        """Headline numbers for the dashboard overview"""
        return {'data': dashboard_service.get_metrics()}, 200


@dashboard_ns.route('/audit')
class AuditTrail(Resource):
    @role_required(Role.ADMIN)
    @dashboard_ns.param('action', 'Filter by action tag, e.g. CLIENT_VALIDATED')
    def get(self):
        """Most recent audit entries"""
        return {'data': list_audit_entries(request.args.get('action'))}, 200
