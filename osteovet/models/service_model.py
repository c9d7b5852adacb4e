from osteovet import db
from osteovet.utils.util import utcnow


class Service(db.Model):
    __tablename__ = 'service'
    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(150), nullable=False)
    title_fr = db.Column(db.String(150))
    description = db.Column(db.Text)
    duration = db.Column(db.Integer, nullable=False)  # minutes
    price = db.Column(db.Float, nullable=False, default=0)
    active = db.Column(db.Boolean, nullable=False, default=True)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    appointments = db.relationship('Appointment', backref='service', lazy=True)

    def __repr__(self):
        return f'<Service {self.title}>'
