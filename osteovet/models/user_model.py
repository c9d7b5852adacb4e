import enum

from osteovet import db
from osteovet.utils.util import utcnow


class Role(enum.Enum):
    ADMIN = 'ADMIN'
    PRACTITIONER = 'PRACTITIONER'
    CLIENT = 'CLIENT'


STAFF_ROLES = (Role.ADMIN, Role.PRACTITIONER)


class User(db.Model):
    __tablename__ = 'user'
    __table_args__ = (
        db.Index('user_role_validated_idx', 'role', 'validated'),
    )
    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    email = db.Column(db.String(120), unique=True, nullable=False)
    password = db.Column(db.String(200), nullable=False)
    first_name = db.Column(db.String(50), nullable=False)
    last_name = db.Column(db.String(50), nullable=False)
    phone = db.Column(db.String(30))
    role = db.Column(db.Enum(Role), nullable=False, default=Role.CLIENT)
    validated = db.Column(db.Boolean, nullable=False, default=False, index=True)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    animals = db.relationship('Animal', backref='owner', lazy=True, cascade='all, delete-orphan')
    appointments = db.relationship('Appointment', backref='client', lazy=True, cascade='all, delete-orphan',
                                   foreign_keys='Appointment.client_id')
    todos = db.relationship('Todo', backref='user', lazy=True, cascade='all, delete-orphan')

    @property
    def is_staff(self):
        return self.role in STAFF_ROLES

    @property
    def full_name(self):
        return f'{self.first_name} {self.last_name}'

    def __repr__(self):
        return f'<User {self.email} ({self.role})>'
